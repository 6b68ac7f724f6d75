import sys

from sousvide.cli import main

sys.exit(main())
