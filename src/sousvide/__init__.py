"""
Sous Vide Panel - control panel for a networked sous-vide cooker.

Polls the cooker once a second, shows target and current temperature
together with pump and heater state, and sends temperature, reboot and
shutdown commands.
"""

__version__ = "0.1.0"

from sousvide.core.config import Config, load_config
from sousvide.dashboard.panel import ControlPanel

__all__ = [
    "ControlPanel",
    "Config",
    "load_config",
    "__version__",
]
