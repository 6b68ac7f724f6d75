"""
Sous Vide Panel - command line entry point.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

from rich.live import Live

from sousvide import __version__
from sousvide.client.device import STATE_FIELDS
from sousvide.client.http import DeviceError
from sousvide.core.config import Config, load_config
from sousvide.dashboard.console import LivePanel, build_panel, make_console
from sousvide.dashboard.panel import ControlPanel

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sousvide-panel",
        description="Control panel for a networked sous-vide cooker",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None
    )
    parser.add_argument(
        "-u", "--url",
        help="Device base URL (overrides config and $SOUSVIDE_URL)",
        default=None
    )
    parser.add_argument(
        "-v", "--verbose",
        help="Enable verbose logging",
        action="store_true"
    )
    parser.add_argument(
        "--debug",
        help="Enable debug logging",
        action="store_true"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("watch", help="Poll the device and show a live panel")
    sub.add_parser("state", help="Poll the device once and print the panel")
    get = sub.add_parser("get", help="Read one state field")
    get.add_argument("field", choices=STATE_FIELDS)
    sub.add_parser("version", help="Print the device version")
    set_temp = sub.add_parser("set-temp", help="Set the target temperature")
    set_temp.add_argument("value", help="Target temperature, sent as entered")
    sub.add_parser("reboot", help="Reboot the device")
    sub.add_parser("shutdown", help="Shut the device down")

    return parser


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    log_level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


async def watch(config: Config) -> int:
    console = make_console()
    async with ControlPanel(config) as panel:
        with Live(
            LivePanel(panel.view, config.device.url),
            console=console,
            refresh_per_second=config.display.refresh_per_second,
        ):
            while True:
                await asyncio.sleep(3600)
    return 0


async def show_state(config: Config) -> int:
    panel = ControlPanel(config)
    try:
        await panel.load_version()
        state = await panel.poller.tick()
    finally:
        await panel.stop()

    if state is None:
        logger.error(f"Could not read state from {config.device.url}")
        return 1

    make_console().print(build_panel(panel.view, config.device.url))
    return 0


async def get_field(config: Config, field: str) -> int:
    panel = ControlPanel(config)
    try:
        value = await panel.device.get_field(field)
    except DeviceError as e:
        logger.error(f"Could not read {field}: {e}")
        return 1
    finally:
        await panel.stop()

    print(json.dumps(value))
    return 0


async def show_version(config: Config) -> int:
    panel = ControlPanel(config)
    try:
        await panel.load_version()
    finally:
        await panel.stop()

    if not panel.view.version_label:
        logger.error(f"Could not read version from {config.device.url}")
        return 1

    print(panel.view.version_label)
    return 0


async def send_command(config: Config, command: str, value: Optional[str] = None) -> int:
    panel = ControlPanel(config)
    try:
        if command == "set-temp":
            ok = await panel.dispatcher.set_temperature(value)
        elif command == "reboot":
            ok = await panel.dispatcher.reboot()
        else:
            ok = await panel.dispatcher.shutdown()
    finally:
        await panel.stop()
    return 0 if ok else 1


async def run(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    if args.url:
        config.device.url = args.url

    if args.command == "watch":
        return await watch(config)
    if args.command == "state":
        return await show_state(config)
    if args.command == "get":
        return await get_field(config, args.field)
    if args.command == "version":
        return await show_version(config)
    return await send_command(config, args.command, getattr(args, "value", None))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the sous-vide panel."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.debug)

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
