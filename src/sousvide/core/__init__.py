"""
Core components: configuration and the device data model.
"""

from sousvide.core.config import Config, load_config
from sousvide.core.models import DeviceState, Command, SetTemp, Reboot, Shutdown, VersionInfo

__all__ = [
    "Config",
    "load_config",
    "DeviceState",
    "Command",
    "SetTemp",
    "Reboot",
    "Shutdown",
    "VersionInfo",
]
