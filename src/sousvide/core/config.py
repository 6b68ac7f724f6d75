"""
Configuration management for the sous-vide panel.

Handles loading and access to configuration settings.
"""

import logging
import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


# Default configuration paths
CONFIG_PATHS = [
    "/etc/sousvide/config.yaml",
    os.path.expanduser("~/.config/sousvide/config.yaml"),
    "config.yaml",
]

# Environment override for the device URL
URL_ENV_VAR = "SOUSVIDE_URL"


@dataclass
class DeviceConfig:
    """Remote sous-vide device connection."""
    url: str = "http://localhost:8080"


@dataclass
class PollConfig:
    """State polling configuration."""
    interval_seconds: float = 1.0


@dataclass
class DisplayConfig:
    """Label rendering configuration."""
    unit: str = "℉"  # DEGREE FAHRENHEIT
    target_placeholder: str = "--"
    current_placeholder: str = "error"
    refresh_per_second: int = 4


@dataclass
class Config:
    """Main configuration class."""
    version: int = 1
    device: DeviceConfig = field(default_factory=DeviceConfig)
    poll: PollConfig = field(default_factory=PollConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        if "version" in data:
            config.version = data["version"]

        if "device" in data:
            config.device = DeviceConfig(**data["device"])

        if "poll" in data:
            config.poll = PollConfig(**data["poll"])

        if "display" in data:
            config.display = DisplayConfig(**data["display"])

        return config


def load_config(path: Optional[str] = None) -> Config:
    """
    Load configuration from file.

    Args:
        path: Path to config file. If None, searches default locations.

    Returns:
        Config object with loaded or default settings. The device URL
        is overridden by $SOUSVIDE_URL when set.
    """
    if path is not None:
        paths_to_try = [path]
    else:
        paths_to_try = CONFIG_PATHS

    config = None
    for config_path in paths_to_try:
        if os.path.exists(config_path):
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f)
                    if data:
                        config = Config.from_dict(data)
                        break
            except Exception as e:
                logger.warning(f"Failed to load config from {config_path}: {e}")

    if config is None:
        config = Config()

    env_url = os.environ.get(URL_ENV_VAR)
    if env_url:
        config.device.url = env_url

    return config
