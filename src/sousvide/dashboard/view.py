"""
View-model for the control panel.

PanelView holds the five labels the panel shows. render_state() is the
only writer of the four state labels; render_version() the only writer
of the version label.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict

from sousvide.core.config import DisplayConfig
from sousvide.core.models import DeviceState, VersionInfo, is_blank

ON = "On"
OFF = "Off"


def format_value(value: Any) -> str:
    """Format a reported number the way the device UI always has (140.0 -> 140)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return f"{value}"


def switch_label(on: bool) -> str:
    return ON if on else OFF


@dataclass
class PanelView:
    """Rendered panel labels."""
    display: DisplayConfig = field(default_factory=DisplayConfig)
    set_temp_label: str = ""
    cur_temp_label: str = ""
    pump_label: str = ""
    heater_label: str = ""
    version_label: str = ""
    renders: int = 0

    def render_state(self, state: DeviceState) -> None:
        """Update the four state labels from one snapshot."""
        if is_blank(state.set_temp):
            self.set_temp_label = self.display.target_placeholder
        else:
            self.set_temp_label = format_value(state.set_temp) + self.display.unit

        # A missing current temperature is shown as an error, unlike the target.
        if is_blank(state.cur_temp):
            self.cur_temp_label = self.display.current_placeholder
        else:
            self.cur_temp_label = format_value(state.cur_temp) + self.display.unit

        self.pump_label = switch_label(state.pump_on)
        self.heater_label = switch_label(state.heater_on)
        self.renders += 1

    def render_version(self, version: VersionInfo) -> None:
        self.version_label = f"Version: {format_value(version.value)}"

    @property
    def cur_temp_missing(self) -> bool:
        return self.renders > 0 and self.cur_temp_label == self.display.current_placeholder

    def labels(self) -> Dict[str, str]:
        return {
            "set_temp_label": self.set_temp_label,
            "cur_temp_label": self.cur_temp_label,
            "pump_label": self.pump_label,
            "heater_label": self.heater_label,
            "version": self.version_label,
        }
