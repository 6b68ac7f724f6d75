"""
Data model for the sous-vide panel.

All entities are transient: a DeviceState lives for one poll, a Command
for one request.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

Number = Union[int, float]


def is_blank(value: Any) -> bool:
    """
    Whether a reported value counts as absent.

    None, False, numeric zero, the empty string and NaN are blank.
    Everything else is present, including negative numbers and "0".
    """
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value == ""
    return False


@dataclass
class DeviceState:
    """
    One snapshot of the device as reported by /rest/state.

    Values are kept exactly as decoded; presence checks happen at
    render time.
    """
    set_temp: Optional[Any] = None
    cur_temp: Optional[Any] = None
    pump: Any = 0
    heater: Any = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceState":
        return cls(
            set_temp=data.get("set_temp"),
            cur_temp=data.get("cur_temp"),
            pump=data.get("pump"),
            heater=data.get("heater"),
        )

    @property
    def pump_on(self) -> bool:
        return not is_blank(self.pump)

    @property
    def heater_on(self) -> bool:
        return not is_blank(self.heater)


@dataclass(frozen=True)
class VersionInfo:
    """Opaque version value reported by the device."""
    value: Any

    def __str__(self) -> str:
        return f"{self.value}"


@dataclass(frozen=True)
class Command:
    """Base class for device commands."""

    method = "PUT"
    path = ""

    def payload(self) -> Optional[Dict[str, Any]]:
        return None


@dataclass(frozen=True)
class SetTemp(Command):
    """Change the target temperature. The value is forwarded unvalidated."""
    value: Union[str, Number] = ""

    path = "/rest/state/set_temp"

    def payload(self) -> Optional[Dict[str, Any]]:
        return {"value": self.value}


@dataclass(frozen=True)
class Reboot(Command):
    path = "/reboot"


@dataclass(frozen=True)
class Shutdown(Command):
    path = "/shutdown"
