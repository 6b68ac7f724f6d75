"""
REST endpoints exposed by the sous-vide controller.
"""

import logging
from typing import Any

from sousvide.client.http import DeviceError, JsonRequestClient
from sousvide.core.models import Command, DeviceState, VersionInfo

logger = logging.getLogger(__name__)

STATE_PATH = "/rest/state"
VERSION_PATH = "/rest/version"

# Fields that can also be read one at a time under /rest/state/<field>
STATE_FIELDS = ("heater", "pump", "cur_temp", "set_temp")


class DeviceClient:
    """
    Typed access to the device API.

    Every method raises DeviceError when the device cannot be reached
    or answers with something unusable; callers decide whether to care.
    """

    def __init__(self, http: JsonRequestClient):
        self._http = http

    @property
    def http(self) -> JsonRequestClient:
        return self._http

    async def get_state(self) -> DeviceState:
        data = await self._http.get_json(STATE_PATH)
        if not isinstance(data, dict):
            raise DeviceError(f"GET {STATE_PATH} returned {type(data).__name__}, expected object")
        return DeviceState.from_dict(data)

    async def get_version(self) -> VersionInfo:
        return VersionInfo(await self._http.get_json(VERSION_PATH))

    async def get_field(self, name: str) -> Any:
        """Read a single state field."""
        if name not in STATE_FIELDS:
            raise ValueError(f"Unknown state field: {name}")
        return await self._http.get_json(f"{STATE_PATH}/{name}")

    async def send(self, command: Command) -> None:
        """Send a command; the response body is ignored."""
        logger.info(f"Sending {type(command).__name__} to {command.path}")
        await self._http.request(command.method, command.path, data=command.payload())

    async def close(self) -> None:
        await self._http.close()
