"""
Command dispatcher.

Each command is one PUT to the device. Nothing is retried and no result
is reported back to the user; failures only reach the log.
"""

import asyncio
import logging
from typing import Any, Set

from sousvide.client.device import DeviceClient
from sousvide.client.http import DeviceError
from sousvide.core.models import Command, Reboot, SetTemp, Shutdown

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Relays user actions to the device."""

    def __init__(self, device: DeviceClient):
        self._device = device
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def send(self, command: Command) -> bool:
        """
        Send a command once.

        Returns:
            True if the device accepted the request
        """
        try:
            await self._device.send(command)
            return True
        except DeviceError as e:
            logger.warning(f"{type(command).__name__} failed: {e}")
            return False

    def fire(self, command: Command) -> asyncio.Task:
        """Schedule a command and return immediately."""
        task = asyncio.create_task(self.send(command))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def set_temperature(self, value: Any) -> bool:
        # Forwarded as entered, no range or type checks.
        return await self.send(SetTemp(value))

    async def reboot(self) -> bool:
        return await self.send(Reboot())

    async def shutdown(self) -> bool:
        return await self.send(Shutdown())

    async def drain(self) -> None:
        """Wait for fired commands to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
