"""
Control panel - ties the poller, the dispatcher and the view together.

Startup order:
1. request options are built once and injected into the HTTP client
2. the version label is fetched once
3. the poll timer starts
4. the UI actions are bound to their handlers by name
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

import aiohttp

from sousvide.client.device import DeviceClient
from sousvide.client.http import DeviceError, JsonRequestClient, RequestOptions
from sousvide.core.config import Config
from sousvide.core.models import Command, Reboot, SetTemp, Shutdown
from sousvide.dashboard.commands import CommandDispatcher
from sousvide.dashboard.poller import StatePoller
from sousvide.dashboard.view import PanelView

logger = logging.getLogger(__name__)


class UnknownHandlerError(LookupError):
    """Raised when an action is invoked whose handler does not exist."""

    def __init__(self, action_id: str, handler_name: Optional[str] = None):
        if handler_name is None:
            message = f"No action bound to '{action_id}'"
        else:
            message = f"Action '{action_id}' is bound to undefined handler '{handler_name}'"
        super().__init__(message)
        self.action_id = action_id
        self.handler_name = handler_name


# Action id -> handler name. "reset" has never had a handler.
DEFAULT_BINDINGS = {
    "set_temp_button": "set_temperature",
    "reset_button": "reset",
    "reboot": "reboot",
    "shutdown": "shutdown",
}


class ControlPanel:
    """
    Headless sous-vide control panel.

    The view-model is exposed as ``view``; ``new_temp`` plays the role of
    the numeric input field read by the set-temperature action.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or Config()

        self.options = RequestOptions()
        self.http = JsonRequestClient(self.config.device.url, self.options, session=session)
        self.device = DeviceClient(self.http)

        self.view = PanelView(display=self.config.display)
        self.poller = StatePoller(self.device, self.view, self.config.poll.interval_seconds)
        self.dispatcher = CommandDispatcher(self.device)

        self.new_temp: Any = ""

        self._bindings: Dict[str, str] = {}
        self._version_task: Optional[asyncio.Task] = None
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def bindings(self) -> Dict[str, str]:
        return dict(self._bindings)

    async def start(self) -> None:
        """Run the startup sequence. Never waits on the network."""
        if self._started:
            logger.warning("Panel already started")
            return

        logger.info(f"Starting control panel for {self.http.base_url}")
        self._started = True

        self._version_task = asyncio.create_task(self.load_version())
        await self.poller.start()

        for action_id, handler_name in DEFAULT_BINDINGS.items():
            self.bind(action_id, handler_name)

    async def stop(self) -> None:
        """Stop polling and release the HTTP session once in-flight calls finish."""
        await self.poller.stop()
        await self.drain()
        await self.device.close()
        self._started = False
        logger.info("Control panel stopped")

    async def load_version(self) -> None:
        try:
            version = await self.device.get_version()
        except DeviceError as e:
            logger.debug(f"Version not available: {e}")
            return
        self.view.render_version(version)

    def bind(self, action_id: str, handler_name: str) -> None:
        """Bind an action to a handler name; the name is resolved on click."""
        self._bindings[action_id] = handler_name
        if handler_name not in self._handlers():
            logger.warning(f"Action '{action_id}' bound to undefined handler '{handler_name}'")

    def click(self, action_id: str) -> asyncio.Task:
        """
        Invoke a bound action.

        Returns:
            The task sending the resulting command

        Raises:
            UnknownHandlerError: if nothing is bound to the action or its
                handler does not exist
        """
        handler_name = self._bindings.get(action_id)
        if handler_name is None:
            raise UnknownHandlerError(action_id)

        factory = self._handlers().get(handler_name)
        if factory is None:
            raise UnknownHandlerError(action_id, handler_name)

        return self.dispatcher.fire(factory())

    def _handlers(self) -> Dict[str, Callable[[], Command]]:
        return {
            "set_temperature": lambda: SetTemp(self.new_temp),
            "reboot": Reboot,
            "shutdown": Shutdown,
        }

    async def drain(self) -> None:
        """Wait for the version read, in-flight polls and fired commands."""
        if self._version_task:
            await asyncio.gather(self._version_task, return_exceptions=True)
        await self.poller.drain()
        await self.dispatcher.drain()

    async def __aenter__(self) -> "ControlPanel":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
