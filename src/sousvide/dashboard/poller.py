"""
Fixed-interval state poller.

Every interval a read of /rest/state is scheduled as its own task and
its result rendered into the PanelView. Reads are never cancelled,
coalesced or ordered: when the device is slower than the interval,
several reads overlap and whichever finishes last wins.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Set

from sousvide.client.device import DeviceClient
from sousvide.client.http import DeviceError
from sousvide.core.models import DeviceState
from sousvide.dashboard.view import PanelView

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0


class StatePoller:
    """Polls the device and renders each answer."""

    def __init__(
        self,
        device: DeviceClient,
        view: PanelView,
        interval: float = DEFAULT_INTERVAL,
    ):
        self._device = device
        self._view = view
        self._interval = interval

        self._running = False
        self._timer_task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()
        self._ticks = 0

        self._on_render: List[Callable[[PanelView], None]] = []

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        """Number of reads issued so far."""
        return self._ticks

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def on_render(self, callback: Callable[[PanelView], None]) -> None:
        """Register callback run after every successful render."""
        self._on_render.append(callback)

    async def start(self) -> None:
        if self._running:
            logger.warning("Poller already running")
            return

        self._running = True
        self._timer_task = asyncio.create_task(self._timer_loop())
        logger.info(f"Polling device state every {self._interval}s")

    async def stop(self) -> None:
        """Stop the timer. Reads already in flight are left to finish."""
        self._running = False

        if self._timer_task:
            self._timer_task.cancel()
            try:
                await self._timer_task
            except asyncio.CancelledError:
                pass
            self._timer_task = None

        logger.info("Poller stopped")

    async def drain(self) -> None:
        """Wait for every in-flight read to complete."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def tick(self) -> asyncio.Task:
        """Schedule one read without waiting for it."""
        self._ticks += 1
        task = asyncio.create_task(self._poll_once(self._ticks))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _timer_loop(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._interval

        while self._running:
            try:
                await asyncio.sleep(max(0.0, deadline - loop.time()))
                deadline += self._interval
                self.tick()
            except asyncio.CancelledError:
                break

    async def _poll_once(self, seq: int) -> Optional[DeviceState]:
        try:
            state = await self._device.get_state()
        except DeviceError as e:
            logger.debug(f"Poll {seq} skipped: {e}")
            return None

        self._view.render_state(state)

        for callback in self._on_render:
            try:
                callback(self._view)
            except Exception as e:
                logger.error(f"Render callback error: {e}")

        return state
