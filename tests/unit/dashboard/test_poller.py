"""
Tests for sousvide.dashboard.poller module.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from sousvide.client.device import DeviceClient
from sousvide.client.http import DeviceError, JsonRequestClient
from sousvide.core.models import DeviceState
from sousvide.dashboard.poller import DEFAULT_INTERVAL, StatePoller
from sousvide.dashboard.view import PanelView


@pytest.fixture
def mock_device():
    device = MagicMock(spec=DeviceClient)
    device.get_state = AsyncMock(
        return_value=DeviceState(set_temp=140, cur_temp=138, pump=1, heater=0)
    )
    return device


class TestStatePoller:
    """Tests for StatePoller."""

    def test_init(self, mock_device):
        poller = StatePoller(mock_device, PanelView())
        assert poller.interval == DEFAULT_INTERVAL == 1.0
        assert poller.running is False
        assert poller.ticks == 0

    @pytest.mark.asyncio
    async def test_tick_renders(self, mock_device):
        view = PanelView()
        poller = StatePoller(mock_device, view)

        state = await poller.tick()

        assert state.set_temp == 140
        assert view.labels()["set_temp_label"] == "140℉"
        assert view.pump_label == "On"
        assert view.heater_label == "Off"

    @pytest.mark.asyncio
    async def test_failed_tick_keeps_previous_render(self, mock_device):
        view = PanelView()
        poller = StatePoller(mock_device, view)
        await poller.tick()

        mock_device.get_state.side_effect = DeviceError("boom")
        result = await poller.tick()

        assert result is None
        assert view.set_temp_label == "140℉"
        assert view.renders == 1

    @pytest.mark.asyncio
    async def test_render_callback_errors_are_contained(self, mock_device):
        view = PanelView()
        poller = StatePoller(mock_device, view)
        seen = []
        poller.on_render(MagicMock(side_effect=RuntimeError("bad callback")))
        poller.on_render(seen.append)

        await poller.tick()

        assert seen == [view]

    @pytest.mark.asyncio
    async def test_timer_keeps_firing(self, mock_device):
        poller = StatePoller(mock_device, PanelView(), interval=0.02)

        await poller.start()
        assert poller.running is True
        await asyncio.sleep(0.15)
        await poller.stop()
        await poller.drain()

        assert poller.running is False
        assert poller.ticks >= 3
        assert mock_device.get_state.await_count == poller.ticks

    @pytest.mark.asyncio
    async def test_first_poll_waits_one_interval(self, mock_device):
        poller = StatePoller(mock_device, PanelView(), interval=10)

        await poller.start()
        await asyncio.sleep(0.05)
        await poller.stop()

        assert poller.ticks == 0

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self, mock_device):
        poller = StatePoller(mock_device, PanelView(), interval=10)

        await poller.start()
        task = poller._timer_task
        await poller.start()

        assert poller._timer_task is task
        await poller.stop()

    @pytest.mark.asyncio
    async def test_overlapping_reads_are_not_cancelled(self, mock_device):
        """Test slow reads overlap and all complete after stop."""
        release = asyncio.Event()

        async def slow_state():
            await release.wait()
            return DeviceState(set_temp=150)

        mock_device.get_state = AsyncMock(side_effect=slow_state)
        view = PanelView()
        poller = StatePoller(mock_device, view, interval=0.02)

        await poller.start()
        await asyncio.sleep(0.1)
        await poller.stop()

        assert poller.inflight >= 2
        assert poller.inflight == poller.ticks

        release.set()
        await poller.drain()

        assert poller.inflight == 0
        assert view.renders == poller.ticks
        assert view.set_temp_label == "150℉"

    @pytest.mark.asyncio
    async def test_later_answer_wins(self, mock_device):
        """Test responses apply in arrival order, not request order."""
        first = asyncio.Event()
        calls = []

        async def state():
            calls.append(len(calls))
            if len(calls) == 1:
                await first.wait()
                return DeviceState(set_temp=100)
            return DeviceState(set_temp=200)

        mock_device.get_state = AsyncMock(side_effect=state)
        view = PanelView()
        poller = StatePoller(mock_device, view)

        slow = poller.tick()
        fast = poller.tick()
        await fast
        assert view.set_temp_label == "200℉"

        first.set()
        await slow
        assert view.set_temp_label == "100℉"

    @pytest.mark.asyncio
    async def test_against_fake_device(self, fake_device):
        view = PanelView()
        http = JsonRequestClient(fake_device.url)
        poller = StatePoller(DeviceClient(http), view)
        try:
            await poller.tick()
        finally:
            await http.close()

        assert view.set_temp_label == "140℉"
        assert view.cur_temp_label == "138℉"
        assert view.pump_label == "On"
        assert view.heater_label == "Off"

    @pytest.mark.asyncio
    async def test_timed_out_read_is_skipped(self, fake_device):
        """Test a read that hits the transport timeout leaves the view alone."""
        fake_device.state_delay = 0.5
        view = PanelView()

        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=0.1)) as session:
            poller = StatePoller(DeviceClient(JsonRequestClient(fake_device.url, session=session)), view)
            result = await poller.tick()

        assert result is None
        assert view.renders == 0
        assert view.set_temp_label == ""
