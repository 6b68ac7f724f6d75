"""
Pytest configuration and shared fixtures for sous-vide panel tests.
"""

import asyncio
import json
import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sousvide.core.config import Config


# ============================================================================
# Temporary Directory Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """Create a temporary config file."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text("""
version: 1
device:
  url: http://sousvide.local:8080
poll:
  interval_seconds: 2.5
display:
  target_placeholder: "n/a"
""")
    return config_path


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config():
    """Return a sample configuration dictionary."""
    return {
        "version": 1,
        "device": {
            "url": "http://192.168.1.50:8080",
        },
        "poll": {
            "interval_seconds": 0.5,
        },
        "display": {
            "unit": "℃",
            "target_placeholder": "--",
            "current_placeholder": "error",
            "refresh_per_second": 2,
        },
    }


# ============================================================================
# Fake Device Fixtures
# ============================================================================

@dataclass
class RecordedRequest:
    """One request received by the fake device."""
    method: str
    path: str
    body: bytes
    content_type: Optional[str]


class FakeDevice:
    """
    In-process stand-in for the sous-vide firmware.

    Answers with text/plain JSON bodies the way the real device does.
    """

    def __init__(self):
        self.state: Dict[str, Any] = {
            "set_temp": 140,
            "cur_temp": 138,
            "pump": 1,
            "heater": 0,
        }
        self.version: Any = "1.2.3"
        self.requests: List[RecordedRequest] = []
        self.state_status = 200
        self.state_body: Optional[str] = None
        self.state_delay = 0.0
        self.command_delay = 0.0
        self.url = ""

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self.handle)
        return app

    def requests_to(self, method: str, path: str) -> List[RecordedRequest]:
        return [r for r in self.requests if r.method == method and r.path == path]

    async def handle(self, request: web.Request) -> web.Response:
        body = await request.read()
        self.requests.append(
            RecordedRequest(request.method, request.path, body, request.headers.get("Content-Type"))
        )

        if request.method == "GET":
            if request.path == "/rest/state":
                if self.state_delay:
                    await asyncio.sleep(self.state_delay)
                if self.state_status != 200:
                    return web.Response(status=self.state_status, text="fail")
                if self.state_body is not None:
                    return web.Response(text=self.state_body)
                return web.Response(text=json.dumps(self.state))
            if request.path == "/rest/version":
                return web.Response(text=json.dumps(self.version))
            if request.path.startswith("/rest/state/"):
                name = request.path.rsplit("/", 1)[1]
                if name in self.state:
                    return web.Response(text=json.dumps(self.state[name]))

        if request.method == "PUT" and request.path in ("/rest/state/set_temp", "/reboot", "/shutdown"):
            if self.command_delay:
                await asyncio.sleep(self.command_delay)
            return web.Response(text="")

        return web.Response(status=404, text="not found")


@pytest_asyncio.fixture
async def fake_device():
    """Start a fake device on a local port."""
    device = FakeDevice()
    server = TestServer(device.make_app())
    await server.start_server()
    device.url = str(server.make_url("")).rstrip("/")
    yield device
    await server.close()


@pytest.fixture
def device_config(fake_device) -> Config:
    """Config pointing at the fake device with a fast poll interval."""
    config = Config()
    config.device.url = fake_device.url
    config.poll.interval_seconds = 0.05
    return config


# ============================================================================
# Clean Environment Fixture
# ============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Ensure clean environment for each test."""
    # Remove any panel-specific env vars that might interfere
    for key in list(os.environ.keys()):
        if key.startswith("SOUSVIDE_"):
            monkeypatch.delenv(key, raising=False)
