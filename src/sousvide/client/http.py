"""
HTTP request layer for talking to the sous-vide device.

Request defaults live in a RequestOptions object built once at startup
and handed to the client, which applies them to every call.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

logger = logging.getLogger(__name__)


class DeviceError(Exception):
    """Raised when a request to the device does not complete cleanly."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class RequestOptions:
    """
    Defaults applied to every outbound request.

    Attributes:
        content_type: Content-Type header sent with each request
        encode_payload: Serialize object payloads to a JSON string body
            instead of sending them as form data
    """
    content_type: str = "application/json"
    encode_payload: bool = True

    def prepare(self, data: Any) -> Any:
        """Turn a payload into the body that goes on the wire."""
        if data is None:
            return None
        if self.encode_payload and not isinstance(data, (str, bytes)):
            return json.dumps(data, separators=(",", ":"))
        return data

    def headers(self) -> Dict[str, str]:
        """Headers for a request."""
        return {"Content-Type": self.content_type}


class JsonRequestClient:
    """
    Thin aiohttp wrapper bound to one device base URL.

    The underlying ClientSession is created on first use so the client
    can be built outside a running event loop.
    """

    def __init__(
        self,
        base_url: str,
        options: Optional[RequestOptions] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._options = options or RequestOptions()
        self._session = session
        self._owns_session = session is None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def options(self) -> RequestOptions:
        return self._options

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def request(self, method: str, path: str, data: Any = None) -> bytes:
        """
        Issue one request and return the raw response body.

        Raises:
            DeviceError: on transport failure or a non-2xx status
        """
        url = self.url_for(path)
        body = self._options.prepare(data)
        logger.debug(f"{method} {url} body={body!r}")

        try:
            async with self._get_session().request(
                method,
                url,
                data=body,
                headers=self._options.headers(),
            ) as response:
                payload = await response.read()
                if response.status >= 400:
                    raise DeviceError(
                        f"{method} {path} returned HTTP {response.status}",
                        status=response.status,
                    )
                return payload
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DeviceError(f"{method} {path} failed: {e}") from e

    async def get_json(self, path: str) -> Any:
        """GET a path and decode its JSON body, whatever the content type."""
        payload = await self.request("GET", path)
        try:
            return json.loads(payload.decode("utf-8"))
        except ValueError as e:
            raise DeviceError(f"GET {path} returned invalid JSON: {e}") from e

    async def put(self, path: str, data: Any = None) -> None:
        """PUT to a path, ignoring the response body."""
        await self.request("PUT", path, data=data)

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "JsonRequestClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
