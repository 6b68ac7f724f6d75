"""
HTTP client for the sous-vide device REST API.
"""

from sousvide.client.http import DeviceError, JsonRequestClient, RequestOptions
from sousvide.client.device import DeviceClient, STATE_FIELDS

__all__ = [
    "DeviceError",
    "JsonRequestClient",
    "RequestOptions",
    "DeviceClient",
    "STATE_FIELDS",
]
