"""Control Yeelight smart lights over their LAN JSON protocol."""

from .client import YeelightClient
from .errors import (
    DeviceConnectionError,
    DeviceTimeoutError,
    MalformedResponseError,
    ProtocolError,
    YeelightError,
)

__all__ = [
    "YeelightClient",
    "DeviceConnectionError",
    "DeviceTimeoutError",
    "MalformedResponseError",
    "ProtocolError",
    "YeelightError",
]
