"""Error types raised by the client.

Connection-level failures subclass the matching built-in exceptions so
callers can catch either ``ConnectionError``/``TimeoutError`` or the
library's own :class:`YeelightError`.
"""

from __future__ import annotations


class YeelightError(Exception):
    """Base class for all client errors."""


class DeviceConnectionError(YeelightError, ConnectionError):
    """The socket could not be opened, or broke before a full reply arrived."""


class DeviceTimeoutError(YeelightError, TimeoutError):
    """No complete response line arrived before the read deadline."""


class MalformedResponseError(YeelightError):
    """The response line is neither a success nor an error object."""

    def __init__(self, message: str, line: str = "") -> None:
        super().__init__(message)
        self.line = line


class ProtocolError(YeelightError):
    """The device rejected the command, or its reply broke the protocol."""

    def __init__(self, message: str, code: int = 0) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
