"""TCP connection to a Yeelight device on the local network.

The device listens on port 55443 and answers each command line with one
reply line. Every round trip uses its own short-lived socket; nothing is
kept open between calls.
"""

from __future__ import annotations

import logging
import socket
import time

from ..errors import DeviceConnectionError, DeviceTimeoutError, MalformedResponseError
from ..protocol.framing import LINE_TERMINATOR, strip_line

logger = logging.getLogger(__name__)

DEFAULT_PORT = 55443
DEFAULT_TIMEOUT = 10.0
RECV_SIZE = 4096
MAX_LINE_BYTES = 64 * 1024


class TCPConnection:
    """One-shot line transport to the light.

    Usage::

        conn = TCPConnection("192.168.1.42")
        reply = conn.send_and_receive('{"id":7,"method":"toggle","params":[]}\\r\\n')
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {timeout}")
        self._host = host
        self._port = port
        self._timeout = timeout

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def timeout(self) -> float:
        return self._timeout

    def _open(self) -> socket.socket:
        """Open a socket to the device within the timeout.

        Raises:
            DeviceConnectionError: If the device cannot be reached.
        """
        try:
            sock = socket.create_connection(
                (self._host, self._port), timeout=self._timeout
            )
        except OSError as e:
            raise DeviceConnectionError(
                f"Could not connect to {self._host}:{self._port}: {e}"
            ) from e
        logger.debug("Connected to %s:%s", self._host, self._port)
        return sock

    def _read_line(self, sock: socket.socket, deadline: float) -> bytes:
        """Read until the first line terminator or the deadline.

        Raises:
            MalformedResponseError: If more than MAX_LINE_BYTES arrive
                without a terminator.
        """
        buffer = b""
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise DeviceTimeoutError(
                    f"No reply from {self._host}:{self._port} within {self._timeout}s"
                )
            sock.settimeout(remaining)

            try:
                chunk = sock.recv(RECV_SIZE)
            except socket.timeout as e:
                raise DeviceTimeoutError(
                    f"No reply from {self._host}:{self._port} within {self._timeout}s"
                ) from e
            except OSError as e:
                raise DeviceConnectionError(
                    f"Read from {self._host}:{self._port} failed: {e}"
                ) from e

            if not chunk:
                raise DeviceConnectionError(
                    f"{self._host}:{self._port} closed the connection "
                    f"before a full reply (got {buffer[:200]!r})"
                )

            # Only the new chunk can hold the first terminator
            end = chunk.find(LINE_TERMINATOR)
            if end >= 0:
                return buffer + chunk[: end + 1]

            buffer += chunk
            if len(buffer) > MAX_LINE_BYTES:
                raise MalformedResponseError(
                    f"Reply from {self._host}:{self._port} exceeds "
                    f"{MAX_LINE_BYTES} bytes without a line terminator",
                    strip_line(buffer[:200]),
                )

    def send_and_receive(self, line: str) -> str:
        """Send one command line and return the reply line.

        Args:
            line: A complete command line, including its CRLF terminator.

        Returns:
            The reply line without its terminator.

        Raises:
            DeviceConnectionError: If the socket cannot be opened or breaks.
            DeviceTimeoutError: If no full line arrives in time.
            MalformedResponseError: If the reply line is too long.
        """
        sock = self._open()
        with sock:
            deadline = time.monotonic() + self._timeout
            try:
                sock.sendall(line.encode("utf-8"))
            except socket.timeout as e:
                raise DeviceTimeoutError(
                    f"Sending to {self._host}:{self._port} timed out"
                ) from e
            except OSError as e:
                raise DeviceConnectionError(
                    f"Write to {self._host}:{self._port} failed: {e}"
                ) from e
            logger.debug("Sent: %s", line.rstrip())

            reply = strip_line(self._read_line(sock, deadline))
        logger.debug("Received: %s", reply)
        return reply
