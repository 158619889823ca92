"""Transport layer: per-call TCP round trips."""

from .tcp_connection import DEFAULT_PORT, DEFAULT_TIMEOUT, TCPConnection
