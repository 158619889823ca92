"""Request objects and line framing.

Every message on the wire is a single JSON object on its own line::

    {"id":1,"method":"get_prop","params":["power","bright"]}\\r\\n

- id: integer chosen by the client, echoed back by the device
- method: the command verb
- params: positional parameters, always present (``[]`` when empty)
- terminator: CRLF on write; the device ends replies with CRLF as well
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

CRLF = "\r\n"
LINE_TERMINATOR = b"\n"


@dataclass
class Request:
    """A single command to send to the device."""

    id: int
    method: str
    params: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "method": self.method, "params": list(self.params)}

    def __repr__(self) -> str:
        return f"Request(id={self.id}, method={self.method!r}, params={self.params!r})"


def encode_request(request: Request) -> str:
    """Serialize a request into a CRLF-terminated command line.

    The request is built as a value tree and dumped in one go, so string
    parameters are always quoted and escaped and numbers stay numbers.

    Args:
        request: The request to encode.

    Returns:
        The command line, including the trailing CRLF.
    """
    body = json.dumps(request.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return body + CRLF


def strip_line(data: bytes) -> str:
    """Decode a raw response line and drop its terminator."""
    return data.decode("utf-8", errors="replace").rstrip("\r\n")
