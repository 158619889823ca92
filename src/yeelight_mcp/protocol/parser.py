"""Response parsing for device replies.

Success and error replies share only the ``id`` field, so there is no
discriminant to dispatch on. A line is read as a success first (a
non-null ``result``); failing that, as an error (an ``error`` object).
Anything else is malformed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Sequence, Union

from ..errors import MalformedResponseError, ProtocolError


@dataclass
class Success:
    """A reply carrying a result payload."""

    id: int
    result: Any


@dataclass
class Failure:
    """A reply in which the device rejected the command."""

    id: int
    code: int
    message: str

    def __repr__(self) -> str:
        return f"Failure(id={self.id}, code={self.code}, message={self.message!r})"


Response = Union[Success, Failure]


def parse_response(line: str) -> Response:
    """Classify a single response line.

    Args:
        line: One line received from the device, with or without terminator.

    Returns:
        ``Success`` or ``Failure``.

    Raises:
        MalformedResponseError: If the line is not JSON, or is JSON of
            neither the success nor the error shape.
    """
    try:
        data = json.loads(line)
    except (ValueError, RecursionError) as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}", line) from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Response is not a JSON object", line)

    msg_id = data.get("id", 0)

    result = data.get("result")
    if result is not None:
        return Success(id=msg_id, result=result)

    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        code = error.get("code", 0)
        if not isinstance(code, int):
            raise MalformedResponseError("Error code is not an integer", line)
        return Failure(id=msg_id, code=code, message=error["message"])

    raise MalformedResponseError("Response has neither a result nor an error", line)


def unwrap(response: Response) -> Any:
    """Return the payload of a success, or raise for a failure.

    Raises:
        ProtocolError: If the device answered with an error.
    """
    if isinstance(response, Failure):
        raise ProtocolError(response.message, response.code)
    return response.result


def parse_properties(names: Sequence[str], result: Any) -> dict[str, str]:
    """Zip requested property names with the values the device returned.

    Raises:
        ProtocolError: If the result is not a list of strings of the same
            length as ``names``.
    """
    if not isinstance(result, list):
        raise ProtocolError(f"get_prop result is not a list: {result!r}")
    if len(result) != len(names):
        raise ProtocolError(
            f"Requested {len(names)} properties, device returned {len(result)} values"
        )
    for name, value in zip(names, result):
        if not isinstance(value, str):
            raise ProtocolError(f"Property {name!r} is not a string: {value!r}")
    return dict(zip(names, result))
