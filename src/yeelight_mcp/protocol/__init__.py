"""Protocol layer: request framing, command builders, and response parsing."""

from .framing import Request, encode_request
from .commands import Method, build_command
from .parser import Failure, Success, parse_properties, parse_response, unwrap
