"""High-level client for a Yeelight smart light.

Every method performs one full round trip: build the request, open a
socket, send the line, read the reply, close the socket, decode.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, Union

from .models.flow import FlowTransition, build_flow_expression
from .models.properties import KNOWN_PROPERTIES, LightState
from .protocol.commands import (
    CRON_POWER_OFF,
    FLOW_RECOVER,
    build_cron_add,
    build_cron_del,
    build_cron_get,
    build_get_prop,
    build_set_adjust,
    build_set_bright,
    build_set_ct_abx,
    build_set_default,
    build_set_hsv,
    build_set_name,
    build_set_power,
    build_set_rgb,
    build_set_scene,
    build_start_cf,
    build_stop_cf,
    build_toggle,
)
from .protocol.framing import Request, encode_request
from .protocol.parser import parse_properties, parse_response, unwrap
from .transport.tcp_connection import DEFAULT_PORT, DEFAULT_TIMEOUT, TCPConnection

logger = logging.getLogger(__name__)

DEFAULT_EFFECT = "smooth"
DEFAULT_DURATION = 500

Flow = Union[str, Sequence[FlowTransition]]


def _flow_expression(flow: Flow) -> str:
    if isinstance(flow, str):
        return flow
    return build_flow_expression(flow)


class YeelightClient:
    """Controls a single light by host and port.

    Usage::

        light = YeelightClient("192.168.1.42")
        light.on()
        light.set_bright(40)
        print(light.get_prop("power", "bright"))

    Errors:
        DeviceConnectionError / DeviceTimeoutError when the light cannot be
        reached, ProtocolError when it rejects a command, and
        MalformedResponseError when the reply cannot be understood.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._connection = TCPConnection(host, port, timeout)

    @property
    def host(self) -> str:
        return self._connection.host

    @property
    def port(self) -> int:
        return self._connection.port

    @property
    def timeout(self) -> float:
        return self._connection.timeout

    def request(self, request: Request) -> Any:
        """Send a request and return the decoded result payload."""
        logger.debug("Request %r to %s:%s", request, self.host, self.port)
        line = encode_request(request)
        reply = self._connection.send_and_receive(line)
        return unwrap(parse_response(reply))

    # ─── QUERIES ─────────────────────────────────────────────────────

    def get_prop(self, *names: str) -> dict[str, str]:
        """Read properties from the light.

        Returns:
            The requested names mapped to the values, in request order.
        """
        result = self.request(build_get_prop(names))
        return parse_properties(names, result)

    def get_state(self, names: Sequence[str] = KNOWN_PROPERTIES) -> LightState:
        """Read the common properties and return them as a LightState."""
        return LightState.from_props(self.get_prop(*names))

    # ─── POWER ───────────────────────────────────────────────────────

    def set_power(
        self,
        power: str,
        effect: str = DEFAULT_EFFECT,
        duration: int = DEFAULT_DURATION,
    ) -> Any:
        return self.request(build_set_power(power, effect, duration))

    def on(self) -> Any:
        """Switch the light on with a one-second smooth fade."""
        return self.set_power("on", "smooth", 1000)

    def off(self) -> Any:
        """Switch the light off with a one-second smooth fade."""
        return self.set_power("off", "smooth", 1000)

    def toggle(self) -> Any:
        return self.request(build_toggle())

    def set_default(self) -> Any:
        """Save the current state as the power-on default."""
        return self.request(build_set_default())

    # ─── COLOR & BRIGHTNESS ──────────────────────────────────────────

    def set_ct_abx(
        self,
        value: int,
        effect: str = DEFAULT_EFFECT,
        duration: int = DEFAULT_DURATION,
    ) -> Any:
        """Change the color temperature (1700-6500 K)."""
        return self.request(build_set_ct_abx(value, effect, duration))

    def set_rgb(
        self,
        value: int,
        effect: str = DEFAULT_EFFECT,
        duration: int = DEFAULT_DURATION,
    ) -> Any:
        """Change the color, given as a ``0xRRGGBB`` integer."""
        return self.request(build_set_rgb(value, effect, duration))

    def set_hsv(
        self,
        hue: int,
        sat: int,
        effect: str = DEFAULT_EFFECT,
        duration: int = DEFAULT_DURATION,
    ) -> Any:
        return self.request(build_set_hsv(hue, sat, effect, duration))

    def set_bright(
        self,
        brightness: int,
        effect: str = DEFAULT_EFFECT,
        duration: int = DEFAULT_DURATION,
    ) -> Any:
        return self.request(build_set_bright(brightness, effect, duration))

    def set_adjust(self, action: str, prop: str) -> Any:
        """Nudge brightness, color temperature or color without reading it first."""
        return self.request(build_set_adjust(action, prop))

    # ─── FLOWS & SCENES ──────────────────────────────────────────────

    def start_cf(self, count: int, action: int, flow: Flow) -> Any:
        """Start a color flow.

        Args:
            count: Number of transitions to run, 0 to loop forever.
            action: 0 recover the previous state, 1 stay, 2 turn off.
            flow: A flow expression string or a sequence of FlowTransition.
        """
        return self.request(build_start_cf(count, action, _flow_expression(flow)))

    def stop_cf(self) -> Any:
        return self.request(build_stop_cf())

    def set_scene(self, scene_class: str, *values: Any) -> Any:
        """Jump straight to a scene, turning the light on if needed.

        The ``cf`` class accepts FlowTransition sequences in place of the
        expression string.
        """
        if scene_class == "cf" and len(values) == 3:
            values = (values[0], values[1], _flow_expression(values[2]))
        return self.request(build_set_scene(scene_class, *values))

    def start_flow(
        self,
        transitions: Sequence[FlowTransition],
        count: int = 0,
        action: int = FLOW_RECOVER,
    ) -> Any:
        """Convenience wrapper over :meth:`start_cf` for transition lists."""
        return self.start_cf(count, action, transitions)

    # ─── TIMERS ──────────────────────────────────────────────────────

    def cron_add(self, cron_type: int, value: int) -> Any:
        """Schedule a power-off timer ``value`` minutes from now."""
        return self.request(build_cron_add(cron_type, value))

    def cron_get(self, cron_type: int = CRON_POWER_OFF) -> Any:
        return self.request(build_cron_get(cron_type))

    def cron_del(self, cron_type: int = CRON_POWER_OFF) -> Any:
        return self.request(build_cron_del(cron_type))

    # ─── MISC ────────────────────────────────────────────────────────

    def set_name(self, name: str) -> Any:
        """Store a name on the device, readable later as the ``name`` property."""
        return self.request(build_set_name(name))

    def __repr__(self) -> str:
        return f"YeelightClient(host={self.host!r}, port={self.port}, timeout={self.timeout})"
