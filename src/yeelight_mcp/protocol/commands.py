"""Command verbs and high-level request builders.

Each verb is sent with a fixed request id. The device echoes the id
back, but since every call owns its own connection nothing relies on it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence

from .framing import Request


class Method(str, Enum):
    """Command verbs understood by the device."""

    GET_PROP = "get_prop"
    SET_CT_ABX = "set_ct_abx"
    SET_RGB = "set_rgb"
    SET_HSV = "set_hsv"
    SET_BRIGHT = "set_bright"
    SET_POWER = "set_power"
    TOGGLE = "toggle"
    SET_DEFAULT = "set_default"
    START_CF = "start_cf"
    STOP_CF = "stop_cf"
    SET_SCENE = "set_scene"
    CRON_ADD = "cron_add"
    CRON_GET = "cron_get"
    CRON_DEL = "cron_del"
    SET_ADJUST = "set_adjust"
    SET_NAME = "set_name"


METHOD_IDS: dict[Method, int] = {
    method: index for index, method in enumerate(Method, start=1)
}

EFFECTS = ("sudden", "smooth")
POWER_STATES = ("on", "off")
ADJUST_ACTIONS = ("increase", "decrease", "circle")
ADJUST_PROPS = ("bright", "ct", "color")

MIN_DURATION_MS = 30
CT_RANGE = (1700, 6500)
RGB_MAX = 0xFFFFFF

# Flow end actions
FLOW_RECOVER = 0
FLOW_STAY = 1
FLOW_TURN_OFF = 2

# The only timer type the device supports
CRON_POWER_OFF = 0

# Scene class -> names of the trailing parameters
SCENE_PARAMS: dict[str, tuple[str, ...]] = {
    "color": ("rgb", "bright"),
    "hsv": ("hue", "sat", "bright"),
    "ct": ("ct", "bright"),
    "cf": ("count", "action", "flow_expression"),
    "auto_delay_off": ("bright", "minutes"),
}


def build_command(method: Method, params: Sequence[Any] = ()) -> Request:
    """Build a request for a verb using its fixed id."""
    return Request(id=METHOD_IDS[method], method=method.value, params=list(params))


def _check_effect(effect: str, duration: int) -> None:
    if effect not in EFFECTS:
        raise ValueError(f"Effect must be one of {EFFECTS}, got {effect!r}")
    if effect == "smooth" and duration < MIN_DURATION_MS:
        raise ValueError(
            f"Smooth duration must be at least {MIN_DURATION_MS} ms, got {duration}"
        )


def _check_bright(bright: int) -> None:
    if not 1 <= bright <= 100:
        raise ValueError(f"Brightness must be 1-100, got {bright}")


def _check_ct(ct: int) -> None:
    low, high = CT_RANGE
    if not low <= ct <= high:
        raise ValueError(f"Color temperature must be {low}-{high} K, got {ct}")


def _check_rgb(rgb: int) -> None:
    if not 0 <= rgb <= RGB_MAX:
        raise ValueError(f"RGB value must be 0-0xFFFFFF, got {rgb}")


def _check_hue_sat(hue: int, sat: int) -> None:
    if not 0 <= hue <= 359:
        raise ValueError(f"Hue must be 0-359, got {hue}")
    if not 0 <= sat <= 100:
        raise ValueError(f"Saturation must be 0-100, got {sat}")


def _check_flow(count: int, action: int, flow_expression: str) -> None:
    if count < 0:
        raise ValueError(f"Flow count must be >= 0, got {count}")
    if action not in (FLOW_RECOVER, FLOW_STAY, FLOW_TURN_OFF):
        raise ValueError(f"Flow action must be 0, 1 or 2, got {action}")
    if not flow_expression:
        raise ValueError("Flow expression must not be empty")


def _check_cron_type(cron_type: int) -> None:
    if cron_type != CRON_POWER_OFF:
        raise ValueError(f"Only cron type {CRON_POWER_OFF} is supported, got {cron_type}")


def build_get_prop(names: Sequence[str]) -> Request:
    """Build a get_prop request.

    Args:
        names: Property names, in the order the values should come back.
    """
    if not names:
        raise ValueError("At least one property name is required")
    if len(set(names)) != len(names):
        raise ValueError(f"Property names must be unique, got {list(names)}")
    return build_command(Method.GET_PROP, [str(name) for name in names])


def build_set_ct_abx(value: int, effect: str, duration: int) -> Request:
    """Build a set_ct_abx request (color temperature in Kelvin)."""
    _check_ct(value)
    _check_effect(effect, duration)
    return build_command(Method.SET_CT_ABX, [value, effect, duration])


def build_set_rgb(value: int, effect: str, duration: int) -> Request:
    """Build a set_rgb request.

    Args:
        value: Color as a 24-bit integer, ``0xRRGGBB``.
        effect: ``"sudden"`` or ``"smooth"``.
        duration: Transition length in milliseconds.
    """
    _check_rgb(value)
    _check_effect(effect, duration)
    return build_command(Method.SET_RGB, [value, effect, duration])


def build_set_hsv(hue: int, sat: int, effect: str, duration: int) -> Request:
    """Build a set_hsv request."""
    _check_hue_sat(hue, sat)
    _check_effect(effect, duration)
    return build_command(Method.SET_HSV, [hue, sat, effect, duration])


def build_set_bright(brightness: int, effect: str, duration: int) -> Request:
    """Build a set_bright request."""
    _check_bright(brightness)
    _check_effect(effect, duration)
    return build_command(Method.SET_BRIGHT, [brightness, effect, duration])


def build_set_power(power: str, effect: str, duration: int) -> Request:
    """Build a set_power request.

    Args:
        power: ``"on"`` or ``"off"``.
        effect: ``"sudden"`` or ``"smooth"``.
        duration: Transition length in milliseconds.
    """
    if power not in POWER_STATES:
        raise ValueError(f"Power must be 'on' or 'off', got {power!r}")
    _check_effect(effect, duration)
    return build_command(Method.SET_POWER, [power, effect, duration])


def build_toggle() -> Request:
    return build_command(Method.TOGGLE)


def build_set_default() -> Request:
    """Build a set_default request (persist the current state)."""
    return build_command(Method.SET_DEFAULT)


def build_start_cf(count: int, action: int, flow_expression: str) -> Request:
    """Build a start_cf request.

    Args:
        count: Number of state changes to run, 0 for an endless flow.
        action: What to do when the flow stops (0 recover, 1 stay, 2 turn off).
        flow_expression: Comma-joined ``duration,mode,value,brightness`` tuples.
    """
    _check_flow(count, action, flow_expression)
    return build_command(Method.START_CF, [count, action, flow_expression])


def build_stop_cf() -> Request:
    return build_command(Method.STOP_CF)


def build_set_scene(scene_class: str, *values: Any) -> Request:
    """Build a set_scene request.

    The number and meaning of ``values`` depend on the scene class, see
    :data:`SCENE_PARAMS`.
    """
    if scene_class not in SCENE_PARAMS:
        raise ValueError(
            f"Unknown scene class {scene_class!r}. Valid: {list(SCENE_PARAMS)}"
        )
    expected = SCENE_PARAMS[scene_class]
    if len(values) != len(expected):
        raise ValueError(
            f"Scene class {scene_class!r} takes {len(expected)} values "
            f"({', '.join(expected)}), got {len(values)}"
        )

    if scene_class == "color":
        _check_rgb(values[0])
        _check_bright(values[1])
    elif scene_class == "hsv":
        _check_hue_sat(values[0], values[1])
        _check_bright(values[2])
    elif scene_class == "ct":
        _check_ct(values[0])
        _check_bright(values[1])
    elif scene_class == "cf":
        _check_flow(values[0], values[1], values[2])
    elif scene_class == "auto_delay_off":
        _check_bright(values[0])
        if values[1] < 1:
            raise ValueError(f"Delay must be at least 1 minute, got {values[1]}")

    return build_command(Method.SET_SCENE, [scene_class, *values])


def build_cron_add(cron_type: int, value: int) -> Request:
    """Build a cron_add request.

    Args:
        cron_type: Timer type, only 0 (power off) exists.
        value: Minutes until the timer fires.
    """
    _check_cron_type(cron_type)
    if value < 1:
        raise ValueError(f"Timer must be at least 1 minute, got {value}")
    return build_command(Method.CRON_ADD, [cron_type, value])


def build_cron_get(cron_type: int) -> Request:
    _check_cron_type(cron_type)
    return build_command(Method.CRON_GET, [cron_type])


def build_cron_del(cron_type: int) -> Request:
    _check_cron_type(cron_type)
    return build_command(Method.CRON_DEL, [cron_type])


def build_set_adjust(action: str, prop: str) -> Request:
    """Build a set_adjust request.

    Color can only be cycled, so ``prop="color"`` requires ``action="circle"``.
    """
    if action not in ADJUST_ACTIONS:
        raise ValueError(f"Adjust action must be one of {ADJUST_ACTIONS}, got {action!r}")
    if prop not in ADJUST_PROPS:
        raise ValueError(f"Adjust property must be one of {ADJUST_PROPS}, got {prop!r}")
    if prop == "color" and action != "circle":
        raise ValueError("Color can only be adjusted with action 'circle'")
    return build_command(Method.SET_ADJUST, [action, prop])


def build_set_name(name: str) -> Request:
    """Build a set_name request."""
    return build_command(Method.SET_NAME, [name])
