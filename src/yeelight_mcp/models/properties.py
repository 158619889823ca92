"""Light state model built from a get_prop property map.

The device returns every property as a string, and an empty string for
properties it does not support.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

KNOWN_PROPERTIES: tuple[str, ...] = (
    "power",
    "bright",
    "ct",
    "rgb",
    "hue",
    "sat",
    "color_mode",
    "flowing",
    "delayoff",
    "music_on",
    "name",
)

COLOR_MODES = {1: "rgb", 2: "ct", 3: "hsv"}


def _int_or_none(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass
class LightState:
    """Typed view of the properties reported by the light."""

    INT_FIELDS: ClassVar[tuple[str, ...]] = (
        "bright", "ct", "rgb", "hue", "sat", "color_mode", "delayoff",
    )

    power: bool | None = None
    bright: int | None = None
    ct: int | None = None
    rgb: int | None = None
    hue: int | None = None
    sat: int | None = None
    color_mode: int | None = None
    flowing: bool | None = None
    delayoff: int | None = None
    music_on: bool | None = None
    name: str = ""
    extra: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_props(cls, props: dict[str, str]) -> LightState:
        """Build a state from a name -> value property map."""
        state = cls()
        for key, value in props.items():
            if key == "power":
                state.power = {"on": True, "off": False}.get(value)
            elif key in ("flowing", "music_on"):
                flag = _int_or_none(value)
                setattr(state, key, None if flag is None else bool(flag))
            elif key in cls.INT_FIELDS:
                setattr(state, key, _int_or_none(value))
            elif key == "name":
                state.name = value
            else:
                state.extra[key] = value
        return state

    @property
    def color_mode_name(self) -> str | None:
        if self.color_mode is None:
            return None
        return COLOR_MODES.get(self.color_mode)

    def to_dict(self) -> dict:
        d = {
            "power": self.power,
            "bright": self.bright,
            "ct": self.ct,
            "rgb": f"#{self.rgb:06X}" if self.rgb is not None else None,
            "hue": self.hue,
            "sat": self.sat,
            "color_mode": self.color_mode_name,
            "flowing": self.flowing,
            "delayoff": self.delayoff,
            "music_on": self.music_on,
            "name": self.name,
        }
        d.update(self.extra)
        return d
