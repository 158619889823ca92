"""Color-flow transitions and flow expressions.

A flow expression is a flat, comma-joined list of 4-tuples::

    duration,mode,value,brightness[,duration,mode,value,brightness...]

- duration: transition length in ms (minimum 50)
- mode: 1 = color, 2 = color temperature, 7 = sleep
- value: RGB for color, Kelvin for color temperature, ignored for sleep
- brightness: 1-100, or -1 to keep the current brightness
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from ..protocol.commands import CT_RANGE, RGB_MAX

MIN_FLOW_DURATION_MS = 50
KEEP_BRIGHTNESS = -1


class FlowMode(IntEnum):
    """Transition modes inside a flow expression."""

    COLOR = 1
    COLOR_TEMPERATURE = 2
    SLEEP = 7


@dataclass
class FlowTransition:
    """One step of a color flow."""

    duration: int
    mode: FlowMode
    value: int = 0
    brightness: int = KEEP_BRIGHTNESS

    def __post_init__(self) -> None:
        self.mode = FlowMode(self.mode)
        if self.duration < MIN_FLOW_DURATION_MS:
            raise ValueError(
                f"Flow duration must be at least {MIN_FLOW_DURATION_MS} ms, "
                f"got {self.duration}"
            )
        if self.brightness != KEEP_BRIGHTNESS and not 1 <= self.brightness <= 100:
            raise ValueError(f"Flow brightness must be 1-100 or -1, got {self.brightness}")
        if self.mode == FlowMode.COLOR and not 0 <= self.value <= RGB_MAX:
            raise ValueError(f"Flow RGB value must be 0-0xFFFFFF, got {self.value}")
        if self.mode == FlowMode.COLOR_TEMPERATURE:
            low, high = CT_RANGE
            if not low <= self.value <= high:
                raise ValueError(f"Flow color temperature must be {low}-{high} K, got {self.value}")

    @classmethod
    def color(cls, rgb: int, duration: int, brightness: int = KEEP_BRIGHTNESS) -> FlowTransition:
        return cls(duration, FlowMode.COLOR, rgb, brightness)

    @classmethod
    def temperature(cls, ct: int, duration: int, brightness: int = KEEP_BRIGHTNESS) -> FlowTransition:
        return cls(duration, FlowMode.COLOR_TEMPERATURE, ct, brightness)

    @classmethod
    def sleep(cls, duration: int) -> FlowTransition:
        return cls(duration, FlowMode.SLEEP, 0, KEEP_BRIGHTNESS)

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.duration, int(self.mode), self.value, self.brightness)


def build_flow_expression(transitions: Sequence[FlowTransition]) -> str:
    """Join transitions into the expression string sent with start_cf."""
    if not transitions:
        raise ValueError("A flow needs at least one transition")
    return ",".join(
        str(part) for transition in transitions for part in transition.to_tuple()
    )


def parse_flow_expression(expression: str) -> list[FlowTransition]:
    """Split a flow expression back into transitions."""
    try:
        numbers = [int(part) for part in expression.split(",")]
    except ValueError as e:
        raise ValueError(f"Flow expression must contain only integers: {expression!r}") from e
    if len(numbers) % 4 != 0:
        raise ValueError(
            f"Flow expression must have a multiple of 4 values, got {len(numbers)}"
        )
    return [
        FlowTransition(*numbers[i : i + 4])
        for i in range(0, len(numbers), 4)
    ]
