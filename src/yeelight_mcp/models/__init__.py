"""Data models for light state and color flows."""

from .properties import KNOWN_PROPERTIES, LightState
from .flow import (
    FlowMode,
    FlowTransition,
    build_flow_expression,
    parse_flow_expression,
)
