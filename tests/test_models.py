"""Tests for the light state and color flow models."""

import pytest

from yeelight_mcp.models.flow import (
    FlowMode,
    FlowTransition,
    build_flow_expression,
    parse_flow_expression,
)
from yeelight_mcp.models.properties import KNOWN_PROPERTIES, LightState


def test_flow_expression():
    """Transitions are flattened into 4-tuples."""
    expression = build_flow_expression([
        FlowTransition.temperature(2700, 1000, 100),
        FlowTransition.color(0x0000FF, 500, 10),
        FlowTransition.sleep(5000),
    ])
    assert expression == "1000,2,2700,100,500,1,255,10,5000,7,0,-1"


def test_parse_flow_expression():
    """Expressions split back into transitions."""
    transitions = parse_flow_expression("1000,2,2700,100,500,1,255,10")
    assert len(transitions) == 2
    assert transitions[0].mode == FlowMode.COLOR_TEMPERATURE
    assert transitions[1].value == 255


def test_parse_flow_expression_bad_length():
    """Values not in groups of four should raise."""
    with pytest.raises(ValueError):
        parse_flow_expression("1000,2,2700")


def test_parse_flow_expression_not_numbers():
    """Non-numeric parts should raise."""
    with pytest.raises(ValueError):
        parse_flow_expression("1000,2,warm,100")


def test_empty_flow():
    """A flow needs at least one step."""
    with pytest.raises(ValueError):
        build_flow_expression([])


def test_transition_validation():
    """Out-of-range transitions should raise."""
    with pytest.raises(ValueError):
        FlowTransition(49, FlowMode.COLOR, 0xFF0000, 100)
    with pytest.raises(ValueError):
        FlowTransition(100, FlowMode.COLOR, 0xFF0000, 0)
    with pytest.raises(ValueError):
        FlowTransition(100, FlowMode.COLOR_TEMPERATURE, 9000, 50)
    with pytest.raises(ValueError):
        FlowTransition(100, 3, 0, 50)


def test_transition_mode_coerced():
    """Plain integer modes become FlowMode members."""
    assert FlowTransition(100, 1, 0xFF, 50).mode is FlowMode.COLOR


def test_light_state_from_props():
    """Property strings become typed fields."""
    state = LightState.from_props({
        "power": "off",
        "bright": "35",
        "rgb": "16711680",
        "color_mode": "1",
        "flowing": "1",
        "name": "",
        "nl_br": "0",
    })
    assert state.power is False
    assert state.bright == 35
    assert state.rgb == 0xFF0000
    assert state.color_mode_name == "rgb"
    assert state.flowing is True
    assert state.extra == {"nl_br": "0"}


def test_light_state_unsupported_props():
    """Empty strings for unsupported properties become None."""
    state = LightState.from_props({"ct": "", "hue": "", "power": ""})
    assert state.ct is None
    assert state.hue is None
    assert state.power is None


def test_light_state_to_dict():
    """to_dict renders RGB as hex and color mode by name."""
    d = LightState(power=True, rgb=0x00FF00, color_mode=1, name="desk").to_dict()
    assert d["power"] is True
    assert d["rgb"] == "#00FF00"
    assert d["color_mode"] == "rgb"
    assert d["name"] == "desk"


def test_known_properties():
    """The default property set covers power and brightness."""
    assert "power" in KNOWN_PROPERTIES
    assert "bright" in KNOWN_PROPERTIES
