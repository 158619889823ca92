"""Tests for the MCP tools, resources and prompts."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock, patch

import pytest

from yeelight_mcp.errors import ProtocolError


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the decorators no-ops that return the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_instance.prompt.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
        # Remove cached server module so it re-imports with our mock
        sys.modules.pop("yeelight_mcp.server", None)
        import yeelight_mcp.server as server_mod

    return server_mod


@pytest.fixture
def server(fake_bulb):
    server_mod = _get_server_module()
    server_mod.connect(fake_bulb.host, fake_bulb.port, timeout=2.0)
    fake_bulb.received.clear()
    yield server_mod
    server_mod.disconnect()


def test_tools_require_connect():
    """Tools fail clearly before a light is configured."""
    server_mod = _get_server_module()
    with pytest.raises(RuntimeError):
        server_mod.toggle()


def test_connect_reports_light(fake_bulb):
    """connect reads power and name from the light."""
    server_mod = _get_server_module()
    result = server_mod.connect(fake_bulb.host, fake_bulb.port, timeout=2.0)
    assert result == {
        "connected": True,
        "host": fake_bulb.host,
        "port": fake_bulb.port,
        "power": "on",
        "name": "desk",
    }
    server_mod.disconnect()


def test_turn_on_uses_smooth_fade(server, fake_bulb):
    """turn_on sends set_power on/smooth/1000."""
    assert server.turn_on() == {"result": ["ok"]}
    assert fake_bulb.requests[0]["params"] == ["on", "smooth", 1000]


def test_get_properties_default_set(server, fake_bulb):
    """Without names, the common property set is read."""
    props = server.get_properties()["properties"]
    assert props["power"] == "on"
    assert props["name"] == "desk"


def test_set_rgb_parses_hex(server, fake_bulb):
    """Hex colors are converted to integers."""
    server.set_rgb("#00FF00", "sudden", 0)
    assert fake_bulb.requests[0]["params"] == [0x00FF00, "sudden", 0]


def test_set_rgb_bad_hex(server, fake_bulb):
    """Bad hex strings are reported without contacting the light."""
    assert "error" in server.set_rgb("green")
    assert fake_bulb.received == []


def test_range_errors_reported(server, fake_bulb):
    """Out-of-range arguments come back as error dicts without contacting the light."""
    assert "error" in server.set_brightness(500)
    assert "error" in server.set_color_temperature(9000)
    assert "error" in server.set_hsv(400, 50)
    assert "error" in server.set_power("dim")
    assert "error" in server.adjust("increase", "color")
    assert "error" in server.add_sleep_timer(0)
    assert "error" in server.set_scene("ct", [5400])
    assert "error" in server.get_properties(["power", "power"])
    assert "error" in server.start_color_flow([{"duration": 10, "mode": 1}])
    assert "error" in server.start_color_flow([{"speed": 1000}])
    assert fake_bulb.received == []


def test_start_color_flow(server, fake_bulb):
    """Transition dicts become a flow expression."""
    server.start_color_flow(
        [{"duration": 1000, "mode": 2, "value": 2700, "brightness": 100}],
        count=1,
        action=2,
    )
    assert fake_bulb.requests[0]["params"] == [1, 2, "1000,2,2700,100"]


def test_set_scene_unknown_class(server, fake_bulb):
    """Unknown scene classes are reported without contacting the light."""
    assert "error" in server.set_scene("disco", [1])
    assert fake_bulb.received == []


def test_sleep_timer_tools(server, fake_bulb):
    """Timer tools use cron type 0."""
    server.add_sleep_timer(20)
    server.get_sleep_timer()
    server.delete_sleep_timer()
    assert [r["method"] for r in fake_bulb.requests] == ["cron_add", "cron_get", "cron_del"]
    assert fake_bulb.requests[0]["params"] == [0, 20]


def test_device_error_propagates(server, fake_bulb):
    """Device rejections surface as ProtocolError."""
    fake_bulb.raw_reply = [b'{"id":16,"error":{"code":-1,"message":"invalid name"}}\r\n']
    with pytest.raises(ProtocolError):
        server.set_name("x")


def test_resources(server, fake_bulb):
    """Resources describe the target and catalogs as JSON."""
    info = json.loads(server.resource_device_info())
    assert info["connected"] is True
    assert info["port"] == fake_bulb.port

    state = json.loads(server.resource_device_state())
    assert state["state"]["bright"] == 100

    scenes = json.loads(server.resource_scene_catalog())["scenes"]
    assert {"class": "ct", "params": ["ct", "bright"]} in scenes


def test_prompts():
    """Prompts mention the tools they steer toward."""
    server_mod = _get_server_module()
    assert "start_color_flow" in server_mod.create_flow("sunrise")
    assert "get_state" in server_mod.set_mood("cozy reading")
