"""MCP server entry point for Yeelight smart lights.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from mcp.server.fastmcp import FastMCP

from .client import YeelightClient
from .models.flow import FlowTransition
from .models.properties import KNOWN_PROPERTIES
from .protocol.commands import (
    ADJUST_ACTIONS,
    ADJUST_PROPS,
    CRON_POWER_OFF,
    FLOW_RECOVER,
    SCENE_PARAMS,
)
from .transport.tcp_connection import DEFAULT_PORT, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "yeelight",
    instructions="MCP server for Yeelight smart lights on the local network",
)

# Target light; each tool call still opens its own socket
_light: YeelightClient | None = None


def _get_light() -> YeelightClient:
    """Get the configured light, raising if none is set."""
    if _light is None:
        raise RuntimeError(
            "No light configured. Use the 'connect' tool first."
        )
    return _light


def _run(command: Callable[..., Any], *args: Any) -> dict[str, Any]:
    """Run a light command, reporting rejected arguments as an error dict.

    Device and connection errors still propagate.
    """
    try:
        return {"result": command(*args)}
    except ValueError as e:
        return {"error": str(e)}


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    host: str,
    port: int = DEFAULT_PORT,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """Point the server at a light and check that it answers.

    Reads the power state and name to confirm the device is reachable.

    Args:
        host: IP address or hostname of the light.
        port: Control port (default 55443).
        timeout: Per-command timeout in seconds.
    """
    global _light
    light = YeelightClient(host, port, timeout)
    props = light.get_prop("power", "name")
    _light = light
    logger.info("Using light at %s:%s", host, port)
    return {
        "connected": True,
        "host": host,
        "port": port,
        "power": props["power"],
        "name": props["name"],
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Forget the configured light."""
    global _light
    _light = None
    return {"disconnected": True}


# ─── STATE TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def get_properties(names: list[str] | None = None) -> dict[str, Any]:
    """Read properties from the light.

    Args:
        names: Property names to read. Defaults to the common set
               (power, bright, ct, rgb, hue, sat, color_mode, ...).
    """
    light = _get_light()
    try:
        return {"properties": light.get_prop(*(names or KNOWN_PROPERTIES))}
    except ValueError as e:
        return {"error": str(e)}


@mcp.tool()
def get_state() -> dict[str, Any]:
    """Read the common properties as typed values."""
    return _get_light().get_state().to_dict()


# ─── POWER TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def turn_on() -> dict[str, Any]:
    """Switch the light on with a smooth one-second fade."""
    return _run(_get_light().on)


@mcp.tool()
def turn_off() -> dict[str, Any]:
    """Switch the light off with a smooth one-second fade."""
    return _run(_get_light().off)


@mcp.tool()
def toggle() -> dict[str, Any]:
    """Toggle the light between on and off."""
    return _run(_get_light().toggle)


@mcp.tool()
def set_power(power: str, effect: str = "smooth", duration: int = 500) -> dict[str, Any]:
    """Switch the light on or off.

    Args:
        power: "on" or "off".
        effect: "sudden" or "smooth".
        duration: Fade length in milliseconds (min 30 for smooth).
    """
    return _run(_get_light().set_power, power, effect, duration)


@mcp.tool()
def set_default() -> dict[str, Any]:
    """Save the current state so the light comes back to it after a power cut."""
    return _run(_get_light().set_default)


# ─── COLOR TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def set_brightness(brightness: int, effect: str = "smooth", duration: int = 500) -> dict[str, Any]:
    """Set the brightness.

    Args:
        brightness: 1-100 percent.
        effect: "sudden" or "smooth".
        duration: Fade length in milliseconds.
    """
    return _run(_get_light().set_bright, brightness, effect, duration)


@mcp.tool()
def set_color_temperature(kelvin: int, effect: str = "smooth", duration: int = 500) -> dict[str, Any]:
    """Set white color temperature.

    Args:
        kelvin: 1700 (warm) to 6500 (cool).
        effect: "sudden" or "smooth".
        duration: Fade length in milliseconds.
    """
    return _run(_get_light().set_ct_abx, kelvin, effect, duration)


@mcp.tool()
def set_rgb(color: str, effect: str = "smooth", duration: int = 500) -> dict[str, Any]:
    """Set an RGB color.

    Args:
        color: Hex color such as "#FF8800" or "ff8800".
        effect: "sudden" or "smooth".
        duration: Fade length in milliseconds.
    """
    try:
        value = int(color.lstrip("#"), 16)
    except ValueError:
        return {"error": f"Color must be a hex string like '#FF8800', got '{color}'"}
    return _run(_get_light().set_rgb, value, effect, duration)


@mcp.tool()
def set_hsv(hue: int, saturation: int, effect: str = "smooth", duration: int = 500) -> dict[str, Any]:
    """Set a color by hue and saturation.

    Args:
        hue: 0-359.
        saturation: 0-100.
        effect: "sudden" or "smooth".
        duration: Fade length in milliseconds.
    """
    return _run(_get_light().set_hsv, hue, saturation, effect, duration)


@mcp.tool()
def adjust(action: str, prop: str) -> dict[str, Any]:
    """Step a property without knowing its current value.

    Args:
        action: "increase", "decrease" or "circle".
        prop: "bright", "ct" or "color" (color only supports "circle").
    """
    return _run(_get_light().set_adjust, action, prop)


# ─── FLOW & SCENE TOOLS ───────────────────────────────────────────────

@mcp.tool()
def start_color_flow(
    transitions: list[dict[str, int]],
    count: int = 0,
    action: int = FLOW_RECOVER,
) -> dict[str, Any]:
    """Run a sequence of color / temperature / sleep transitions.

    Args:
        transitions: Steps such as
                     {"duration": 1000, "mode": 1, "value": 16711680, "brightness": 100}.
                     mode 1 = RGB color, 2 = color temperature, 7 = sleep.
        count: Number of steps to run, 0 loops forever.
        action: After the flow: 0 recover, 1 stay, 2 turn off.
    """
    try:
        steps = [FlowTransition(**t) for t in transitions]
    except (TypeError, ValueError) as e:
        return {"error": f"Invalid transition: {e}"}
    return _run(_get_light().start_flow, steps, count, action)


@mcp.tool()
def stop_color_flow() -> dict[str, Any]:
    """Stop a running color flow."""
    return _run(_get_light().stop_cf)


@mcp.tool()
def set_scene(scene_class: str, values: list[Any]) -> dict[str, Any]:
    """Jump directly to a scene, turning the light on if it is off.

    Args:
        scene_class: One of color, hsv, ct, cf, auto_delay_off.
        values: Trailing parameters for the class, e.g. [16711680, 50] for color.
    """
    if scene_class not in SCENE_PARAMS:
        return {"error": f"Unknown scene class '{scene_class}'. Valid: {list(SCENE_PARAMS)}"}
    return _run(_get_light().set_scene, scene_class, *values)


# ─── TIMER TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def add_sleep_timer(minutes: int) -> dict[str, Any]:
    """Turn the light off after the given number of minutes.

    Args:
        minutes: Delay before power-off.
    """
    return _run(_get_light().cron_add, CRON_POWER_OFF, minutes)


@mcp.tool()
def get_sleep_timer() -> dict[str, Any]:
    """Read the pending power-off timer."""
    return _run(_get_light().cron_get, CRON_POWER_OFF)


@mcp.tool()
def delete_sleep_timer() -> dict[str, Any]:
    """Cancel the pending power-off timer."""
    return _run(_get_light().cron_del, CRON_POWER_OFF)


# ─── MISC TOOLS ───────────────────────────────────────────────────────

@mcp.tool()
def set_name(name: str) -> dict[str, Any]:
    """Store a name on the light.

    Args:
        name: New device name.
    """
    return _run(_get_light().set_name, name)


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("yeelight://device/info")
def resource_device_info() -> str:
    """Configured light address and timeout."""
    if _light is None:
        return json.dumps({"connected": False})
    return json.dumps({
        "connected": True,
        "host": _light.host,
        "port": _light.port,
        "timeout": _light.timeout,
    })


@mcp.resource("yeelight://device/state")
def resource_device_state() -> str:
    """Live light state read from the device."""
    if _light is None:
        return json.dumps({"connected": False})
    return json.dumps({"connected": True, "state": _light.get_state().to_dict()})


@mcp.resource("yeelight://catalog/properties")
def resource_property_catalog() -> str:
    """Property names the server reads by default."""
    return json.dumps({"properties": list(KNOWN_PROPERTIES)})


@mcp.resource("yeelight://catalog/scenes")
def resource_scene_catalog() -> str:
    """Scene classes and the parameters each one takes."""
    scenes = [
        {"class": name, "params": list(params)}
        for name, params in SCENE_PARAMS.items()
    ]
    return json.dumps({"scenes": scenes})


@mcp.resource("yeelight://catalog/adjust")
def resource_adjust_catalog() -> str:
    """Valid set_adjust actions and properties."""
    return json.dumps({"actions": list(ADJUST_ACTIONS), "props": list(ADJUST_PROPS)})


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def create_flow(mood: str) -> str:
    """Guide the AI to design a color flow for a mood or occasion.

    Args:
        mood: Occasion, mood, or reference (e.g. "sunrise", "party").
    """
    return f"""Design a color flow that evokes "{mood}".
Consider:
- RGB steps (mode 1) for saturated colors, color temperature steps (mode 2) for whites
- Sleep steps (mode 7) to hold a color before the next change
- Step durations of at least 50 ms; slow flows feel calmer
- Brightness per step (1-100, or -1 to keep the current level)
- Whether the flow should loop (count 0) and what happens when it ends

Use the start_color_flow tool to run it and stop_color_flow to end it."""


@mcp.prompt()
def set_mood(description: str) -> str:
    """Turn a free-form description into a static light setting.

    Args:
        description: What the room should feel like.
    """
    return f"""Set the light to match: {description}
Read the current state with get_state first.
Then choose between:
- set_color_temperature for white light (1700 K warm to 6500 K cool)
- set_rgb or set_hsv for colored light
- set_brightness for the level
Use set_default afterwards if the setting should survive a power cut."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
