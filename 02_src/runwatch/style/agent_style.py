"""Deterministic agent styling.

Icons and colors are derived from the agent type string alone, so every
client renders the same agent the same way without a registry.
"""

from dataclasses import dataclass

HASH_SEED = 5381
_MASK_32 = 0xFFFFFFFF

# Reordering or resizing the pool changes every agent's icon: bump the version.
ICON_POOL_VERSION = 1
ICON_POOL: tuple[str, ...] = (
    "\U0001F916",  # robot
    "\U0001F9E0",  # brain
    "\u2699\uFE0F",  # gear
    "\U0001F4A1",  # light bulb
    "\U0001F527",  # wrench
    "\U0001F9ED",  # compass
    "\U0001F4CB",  # clipboard
    "\U0001F4BB",  # laptop
    "\U0001F6E1\uFE0F",  # shield
    "\U0001F680",  # rocket
    "\U0001F50D",  # magnifier
    "\U0001F3AF",  # target
    "\u26A1",  # lightning
    "\U0001F4D0",  # triangular ruler
    "\U0001F9EA",  # test tube
    "\U0001F310",  # globe
)

COLOR_LIGHTNESS = 0.65
COLOR_CHROMA = 0.15


@dataclass(frozen=True)
class AgentStyle:
    """Display identity of an agent type."""

    icon: str
    color: str
    hue: int


def _utf16_units(value: str):
    data = value.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_string(value: str) -> int:
    """djb2 over UTF-16 code units, as an unsigned 32-bit integer.

    Matches the value a browser computes with ``charCodeAt``; for characters
    in the Basic Multilingual Plane a code unit is the code point.
    """
    h = HASH_SEED
    for unit in _utf16_units(value):
        h = (h * 33 + unit) & _MASK_32
    return h


def agent_icon(agent_type: str) -> str:
    """Icon for an agent type; the same string always gets the same glyph."""
    return ICON_POOL[hash_string(agent_type) % len(ICON_POOL)]


def agent_hue(agent_type: str) -> int:
    return hash_string(agent_type) % 360


def agent_color(agent_type: str) -> str:
    """CSS ``oklch()`` color with fixed lightness and chroma, hue from the hash."""
    return f"oklch({COLOR_LIGHTNESS} {COLOR_CHROMA} {agent_hue(agent_type)})"


def agent_style(agent_type: str) -> AgentStyle:
    return AgentStyle(
        icon=agent_icon(agent_type),
        color=agent_color(agent_type),
        hue=agent_hue(agent_type),
    )
