"""Agent visual identity."""

from .agent_style import (
    ICON_POOL,
    ICON_POOL_VERSION,
    AgentStyle,
    agent_color,
    agent_hue,
    agent_icon,
    agent_style,
    hash_string,
)

__all__ = [
    "ICON_POOL",
    "ICON_POOL_VERSION",
    "AgentStyle",
    "agent_color",
    "agent_hue",
    "agent_icon",
    "agent_style",
    "hash_string",
]
