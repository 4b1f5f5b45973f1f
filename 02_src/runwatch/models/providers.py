"""Provider availability data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ProviderCapabilities:
    """What an AI provider can do for an agent."""

    file_access: bool = False
    shell_access: bool = False
    tool_use: bool = False
    sub_agents: bool = False


@dataclass
class ProviderInfo:
    """Server-side detection result for one provider."""

    id: str
    name: str
    available: bool
    reason: str | None = None
    models: list[str] = field(default_factory=list)
    capabilities: ProviderCapabilities = field(default_factory=ProviderCapabilities)


@dataclass
class ProviderStatus:
    """Client-held availability of a provider; may flip between polls."""

    id: str
    name: str
    available: bool
    reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProviderStatus":
        return cls(
            id=data["id"],
            name=data["name"],
            available=bool(data["available"]),
            reason=data.get("reason"),
        )
