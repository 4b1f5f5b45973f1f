"""Provider detection and the cached availability list."""

import asyncio
import os
import shutil
from dataclasses import replace
from pathlib import Path
from typing import Callable, Protocol

from ..logging_config import get_logger
from ..models import ProviderCapabilities, ProviderInfo

logger = get_logger(__name__)


class IProviderDetector(Protocol):
    """Decides whether one provider can currently run agents."""

    id: str
    name: str

    def detect(self) -> ProviderInfo:
        """Evaluate availability now."""
        ...


class ProviderDetector:
    """Provider that is available when any of its checks passes."""

    def __init__(
        self,
        provider_id: str,
        name: str,
        checks: list[Callable[[], bool]],
        unavailable_reason: str,
        models: list[str] | None = None,
        capabilities: ProviderCapabilities | None = None,
    ):
        self.id = provider_id
        self.name = name
        self._checks = checks
        self._unavailable_reason = unavailable_reason
        self._models = list(models or [])
        self._capabilities = capabilities or ProviderCapabilities()

    def detect(self) -> ProviderInfo:
        available = any(check() for check in self._checks)
        return ProviderInfo(
            id=self.id,
            name=self.name,
            available=available,
            reason=None if available else self._unavailable_reason,
            models=list(self._models),
            capabilities=replace(self._capabilities),
        )


def env_var_set(name: str) -> Callable[[], bool]:
    return lambda: bool(os.getenv(name))


def executable_on_path(name: str) -> Callable[[], bool]:
    return lambda: shutil.which(name) is not None


def file_exists(path: Path) -> Callable[[], bool]:
    return lambda: path.exists()


def builtin_detectors() -> list[IProviderDetector]:
    """Detectors for the providers agents can run on out of the box."""
    prompt_only = ProviderCapabilities(tool_use=True)
    return [
        ProviderDetector(
            "claude-code",
            "Claude Code CLI",
            [executable_on_path("claude")],
            "Claude Code CLI not found (run: npm install -g @anthropic-ai/claude-code)",
            models=["sonnet", "opus", "haiku"],
            capabilities=ProviderCapabilities(
                file_access=True, shell_access=True, tool_use=True, sub_agents=True
            ),
        ),
        ProviderDetector(
            "gemini",
            "Google Gemini",
            [env_var_set("GOOGLE_GENERATIVE_AI_API_KEY")],
            "GOOGLE_GENERATIVE_AI_API_KEY not set",
            models=[
                "gemini-2.5-flash",
                "gemini-3-pro-preview",
                "gemini-3-pro-high",
                "gemini-3-pro-low",
            ],
            capabilities=prompt_only,
        ),
        ProviderDetector(
            "claude-api",
            "Anthropic API",
            [env_var_set("ANTHROPIC_API_KEY")],
            "ANTHROPIC_API_KEY not set",
            models=[
                "claude-sonnet-4-5-20250514",
                "claude-sonnet-4-20250514",
                "claude-haiku-3-5-20241022",
            ],
            capabilities=prompt_only,
        ),
        ProviderDetector(
            "antigravity",
            "Google Antigravity",
            [
                env_var_set("ANTIGRAVITY_CLIENT_ID"),
                file_exists(
                    Path.home() / ".config" / "opencode" / "antigravity-accounts.json"
                ),
            ],
            "No Antigravity accounts configured "
            "(set ANTIGRAVITY_CLIENT_ID or import OpenCode tokens)",
            models=[
                "antigravity-gemini-3-pro",
                "antigravity-gemini-3-flash",
                "antigravity-claude-sonnet-4-5",
                "antigravity-claude-opus-4-5-thinking",
            ],
            capabilities=prompt_only,
        ),
    ]


class IProviderRegistry(Protocol):
    """Availability of the providers agents depend on."""

    async def get_available_providers(self, refresh: bool = False) -> list[ProviderInfo]:
        """Return the cached scan, re-evaluating when refresh is set."""
        ...


class ProviderRegistry:
    """Scans provider detectors and caches the result for routine polls."""

    def __init__(self, detectors: list[IProviderDetector] | None = None):
        self._detectors = builtin_detectors() if detectors is None else detectors
        self._cached: list[ProviderInfo] | None = None

    async def scan(self) -> list[ProviderInfo]:
        """Evaluate every detector; detection may touch the filesystem."""
        return await asyncio.to_thread(
            lambda: [detector.detect() for detector in self._detectors]
        )

    async def get_available_providers(self, refresh: bool = False) -> list[ProviderInfo]:
        """Return the cached scan, re-evaluating when refresh is set."""
        if self._cached is None or refresh:
            self._cached = await self.scan()
            logger.info(
                "Provider scan: %d of %d available",
                sum(1 for p in self._cached if p.available),
                len(self._cached),
            )
        return self._cached
