"""Runwatch: observe multi-agent pipeline runs."""

from .app import Application, IApplication
from .client import (
    FetchState,
    FetchStatus,
    LiveMessageFeed,
    PollingLoop,
    ProviderAvailabilityView,
    Scope,
    SearchFilter,
)
from .errors import InvalidRequest, RunwatchError, TransportFailure, UpstreamFailure
from .messages import MessageQueryResult, MessageQueryService, build_threads
from .models import AgentMessage, PipelineRun, ProviderInfo, ProviderStatus
from .providers import ProviderRegistry
from .storage import IStorage, Storage
from .style import agent_color, agent_icon, agent_style, hash_string

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "AgentMessage",
    "PipelineRun",
    "ProviderInfo",
    "ProviderStatus",
    # Errors
    "RunwatchError",
    "InvalidRequest",
    "TransportFailure",
    "UpstreamFailure",
    # Server components
    "IStorage",
    "Storage",
    "MessageQueryResult",
    "MessageQueryService",
    "ProviderRegistry",
    "build_threads",
    # Styling
    "hash_string",
    "agent_icon",
    "agent_color",
    "agent_style",
    # Client primitives
    "Scope",
    "FetchState",
    "FetchStatus",
    "PollingLoop",
    "ProviderAvailabilityView",
    "SearchFilter",
    "LiveMessageFeed",
]
