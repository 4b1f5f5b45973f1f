"""Core data models for runwatch."""

from .messages import AgentMessage, PipelineRun, message_from_view, message_to_view
from .providers import ProviderCapabilities, ProviderInfo, ProviderStatus

__all__ = [
    # Messages
    "AgentMessage",
    "PipelineRun",
    "message_to_view",
    "message_from_view",
    # Providers
    "ProviderCapabilities",
    "ProviderInfo",
    "ProviderStatus",
]
