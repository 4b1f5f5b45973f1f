"""Client-side state primitives for UIs observing pipeline runs."""

from .fetch_state import FetchState, FetchStatus
from .message_feed import (
    LiveMessageFeed,
    RunMessages,
    messages_url,
    run_messages_state,
)
from .polling import PollingLoop
from .provider_status import ProviderAvailabilityView
from .scope import Scope
from .search import SearchFilter

__all__ = [
    "Scope",
    "FetchState",
    "FetchStatus",
    "PollingLoop",
    "ProviderAvailabilityView",
    "SearchFilter",
    "LiveMessageFeed",
    "RunMessages",
    "messages_url",
    "run_messages_state",
]
