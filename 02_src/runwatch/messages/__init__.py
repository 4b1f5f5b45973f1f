"""Agent message retrieval."""

from .service import IMessageQueryService, MessageQueryResult, MessageQueryService
from .threads import MessageThread, build_threads, group_by_phase

__all__ = [
    "IMessageQueryService",
    "MessageQueryResult",
    "MessageQueryService",
    "MessageThread",
    "build_threads",
    "group_by_phase",
]
