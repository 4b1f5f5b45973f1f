"""Read side of the agent message log."""

from dataclasses import dataclass, field
from typing import Any, Protocol

from ..errors import InvalidRequest
from ..logging_config import get_logger
from ..models import message_to_view
from ..storage import IStorage

logger = get_logger(__name__)


@dataclass
class MessageQueryResult:
    """Ordered message projections for one run."""

    messages: list[dict[str, Any]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.messages)

    def to_dict(self) -> dict[str, Any]:
        return {"messages": self.messages, "total": self.total}


class IMessageQueryService(Protocol):
    """Retrieval of inter-agent messages for a pipeline run."""

    async def list_messages(
        self, pipeline_run_id: str | None, agent: str | None = None
    ) -> MessageQueryResult:
        """Return the run's messages in creation order."""
        ...


class MessageQueryService:
    """Serves a run's message log to UIs. Never writes."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def list_messages(
        self, pipeline_run_id: str | None, agent: str | None = None
    ) -> MessageQueryResult:
        """Return the run's messages in creation order.

        An ``agent`` keeps every message that agent sent or received.
        There is no pagination: the whole matching set is returned.
        """
        if not pipeline_run_id or not pipeline_run_id.strip():
            raise InvalidRequest("pipelineRunId is required")

        messages = await self._storage.get_agent_messages(
            pipeline_run_id, agent=agent or None
        )
        logger.debug(
            "Listed %d messages for run %s", len(messages), pipeline_run_id,
            extra={"context": {"pipeline_run_id": pipeline_run_id, "agent": agent}},
        )
        return MessageQueryResult(messages=[message_to_view(m) for m in messages])
