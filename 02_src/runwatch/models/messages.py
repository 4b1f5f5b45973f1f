"""Agent message data models."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass
class PipelineRun:
    """One execution of a multi-agent pipeline."""

    id: str
    created_at: datetime | None = None


@dataclass
class AgentMessage:
    """A message sent between agents during a pipeline run."""

    id: str
    pipeline_run_id: str
    from_agent: str
    message_type: str  # open set: "question", "flag", "handoff", ...
    content: str
    phase: int
    created_at: datetime
    to_agent: str | None = None  # None for broadcast
    from_role: str | None = None
    parent_id: str | None = None


def message_to_view(message: AgentMessage) -> dict[str, Any]:
    """Project a message to the wire shape served to UIs."""
    return {
        "id": message.id,
        "fromAgent": message.from_agent,
        "fromRole": message.from_role,
        "toAgent": message.to_agent,
        "messageType": message.message_type,
        "content": message.content,
        "phase": message.phase,
        "parentId": message.parent_id,
        "createdAt": message.created_at.isoformat(),
    }


def message_from_view(data: dict[str, Any], pipeline_run_id: str) -> AgentMessage:
    """Rebuild a message from its wire projection."""
    created_at = datetime.fromisoformat(data["createdAt"])
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    return AgentMessage(
        id=data["id"],
        pipeline_run_id=pipeline_run_id,
        from_agent=data["fromAgent"],
        from_role=data.get("fromRole"),
        to_agent=data.get("toAgent"),
        message_type=data["messageType"],
        content=data["content"],
        phase=data.get("phase", 0),
        parent_id=data.get("parentId"),
        created_at=created_at,
    )
