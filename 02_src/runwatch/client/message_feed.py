"""Client views over a pipeline run's message log."""

from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import urlencode

import httpx

from ..config import TEAM_CHAT_POLL_INTERVAL
from ..logging_config import get_logger
from ..models import AgentMessage, message_from_view
from .fetch_state import FetchState
from .polling import PollingLoop
from .scope import Scope

logger = get_logger(__name__)

MESSAGES_PATH = "/api/messages"


@dataclass
class RunMessages:
    """Parsed response of the message endpoint."""

    messages: list[AgentMessage] = field(default_factory=list)
    total: int = 0


def messages_url(
    pipeline_run_id: str | None, agent: str | None = None, path: str = MESSAGES_PATH
) -> str | None:
    """URL for a run's messages, or None when there is no run to show."""
    if not pipeline_run_id:
        return None
    params = {"pipelineRunId": pipeline_run_id}
    if agent:
        params["agent"] = agent
    return f"{path}?{urlencode(params)}"


def parse_run_messages(pipeline_run_id: str) -> Callable[[Any], RunMessages]:
    def parse(payload: Any) -> RunMessages:
        messages = [
            message_from_view(item, pipeline_run_id) for item in payload["messages"]
        ]
        return RunMessages(messages=messages, total=payload.get("total", len(messages)))

    return parse


def run_messages_state(
    client: httpx.AsyncClient,
    pipeline_run_id: str | None,
    agent: str | None = None,
    *,
    scope: Scope | None = None,
) -> FetchState[RunMessages]:
    """FetchState for a run's messages; a missing run id disables fetching."""
    return FetchState(
        client,
        messages_url(pipeline_run_id, agent),
        scope=scope,
        parse=parse_run_messages(pipeline_run_id or ""),
    )


class LiveMessageFeed:
    """Polls a run's messages and appends only the ones not seen before.

    Appending instead of replacing keeps already-rendered messages in place.
    Failed polls change nothing; the next tick retries.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        pipeline_run_id: str,
        *,
        agent: str | None = None,
        scope: Scope | None = None,
        interval: float = TEAM_CHAT_POLL_INTERVAL,
        enabled: bool = True,
    ):
        self._client = client
        self._pipeline_run_id = pipeline_run_id
        self._url = messages_url(pipeline_run_id, agent)
        self._scope = scope or Scope()
        self._seen_ids: set[str] = set()
        self._listeners: list[Callable[["LiveMessageFeed"], None]] = []
        self._poller = PollingLoop(self.poll, interval, enabled=enabled, scope=self._scope)

        self.messages: list[AgentMessage] = []
        self.unread = False

    @property
    def total(self) -> int:
        return len(self.messages)

    @property
    def poller(self) -> PollingLoop:
        return self._poller

    def subscribe(self, listener: Callable[["LiveMessageFeed"], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def start(self) -> None:
        self._poller.start()

    def set_enabled(self, enabled: bool) -> None:
        self._poller.set_enabled(enabled)

    def mark_read(self) -> None:
        self.unread = False

    async def poll(self) -> None:
        """Fetch the run once and append unseen messages."""
        if not self._url:
            return

        try:
            response = await self._client.get(self._url)
            response.raise_for_status()
            incoming = parse_run_messages(self._pipeline_run_id)(response.json()).messages
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.debug("Message poll failed for run %s: %s", self._pipeline_run_id, e)
            return

        if not self._scope.alive:
            return

        fresh = [m for m in incoming if m.id not in self._seen_ids]
        if not fresh:
            return

        self._seen_ids.update(m.id for m in fresh)
        # New list so identity-keyed consumers (SearchFilter) recompute
        self.messages = [*self.messages, *fresh]
        self.unread = True
        for listener in list(self._listeners):
            listener(self)
