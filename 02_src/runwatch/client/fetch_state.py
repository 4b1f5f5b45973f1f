"""Fetch-with-state: loading/error/data tracking for one URL."""

import asyncio
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

import httpx

from ..errors import RunwatchError, TransportFailure, UpstreamFailure
from ..logging_config import get_logger
from .scope import Scope

logger = get_logger(__name__)

T = TypeVar("T")

Listener = Callable[["FetchState[Any]"], None]


class FetchStatus(str, Enum):
    """Lifecycle of a FetchState."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class FetchState(Generic[T]):
    """Fetches JSON from a URL and tracks loading, error and data.

    Pass ``url=None`` to disable fetching. On failure the previous data is
    kept alongside the error. Nothing changes once the scope has closed.
    Concurrent refetches are independent; the last one to land wins.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str | None = None,
        *,
        scope: Scope | None = None,
        parse: Callable[[Any], T] | None = None,
    ):
        self._client = client
        self._url = url
        self._scope = scope or Scope()
        self._parse = parse
        self._listeners: list[Listener] = []

        self.status = FetchStatus.IDLE
        self.data: T | None = None
        self.error: RunwatchError | None = None

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def scope(self) -> Scope:
        return self._scope

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every state change. Returns an unsubscribe."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def start(self) -> asyncio.Task | None:
        """Begin fetching the current URL in the background."""
        if not self._scope.alive:
            return None
        if self._url:
            self._update(status=FetchStatus.LOADING)
        return self._scope.spawn(self.refetch())

    def set_url(self, url: str | None) -> asyncio.Task | None:
        """Point at a new URL and fetch it; same URL is a no-op."""
        if url == self._url:
            return None
        self._url = url
        return self.start()

    async def refetch(self) -> None:
        """Fetch the current URL now."""
        url = self._url
        if not url:
            self._update(status=FetchStatus.IDLE, data=None, error=None)
            return

        # start() may already have announced LOADING
        if self.status is not FetchStatus.LOADING:
            self._update(status=FetchStatus.LOADING)

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            self._fail(TransportFailure(url, e))
            return

        if not response.is_success:
            self._fail(UpstreamFailure(url, response.status_code))
            return

        try:
            payload = response.json()
            data = self._parse(payload) if self._parse else payload
        except Exception as e:
            self._fail(
                UpstreamFailure(
                    url, response.status_code, f"Invalid response body: {e}"
                )
            )
            return

        self._update(status=FetchStatus.SUCCESS, data=data, error=None)

    def _fail(self, error: RunwatchError) -> None:
        logger.warning("Fetch failed: %s", error)
        self._update(status=FetchStatus.FAILURE, error=error)

    def _update(self, **changes: Any) -> None:
        if not self._scope.alive:
            logger.debug("Discarding update for %s after scope closed", self._url)
            return
        for name, value in changes.items():
            setattr(self, name, value)
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error("FetchState listener failed: %s", e, exc_info=True)
