"""Live provider availability for UIs."""

from typing import Callable

import httpx

from ..config import PROVIDER_POLL_INTERVAL
from ..logging_config import get_logger
from ..models import ProviderStatus
from .polling import PollingLoop
from .scope import Scope

logger = get_logger(__name__)


class ProviderAvailabilityView:
    """Polls provider availability and keeps the last known list.

    A failed poll leaves the list as it was: availability is advisory, so a
    stale answer beats an error state. ``recheck`` asks the server to
    re-evaluate instead of serving its cached scan.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        scope: Scope | None = None,
        url: str = "/api/providers",
        interval: float = PROVIDER_POLL_INTERVAL,
    ):
        self._client = client
        self._url = url
        self._scope = scope or Scope()
        self._listeners: list[Callable[["ProviderAvailabilityView"], None]] = []
        self._poller = PollingLoop(
            lambda: self._fetch(refresh=False), interval, scope=self._scope
        )

        self.providers: list[ProviderStatus] | None = None

    @property
    def poller(self) -> PollingLoop:
        return self._poller

    @property
    def unavailable(self) -> list[ProviderStatus]:
        return [p for p in self.providers or [] if not p.available]

    @property
    def any_available(self) -> bool:
        return any(p.available for p in self.providers or [])

    def subscribe(
        self, listener: Callable[["ProviderAvailabilityView"], None]
    ) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def start(self) -> None:
        """Fetch now, then every poll interval until the scope closes."""
        self._poller.start()

    async def recheck(self) -> None:
        """Force the server to re-evaluate providers, then update."""
        await self._fetch(refresh=True)

    async def _fetch(self, refresh: bool) -> None:
        params = {"refresh": "true"} if refresh else None
        try:
            response = await self._client.get(self._url, params=params)
            response.raise_for_status()
            payload = response.json()
            providers = [
                ProviderStatus.from_dict(item) for item in payload.get("providers") or []
            ]
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.debug("Provider status fetch failed, keeping last list: %s", e)
            return

        if not self._scope.alive:
            return
        self.providers = providers
        for listener in list(self._listeners):
            listener(self)
