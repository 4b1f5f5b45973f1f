"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol

from .config import resolve_db_path
from .logging_config import get_logger
from .messages import IMessageQueryService, MessageQueryService
from .providers import IProviderRegistry, ProviderRegistry
from .storage import IStorage, Storage

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...

    @property
    def storage(self) -> IStorage: ...

    @property
    def messages(self) -> IMessageQueryService: ...

    @property
    def providers(self) -> IProviderRegistry: ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        db_path: str | None = None,
        provider_registry: IProviderRegistry | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._providers: IProviderRegistry | None = provider_registry
        self._messages: IMessageQueryService | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Provider registry (no internal dependencies)
        if self._providers is None:
            self._providers = ProviderRegistry()
        logger.info("Provider registry initialized")

        # 3. Message queries (depend on Storage)
        self._messages = MessageQueryService(self._storage)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        self._messages = None
        if self._storage:
            await self._storage.close()
            self._storage = None
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset data between test runs."""
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def messages(self) -> IMessageQueryService:
        """Get message query service."""
        if not self._messages:
            raise RuntimeError("Application not started")
        return self._messages

    @property
    def providers(self) -> IProviderRegistry:
        """Get provider registry."""
        if not self._providers:
            raise RuntimeError("Application not started")
        return self._providers
