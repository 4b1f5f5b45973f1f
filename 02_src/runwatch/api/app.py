"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application, IApplication
from ..logging_config import get_logger
from .routes import control, messages, providers

logger = get_logger(__name__)


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: IApplication | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Without an explicit application the global one is used and started by
    the lifespan handler; a passed-in application is managed by the caller.
    """
    managed = application is None
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        if managed:
            await application.start()
        sim_instance = control.get_sim_instance()
        if sim_instance and hasattr(sim_instance, "set_storage"):
            sim_instance.set_storage(application.storage)
        logger.info("API ready")
        yield
        if sim_instance:
            await sim_instance.stop()
        if managed:
            await application.stop()

    fastapi_app = FastAPI(
        title="Runwatch API",
        description="Read API for multi-agent pipeline runs",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Enable CORS
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    fastapi_app.include_router(messages.create_messages_router(application))
    fastapi_app.include_router(providers.create_providers_router(application))
    fastapi_app.include_router(control.create_control_router(application))

    return fastapi_app
