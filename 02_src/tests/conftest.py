"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from runwatch.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def message_service(storage):
    """Create MessageQueryService over the test storage."""
    from runwatch.messages import MessageQueryService

    return MessageQueryService(storage)


@pytest.fixture
def static_providers(monkeypatch):
    """Provider registry with fixed detectors."""
    from runwatch.providers import ProviderDetector, ProviderRegistry, env_var_set

    monkeypatch.delenv("RUNWATCH_TEST_GEMINI_KEY", raising=False)

    return ProviderRegistry(
        detectors=[
            ProviderDetector("claude-code", "Claude Code CLI", [lambda: True], "not found"),
            ProviderDetector(
                "gemini",
                "Google Gemini",
                [env_var_set("RUNWATCH_TEST_GEMINI_KEY")],
                "key not set",
            ),
        ]
    )


@pytest_asyncio.fixture
async def application(static_providers):
    """Started application on an in-memory database."""
    from runwatch.app import Application

    app = Application(db_path=":memory:", provider_registry=static_providers)
    await app.start()
    yield app
    await app.stop()


@pytest_asyncio.fixture
async def api_client(application):
    """HTTP client talking to the FastAPI app in-process."""
    from runwatch.api import create_fastapi_app

    fastapi_app = create_fastapi_app(application)
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def scope():
    """Scope closed after the test."""
    from runwatch.client import Scope

    sc = Scope()
    yield sc
    sc.close()
