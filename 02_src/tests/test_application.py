"""Tests for Application."""

import pytest

from runwatch.app import Application
from runwatch.messages import MessageQueryService
from runwatch.providers import ProviderRegistry

from factories import make_message


class TestApplicationStart:
    """Tests for Application.start()."""

    @pytest.mark.asyncio
    async def test_start_initializes_components(self):
        """Test that start initializes all components."""
        app = Application(db_path=":memory:")
        await app.start()

        assert app._storage is not None
        assert isinstance(app._providers, ProviderRegistry)
        assert isinstance(app._messages, MessageQueryService)
        await app.stop()

    @pytest.mark.asyncio
    async def test_message_service_uses_storage(self):
        """Test that the query service reads from the started storage."""
        app = Application(db_path=":memory:")
        await app.start()

        assert app._messages._storage is app._storage
        await app.stop()

    @pytest.mark.asyncio
    async def test_injected_registry_kept(self, static_providers):
        """Test that a passed-in provider registry is used as-is."""
        app = Application(db_path=":memory:", provider_registry=static_providers)
        await app.start()

        assert app.providers is static_providers
        await app.stop()

    @pytest.mark.asyncio
    async def test_start_creates_database_tables(self):
        """Test that start creates database tables."""
        app = Application(db_path=":memory:")
        await app.start()

        async with app._storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "agent_messages" in tables
        await app.stop()

    @pytest.mark.asyncio
    async def test_database_url_from_env(self, monkeypatch, tmp_path):
        """Test that DATABASE_URL picks the database file."""
        db_file = tmp_path / "runs.db"
        monkeypatch.setenv("DATABASE_URL", str(db_file))

        app = Application()
        await app.start()
        await app.stop()

        assert db_file.exists()


class TestApplicationStop:
    """Tests for Application.stop()."""

    @pytest.mark.asyncio
    async def test_stop_clears_components(self):
        """Test that stop releases storage and services."""
        app = Application(db_path=":memory:")
        await app.start()
        await app.stop()

        with pytest.raises(RuntimeError, match="not started"):
            _ = app.storage
        with pytest.raises(RuntimeError, match="not started"):
            _ = app.messages


class TestApplicationReset:
    """Tests for Application.reset()."""

    @pytest.mark.asyncio
    async def test_reset_clears_storage(self, application):
        """Test that reset clears the message log."""
        await application.storage.save_agent_message(make_message("m1"))

        await application.reset()

        result = await application.messages.list_messages("r1")
        assert result.total == 0

    @pytest.mark.asyncio
    async def test_components_work_after_reset(self, application):
        """Test that writes and reads still work after reset."""
        await application.reset()

        await application.storage.save_agent_message(make_message("m2"))

        result = await application.messages.list_messages("r1")
        assert result.total == 1


class TestApplicationProperties:
    """Tests for Application properties."""

    @pytest.mark.asyncio
    async def test_storage_property(self, application):
        """Test storage property."""
        assert application.storage is application._storage

    @pytest.mark.asyncio
    async def test_storage_property_raises_when_not_started(self):
        """Test that storage property raises when not started."""
        app = Application(db_path=":memory:")

        with pytest.raises(RuntimeError, match="not started"):
            _ = app.storage

    @pytest.mark.asyncio
    async def test_messages_property_raises_when_not_started(self):
        """Test that messages property raises when not started."""
        app = Application(db_path=":memory:")

        with pytest.raises(RuntimeError, match="not started"):
            _ = app.messages

    @pytest.mark.asyncio
    async def test_providers_property_raises_when_not_started(self):
        """Test that providers property raises when not started."""
        app = Application(db_path=":memory:")

        with pytest.raises(RuntimeError, match="not started"):
            _ = app.providers
