"""Tests for Storage."""

from datetime import datetime, timedelta, timezone

import pytest

from runwatch.errors import InvalidRequest
from runwatch.models import PipelineRun

from factories import at, make_message


class TestStorageInit:
    """Tests for Storage initialization."""

    async def test_init_creates_tables(self, storage):
        """Test that init creates all tables."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "pipeline_runs" in tables
            assert "agent_messages" in tables

    async def test_use_before_init_raises(self):
        """Test that an uninitialized storage refuses queries."""
        from runwatch.storage import Storage

        st = Storage(":memory:")
        with pytest.raises(RuntimeError, match="not initialized"):
            await st.get_agent_messages("r1")


class TestStoragePipelineRuns:
    """Tests for PipelineRun storage."""

    async def test_save_pipeline_run_is_idempotent(self, storage):
        """Test that saving the same run twice keeps one row."""
        await storage.save_pipeline_run(PipelineRun(id="r1"))
        await storage.save_pipeline_run(PipelineRun(id="r1"))

        async with storage._conn.execute("SELECT COUNT(*) FROM pipeline_runs") as cursor:
            (count,) = await cursor.fetchone()
        assert count == 1


class TestStorageAgentMessages:
    """Tests for AgentMessage storage."""

    async def test_save_and_get_message(self, storage):
        """Test a message comes back with every field intact."""
        msg = make_message(
            "m1",
            from_role="planner",
            message_type="handoff",
            content='{"plan": [1, 2]}',
            phase=3,
            created_at=at(0),
        )
        await storage.save_agent_message(msg)

        messages = await storage.get_agent_messages("r1")
        assert len(messages) == 1
        got = messages[0]
        assert got.id == "m1"
        assert got.from_agent == "planner"
        assert got.to_agent == "coder"
        assert got.message_type == "handoff"
        assert got.content == '{"plan": [1, 2]}'
        assert got.phase == 3
        assert got.parent_id is None
        assert got.created_at == at(0)

    async def test_save_message_generates_id(self, storage):
        """Test that an empty id is replaced with a generated one."""
        saved = await storage.save_agent_message(make_message(""))

        assert saved.id
        messages = await storage.get_agent_messages("r1")
        assert messages[0].id == saved.id

    async def test_broadcast_message_has_no_recipient(self, storage):
        """Test that to_agent may be absent."""
        await storage.save_agent_message(make_message("m1", to_agent=None))

        messages = await storage.get_agent_messages("r1")
        assert messages[0].to_agent is None

    async def test_messages_ordered_by_created_at(self, storage):
        """Test ordering by timestamp regardless of insertion order."""
        await storage.save_agent_message(make_message("m3", created_at=at(3)))
        await storage.save_agent_message(make_message("m1", created_at=at(1)))
        await storage.save_agent_message(make_message("m2", created_at=at(2)))

        messages = await storage.get_agent_messages("r1")
        assert [m.id for m in messages] == ["m1", "m2", "m3"]

    async def test_equal_timestamps_keep_insertion_order(self, storage):
        """Test that ties are broken by insertion order."""
        for msg_id in ["b", "a", "c"]:
            await storage.save_agent_message(make_message(msg_id, created_at=at(5)))

        messages = await storage.get_agent_messages("r1")
        assert [m.id for m in messages] == ["b", "a", "c"]

    async def test_timezones_normalized_for_ordering(self, storage):
        """Test that non-UTC timestamps order by the instant they denote."""
        plus_two = timezone(timedelta(hours=2))
        # 13:30+02:00 is 11:30 UTC, before BASE_TIME (12:00 UTC)
        early = datetime(2024, 1, 1, 13, 30, tzinfo=plus_two)
        await storage.save_agent_message(make_message("late", created_at=at(0)))
        await storage.save_agent_message(make_message("early", created_at=early))

        messages = await storage.get_agent_messages("r1")
        assert [m.id for m in messages] == ["early", "late"]
        assert messages[0].created_at == early

    async def test_messages_scoped_to_run(self, storage):
        """Test that other runs' messages are not returned."""
        await storage.save_agent_message(make_message("m1", pipeline_run_id="r1"))
        await storage.save_agent_message(make_message("m2", pipeline_run_id="r2"))

        messages = await storage.get_agent_messages("r1")
        assert [m.id for m in messages] == ["m1"]

    async def test_agent_filter_matches_sender_or_recipient(self, storage):
        """Test the agent filter is an OR over sender and recipient."""
        await storage.save_agent_message(
            make_message("m1", from_agent="planner", to_agent="coder", created_at=at(1))
        )
        await storage.save_agent_message(
            make_message("m2", from_agent="coder", to_agent="reviewer", created_at=at(2))
        )
        await storage.save_agent_message(
            make_message("m3", from_agent="planner", to_agent="reviewer", created_at=at(3))
        )

        messages = await storage.get_agent_messages("r1", agent="coder")
        assert [m.id for m in messages] == ["m1", "m2"]

    async def test_parent_in_same_run(self, storage):
        """Test saving a reply to an existing message."""
        await storage.save_agent_message(make_message("m1", created_at=at(1)))
        await storage.save_agent_message(
            make_message("m2", parent_id="m1", created_at=at(2))
        )

        messages = await storage.get_agent_messages("r1")
        assert messages[1].parent_id == "m1"

    async def test_parent_must_exist(self, storage):
        """Test that a reply to an unknown message is rejected."""
        with pytest.raises(InvalidRequest):
            await storage.save_agent_message(make_message("m1", parent_id="missing"))

    async def test_parent_from_other_run_rejected(self, storage):
        """Test that cross-run parents are rejected."""
        await storage.save_agent_message(make_message("m1", pipeline_run_id="r2"))

        with pytest.raises(InvalidRequest):
            await storage.save_agent_message(
                make_message("m2", pipeline_run_id="r1", parent_id="m1")
            )

    async def test_self_parent_rejected(self, storage):
        """Test that a message cannot be its own parent."""
        with pytest.raises(InvalidRequest):
            await storage.save_agent_message(make_message("m1", parent_id="m1"))

    async def test_clear(self, storage):
        """Test that clear removes all data."""
        await storage.save_agent_message(make_message("m1"))

        await storage.clear()

        assert await storage.get_agent_messages("r1") == []
