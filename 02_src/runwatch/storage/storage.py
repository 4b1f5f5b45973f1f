"""SQLite storage implementation."""

import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..errors import InvalidRequest
from ..models import AgentMessage, PipelineRun


_MESSAGE_COLUMNS = """
    id, pipeline_run_id, from_agent, from_role, to_agent,
    message_type, content, phase, parent_id, created_at
"""


def _to_db_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with fixed precision so text order matches time order."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _from_db_timestamp(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


class IStorage(Protocol):
    """Persistent message log (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Pipeline runs
    async def save_pipeline_run(self, run: PipelineRun) -> None:
        """Register a pipeline run (no-op if it already exists)."""
        ...

    # Agent messages
    async def save_agent_message(self, message: AgentMessage) -> AgentMessage:
        """Append a message to its run's log."""
        ...

    async def get_agent_messages(
        self, pipeline_run_id: str, agent: str | None = None
    ) -> list[AgentMessage]:
        """Get a run's messages in creation order, optionally for one agent."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    # Pipeline runs
    async def save_pipeline_run(self, run: PipelineRun) -> None:
        """Register a pipeline run (no-op if it already exists)."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        created_at = run.created_at or datetime.now(timezone.utc)
        await self._conn.execute(
            """
            INSERT OR IGNORE INTO pipeline_runs (id, created_at)
            VALUES (?, ?)
            """,
            (run.id, _to_db_timestamp(created_at)),
        )
        await self._conn.commit()

    # Agent messages
    async def save_agent_message(self, message: AgentMessage) -> AgentMessage:
        """Append a message to its run's log.

        The parent, when given, must already exist in the same run. Since a
        parent is always written before its replies, the log stays acyclic.
        """
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        if not message.id:
            message.id = str(uuid.uuid4())

        if message.parent_id:
            cursor = await self._conn.execute(
                "SELECT pipeline_run_id FROM agent_messages WHERE id = ?",
                (message.parent_id,),
            )
            row = await cursor.fetchone()
            if not row or row[0] != message.pipeline_run_id:
                raise InvalidRequest(
                    f"parent message {message.parent_id} not found "
                    f"in run {message.pipeline_run_id}"
                )

        await self._conn.execute(
            """
            INSERT OR IGNORE INTO pipeline_runs (id, created_at)
            VALUES (?, ?)
            """,
            (message.pipeline_run_id, _to_db_timestamp(message.created_at)),
        )
        await self._conn.execute(
            f"""
            INSERT INTO agent_messages ({_MESSAGE_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                message.id,
                message.pipeline_run_id,
                message.from_agent,
                message.from_role,
                message.to_agent,
                message.message_type,
                message.content,
                message.phase,
                message.parent_id,
                _to_db_timestamp(message.created_at),
            ),
        )
        await self._conn.commit()
        return message

    async def get_agent_messages(
        self, pipeline_run_id: str, agent: str | None = None
    ) -> list[AgentMessage]:
        """Get a run's messages in creation order.

        With ``agent``, keeps messages the agent sent OR received.
        """
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        conditions = ["pipeline_run_id = ?"]
        params: list[str] = [pipeline_run_id]

        if agent:
            conditions.append("(from_agent = ? OR to_agent = ?)")
            params.extend([agent, agent])

        query = f"""
            SELECT {_MESSAGE_COLUMNS}
            FROM agent_messages
            WHERE {' AND '.join(conditions)}
            ORDER BY created_at ASC, rowid ASC
        """

        cursor = await self._conn.execute(query, params)
        rows = await cursor.fetchall()

        return [
            AgentMessage(
                id=row[0],
                pipeline_run_id=row[1],
                from_agent=row[2],
                from_role=row[3],
                to_agent=row[4],
                message_type=row[5],
                content=row[6],
                phase=row[7],
                parent_id=row[8],
                created_at=_from_db_timestamp(row[9]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        for table in ["agent_messages", "pipeline_runs"]:
            await self._conn.execute(f"DELETE FROM {table}")

        await self._conn.commit()
