"""SIM implementation - scripted pipeline run for UI development."""

import asyncio
import random
import uuid
from datetime import datetime, timezone
from typing import Protocol

from runwatch.logging_config import get_logger
from runwatch.models import AgentMessage, PipelineRun
from runwatch.storage import IStorage

logger = get_logger(__name__)


# (from_agent, to_agent, message_type, content, phase, reply_to_index)
SCENARIO: list[tuple[str, str | None, str, str, int, int | None]] = [
    ("planner", "coder", "handoff", "Plan ready: add the /health endpoint.", 0, None),
    ("coder", "planner", "question", "Should /health check the database?", 1, 0),
    ("planner", "coder", "response", "Yes, a cheap SELECT 1 is enough.", 1, 1),
    ("reviewer", "coder", "flag", "The handler swallows database errors.", 2, None),
    ("coder", "reviewer", "response", "Fixed: errors now return 503.", 2, 3),
    ("reviewer", None, "suggestion", "Consider a readiness probe as well.", 2, None),
]


class ISim(Protocol):
    """Generate test data: a scripted multi-agent exchange."""

    async def start(self) -> str:
        """Start a new scripted run and return its id."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


class Sim:
    """Writes a scripted agent conversation into a fresh pipeline run."""

    def __init__(
        self,
        storage: IStorage | None = None,
        delay_range: tuple[float, float] = (1.0, 3.0),
    ):
        self._storage = storage
        self._delay_range = delay_range
        self._running = False
        self._task: asyncio.Task | None = None

    def set_storage(self, storage: IStorage) -> None:
        """Inject the message store the scenario writes to."""
        self._storage = storage

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> str:
        """Start a new scripted run and return its id."""
        if not self._storage:
            raise RuntimeError("SIM storage not configured")

        await self.stop()

        run_id = str(uuid.uuid4())
        await self._storage.save_pipeline_run(
            PipelineRun(id=run_id, created_at=datetime.now(timezone.utc))
        )

        self._running = True
        self._task = asyncio.create_task(self._run_scenario(run_id))
        logger.info("SIM: started run %s", run_id)
        return run_id

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def _run_scenario(self, run_id: str) -> None:
        """Write the scripted messages with random delays."""
        written: list[AgentMessage] = []
        try:
            for from_agent, to_agent, message_type, content, phase, reply_to in SCENARIO:
                if not self._running:
                    break

                message = AgentMessage(
                    id=str(uuid.uuid4()),
                    pipeline_run_id=run_id,
                    from_agent=from_agent,
                    from_role=from_agent,
                    to_agent=to_agent,
                    message_type=message_type,
                    content=content,
                    phase=phase,
                    parent_id=written[reply_to].id if reply_to is not None else None,
                    created_at=datetime.now(timezone.utc),
                )
                await self._storage.save_agent_message(message)
                written.append(message)
                logger.info("SIM: %s -> %s [%s]", from_agent, to_agent or "*", message_type)

                await asyncio.sleep(random.uniform(*self._delay_range))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e, exc_info=True)
        finally:
            self._running = False
            logger.info("SIM: run %s finished with %d messages", run_id, len(written))
