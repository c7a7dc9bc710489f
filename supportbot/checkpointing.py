"""
Checkpointing
=============
Checkpoint backends for the compiled graphs. Interrupts only work when a
graph is compiled with a checkpointer: the paused state is saved under the
thread_id and picked up again by the resume call.

  Memory (default for the demos)
  ──────────────────────────────
  MemorySaver. Lost on process exit.

  SQLite
  ──────
  AsyncSqliteSaver from langgraph-checkpoint-sqlite. Threads survive process
  restarts, so a refund waiting for authorization can be resumed later.
  The file path comes from CHECKPOINT_DB_PATH (default "agent_checkpoints.db").

    async with sqlite_checkpointer() as cp:
        graph = build_support_graph(checkpointer=cp)
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from langgraph.checkpoint.memory import MemorySaver
from langgraph.checkpoint.sqlite.aio import AsyncSqliteSaver

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "agent_checkpoints.db"


def get_db_path() -> str:
    return os.getenv("CHECKPOINT_DB_PATH", DEFAULT_DB_PATH)


@asynccontextmanager
async def sqlite_checkpointer(
    db_path: str | None = None,
) -> AsyncIterator[AsyncSqliteSaver]:
    """
    Open an AsyncSqliteSaver and run its (idempotent) setup().

    Args:
        db_path: Path to the SQLite file. Defaults to get_db_path().
                 ":memory:" keeps everything in-process.
    """
    path = db_path if db_path is not None else get_db_path()
    logger.info("[checkpointing] Opening SQLite checkpointer at: %s", path)

    async with AsyncSqliteSaver.from_conn_string(path) as checkpointer:
        await checkpointer.setup()
        logger.info("[checkpointing] SQLite checkpointer ready")
        yield checkpointer


def memory_checkpointer() -> MemorySaver:
    return MemorySaver()
