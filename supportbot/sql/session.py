"""
SQL Agent Session
=================
One object per process that owns the checkpointer and the compiled SQL
graph, and turns console-style text turns into graph calls.

    no write pending     chat() → ainvoke({"messages": [HumanMessage]})
    write pending, yes   chat() → ainvoke(Command(resume=True))
    write pending, no    chat() → ainvoke(Command(resume=False))
    write pending, else  chat() → asks again; the graph is not touched

A pending write is whatever human_review interrupted with, so the prompt
the user sees always lists every write in the batch that "yes" would run.

Checkpointer modes:
  SQLite (default, durable)   SqlAgentSession(db_path="agent_checkpoints.db")
  In-memory (ephemeral)       SqlAgentSession(in_memory=True)
"""
import json
import logging
import re
from contextlib import AsyncExitStack

from langchain_core.messages import AIMessage, HumanMessage
from langgraph.types import Command

from ..checkpointing import get_db_path, memory_checkpointer, sqlite_checkpointer
from .client import create_supabase_client
from .graph import build_sql_graph
from .tools import DELETE_TOOL, INSERT_TOOL, UPDATE_TOOL, build_supabase_tools

logger = logging.getLogger(__name__)

APPROVE_WORDS = frozenset({
    "yes", "y", "yep", "yeah", "sure", "ok", "okay", "confirm", "confirmed", "proceed",
    "네", "예", "응", "좋아",
})
DECLINE_WORDS = frozenset({
    "no", "n", "nope", "cancel", "stop", "abort", "don't", "dont",
    "아니", "아니요", "아니오", "취소",
})
APPROVE_PHRASES = ("do it", "go ahead")

REASK_PREFIX = "Please answer yes or no first.\n\n"


# ── Reading the user's answer ───────────────────────────────────────────────

def is_confirmation(message: str) -> bool | None:
    """
    True for an approval, False for a refusal, None when the reply is
    neither or both ("yes, but cancel the delete").

    Matching is per word, so "know" is not a "no" and "good" is not a "go".
    """
    text = message.lower().strip()
    words = set(re.findall(r"[\w']+", text))

    approved = bool(words & APPROVE_WORDS) or any(p in text for p in APPROVE_PHRASES)
    declined = bool(words & DECLINE_WORDS)

    if approved == declined:
        return None
    return approved


# ── Describing pending writes ───────────────────────────────────────────────

def _filter_text(filter: dict | None) -> str:
    if not filter:
        return "ALL rows"
    return "rows where " + ", ".join(f"{k} = {v!r}" for k, v in filter.items())


def describe_pending(pending: dict) -> str:
    """One write as a verb phrase: "delete rows where id = 3 from **t**"."""
    tool = pending["tool"]
    args = pending.get("args", {})
    table = args.get("table", "unknown")

    if tool == INSERT_TOOL:
        return f"insert into **{table}**: {json.dumps(args.get('data', {}), ensure_ascii=False)}"
    if tool == UPDATE_TOOL:
        values = json.dumps(args.get("data", {}), ensure_ascii=False)
        return f"update {_filter_text(args.get('filter'))} in **{table}** with {values}"
    if tool == DELETE_TOOL:
        return f"delete {_filter_text(args.get('filter'))} from **{table}**"
    return f"run `{tool}`"


def confirmation_prompt(pending_actions: list[dict]) -> str:
    """The yes/no question shown while a batch of writes waits for review."""
    actions = [describe_pending(p) for p in pending_actions]

    if len(actions) == 1:
        text = f"I'm ready to {actions[0]}."
    else:
        text = "I'm ready to:\n\n" + "\n".join(f"- {a}" for a in actions)

    if any(p["tool"] in (UPDATE_TOOL, DELETE_TOOL) for p in pending_actions):
        text += "\n\nThis cannot be undone."
    return text + "\n\nShall I proceed? (yes / no)"


def pending_from_state(state) -> list[dict]:
    """The pending_writes payload of the interrupt the thread is paused on."""
    for task in state.tasks:
        for pause in task.interrupts:
            if isinstance(pause.value, dict) and "pending_writes" in pause.value:
                return pause.value["pending_writes"]
    return []


# ── SqlAgentSession ─────────────────────────────────────────────────────────

class SqlAgentSession:
    """
    Args:
        db_path:      SQLite checkpoint file. Defaults to CHECKPOINT_DB_PATH
                      or "agent_checkpoints.db".
        in_memory:    Use MemorySaver instead of SQLite.
        allow_writes: Expose insert/update/delete (each batch still needs a "yes").
        client:       Supabase client. Created from the environment when omitted.
        llm:          Chat model. Defaults to build_llm().
        tools:        Pre-built tools; skips client creation entirely.

    Usage:
        session = SqlAgentSession(in_memory=True)
        await session.start()
        response = await session.chat(session_id, "전기에어커튼은 어떤 인증을 받아야해?")
        await session.stop()
    """

    def __init__(
        self,
        db_path: str | None = None,
        in_memory: bool = False,
        allow_writes: bool = False,
        client=None,
        llm=None,
        tools: list | None = None,
    ):
        self._db_path      = db_path
        self._in_memory    = in_memory
        self._allow_writes = allow_writes
        self._client       = client
        self._llm          = llm
        self._tools        = tools
        self._graph        = None
        self._exit_stack   = AsyncExitStack()

    async def start(self) -> None:
        if self._in_memory:
            checkpointer = memory_checkpointer()
            logger.info("[session] Using in-memory checkpointer (ephemeral)")
        else:
            path = self._db_path or get_db_path()
            checkpointer = await self._exit_stack.enter_async_context(sqlite_checkpointer(path))
            logger.info("[session] Using SQLite checkpointer at: %s", path)

        tools = self._tools
        if tools is None:
            client = self._client or create_supabase_client()
            tools = build_supabase_tools(client, allow_writes=self._allow_writes)

        self._graph = build_sql_graph(tools, llm=self._llm, checkpointer=checkpointer)
        logger.info("[session] Ready. %d tools: %s", len(tools), [t.name for t in tools])

    async def stop(self) -> None:
        await self._exit_stack.aclose()

    @property
    def graph(self):
        return self._graph

    def _config(self, session_id: str) -> dict:
        return {"configurable": {"thread_id": session_id}}

    async def get_state(self, session_id: str):
        return await self._graph.aget_state(self._config(session_id))

    async def is_interrupted(self, session_id: str) -> bool:
        return bool((await self.get_state(session_id)).next)

    async def get_pending_actions(self, session_id: str) -> list[dict]:
        return pending_from_state(await self.get_state(session_id))

    async def get_history(self, session_id: str) -> list[dict]:
        """User and assistant turns only; tool traffic is left out."""
        state = await self.get_state(session_id)
        history = []
        for msg in state.values.get("messages", []):
            if isinstance(msg, HumanMessage):
                history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AIMessage) and msg.content and not msg.tool_calls:
                history.append({"role": "assistant", "content": msg.content})
        return history

    @staticmethod
    def _paused(pending: list[dict], prefix: str = "") -> dict:
        return {
            "content":         prefix + confirmation_prompt(pending),
            "interrupted":     True,
            "pending_action":  pending[0] if pending else None,
            "pending_actions": pending,
        }

    async def chat(self, session_id: str, message: str) -> dict:
        """
        Send one user turn and return:
            content          the reply, or the yes/no question
            interrupted      True while writes wait for review
            pending_action   first pending write (when interrupted)
            pending_actions  every pending write (when interrupted)
        """
        config = self._config(session_id)
        state  = await self.get_state(session_id)

        if state.next:
            decision = is_confirmation(message)
            if decision is None:
                logger.info("[session] %s: unclear answer to a pending write", session_id[:8])
                return self._paused(pending_from_state(state), prefix=REASK_PREFIX)
            result = await self._graph.ainvoke(Command(resume=decision), config=config)
        else:
            result = await self._graph.ainvoke(
                {"messages": [HumanMessage(content=message)]}, config=config,
            )

        state = await self.get_state(session_id)
        if state.next:
            return self._paused(pending_from_state(state))

        for msg in reversed(result["messages"]):
            if isinstance(msg, AIMessage) and msg.content and not msg.tool_calls:
                return {"content": msg.content, "interrupted": False}
        return {"content": "...", "interrupted": False}
