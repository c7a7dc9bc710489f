"""
supportbot — LangGraph support and SQL question-answering agents
================================================================

Package layout:

    config.py         .env loading, Supabase settings, logging setup
    providers.py      chat model + embedding construction from env vars
    checkpointing.py  SQLite + memory checkpoint backends
    categorize.py     JSON-mode categorization parsed with pydantic
    support/          LangCorp support graph (billing / technical / refund)
    certification/    KC certification routing graph
    hitl/             human-in-the-loop interrupt patterns
    sql/              Supabase tools, SQL agent graph, SqlAgentSession
    demos.py          console drivers for every graph

Entry points for external callers:
"""
from .certification import build_certification_graph
from .checkpointing import get_db_path, memory_checkpointer, sqlite_checkpointer
from .support import build_support_graph

__all__ = [
    "build_support_graph",
    "build_certification_graph",
    "sqlite_checkpointer",
    "memory_checkpointer",
    "get_db_path",
]
