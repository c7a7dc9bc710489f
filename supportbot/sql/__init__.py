from .client import create_supabase_client, list_public_tables
from .graph import build_sql_graph
from .session import SqlAgentSession
from .tools import build_supabase_tools, format_error

__all__ = [
    "SqlAgentSession",
    "build_sql_graph",
    "build_supabase_tools",
    "create_supabase_client",
    "list_public_tables",
    "format_error",
]
