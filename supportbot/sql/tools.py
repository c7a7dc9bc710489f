"""
Supabase Tools
==============
Thin LangChain tools over the Supabase client for the KC certification agent.

Read-only (default tool list)
  list-tables-supabase       RPC get_public_tables
  info-table-supabase        RPC get_table_column_info, per table
  query-supabase             exact match on kc_certifications.sub_category
  semantic-search-supabase   embedding + RPC match_kc_certifications
  query-checker-supabase     pattern checks on a SQL string (no DB call)

Write (allow_writes=True, always behind human confirmation)
  insert-data-supabase
  update-data-supabase
  delete-data-supabase

Error contract: a tool never raises. Anything the Supabase client (or the
embedding call) throws is caught and returned as "<action> failed: <error>",
so the model sees the failure and can react to it.
"""
import json
import logging
import re
from typing import Any

from langchain_core.tools import tool
from pydantic import BaseModel, Field

from ..providers import build_embeddings

logger = logging.getLogger(__name__)

KC_TABLE = "kc_certifications"
PRODUCT_COLUMN = "sub_category"
PUBLIC_SCHEMA = "public"

MATCH_FUNCTION = "match_kc_certifications"
MATCH_THRESHOLD = 0.5
MATCH_COUNT = 5

LIST_TABLES_TOOL = "list-tables-supabase"
INFO_TABLE_TOOL = "info-table-supabase"
QUERY_TOOL = "query-supabase"
SEMANTIC_SEARCH_TOOL = "semantic-search-supabase"
QUERY_CHECKER_TOOL = "query-checker-supabase"
INSERT_TOOL = "insert-data-supabase"
UPDATE_TOOL = "update-data-supabase"
DELETE_TOOL = "delete-data-supabase"

WRITE_TOOLS: frozenset[str] = frozenset({INSERT_TOOL, UPDATE_TOOL, DELETE_TOOL})

COMMON_QUERY_ERRORS = (
    (re.compile(r"NOT IN \(NULL\)", re.IGNORECASE),
     "Do not use NOT IN with NULL values."),
    (re.compile(r"UNION\s+SELECT", re.IGNORECASE),
     "Use UNION ALL if duplicates should be kept."),
    (re.compile(r"BETWEEN\s+\d+\s+AND\s+\d+", re.IGNORECASE),
     "BETWEEN is inclusive. Use > and < for an exclusive range."),
)


def format_error(error: Any) -> str:
    """
    Render whatever the client raised as a plain string.

    postgrest's APIError carries the server message in `.message`; other
    exceptions fall back to str(). Non-exception payloads (dicts from RPC
    error bodies) are rendered as JSON.
    """
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, (dict, list)):
        return json.dumps(error, ensure_ascii=False, default=str)
    return str(error)


def to_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2, default=str)


def check_query(query: str) -> str:
    """Append a warning for every common mistake found in `query`."""
    result = query
    found = False
    for pattern, fix in COMMON_QUERY_ERRORS:
        if pattern.search(query):
            found = True
            result += f"\n\nWarning: {fix}"
    if not found:
        result += "\n\nNo common errors found in the query."
    return result


def format_columns(table: str, columns: list[dict]) -> str:
    """Render get_table_column_info rows as a short schema block."""
    if not columns:
        return f"Table: {table}\nNo column information found.\n\n"

    lines = [f"Table: {table}", "Columns:"]
    for col in columns:
        nullable = " (nullable)" if col.get("is_nullable") == "YES" else ""
        default = f" [default: {col['column_default']}]" if col.get("column_default") else ""
        col_type = (
            col["udt_name"]
            if col.get("data_type") == "USER-DEFINED" and col.get("udt_name")
            else col.get("data_type")
        )
        lines.append(f"- {col['column_name']}: {col_type}{nullable}{default}")
    return "\n".join(lines) + "\n\n"


def _apply_filter(query, filter: dict | None):
    for key, value in (filter or {}).items():
        query = query.eq(key, value)
    return query


# ── Tool input schemas ──────────────────────────────────────────────────────

class InfoTableInput(BaseModel):
    tables: str = Field(description="Comma-separated list of table names")


class QueryInput(BaseModel):
    product: str = Field(description="Product name to look up in sub_category")


class SemanticSearchInput(BaseModel):
    search_term: str = Field(description="Keywords describing the product")


class QueryCheckerInput(BaseModel):
    query: str = Field(description="SQL query to check")


class InsertInput(BaseModel):
    table: str = Field(description="Table to insert into")
    data: dict[str, Any] = Field(description="Row to insert (column: value)")


class UpdateInput(BaseModel):
    table: str = Field(description="Table to update")
    data: dict[str, Any] = Field(description="Columns to update (column: value)")
    filter: dict[str, Any] | None = Field(default=None, description="Equality filters (column: value)")


class DeleteInput(BaseModel):
    table: str = Field(description="Table to delete from")
    filter: dict[str, Any] | None = Field(default=None, description="Equality filters (column: value)")


# ── Factory ─────────────────────────────────────────────────────────────────

def build_supabase_tools(client, embeddings=None, allow_writes: bool = False) -> list:
    """
    Build the tool list bound to one Supabase client.

    Args:
        client:       supabase.Client (or anything with the same table/rpc API).
        embeddings:   LangChain Embeddings for semantic search. Built lazily
                      with build_embeddings() on first use when omitted.
        allow_writes: Also return the insert/update/delete tools.
    """
    embedder = {"model": embeddings}

    def embed(text: str) -> list[float]:
        if embedder["model"] is None:
            embedder["model"] = build_embeddings()
        return embedder["model"].embed_query(text)

    @tool(LIST_TABLES_TOOL)
    def list_tables() -> str:
        """Returns a list of all tables in the database."""
        try:
            response = client.rpc("get_public_tables").execute()
            return ", ".join(row["tablename"] for row in response.data or [])
        except Exception as exc:
            return f"Listing tables failed: {format_error(exc)}"

    @tool(INFO_TABLE_TOOL, args_schema=InfoTableInput)
    def info_table(tables: str) -> str:
        """Returns the column schema of the given tables. Input is a comma-separated list of table names."""
        table_list = [t.strip() for t in tables.split(",") if t.strip()]
        logger.info("[tools] info-table: %s", table_list)

        result = ""
        for table in table_list:
            try:
                response = client.rpc(
                    "get_table_column_info",
                    {"p_schema_name": PUBLIC_SCHEMA, "p_table_name": table},
                ).execute()
            except Exception as exc:
                result += f"Table '{table}':\nError: {format_error(exc)}\n\n"
                continue
            result += format_columns(table, response.data or [])
        return result

    @tool(QUERY_TOOL, args_schema=QueryInput)
    def query(product: str) -> str:
        """Looks up certification rows whose sub_category exactly matches the product name."""
        logger.info("[tools] query: product=%r", product)
        try:
            response = (
                client.table(KC_TABLE)
                .select("*")
                .eq(PRODUCT_COLUMN, product)
                .execute()
            )
            return to_json(response.data)
        except Exception as exc:
            return f"Query failed: {format_error(exc)}"

    @tool(SEMANTIC_SEARCH_TOOL, args_schema=SemanticSearchInput)
    def semantic_search(search_term: str) -> str:
        """Finds certification rows semantically similar to the search term. Use when the exact match finds nothing."""
        logger.info("[tools] semantic-search: %r", search_term)
        try:
            response = client.rpc(
                MATCH_FUNCTION,
                {
                    "query_embedding": embed(search_term),
                    "match_threshold": MATCH_THRESHOLD,
                    "match_count":     MATCH_COUNT,
                },
            ).execute()
            return to_json(response.data)
        except Exception as exc:
            return f"Semantic search failed: {format_error(exc)}"

    @tool(QUERY_CHECKER_TOOL, args_schema=QueryCheckerInput)
    def query_checker(query: str) -> str:
        """Checks a SQL query for common mistakes. Input is the SQL query to check."""
        return check_query(query)

    @tool(INSERT_TOOL, args_schema=InsertInput)
    def insert_data(table: str, data: dict[str, Any]) -> str:
        """Inserts a row into a table. Input is the table name and the row."""
        try:
            response = client.table(table).insert(data).execute()
            return f"Insert succeeded: {to_json(response.data)}"
        except Exception as exc:
            return f"Insert failed: {format_error(exc)}"

    @tool(UPDATE_TOOL, args_schema=UpdateInput)
    def update_data(table: str, data: dict[str, Any], filter: dict[str, Any] | None = None) -> str:
        """Updates rows in a table. Input is the table name, the new values and equality filters."""
        try:
            response = _apply_filter(client.table(table).update(data), filter).execute()
            return f"Update succeeded: {to_json(response.data)}"
        except Exception as exc:
            return f"Update failed: {format_error(exc)}"

    @tool(DELETE_TOOL, args_schema=DeleteInput)
    def delete_data(table: str, filter: dict[str, Any] | None = None) -> str:
        """Deletes rows from a table. Input is the table name and equality filters."""
        try:
            response = _apply_filter(client.table(table).delete(), filter).execute()
            return f"Delete succeeded: {to_json(response.data)}"
        except Exception as exc:
            return f"Delete failed: {format_error(exc)}"

    tools = [list_tables, info_table, query, semantic_search, query_checker]
    if allow_writes:
        tools += [insert_data, update_data, delete_data]
    return tools
