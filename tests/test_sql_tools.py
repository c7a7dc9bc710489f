"""
Tests for supportbot/sql/tools.py and supportbot/sql/client.py
===============================================================
The Supabase client is a MagicMock: builder calls (table/select/eq/rpc)
return mocks, and execute().data is set per test.

Covers:
  - read tools: list-tables, info-table, query, semantic-search, query-checker
  - write tools: insert / update / delete with equality filters
  - tool list depends on allow_writes
  - client failures come back as strings, never raised
  - format_error, check_query, format_columns
  - list_public_tables RPC → pg_tables fallback
"""
from unittest.mock import MagicMock, patch

import pytest

from supportbot.sql.client import list_public_tables
from supportbot.sql.tools import (
    DELETE_TOOL,
    INFO_TABLE_TOOL,
    INSERT_TOOL,
    KC_TABLE,
    LIST_TABLES_TOOL,
    MATCH_COUNT,
    MATCH_FUNCTION,
    MATCH_THRESHOLD,
    PRODUCT_COLUMN,
    QUERY_CHECKER_TOOL,
    QUERY_TOOL,
    SEMANTIC_SEARCH_TOOL,
    UPDATE_TOOL,
    build_supabase_tools,
    check_query,
    format_columns,
    format_error,
)


class FakeAPIError(Exception):
    """Shaped like postgrest.exceptions.APIError: the text lives in .message."""

    def __init__(self, message: str):
        super().__init__({"message": message, "code": "42P01"})
        self.message = message


def _tools(client, **kwargs) -> dict:
    return {t.name: t for t in build_supabase_tools(client, **kwargs)}


# ---------------------------------------------------------------------------
# Tool list
# ---------------------------------------------------------------------------

class TestToolList:
    def test_read_only_by_default(self):
        names = set(_tools(MagicMock()))
        assert names == {
            LIST_TABLES_TOOL, INFO_TABLE_TOOL, QUERY_TOOL,
            SEMANTIC_SEARCH_TOOL, QUERY_CHECKER_TOOL,
        }

    def test_allow_writes_adds_write_tools(self):
        names = set(_tools(MagicMock(), allow_writes=True))
        assert {INSERT_TOOL, UPDATE_TOOL, DELETE_TOOL} <= names
        assert len(names) == 8


# ---------------------------------------------------------------------------
# Read tools
# ---------------------------------------------------------------------------

class TestListTables:
    def test_joins_table_names(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value.data = [
            {"tablename": "kc_certifications"}, {"tablename": "products"},
        ]

        result = _tools(client)[LIST_TABLES_TOOL].invoke({})

        client.rpc.assert_called_once_with("get_public_tables")
        assert result == "kc_certifications, products"

    def test_error_is_returned(self):
        client = MagicMock()
        client.rpc.return_value.execute.side_effect = FakeAPIError("function does not exist")

        result = _tools(client)[LIST_TABLES_TOOL].invoke({})

        assert result == "Listing tables failed: function does not exist"


class TestInfoTable:
    def test_describes_each_table(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value.data = [
            {"column_name": "id", "data_type": "bigint", "is_nullable": "NO"},
        ]

        result = _tools(client)[INFO_TABLE_TOOL].invoke({"tables": "a, b"})

        assert "Table: a\nColumns:\n- id: bigint" in result
        assert "Table: b\nColumns:\n- id: bigint" in result
        client.rpc.assert_any_call(
            "get_table_column_info", {"p_schema_name": "public", "p_table_name": "b"},
        )

    def test_one_failing_table_does_not_hide_the_others(self):
        ok = MagicMock()
        ok.data = [{"column_name": "id", "data_type": "bigint", "is_nullable": "NO"}]
        client = MagicMock()
        client.rpc.return_value.execute.side_effect = [Exception("relation missing"), ok]

        result = _tools(client)[INFO_TABLE_TOOL].invoke({"tables": "missing,kc_certifications"})

        assert "Table 'missing':\nError: relation missing" in result
        assert "Table: kc_certifications" in result


class TestQuery:
    def test_exact_match_on_sub_category(self):
        client = MagicMock()
        chain = client.table.return_value.select.return_value.eq.return_value
        chain.execute.return_value.data = [{"sub_category": "전기에어커튼", "certification": "안전인증"}]

        result = _tools(client)[QUERY_TOOL].invoke({"product": "전기에어커튼"})

        client.table.assert_called_once_with(KC_TABLE)
        client.table.return_value.select.return_value.eq.assert_called_once_with(
            PRODUCT_COLUMN, "전기에어커튼",
        )
        assert "안전인증" in result

    def test_error_is_returned_with_message(self):
        client = MagicMock()
        client.table.side_effect = FakeAPIError('relation "kc_certifications" does not exist')

        result = _tools(client)[QUERY_TOOL].invoke({"product": "완구"})

        assert result.startswith("Query failed: ")
        assert 'relation "kc_certifications" does not exist' in result

    def test_plain_exception_is_returned(self):
        client = MagicMock()
        chain = client.table.return_value.select.return_value.eq.return_value
        chain.execute.side_effect = ConnectionError("connection refused")

        result = _tools(client)[QUERY_TOOL].invoke({"product": "완구"})

        assert result == "Query failed: connection refused"


class TestSemanticSearch:
    def test_embeds_and_calls_match_function(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value.data = [{"sub_category": "에어커튼"}]
        embeddings = MagicMock()
        embeddings.embed_query.return_value = [0.1, 0.2]

        result = _tools(client, embeddings=embeddings)[SEMANTIC_SEARCH_TOOL].invoke(
            {"search_term": "에어 커튼"}
        )

        embeddings.embed_query.assert_called_once_with("에어 커튼")
        client.rpc.assert_called_once_with(MATCH_FUNCTION, {
            "query_embedding": [0.1, 0.2],
            "match_threshold": MATCH_THRESHOLD,
            "match_count":     MATCH_COUNT,
        })
        assert "에어커튼" in result

    def test_embeddings_built_lazily(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value.data = []
        embeddings = MagicMock()
        embeddings.embed_query.return_value = [0.0]

        with patch("supportbot.sql.tools.build_embeddings", return_value=embeddings) as build:
            tools = _tools(client)
            build.assert_not_called()
            tools[SEMANTIC_SEARCH_TOOL].invoke({"search_term": "a"})
            tools[SEMANTIC_SEARCH_TOOL].invoke({"search_term": "b"})

        build.assert_called_once()

    def test_embedding_failure_is_returned(self):
        embeddings = MagicMock()
        embeddings.embed_query.side_effect = RuntimeError("invalid api key")

        result = _tools(MagicMock(), embeddings=embeddings)[SEMANTIC_SEARCH_TOOL].invoke(
            {"search_term": "a"}
        )

        assert result == "Semantic search failed: invalid api key"


class TestQueryChecker:
    def test_tool_makes_no_client_call(self):
        client = MagicMock()
        result = _tools(client)[QUERY_CHECKER_TOOL].invoke({"query": "SELECT 1"})

        assert result.endswith("No common errors found in the query.")
        client.table.assert_not_called()
        client.rpc.assert_not_called()


# ---------------------------------------------------------------------------
# Write tools
# ---------------------------------------------------------------------------

class TestWriteTools:
    def test_insert(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value.data = [{"id": 1}]

        result = _tools(client, allow_writes=True)[INSERT_TOOL].invoke(
            {"table": "kc_certifications", "data": {"sub_category": "완구"}}
        )

        client.table.return_value.insert.assert_called_once_with({"sub_category": "완구"})
        assert result.startswith("Insert succeeded: ")
        assert '"id": 1' in result

    def test_update_applies_equality_filter(self):
        client = MagicMock()
        update = client.table.return_value.update.return_value
        update.eq.return_value.execute.return_value.data = [{"id": 7}]

        result = _tools(client, allow_writes=True)[UPDATE_TOOL].invoke(
            {"table": "kc_certifications", "data": {"note": "x"}, "filter": {"id": 7}}
        )

        update.eq.assert_called_once_with("id", 7)
        assert result.startswith("Update succeeded: ")

    def test_delete_without_filter(self):
        client = MagicMock()
        client.table.return_value.delete.return_value.execute.return_value.data = []

        result = _tools(client, allow_writes=True)[DELETE_TOOL].invoke({"table": "t"})

        client.table.return_value.delete.return_value.eq.assert_not_called()
        assert result == "Delete succeeded: []"

    def test_write_failure_is_returned(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = FakeAPIError(
            "permission denied for table t"
        )

        result = _tools(client, allow_writes=True)[INSERT_TOOL].invoke(
            {"table": "t", "data": {"a": 1}}
        )

        assert result == "Insert failed: permission denied for table t"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestFormatError:
    def test_prefers_message_attribute(self):
        assert format_error(FakeAPIError("boom")) == "boom"

    def test_exception_falls_back_to_str(self):
        assert format_error(ValueError("bad value")) == "bad value"

    def test_dict_is_rendered_as_json(self):
        assert format_error({"code": "PGRST116"}) == '{"code": "PGRST116"}'

    def test_dict_with_message_key_is_json(self):
        assert "details" in format_error({"message": "m", "details": "d"})

    def test_other_values_use_str(self):
        assert format_error(42) == "42"


class TestCheckQuery:
    def test_clean_query(self):
        assert check_query("SELECT * FROM t") == (
            "SELECT * FROM t\n\nNo common errors found in the query."
        )

    @pytest.mark.parametrize("sql,warning", [
        ("SELECT * FROM t WHERE a NOT IN (NULL)", "NOT IN with NULL"),
        ("SELECT a FROM t UNION SELECT a FROM u", "UNION ALL"),
        ("SELECT * FROM t WHERE a between 1 and 5", "BETWEEN is inclusive"),
    ])
    def test_each_pattern_warns(self, sql, warning):
        result = check_query(sql)
        assert "\n\nWarning: " in result
        assert warning in result
        assert "No common errors" not in result

    def test_union_all_is_fine(self):
        assert "No common errors" in check_query("SELECT a FROM t UNION ALL SELECT a FROM u")

    def test_multiple_warnings(self):
        result = check_query("SELECT 1 UNION SELECT 2 WHERE x BETWEEN 1 AND 2")
        assert result.count("Warning:") == 2


class TestFormatColumns:
    def test_nullable_default_and_user_defined(self):
        result = format_columns("kc_certifications", [
            {"column_name": "id", "data_type": "bigint", "is_nullable": "NO",
             "column_default": "nextval('seq')"},
            {"column_name": "embedding", "data_type": "USER-DEFINED", "udt_name": "vector",
             "is_nullable": "YES", "column_default": None},
        ])

        assert result == (
            "Table: kc_certifications\n"
            "Columns:\n"
            "- id: bigint [default: nextval('seq')]\n"
            "- embedding: vector (nullable)\n\n"
        )

    def test_no_columns(self):
        assert format_columns("ghost", []) == "Table: ghost\nNo column information found.\n\n"


# ---------------------------------------------------------------------------
# list_public_tables
# ---------------------------------------------------------------------------

class TestListPublicTables:
    def test_uses_rpc_when_available(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value.data = [{"table_name": "kc_certifications"}]

        assert list_public_tables(client) == ["kc_certifications"]
        client.table.assert_not_called()

    def test_falls_back_to_pg_tables(self):
        client = MagicMock()
        client.rpc.return_value.execute.side_effect = Exception("function get_tables does not exist")
        eq = client.table.return_value.select.return_value.eq
        eq.return_value.execute.return_value.data = [{"tablename": "a"}, {"tablename": "b"}]

        assert list_public_tables(client) == ["a", "b"]
        client.table.assert_called_once_with("pg_tables")
        eq.assert_called_once_with("schemaname", "public")

    def test_fallback_error_propagates(self):
        client = MagicMock()
        client.rpc.return_value.execute.side_effect = Exception("no rpc")
        client.table.side_effect = RuntimeError("no access")

        with pytest.raises(RuntimeError, match="no access"):
            list_public_tables(client)
