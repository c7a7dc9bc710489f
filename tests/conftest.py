"""
pytest configuration for the supportbot test suite.

Puts the project root on sys.path so tests import `supportbot` without an
install, and sets dummy provider variables so build_llm() never needs real
keys. Every test hands the graphs a MagicMock model; nothing calls out.

asyncio_mode = "auto" (pyproject.toml) collects async test functions as
asyncio tests without a marker on each one.
"""
import os
import sys
import uuid
from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

os.environ.setdefault("GROQ_API_KEY", "test-key")
os.environ.setdefault("LLM_PROVIDER", "groq")


def ai(content: str = "", tool_calls: list | None = None) -> AIMessage:
    return AIMessage(content=content, tool_calls=tool_calls or [])


def route(label: str) -> AIMessage:
    """A JSON-mode categorization reply."""
    return AIMessage(content='{"nextRepresentative": "%s"}' % label)


def mock_llm(*replies) -> MagicMock:
    """
    A chat model double. bind() and bind_tools() return the same mock, so
    plain calls and JSON-mode categorization calls share one reply queue.
    """
    llm = MagicMock()
    llm.bind.return_value = llm
    llm.bind_tools.return_value = llm
    llm.invoke.side_effect = list(replies)
    return llm


@pytest.fixture
def session_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def config(session_id) -> dict:
    return {"configurable": {"thread_id": session_id}}
