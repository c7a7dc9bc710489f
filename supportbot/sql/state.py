"""
SQL Agent State
===============
"""
from typing import Annotated, Sequence

from langchain_core.messages import BaseMessage
from langgraph.graph.message import add_messages
from typing_extensions import TypedDict

from .tools import WRITE_TOOLS


class SqlAgentState(TypedDict):
    messages: Annotated[Sequence[BaseMessage], add_messages]


# Tools that change data and so need explicit human confirmation.
CONFIRMATION_REQUIRED_TOOLS: frozenset[str] = WRITE_TOOLS
