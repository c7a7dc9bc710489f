"""
SQL Agent Routing
=================
  agent → route_after_agent → "tools" | "human_review" | END

human_review picks its own successor with Command(goto=...), so it has no
router here.
"""
from typing import Literal

from langgraph.graph import END

from .state import CONFIRMATION_REQUIRED_TOOLS, SqlAgentState


def route_after_agent(state: SqlAgentState) -> Literal["tools", "human_review", "__end__"]:
    """
    A batch with any write in it is reviewed as a whole: ToolNode runs every
    call of the message, so a read cannot go ahead without the write.
    """
    tool_calls = getattr(state["messages"][-1], "tool_calls", None)
    if not tool_calls:
        return END
    if any(tc["name"] in CONFIRMATION_REQUIRED_TOOLS for tc in tool_calls):
        return "human_review"
    return "tools"
