"""
SQL Agent Nodes
===============
  create_agent_node — the ReAct brain; calls tools or produces a final answer
  human_review_node — pauses on a batch containing writes until a human decides
"""
import logging
from typing import Literal

from langchain_core.messages import AIMessage, SystemMessage, ToolMessage
from langgraph.graph import END
from langgraph.types import Command, interrupt

from .prompts import SYSTEM_PROMPT
from .state import CONFIRMATION_REQUIRED_TOOLS, SqlAgentState

logger = logging.getLogger(__name__)

CANCELLED_TOOL_RESULT = "Action cancelled by user."
CANCELLED_REPLY = (
    "No problem, I've left the database untouched. "
    "Is there anything else I can help you with?"
)


def create_agent_node(llm_with_tools, system_prompt: str = SYSTEM_PROMPT):
    """
    Return the agent node bound to a model that already has the tools bound.
    The system prompt is prepended once, unless the transcript already starts
    with a SystemMessage.
    """
    def agent_node(state: SqlAgentState) -> dict:
        messages = list(state["messages"])

        if not messages or not isinstance(messages[0], SystemMessage):
            messages = [SystemMessage(content=system_prompt)] + messages

        response = llm_with_tools.invoke(messages)
        if getattr(response, "tool_calls", None):
            logger.info("[sql] tool calls: %s", [tc["name"] for tc in response.tool_calls])
        return {"messages": [response]}

    return agent_node


def pending_writes(message) -> list[dict]:
    """Every write call in the message, in order, as {tool, args}."""
    return [
        {"tool": tc["name"], "args": tc.get("args", {})}
        for tc in getattr(message, "tool_calls", None) or []
        if tc["name"] in CONFIRMATION_REQUIRED_TOOLS
    ]


def cancel_tool_calls(message) -> list[ToolMessage]:
    """
    One ToolMessage per tool call of `message`. Chat APIs reject a transcript
    where a tool call has no answer, so a declined batch is answered in full,
    reads included.
    """
    return [
        ToolMessage(content=CANCELLED_TOOL_RESULT, tool_call_id=tc["id"], name=tc["name"])
        for tc in message.tool_calls
    ]


def human_review_node(state: SqlAgentState) -> Command[Literal["tools", "__end__"]]:
    """
    Interrupt with {"pending_writes": [...]} and wait for Command(resume=bool).

    True  → run the whole batch in "tools"
    False → answer every call as cancelled, reply, and end the run
    """
    last = state["messages"][-1]
    writes = pending_writes(last)

    approved = interrupt({"pending_writes": writes})

    if approved:
        logger.info("[sql] writes approved: %s", [w["tool"] for w in writes])
        return Command(goto="tools")

    logger.info("[sql] writes rejected: %s", [w["tool"] for w in writes])
    return Command(
        goto=END,
        update={"messages": cancel_tool_calls(last) + [AIMessage(content=CANCELLED_REPLY)]},
    )
