"""
Ask-Human Graph
===============
A ReAct loop where one of the "tools" is the user.

    START → agent ── no tool calls ─────────────────────► END
              │ ▲
     search   │ └──────────── action (ToolNode)
              │ askHuman
              ▼
            askHuman ──⚡INTERRUPT──► (user answers) ──► agent

The askHuman tool is only bound to the model so it can request it; it never
runs. The askHuman node answers the pending tool call with a ToolMessage
built from the resume value.
"""
import logging
from typing import Literal

from langchain_core.messages import ToolMessage
from langchain_core.tools import tool
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, MessagesState, StateGraph
from langgraph.prebuilt import ToolNode
from langgraph.types import interrupt

from ..providers import build_llm

logger = logging.getLogger(__name__)

ASK_HUMAN_TOOL = "askHuman"
LOCATION_PROMPT = "Please provide your location:"


@tool
def search(query: str) -> str:
    """Call to surf the web."""
    return "It's sunny in San Francisco, but you better look out if you're a Gemini 😈."


@tool(ASK_HUMAN_TOOL)
def ask_human(question: str) -> str:
    """Ask the human for input."""
    return "The human said XYZ"


TOOLS = [search]


def should_continue(state: MessagesState) -> Literal["action", "askHuman", "__end__"]:
    last = state["messages"][-1]
    tool_calls = getattr(last, "tool_calls", None)

    if not tool_calls:
        return END

    if tool_calls[0]["name"] == ASK_HUMAN_TOOL:
        logger.info("--- ASKING HUMAN ---")
        return "askHuman"

    return "action"


def create_agent_node(llm_with_tools):
    def call_model(state: MessagesState) -> dict:
        response = llm_with_tools.invoke(state["messages"])
        return {"messages": [response]}

    return call_model


def ask_human_node(state: MessagesState) -> dict:
    tool_call_id = state["messages"][-1].tool_calls[0]["id"]
    location = interrupt(LOCATION_PROMPT)
    return {"messages": [ToolMessage(tool_call_id=tool_call_id, content=location)]}


def build_ask_human_graph(llm=None, checkpointer: BaseCheckpointSaver | None = None):
    if llm is None:
        llm = build_llm()
    llm_with_tools = llm.bind_tools(TOOLS + [ask_human])

    workflow = StateGraph(MessagesState)

    workflow.add_node("agent",    create_agent_node(llm_with_tools))
    workflow.add_node("action",   ToolNode(TOOLS))
    workflow.add_node("askHuman", ask_human_node)

    workflow.add_edge(START, "agent")
    workflow.add_conditional_edges(
        "agent",
        should_continue,
        {"action": "action", "askHuman": "askHuman", END: END},
    )
    workflow.add_edge("action", "agent")
    workflow.add_edge("askHuman", "agent")

    return workflow.compile(checkpointer=checkpointer or MemorySaver())
