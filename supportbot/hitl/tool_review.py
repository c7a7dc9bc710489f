"""
Tool-Call Review Graph
======================
Every tool call the model makes is shown to a human before it runs.

    START → call_llm ── no tool calls ──► END
              ▲   │
              │   ▼
              │ human_review_node ──⚡INTERRUPT──►
              │   │ continue / update         │ feedback
              │   ▼                           │
              └─ run_tool ◄───────────────────┘ (feedback goes to call_llm)

Resume payloads (Command(resume=...)):

    {"action": "continue"}                        run the call as proposed
    {"action": "update",   "data": {...args}}     replace the call's args, then run
    {"action": "feedback", "data": "<text>"}      answer the call with the text
                                                  and let the model try again
"""
import logging
from typing import Literal

from langchain_core.messages import AIMessage, ToolMessage
from langchain_core.tools import tool
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, MessagesState, StateGraph
from langgraph.types import Command, interrupt

from ..providers import build_llm

logger = logging.getLogger(__name__)

REVIEW_QUESTION = "Is this correct?"


@tool
def weather_search(city: str) -> str:
    """Search for the weather"""
    logger.info("[tool_review] Searching for: %s", city)
    return "Sunny!"


TOOLS_BY_NAME = {"weather_search": weather_search}


def create_call_llm_node(llm_with_tools):
    def call_llm(state: MessagesState) -> dict:
        response = llm_with_tools.invoke(state["messages"])
        return {"messages": [response]}

    return call_llm


def human_review_node(state: MessagesState) -> Command[Literal["run_tool", "call_llm"]]:
    last = state["messages"][-1]
    tool_call = last.tool_calls[-1]

    review = interrupt({"question": REVIEW_QUESTION, "tool_call": tool_call})

    action = review.get("action") if isinstance(review, dict) else None
    data = review.get("data") if isinstance(review, dict) else None
    logger.info("[tool_review] review action=%s", action)

    if action == "continue":
        return Command(goto="run_tool")

    if action == "update":
        # Same id as the pending message, so add_messages replaces it.
        updated = AIMessage(
            content=last.content,
            tool_calls=[{
                "id":   tool_call["id"],
                "name": tool_call["name"],
                "args": data,
            }],
            id=last.id,
        )
        return Command(goto="run_tool", update={"messages": [updated]})

    if action == "feedback":
        feedback = ToolMessage(
            name=tool_call["name"],
            content=data,
            tool_call_id=tool_call["id"],
        )
        return Command(goto="call_llm", update={"messages": [feedback]})

    raise ValueError("Invalid review action")


def run_tool(state: MessagesState) -> dict:
    new_messages = []
    for tool_call in state["messages"][-1].tool_calls:
        result = TOOLS_BY_NAME[tool_call["name"]].invoke(tool_call["args"])
        new_messages.append(ToolMessage(
            name=tool_call["name"],
            content=result,
            tool_call_id=tool_call["id"],
        ))
    return {"messages": new_messages}


def route_after_llm(state: MessagesState) -> Literal["human_review_node", "__end__"]:
    if not getattr(state["messages"][-1], "tool_calls", None):
        return END
    return "human_review_node"


def build_tool_review_graph(llm=None, checkpointer: BaseCheckpointSaver | None = None):
    if llm is None:
        llm = build_llm()

    workflow = StateGraph(MessagesState)

    workflow.add_node("call_llm",          create_call_llm_node(llm.bind_tools([weather_search])))
    workflow.add_node("run_tool",          run_tool)
    workflow.add_node("human_review_node", human_review_node)

    workflow.add_edge(START, "call_llm")
    workflow.add_conditional_edges("call_llm", route_after_llm, ["human_review_node", END])
    workflow.add_edge("run_tool", "call_llm")

    return workflow.compile(checkpointer=checkpointer or MemorySaver())
