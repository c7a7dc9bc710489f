"""
Text Revision Graph
===================
One node that surfaces a piece of state to a human and writes back whatever
they return.

Running it through stream() shows the pending "__interrupt__" chunk with the
{"text_to_revise": ...} payload; Command(resume="<edited text>") finishes it.
"""
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import START, StateGraph
from langgraph.types import interrupt
from typing_extensions import TypedDict


class RevisionState(TypedDict):
    some_text: str


def human_node(state: RevisionState) -> dict:
    value = interrupt({"text_to_revise": state["some_text"]})
    return {"some_text": value}


def build_revision_graph(checkpointer: BaseCheckpointSaver | None = None):
    workflow = StateGraph(RevisionState)
    workflow.add_node("human_node", human_node)
    workflow.add_edge(START, "human_node")
    # A checkpointer is required for interrupt() to work.
    return workflow.compile(checkpointer=checkpointer or MemorySaver())
