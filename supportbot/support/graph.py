"""
Support Graph
=============

    START
      │
      ▼
    initial_support ── conversational ──────────────► END
      │ billing              │ technical
      ▼                      ▼
    billing_support        technical_support ───────► END
      │ refund    └── respond ──────────────────────► END
      ▼
    handle_refund ──⚡INTERRUPT──► (human decides) ──► END

The checkpointer is required: handle_refund pauses the thread and the resume
call (Command(resume=...) or update_state + stream(None)) continues it.
"""
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, StateGraph

from ..providers import build_llm
from .nodes import (
    create_billing_support_node,
    create_initial_support_node,
    create_technical_support_node,
    handle_refund,
)
from .routing import route_after_billing, route_after_initial
from .state import SupportState


def build_support_graph(llm=None, checkpointer: BaseCheckpointSaver | None = None):
    """
    Build and compile the LangCorp support graph.

    Args:
        llm:          Chat model for every node. Defaults to build_llm().
        checkpointer: Any LangGraph checkpoint backend. Defaults to MemorySaver.
    """
    if llm is None:
        llm = build_llm()
    if checkpointer is None:
        checkpointer = MemorySaver()

    workflow = StateGraph(SupportState)

    workflow.add_node("initial_support",   create_initial_support_node(llm))
    workflow.add_node("billing_support",   create_billing_support_node(llm))
    workflow.add_node("technical_support", create_technical_support_node(llm))
    workflow.add_node("handle_refund",     handle_refund)

    workflow.add_edge(START, "initial_support")

    workflow.add_conditional_edges(
        "initial_support",
        route_after_initial,
        {
            "billing":        "billing_support",
            "technical":      "technical_support",
            "conversational": END,
        },
    )
    workflow.add_edge("technical_support", END)
    workflow.add_conditional_edges(
        "billing_support",
        route_after_billing,
        {"refund": "handle_refund", END: END},
    )
    workflow.add_edge("handle_refund", END)

    return workflow.compile(checkpointer=checkpointer)
