"""
Certification Graph
===================

    START
      │
      ▼
    initial_support ── conversational ──► END
      │ certification
      ▼
    certification_support ──────────────► END

Same shape as the support graph's first hop, with a two-value routing label.
"""
import logging
from typing import Literal

from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, StateGraph
from pydantic import BaseModel, ConfigDict, Field

from ..categorize import categorize, trim_trailing_ai
from ..providers import build_llm
from ..support.state import SupportState
from .prompts import CERTIFICATION_SYSTEM, INIT_SYSTEM, ROUTING_HUMAN, ROUTING_SYSTEM

logger = logging.getLogger(__name__)


class CertificationRoute(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    next_representative: Literal["RESPOND", "CERTIFICATION"] = Field(alias="nextRepresentative")


def create_initial_support_node(llm):
    def initial_support(state: SupportState) -> dict:
        messages = list(state["messages"])

        support_response = llm.invoke([SystemMessage(content=INIT_SYSTEM)] + messages)
        route = categorize(
            llm,
            [SystemMessage(content=ROUTING_SYSTEM)]
            + messages
            + [HumanMessage(content=ROUTING_HUMAN)],
            CertificationRoute,
        )
        logger.info("[certification] initial_support -> %s", route.next_representative)

        return {
            "messages": [support_response],
            "next_representative": route.next_representative,
        }

    return initial_support


def create_certification_support_node(llm):
    def certification_support(state: SupportState) -> dict:
        history = trim_trailing_ai(state["messages"])
        response = llm.invoke([SystemMessage(content=CERTIFICATION_SYSTEM)] + history)
        return {"messages": [response]}

    return certification_support


def route_after_initial(state: SupportState) -> Literal["certification", "conversational"]:
    if "CERTIFICATION" in (state.get("next_representative") or ""):
        return "certification"
    return "conversational"


def build_certification_graph(llm=None, checkpointer: BaseCheckpointSaver | None = None):
    if llm is None:
        llm = build_llm()
    if checkpointer is None:
        checkpointer = MemorySaver()

    workflow = StateGraph(SupportState)

    workflow.add_node("initial_support",       create_initial_support_node(llm))
    workflow.add_node("certification_support", create_certification_support_node(llm))

    workflow.add_edge(START, "initial_support")
    workflow.add_conditional_edges(
        "initial_support",
        route_after_initial,
        {"certification": "certification_support", "conversational": END},
    )
    workflow.add_edge("certification_support", END)

    return workflow.compile(checkpointer=checkpointer)
