"""
Simple Feedback Graph
=====================
The smallest interrupt example: three steps, the middle one waits for a human.

    START → step_1 → human_feedback ──⚡INTERRUPT──► step_3 → END

Resume with Command(resume="<feedback>"); the value lands in user_feedback.
"""
import logging

from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, StateGraph
from langgraph.types import interrupt
from typing_extensions import TypedDict

logger = logging.getLogger(__name__)

FEEDBACK_PROMPT = "Please provide feedback"


class FeedbackState(TypedDict, total=False):
    input: str
    user_feedback: str


def step_1(state: FeedbackState) -> dict:
    logger.info("---Step 1---")
    return {}


def human_feedback(state: FeedbackState) -> dict:
    logger.info("--- humanFeedback ---")
    feedback = interrupt(FEEDBACK_PROMPT)
    return {"user_feedback": feedback}


def step_3(state: FeedbackState) -> dict:
    logger.info("---Step 3---")
    return {}


def build_feedback_graph(checkpointer: BaseCheckpointSaver | None = None):
    builder = StateGraph(FeedbackState)

    builder.add_node("step_1", step_1)
    builder.add_node("human_feedback", human_feedback)
    builder.add_node("step_3", step_3)

    builder.add_edge(START, "step_1")
    builder.add_edge("step_1", "human_feedback")
    builder.add_edge("human_feedback", "step_3")
    builder.add_edge("step_3", END)

    return builder.compile(checkpointer=checkpointer or MemorySaver())
