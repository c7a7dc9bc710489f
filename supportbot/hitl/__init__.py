"""
Human-in-the-loop graphs
========================

    simple.py       three steps, feedback interrupt in the middle
    revise.py       surface state to a human, write back the edit
    ask_human.py    ReAct loop where the user is one of the tools
    tool_review.py  approve / edit / reject every tool call
"""
from .ask_human import build_ask_human_graph
from .revise import build_revision_graph
from .simple import build_feedback_graph
from .tool_review import build_tool_review_graph

__all__ = [
    "build_feedback_graph",
    "build_revision_graph",
    "build_ask_human_graph",
    "build_tool_review_graph",
]
