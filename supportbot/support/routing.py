"""
Support Routing
===============
Pure functions that read SupportState and return an edge key.

  initial_support → route_after_initial → "billing" | "technical" | "conversational"
  billing_support → route_after_billing → "refund" | END

Labels are matched by substring, so a label with stray punctuation still routes.
"""
from typing import Literal

from langgraph.graph import END

from .state import SupportState


def route_after_initial(state: SupportState) -> Literal["billing", "technical", "conversational"]:
    label = state.get("next_representative") or ""
    if "BILLING" in label:
        return "billing"
    if "TECHNICAL" in label:
        return "technical"
    return "conversational"


def route_after_billing(state: SupportState) -> Literal["refund", "__end__"]:
    label = state.get("next_representative") or ""
    if "REFUND" in label:
        return "refund"
    return END
