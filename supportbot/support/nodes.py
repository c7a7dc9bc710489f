"""
Support Nodes
=============
  initial_support    — frontline reply + BILLING/TECHNICAL/RESPOND label
  billing_support    — billing reply + REFUND/RESPOND label
  technical_support  — technical reply
  handle_refund      — pauses for human authorization, then "processes" the refund

Nodes that talk to the model are built by factories that close over the
chat model, so tests can hand in a mock.
"""
import logging

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from langgraph.types import interrupt

from ..categorize import categorize, trim_trailing_ai
from .prompts import (
    BILLING_CATEGORIZATION_HUMAN_TEMPLATE,
    BILLING_CATEGORIZATION_SYSTEM_TEMPLATE,
    BILLING_SYSTEM_TEMPLATE,
    CATEGORIZATION_HUMAN_TEMPLATE,
    CATEGORIZATION_SYSTEM_TEMPLATE,
    REFUND_AUTHORIZATION_QUESTION,
    REFUND_DECLINED,
    REFUND_PROCESSED,
    SYSTEM_TEMPLATE,
    TECHNICAL_SYSTEM_TEMPLATE,
)
from .state import BillingRoute, InitialRoute, SupportState

logger = logging.getLogger(__name__)


def create_initial_support_node(llm):
    def initial_support(state: SupportState) -> dict:
        messages = list(state["messages"])

        support_response = llm.invoke([SystemMessage(content=SYSTEM_TEMPLATE)] + messages)

        route = categorize(
            llm,
            [SystemMessage(content=CATEGORIZATION_SYSTEM_TEMPLATE)]
            + messages
            + [HumanMessage(content=CATEGORIZATION_HUMAN_TEMPLATE)],
            InitialRoute,
        )
        logger.info("[support] initial_support -> %s", route.next_representative)

        return {
            "messages": [support_response],
            "next_representative": route.next_representative,
        }

    return initial_support


def create_billing_support_node(llm):
    def billing_support(state: SupportState) -> dict:
        history = trim_trailing_ai(state["messages"])

        billing_response = llm.invoke([SystemMessage(content=BILLING_SYSTEM_TEMPLATE)] + history)

        route = categorize(
            llm,
            [
                SystemMessage(content=BILLING_CATEGORIZATION_SYSTEM_TEMPLATE),
                HumanMessage(content=BILLING_CATEGORIZATION_HUMAN_TEMPLATE.format(
                    text=billing_response.content,
                )),
            ],
            BillingRoute,
        )
        logger.info("[support] billing_support -> %s", route.next_representative)

        return {
            "messages": [billing_response],
            "next_representative": route.next_representative,
        }

    return billing_support


def create_technical_support_node(llm):
    def technical_support(state: SupportState) -> dict:
        history = trim_trailing_ai(state["messages"])
        response = llm.invoke([SystemMessage(content=TECHNICAL_SYSTEM_TEMPLATE)] + history)
        return {"messages": [response]}

    return technical_support


def handle_refund(state: SupportState) -> dict:
    """
    Refunds need a human in the loop.

    If refund_authorized is not already set (update_state can set it before
    resuming), the node pauses via interrupt(). The value passed back with
    Command(resume=...) is the decision: truthy authorizes the refund.
    On resume the node runs again from the top, and interrupt() returns the
    resume value instead of pausing.
    """
    authorized = bool(state.get("refund_authorized", False))

    if not authorized:
        logger.info("--- HUMAN AUTHORIZATION REQUIRED FOR REFUND ---")
        authorized = bool(interrupt(REFUND_AUTHORIZATION_QUESTION))

    if not authorized:
        logger.info("[support] refund declined")
        return {
            "messages": [AIMessage(content=REFUND_DECLINED)],
            "refund_authorized": False,
        }

    logger.info("[support] refund processed")
    return {
        "messages": [AIMessage(content=REFUND_PROCESSED)],
        "refund_authorized": True,
    }
