"""
Support State
=============
State shared by the support and certification graphs, plus the categorization
schemas that constrain the routing label.

add_messages is a reducer: node results are APPENDED to the transcript (or
replace a message with the same id).
"""
from typing import Annotated, Literal, Sequence

from langchain_core.messages import BaseMessage
from langgraph.graph.message import add_messages
from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict


class SupportState(TypedDict, total=False):
    messages: Annotated[Sequence[BaseMessage], add_messages]
    # Routing label from the last categorization call.
    next_representative: str
    # Set by a human (resume value or update_state) before a refund goes through.
    refund_authorized: bool


class InitialRoute(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    next_representative: Literal["BILLING", "TECHNICAL", "RESPOND"] = Field(
        alias="nextRepresentative"
    )


class BillingRoute(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    next_representative: Literal["REFUND", "RESPOND"] = Field(alias="nextRepresentative")
