"""
Categorization Helpers
======================
Shared by the support and certification graphs.

A categorization is a second model call that asks for a JSON object with a
single "nextRepresentative" key. The reply is parsed straight into a pydantic
model whose field is a Literal, so a label outside the allowed set (or a reply
that is not JSON at all) raises pydantic.ValidationError. Nothing here catches
it: a bad categorization stops the run.
"""
import logging
from typing import Sequence, TypeVar

from langchain_core.messages import AIMessage, BaseMessage
from pydantic import BaseModel

logger = logging.getLogger(__name__)

JSON_RESPONSE_FORMAT = {"type": "json_object"}

RouteT = TypeVar("RouteT", bound=BaseModel)


def categorize(llm, messages: Sequence[BaseMessage], schema: type[RouteT]) -> RouteT:
    """Invoke the model in JSON mode and validate its reply against `schema`."""
    response = llm.bind(response_format=JSON_RESPONSE_FORMAT).invoke(list(messages))
    route = schema.model_validate_json(response.content)
    logger.debug("[categorize] %s -> %r", schema.__name__, route)
    return route


def trim_trailing_ai(messages: Sequence[BaseMessage]) -> list[BaseMessage]:
    """
    Drop the last message when it came from the model, so the user's question
    is the most recent turn. Small models stay on topic better that way.
    """
    history = list(messages)
    if history and isinstance(history[-1], AIMessage):
        return history[:-1]
    return history
