"""
Tests for supportbot/categorize.py
"""
import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from pydantic import ValidationError

from conftest import mock_llm, route
from supportbot.categorize import JSON_RESPONSE_FORMAT, categorize, trim_trailing_ai
from supportbot.support.state import BillingRoute


class TestCategorize:
    def test_returns_validated_model(self):
        llm = mock_llm(route("REFUND"))

        parsed = categorize(llm, [HumanMessage(content="refund")], BillingRoute)

        assert isinstance(parsed, BillingRoute)
        assert parsed.next_representative == "REFUND"
        llm.bind.assert_called_once_with(response_format=JSON_RESPONSE_FORMAT)

    def test_passes_messages_as_list(self):
        llm = mock_llm(route("RESPOND"))
        messages = (SystemMessage(content="s"), HumanMessage(content="h"))

        categorize(llm, messages, BillingRoute)

        assert llm.invoke.call_args.args[0] == list(messages)

    @pytest.mark.parametrize("content", [
        "",
        "REFUND",
        '{"nextRepresentative": "refund"}',
        '{"next": "REFUND"}',
    ])
    def test_invalid_replies_raise(self, content):
        llm = mock_llm(AIMessage(content=content))
        with pytest.raises(ValidationError):
            categorize(llm, [HumanMessage(content="x")], BillingRoute)


class TestTrimTrailingAi:
    def test_drops_last_ai_message(self):
        history = [HumanMessage(content="q"), AIMessage(content="a")]
        assert trim_trailing_ai(history) == [history[0]]

    def test_keeps_history_ending_with_human(self):
        history = [AIMessage(content="a"), HumanMessage(content="q")]
        assert trim_trailing_ai(history) == history

    def test_only_one_message_is_dropped(self):
        history = [HumanMessage(content="q"), AIMessage(content="a1"), AIMessage(content="a2")]
        assert [m.content for m in trim_trailing_ai(history)] == ["q", "a1"]

    def test_empty_history(self):
        assert trim_trailing_ai([]) == []
