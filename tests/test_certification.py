"""
Tests for supportbot/certification/graph.py
============================================
Two-label routing: CERTIFICATION goes to the certification specialist,
RESPOND ends after the frontline reply.
"""
import pytest
from langchain_core.messages import AIMessage, HumanMessage
from langgraph.checkpoint.memory import MemorySaver
from pydantic import ValidationError

from conftest import ai, mock_llm, route
from supportbot.certification.graph import (
    CertificationRoute,
    build_certification_graph,
    create_certification_support_node,
    route_after_initial,
)
from supportbot.certification.prompts import CERTIFICATION_SYSTEM, INIT_SYSTEM


class TestRouteAfterInitial:
    @pytest.mark.parametrize("label,expected", [
        ("CERTIFICATION", "certification"),
        ("RESPOND",       "conversational"),
        ("",              "conversational"),
    ])
    def test_label_table(self, label, expected):
        assert route_after_initial({"next_representative": label}) == expected


class TestCertificationRoute:
    def test_billing_is_not_a_certification_label(self):
        with pytest.raises(ValidationError):
            CertificationRoute.model_validate_json('{"nextRepresentative": "BILLING"}')


class TestCertificationSupportNode:
    def test_drops_trailing_ai_and_uses_certification_prompt(self):
        reply = ai("Electric air curtains need KC safety certification.")
        llm = mock_llm(reply)

        result = create_certification_support_node(llm)({"messages": [
            HumanMessage(content="전기에어커튼은 어떤 인증을 받아야해?"),
            AIMessage(content="Let me check."),
        ]})

        call = llm.invoke.call_args.args[0]
        assert call[0].content == CERTIFICATION_SYSTEM
        assert [m.content for m in call[1:]] == ["전기에어커튼은 어떤 인증을 받아야해?"]
        assert result == {"messages": [reply]}


class TestCertificationGraph:
    def test_greeting_is_answered_by_frontline(self, config):
        llm = mock_llm(ai("Nice to meet you, Tom!"), route("RESPOND"))
        graph = build_certification_graph(llm=llm, checkpointer=MemorySaver())

        result = graph.invoke(
            {"messages": [HumanMessage(content="hey my name is Tom Kim how are you??")]}, config,
        )

        assert result["messages"][-1].content == "Nice to meet you, Tom!"
        assert llm.invoke.call_args_list[0].args[0][0].content == INIT_SYSTEM

    def test_certification_question_reaches_specialist(self, config):
        llm = mock_llm(
            ai("Let me route you."), route("CERTIFICATION"), ai("KC 안전인증 대상입니다."),
        )
        graph = build_certification_graph(llm=llm, checkpointer=MemorySaver())

        result = graph.invoke(
            {"messages": [HumanMessage(content="전기에어커튼은 어떤 인증을 받아야해?")]}, config,
        )

        assert result["messages"][-1].content == "KC 안전인증 대상입니다."
        assert result["next_representative"] == "CERTIFICATION"
