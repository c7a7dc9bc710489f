"""
Demo Scenarios
==============
Driver coroutines: each builds a graph, streams it, and prints every step to
the console. Interrupted runs print the pending state and then resume with
a scripted human answer.

Every scenario accepts an already-built graph so it can run against a
mocked model.
"""
import json
import logging
import uuid

from langchain_core.messages import AIMessage, HumanMessage
from langgraph.types import Command

from .certification import build_certification_graph
from .hitl import (
    build_ask_human_graph,
    build_feedback_graph,
    build_revision_graph,
    build_tool_review_graph,
)
from .sql import (
    SqlAgentSession,
    build_sql_graph,
    build_supabase_tools,
    create_supabase_client,
    list_public_tables,
)
from .support import build_support_graph

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 80

DEFAULT_SQL_QUESTION = "전기에어커튼은 어떤 인증을 받아야해?"


def thread_config(thread_id: str) -> dict:
    return {"configurable": {"thread_id": thread_id}}


def print_step(value) -> None:
    print("---STEP---")
    print(value)
    print("---END STEP---")


def print_last_message(event: dict, tag: str = "") -> None:
    """Print the newest message of a stream_mode="values" event."""
    msg = event["messages"][-1]
    prefix = f"{tag} " if tag else ""
    if isinstance(msg, AIMessage) and msg.tool_calls:
        print(f"{prefix}{msg.type} Message:", json.dumps(msg.tool_calls, indent=2, ensure_ascii=False))
    else:
        print(f"{prefix}{msg.type} Message:", msg.content)


# ── Support ─────────────────────────────────────────────────────────────────

async def run_support(message: str, thread_id: str, graph=None, authorize: bool = True) -> None:
    """
    Stream one support conversation. If it stops for refund authorization,
    print the pending tasks and resume with the `authorize` decision.
    """
    graph = graph or build_support_graph()
    config = thread_config(thread_id)

    async for value in graph.astream({"messages": [HumanMessage(content=message)]}, config):
        print_step(value)

    state = await graph.aget_state(config)
    if not state.next:
        return

    logger.info("[demo] thread %s paused before %s", thread_id, state.next)
    print("CURRENT TASKS", state.tasks)
    print("NEXT TASKS", state.next)

    async for value in graph.astream(Command(resume=authorize), config):
        print(value)


async def run_support_refund(graph=None) -> None:
    await run_support(
        "I've changed my mind and I want a refund for order #182818!",
        "refund_testing_id",
        graph=graph,
    )


async def run_support_technical(graph=None) -> None:
    await run_support(
        "My LangCorp computer isn't turning on because I dropped it in water.",
        "technical_testing_id",
        graph=graph,
    )


async def run_support_conversational(graph=None) -> None:
    await run_support("How are you? I'm Cobb.", "conversational_testing_id", graph=graph)


async def run_certification(graph=None) -> None:
    graph = graph or build_certification_graph()
    config = thread_config("certification_test_id")
    async for value in graph.astream(
        {"messages": [HumanMessage(content="hey my name is Tom Kim how are you??")]},
        config,
    ):
        print_step(value)


# ── Human-in-the-loop ───────────────────────────────────────────────────────

async def run_hitl_simple(graph=None) -> None:
    graph = graph or build_feedback_graph()
    config = thread_config("1")

    async for event in graph.astream({"input": "hello world"}, config):
        print(event)

    print("--- GRAPH INTERRUPTED ---")

    async for event in graph.astream(Command(resume="go to step 1! "), config):
        print(event)
        print("\n====\n")

    print((await graph.aget_state(config)).values)


async def run_hitl_revise(graph=None) -> None:
    graph = graph or build_revision_graph()
    config = thread_config("some_id")

    async for chunk in graph.astream({"some_text": "Original text"}, config):
        print(chunk)
        print("\n====\n")

    async for chunk in graph.astream(Command(resume="Edited text"), config):
        print(chunk)
        print("\n====\n")


async def run_hitl_ask_human(graph=None) -> None:
    graph = graph or build_ask_human_graph()
    config = thread_config("3")
    question = "Use the search tool to ask the user where they are, then look up the weather there"

    async for event in graph.astream(
        {"messages": [HumanMessage(content=question)]}, config, stream_mode="values",
    ):
        msg = event["messages"][-1]
        print(f"{'=' * 32} {msg.type} Message {'=' * 32}")
        print(msg.content)

    print("next: ", (await graph.aget_state(config)).next)

    async for event in graph.astream(Command(resume="San Francisco"), config):
        print(event)
        print("\n====\n")


async def _review_run(graph, thread_id: str, question: str, resumes: list) -> None:
    config = thread_config(thread_id)

    async for event in graph.astream(
        {"messages": [HumanMessage(content=question)]}, config, stream_mode="values",
    ):
        print_last_message(event, "[1]")

    for step, resume in enumerate(resumes, start=2):
        state = await graph.aget_state(config)
        print(f"[NEXT STATE]: {state.next}\n")
        if not state.next:
            break
        async for event in graph.astream(Command(resume=resume), config, stream_mode="values"):
            print_last_message(event, f"[{step}]")

    print(SEPARATOR + "\n")


async def run_hitl_tool_review(graph=None) -> None:
    graph = graph or build_tool_review_graph()

    print("RUN #1: w/o review")
    print(SEPARATOR + "\n")
    await _review_run(graph, "1", "hi!", [])

    print("RUN #2: approve tool call")
    print(SEPARATOR + "\n")
    await _review_run(
        graph, "2", "what's the weather in San Francisco?",
        [{"action": "continue"}],
    )

    print("RUN #3: update")
    print(SEPARATOR + "\n")
    await _review_run(
        graph, "3", "what's the weather in sf?",
        [{"action": "update", "data": {"city": "San Francisco"}}],
    )

    print("RUN #4: feedback")
    print(SEPARATOR + "\n")
    await _review_run(
        graph, "4", "what's the weather in SF?",
        [
            {
                "action": "feedback",
                "data": "User requested changes: use <city, country> format for location",
            },
            {"action": "continue"},
        ],
    )


# ── SQL agent ───────────────────────────────────────────────────────────────

async def run_sql(question: str = DEFAULT_SQL_QUESTION, graph=None) -> None:
    """One-shot question; prints tool calls as they are made, then the answer."""
    if graph is None:
        graph = build_sql_graph(build_supabase_tools(create_supabase_client()))
    config = thread_config(str(uuid.uuid4()))

    async for event in graph.astream(
        {"messages": [HumanMessage(content=question)]}, config, stream_mode="values",
    ):
        last = event["messages"][-1]
        if getattr(last, "tool_calls", None):
            print(json.dumps(last.tool_calls, indent=2, ensure_ascii=False))
        elif last.content:
            print(last.content)


async def run_sql_chat(session: SqlAgentSession | None = None) -> None:
    """Interactive chat. 'quit' exits, 'new' starts a fresh thread."""
    session = session or SqlAgentSession(in_memory=True, allow_writes=True)
    await session.start()
    session_id = str(uuid.uuid4())

    print("\n" + "=" * 60)
    print("  KC Certification Assistant")
    print("=" * 60)
    print("\nType 'quit' to exit, 'new' to start a fresh session.\n")

    try:
        while True:
            try:
                user_input = input("You: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\n\nGoodbye!")
                break

            if not user_input:
                continue

            if user_input.lower() == "quit":
                break

            if user_input.lower() == "new":
                session_id = str(uuid.uuid4())
                print(f"\n[New session: {session_id[:8]}...]\n")
                continue

            response = await session.chat(session_id, user_input)
            print(f"\nAgent: {response['content']}")

            if response.get("interrupted"):
                tools = ", ".join(p["tool"] for p in response.get("pending_actions", []))
                print(f"\n  [Paused, waiting for your confirmation: {tools}]")

            print()
    finally:
        await session.stop()


async def run_tables(client=None) -> None:
    client = client or create_supabase_client()
    print("Tables in the database:")
    for name in list_public_tables(client):
        print(f"- {name}")


SCENARIOS = {
    "support-refund":         run_support_refund,
    "support-technical":      run_support_technical,
    "support-conversational": run_support_conversational,
    "certification":          run_certification,
    "hitl-simple":            run_hitl_simple,
    "hitl-revise":            run_hitl_revise,
    "hitl-ask-human":         run_hitl_ask_human,
    "hitl-tool-review":       run_hitl_tool_review,
    "sql":                    run_sql,
    "sql-chat":               run_sql_chat,
    "tables":                 run_tables,
}
