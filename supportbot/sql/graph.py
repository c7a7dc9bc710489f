"""
SQL Agent Graph
===============

    START
      │
      ▼
    agent ──────────────────────────────────────► END (final answer)
      │ read tools                                 ▲
      ▼                                            │
    tools ──────────────────────────────────────── ┘  (ReAct loop)

    agent
      │ batch with a write (insert / update / delete)
      ▼
    human_review ──⚡INTERRUPT──► Command(resume=True)  ──► tools
                                  Command(resume=False) ──► END (calls cancelled)

human_review pauses via interrupt() with the pending writes as payload;
the resume value is the human's decision.
"""
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, StateGraph
from langgraph.prebuilt import ToolNode

from ..providers import build_llm
from .nodes import create_agent_node, human_review_node
from .routing import route_after_agent
from .state import SqlAgentState


def build_sql_graph(tools: list, llm=None, checkpointer: BaseCheckpointSaver | None = None):
    """
    Build and compile the SQL question-answering graph.

    Args:
        tools:        Tools from build_supabase_tools().
        llm:          Chat model. Defaults to build_llm().
        checkpointer: Any LangGraph checkpoint backend. Defaults to MemorySaver.
    """
    if llm is None:
        llm = build_llm()
    llm_with_tools = llm.bind_tools(tools)

    if checkpointer is None:
        checkpointer = MemorySaver()

    workflow = StateGraph(SqlAgentState)

    workflow.add_node("agent",        create_agent_node(llm_with_tools))
    workflow.add_node("tools",        ToolNode(tools))
    workflow.add_node("human_review", human_review_node)

    workflow.add_edge(START, "agent")
    workflow.add_conditional_edges(
        "agent",
        route_after_agent,
        {"tools": "tools", "human_review": "human_review", END: END},
    )
    workflow.add_edge("tools", "agent")

    return workflow.compile(checkpointer=checkpointer)
