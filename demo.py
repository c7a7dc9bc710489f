"""
CLI Demo
========
Run one of the demo scenarios in your terminal.

Usage:
    python demo.py <scenario> [question]

Scenarios:

  Customer support (LangCorp):
    support-refund           billing → refund → pauses for authorization → resumed
    support-technical        routed to technical support
    support-conversational   answered by frontline support

  KC certification routing:
    certification

  Human-in-the-loop patterns:
    hitl-simple              feedback interrupt between two steps
    hitl-revise              edit a piece of state
    hitl-ask-human           the user answers a tool call
    hitl-tool-review         approve / update / give feedback on tool calls

  Supabase SQL agent:
    sql ["question"]         one-shot question, streamed
    sql-chat                 interactive, write tools behind yes/no confirmation
    tables                   list tables in the public schema
"""
import asyncio
import sys

from supportbot.config import configure_logging, load_env
from supportbot.demos import SCENARIOS


def main(argv: list[str]) -> int:
    if not argv or argv[0] not in SCENARIOS:
        print(__doc__)
        print("Available:", ", ".join(SCENARIOS))
        return 1

    load_env()
    configure_logging()

    name, args = argv[0], argv[1:]
    if name == "sql" and args:
        asyncio.run(SCENARIOS[name](" ".join(args)))
    else:
        asyncio.run(SCENARIOS[name]())
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
