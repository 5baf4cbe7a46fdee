"""
Interactive CLI adapter for the portfolio assistant.

Architectural role:
- Terminal interface over `assistant.core.engine.resolve`.
- Loads the knowledge record once at startup.

Request lifecycle (per user turn):
1. Read a line from stdin (or take the question from argv for one-shot use).
2. Handle local control commands (`exit`/`quit`).
3. Resolve the question and print answer, source caption, and quick links.

Error handling strategy:
- Record load/validation failures print a message and exit with status 1.
- EOF and keyboard interrupts end the loop without traceback output.
"""

import argparse
import logging
import sys

from assistant.core.engine import resolve
from assistant.nlp.formatters import INTRO_MESSAGE
from assistant.knowledge import source_config
from assistant.knowledge.loader import KnowledgeError, load_knowledge


def render(result, max_actions=source_config.MAX_ACTIONS) -> str:
    """Format a `ResolutionResult` for terminal output."""
    lines = [result.answer, "", f"[{result.source}]"]

    for action in (result.actions or ())[:max_actions]:
        lines.append(f"  -> {action.label}: {action.url}")

    return "\n".join(lines)


def build_parser():
    parser = argparse.ArgumentParser(description="Ask the portfolio assistant a question")
    parser.add_argument("question", nargs="*", help="Question to answer once (omit for interactive mode)")
    parser.add_argument("--knowledge", default=None, help="Path to the knowledge record JSON")
    parser.add_argument("--html", default=None, help="Page with an embedded knowledge record")
    return parser


def main(argv=None):
    """Run one-shot or interactive question answering; return the exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=source_config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        record = load_knowledge(path=args.knowledge, html_path=args.html)
    except KnowledgeError as e:
        print(f"Knowledge initialization error: {e}")
        return 1

    if args.question:
        print(render(resolve(" ".join(args.question), record)))
        return 0

    print(INTRO_MESSAGE)
    print("(Type 'exit' to quit)")
    print("-" * 60)

    while True:

        try:
            question = input("Question: ").strip()

        except EOFError:
            print()
            break

        except KeyboardInterrupt:
            print("\nOperation cancelled by user.")
            break

        if not question:
            continue

        if question.lower() in ("exit", "quit"):
            break

        print()
        print(render(resolve(question, record)))
        print("\n" + "-" * 60 + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
