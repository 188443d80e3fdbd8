#!/usr/bin/env python3
"""
Innovation Hub - Supply-chain idea submission and AI brainstorming.

Command-line entry point:
  - Serve the web API
  - Submit an idea
  - Brainstorm ideas with AI (falls back to built-in suggestions)
  - Export the knowledge base to CSV
  - Print dashboard statistics

Usage:
    python main.py serve                          # Run the web API
    python main.py submit --name Ada --email ada@example.com \\
        --title "RFID dock doors" --description "..." --category manhattan
    python main.py brainstorm --category kinaxis --problem "Forecasts drift"
    python main.py brainstorm --category coupa --interactive
    python main.py export -o knowledge.csv
    python main.py stats
"""

import argparse
import logging
import sys

from src.analytics import AnalyticsService
from src.brainstorm import BrainstormingOrchestrator, RemoteIdeaClient
from src.config import (
    SUPABASE_URL,
    SUPABASE_KEY,
    WEB_PORT,
    print_config_summary,
    setup_logging,
    validate_config,
)
from src.knowledge import KnowledgeBase
from src.models.category import Category
from src.storage import Store, StoreError, SupabaseStore, MockSupabaseStore
from src.submission import IdeaSubmissionWorkflow, SubmissionError, FormValidationError

logger = logging.getLogger(__name__)

CATEGORY_CHOICES = [c.value for c in Category]


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="innovation-hub",
        description="Submit, browse and brainstorm supply-chain innovation ideas.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s serve --port 8080            Run the web API on port 8080
  %(prog)s brainstorm -c manhattan -p "Trucks arrive late"
  %(prog)s brainstorm -c coupa -i       Interactive brainstorming chat
  %(prog)s export -q rfid -o rfid.csv   Export matching knowledge base rows
  %(prog)s stats                        Show dashboard statistics
        """,
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    # serve
    serve = commands.add_parser("serve", help="Run the web API")
    serve.add_argument("--port", type=int, default=WEB_PORT, help=f"Port (default: {WEB_PORT})")
    serve.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    # submit
    submit = commands.add_parser("submit", help="Submit an idea")
    submit.add_argument("--name", required=True, help="Your full name")
    submit.add_argument("--email", required=True, help="Your email address")
    submit.add_argument("--title", required=True, help="Idea title")
    submit.add_argument("--description", required=True, help="Idea description")
    submit.add_argument("--category", required=True, choices=CATEGORY_CHOICES, help="Idea category")

    # brainstorm
    brainstorm = commands.add_parser("brainstorm", help="Brainstorm ideas with AI")
    brainstorm.add_argument(
        "--category", "-c",
        choices=CATEGORY_CHOICES,
        default=Category.default().value,
        help="Idea category (default: other_scm)",
    )
    brainstorm.add_argument("--problem", "-p", help="Problem statement to generate an idea for")
    brainstorm.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Chat until an empty line or EOF",
    )

    # export
    export = commands.add_parser("export", help="Export the knowledge base to CSV")
    export.add_argument("--query", "-q", default="", help="Only export rows matching this term")
    export.add_argument("--output", "-o", metavar="FILE", help="Output file (default: stdout)")

    # stats
    commands.add_parser("stats", help="Show dashboard statistics")

    return parser


def get_store() -> Store:
    """Get the configured data store."""
    if SUPABASE_URL and SUPABASE_KEY:
        return SupabaseStore()
    logger.warning("Supabase not configured; using in-memory store")
    return MockSupabaseStore()


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Innovation Hub Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


# =============================================================================
# Commands
# =============================================================================

def run_serve(args) -> int:
    from web.app import app

    app.run(debug=args.debug, port=args.port)
    return 0


def run_submit(args) -> int:
    workflow = IdeaSubmissionWorkflow(get_store())

    try:
        result = workflow.submit(
            name=args.name,
            email=args.email,
            title=args.title,
            description=args.description,
            category=args.category,
        )
    except FormValidationError as e:
        print("❌ Invalid submission:")
        for error in e.errors:
            print(f"  - {error}")
        return 1
    except SubmissionError as e:
        print(f"❌ Submission failed: {e}")
        return 1

    print("✓ Idea submitted successfully!")
    print(f"  Idea ID: {result.idea.id}")
    print(f"  User: {result.user.name} ({'new' if result.user_created else 'existing'})")
    for warning in result.warnings:
        print(f"  ⚠️  {warning}")
    return 0


def run_brainstorm(args, input_fn=input) -> int:
    orchestrator = BrainstormingOrchestrator(RemoteIdeaClient())
    orchestrator.initialize()

    if not orchestrator.remote_ready:
        print("(AI endpoint unavailable, using built-in suggestions)")

    if args.problem:
        print(orchestrator.respond(args.problem, args.category))

    if not args.interactive:
        if not args.problem:
            print("Nothing to do: pass --problem or --interactive")
            return 1
        return 0

    print(orchestrator.welcome_message(args.category))
    while True:
        try:
            message = input_fn("\nyou> ").strip()
        except EOFError:
            break
        if not message:
            break
        print(f"\nai> {orchestrator.respond(message, args.category)}")

    return 0


def run_export(args) -> int:
    try:
        csv_text = KnowledgeBase(get_store()).export(args.query)
    except StoreError as e:
        print(f"❌ Export failed: {e}")
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8", newline="") as f:
            f.write(csv_text)
        print(f"Knowledge base exported to {args.output}")
    else:
        sys.stdout.write(csv_text)
    return 0


def run_stats(args) -> int:
    snapshot = AnalyticsService(get_store()).snapshot()

    print("=" * 60)
    print("INNOVATION HUB STATISTICS")
    print("=" * 60)
    print(f"Total users:       {snapshot.total_users}")
    print(f"Total ideas:       {snapshot.total_ideas}")
    print(f"Submissions:       {snapshot.total_submissions}")
    print(f"Today's visitors:  {snapshot.today_visitors}")

    if snapshot.ideas_by_category:
        print("\nIdeas by category:")
        for count in snapshot.ideas_by_category:
            print(f"  {count.label:<16} {count.submission_count}")

    if snapshot.error:
        print(f"\n⚠️  Some statistics could not be loaded: {snapshot.error}")
    print("=" * 60)
    return 1 if snapshot.error else 0


COMMANDS = {
    "serve": run_serve,
    "submit": run_submit,
    "brainstorm": run_brainstorm,
    "export": run_export,
    "stats": run_stats,
}


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None)

    # Handle --show-config
    if args.show_config:
        show_config()
        return 0

    if not args.command:
        parser.print_help()
        return 1

    try:
        return COMMANDS[args.command](args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
