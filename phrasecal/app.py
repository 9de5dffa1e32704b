"""
Main app entry point for the PhraseCal menu bar app.
With --preview the phrase is resolved in the terminal instead.
"""

import argparse
import sys
from typing import List, Optional

from phrasecal.event_draft import EventDraft
from phrasecal.logging_helper import Log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phrasecal",
        description="Create calendar events from natural language.",
    )
    parser.add_argument(
        "--preview",
        metavar="TEXT",
        help='Resolve TEXT (e.g. "lunch tomorrow at noon") and print the event.',
    )
    parser.add_argument(
        "--create",
        action="store_true",
        help="With --preview, also add the event to the preferred calendar.",
    )
    return parser


def run_preview(text: str, create: bool = False, draft: Optional[EventDraft] = None) -> int:
    draft = draft or EventDraft.from_settings()
    if not draft.update(text):
        return 1

    event = draft.event
    print(event.title)
    print(f"{draft.subtitle or 'New Event'}: {draft.item_subtitle}")

    if create and not draft.confirm():
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the app."""
    parser = build_parser()
    args = parser.parse_args(argv)

    Log.section("PhraseCal")
    Log.info(f"Log file: {Log.get_log_path()}")

    if args.preview is not None:
        return run_preview(args.preview, create=args.create)
    if args.create:
        parser.error("--create requires --preview")

    # Imported here so the terminal mode works without rumps (macOS only)
    from phrasecal.statusbar_controller import StatusBarController

    Log.info("Starting PhraseCal menu bar app")
    app = StatusBarController()
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
