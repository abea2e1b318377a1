"""CLI for filing, searching and reviewing notes in a local vault file"""

import argparse
import sys
from pathlib import Path
from typing import List

from loguru import logger

from quicknote.config import settings
from quicknote.domain.note import Note
from quicknote.domain.rating import Rating
from quicknote.engine import KnowledgeEngine
from quicknote.errors import QuickNoteError
from quicknote.note_store.local import LocalNoteStore
from quicknote.search_index.token_index import TokenSearchIndex


def open_engine(vault: str) -> KnowledgeEngine:
    return KnowledgeEngine(
        note_store=LocalNoteStore(filepath=Path(vault)),
        search_index=TokenSearchIndex(),
    )


def print_notes(notes: List[Note]) -> None:
    for note in notes:
        tags = " ".join(f"#{tag}" for tag in note.tags)
        print(f"{note.id:>5}  [{note.category.value}] {note.title}  {tags}".rstrip())


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--vault",
        type=str,
        required=False,
        help="Vault file holding the notes",
        default=settings.note_store_path,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create the vault and add the welcome note")

    add_parser = subparsers.add_parser("add", help="File a new note")
    add_parser.add_argument("title", type=str)
    add_parser.add_argument("content", type=str, nargs="?", default="")
    add_parser.add_argument("--category", type=str, default=None, help="Override the category")

    search_parser = subparsers.add_parser("search", help="Search notes")
    search_parser.add_argument("query", type=str)

    due_parser = subparsers.add_parser("due", help="List notes due for review")
    due_parser.add_argument("--as-of", type=float, default=None, help="Seconds since epoch")

    rate_parser = subparsers.add_parser("rate", help="Rate a reviewed note")
    rate_parser.add_argument("note_id", type=int)
    rate_parser.add_argument("rating", choices=[rating.value for rating in Rating])

    subparsers.add_parser("count", help="Print the number of notes")

    args = parser.parse_args(argv)

    try:
        engine = open_engine(args.vault)

        if args.command == "init":
            note_id = engine.seed_welcome_note()
            if note_id is None:
                print(f"Vault already has {engine.note_count()} note(s)")
            else:
                print(f"Vault initialized at {args.vault}")
        elif args.command == "add":
            print(engine.add_note(args.title, args.content, category=args.category))
        elif args.command == "search":
            print_notes(engine.search(args.query))
        elif args.command == "due":
            print_notes(engine.due_cards(args.as_of))
        elif args.command == "rate":
            note = engine.rate(args.note_id, args.rating)
            print(f"Next review in {note.review.interval_days} day(s)")
        elif args.command == "count":
            print(engine.note_count())
    except QuickNoteError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])
    sys.exit(main())
