#!/usr/bin/env python3
"""CLI for reading and editing the sections of a knowledge file."""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from knowledgedoc.config import DEFAULT_CONFIG_PATH, load_settings
from knowledgedoc.core import DocumentStore, DocumentStoreError
from knowledgedoc.markdown import dump, load

load_dotenv()


def read_body(args: argparse.Namespace) -> str:
    """Return --body if given, else read the body from stdin."""
    if args.body is not None:
        return args.body
    return sys.stdin.read()


def open_store(path: Path, level: int, create: bool = False) -> DocumentStore:
    """Load the knowledge file, or start empty if allowed and it is missing."""
    if create and not path.exists():
        return DocumentStore()
    return load(path, level=level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Read and edit the sections of a markdown knowledge file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list                           List section titles in order
  %(prog)s show 'SOLID Principles'        Print a section body
  %(prog)s add curl --body 'text'         Append a section
  %(prog)s update curl < curl.md          Replace a section body from stdin
  %(prog)s move curl 0                    Move a section to the top
  %(prog)s search importlib               Find sections mentioning a term
""",
    )
    parser.add_argument(
        "--config", type=Path, default=DEFAULT_CONFIG_PATH,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument(
        "-f", "--file", type=Path,
        help="Knowledge file (default: from config or KNOWLEDGEDOC_FILE)"
    )
    parser.add_argument(
        "--level", type=int, choices=range(1, 7), metavar="{1-6}",
        help="Heading level that starts a section (default: from config)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print debug information"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # list
    list_parser = subparsers.add_parser("list", help="List section titles")
    list_parser.add_argument(
        "-p", "--positions", action="store_true", help="Show positions"
    )

    # show
    show_parser = subparsers.add_parser("show", help="Print a section body")
    show_parser.add_argument("title", help="Section title")

    # add
    add_parser = subparsers.add_parser("add", help="Append a new section")
    add_parser.add_argument("title", help="Section title")
    add_parser.add_argument("--body", help="Section text (default: read stdin)")

    # update
    update_parser = subparsers.add_parser("update", help="Replace a section body")
    update_parser.add_argument("title", help="Section title")
    update_parser.add_argument("--body", help="New section text (default: read stdin)")

    # remove
    remove_parser = subparsers.add_parser("remove", help="Delete a section")
    remove_parser.add_argument("title", help="Section title")

    # move
    move_parser = subparsers.add_parser("move", help="Move a section to a new position")
    move_parser.add_argument("title", help="Section title")
    move_parser.add_argument("position", type=int, help="Target position (0 is first)")

    # search
    search_parser = subparsers.add_parser(
        "search", help="Find sections whose title or body contains text"
    )
    search_parser.add_argument("query", help="Text to search for (case-insensitive)")

    # check
    subparsers.add_parser("check", help="Parse the file and report section count")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    path = args.file or settings.document
    level = args.level or settings.section_level

    try:
        store = open_store(path, level, create=args.command == "add")

        if args.command == "list":
            for section in store.sections():
                if args.positions:
                    print(f"{section.position:3d}  {section.title}")
                else:
                    print(section.title)

        elif args.command == "show":
            print(store.get_section(args.title).body)

        elif args.command == "add":
            section = store.add_section(args.title, read_body(args))
            dump(store, path, level=level)
            print(f"Added '{section.title}' at position {section.position}")

        elif args.command == "update":
            section = store.update_section(args.title, read_body(args))
            dump(store, path, level=level)
            print(f"Updated '{section.title}'")

        elif args.command == "remove":
            section = store.remove_section(args.title)
            dump(store, path, level=level)
            print(f"Removed '{section.title}'")

        elif args.command == "move":
            section = store.move_section(args.title, args.position)
            dump(store, path, level=level)
            print(f"Moved '{section.title}' to position {section.position}")

        elif args.command == "search":
            results = store.search(args.query)
            for section in results:
                print(section.title)
            if not results:
                print(f"No sections matching: {args.query}", file=sys.stderr)

        elif args.command == "check":
            print(f"{path}: {len(store)} section(s)")

    except FileNotFoundError:
        print(f"Knowledge file not found: {path}", file=sys.stderr)
        return 1
    except (DocumentStoreError, IndexError) as e:
        print(str(e), file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
