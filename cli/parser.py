"""Argument parser for Prompt Shelf CLI.

Updates:
  v0.3.0 - 2026-10-14 - Accept --path after the subcommand as well as before it.
  v0.2.0 - 2026-10-12 - Add tag and templates subcommands.
  v0.1.0 - 2026-09-30 - Initial launcher flags and prompt subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

PROG = "prompt-shelf"


def _storage_options(*, top_level: bool) -> argparse.ArgumentParser:
    """Return a parent parser carrying ``--path`` for the launcher or a subcommand."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--path",
        "-p",
        dest="path",
        type=Path,
        # Subcommands must not overwrite a value given before the subcommand name.
        default=None if top_level else argparse.SUPPRESS,
        help="Storage directory holding the prompts/ folder (default: ~/.prompt-shelf).",
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Personal prompt library: pick, copy and manage reusable prompts.",
        parents=[_storage_options(top_level=True)],
    )
    parser.add_argument(
        "--manage",
        "-m",
        action="store_true",
        help="Start the interactive session in management mode instead of quick select.",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log informational messages.",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")
    storage = [_storage_options(top_level=False)]

    list_parser = subparsers.add_parser("list", parents=storage, help="List prompts.")
    list_parser.add_argument(
        "--tag",
        "-t",
        dest="tags",
        action="append",
        default=[],
        help="Only list prompts carrying this tag (repeatable; all must match).",
    )

    get_parser = subparsers.add_parser("get", parents=storage, help="Print a prompt's content.")
    get_parser.add_argument("name", help="Prompt name.")

    create_parser = subparsers.add_parser(
        "create",
        parents=storage,
        help="Create a prompt from a template or the clipboard.",
    )
    create_parser.add_argument("name", help="Prompt name (lower-cased, spaces become '-').")
    create_parser.add_argument(
        "--template",
        default=None,
        help="Creation template (see 'templates'; default from settings).",
    )
    create_parser.add_argument(
        "--tag",
        "-t",
        dest="tags",
        action="append",
        default=[],
        help="Tag to attach (repeatable).",
    )
    create_parser.add_argument(
        "--from-clipboard",
        action="store_true",
        help="Use the current clipboard text as the prompt content.",
    )

    edit_parser = subparsers.add_parser(
        "edit",
        parents=storage,
        help="Open a prompt in the configured editor.",
    )
    edit_parser.add_argument("name", help="Prompt name.")

    delete_parser = subparsers.add_parser("delete", parents=storage, help="Delete a prompt.")
    delete_parser.add_argument("name", help="Prompt name.")
    delete_parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Skip the confirmation question.",
    )

    copy_parser = subparsers.add_parser(
        "copy",
        parents=storage,
        help="Copy a prompt's content to the clipboard.",
    )
    copy_parser.add_argument("name", help="Prompt name.")

    search_parser = subparsers.add_parser(
        "search",
        parents=storage,
        help="Search names, content and tags.",
    )
    search_parser.add_argument("query", help="Case-insensitive search text.")
    search_parser.add_argument(
        "--tag",
        "-t",
        dest="tags",
        action="append",
        default=[],
        help="Only show results carrying this tag (repeatable).",
    )

    tag_parser = subparsers.add_parser(
        "tag",
        parents=storage,
        help="Show, add or remove a prompt's tags.",
    )
    tag_parser.add_argument("name", help="Prompt name.")
    tag_parser.add_argument(
        "--add",
        "-a",
        action="append",
        default=[],
        help="Tag to add (repeatable).",
    )
    tag_parser.add_argument(
        "--remove",
        "-r",
        action="append",
        default=[],
        help="Tag to remove (repeatable).",
    )

    subparsers.add_parser(
        "templates",
        parents=storage,
        help="List available creation templates.",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the Prompt Shelf launcher."""
    return build_parser().parse_args(argv)
