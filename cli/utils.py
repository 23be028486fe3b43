"""Shared CLI utility functions for Prompt Shelf commands.

Updates:
  v0.2.0 - 2026-10-12 - Add error hints and the delete confirmation question.
  v0.1.0 - 2026-09-30 - Extract stdout/stderr logging and path helpers.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from core.exceptions import (
    ClipboardError,
    EditorError,
    InvalidPromptNameError,
    PromptAlreadyExistsError,
    PromptNotFoundError,
    PromptStorageError,
    TemplateNotFoundError,
)

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Iterable
    from logging import Logger
    from typing import TextIO

    from models.prompt_model import Prompt
else:  # pragma: no cover - runtime placeholders for type-only imports
    Iterable = Logger = TextIO = Prompt = Any

PROG = "prompt-shelf"

_HINTS: tuple[tuple[type[BaseException], str], ...] = (
    (PromptNotFoundError, f"Run '{PROG} list' to see available prompts."),
    (PromptAlreadyExistsError, f"Use '{PROG} edit NAME' to change the existing prompt."),
    (TemplateNotFoundError, f"Run '{PROG} templates' to see available templates."),
    (InvalidPromptNameError, "Names may not contain '/' or '\\', start with '.', or be empty."),
    (EditorError, "Set PROMPT_SHELF_EDITOR or EDITOR to an installed editor command."),
    (ClipboardError, "Install a clipboard helper such as xclip, xsel or wl-clipboard."),
    (PromptStorageError, "Check that the storage directory exists and is writable."),
)


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_error(exc: BaseException) -> str:
    """Return the user-facing message for *exc* followed by a hint when one applies."""
    message = str(exc) or type(exc).__name__
    for error_type, hint in _HINTS:
        if isinstance(exc, error_type):
            return f"{message}\n{hint}"
    return message


def report_error(logger: Logger, exc: BaseException) -> None:
    """Log *exc* and write its description to stderr."""
    logger.debug("Command failed", exc_info=exc)
    print(f"Error: {describe_error(exc)}", file=sys.stderr)


def format_tags(tags: Iterable[str]) -> str:
    return ", ".join(tags)


def format_prompt_line(prompt: Prompt, *, width: int = 0) -> str:
    """Return ``name  [tag, tag]`` for listings."""
    name = prompt.name.ljust(width) if width else prompt.name
    if not prompt.tags:
        return name.rstrip()
    return f"{name}  [{format_tags(prompt.sorted_tags)}]"


def confirm(question: str, *, stream: TextIO | None = None) -> bool:
    """Ask a ``[y/N]`` question on *stream* (stdin by default) and return the answer."""
    source = stream or sys.stdin
    print(f"{question} [y/N]: ", end="", flush=True)
    answer = source.readline()
    return answer.strip().lower() in {"y", "yes"}


def describe_path(
    path_value: object,
    *,
    expect_directory: bool,
    allow_missing_file: bool = False,
) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"

    message = f"{resolved} (missing)"
    if expect_directory:
        message = f"{resolved} (missing - created on first write)"
    elif allow_missing_file:
        message = f"{resolved} (missing - created on demand)"
    parent = resolved.parent
    if not parent.exists():
        message += f", parent missing: {parent}"
    return message
