"""Default CLI behaviour for launching the Prompt Shelf terminal interface."""

from __future__ import annotations

import importlib
import logging
import sys
from typing import TYPE_CHECKING, Any, cast

from core import PromptShelfError, build_session

from .utils import report_error

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    import argparse
    from collections.abc import Callable

    from config import PromptShelfSettings
    from core import SessionMachine
else:  # pragma: no cover - runtime placeholders for type-only imports
    PromptShelfSettings = Any


def run_default_mode(
    settings: PromptShelfSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    """Run the interactive session and print its exit message."""
    try:
        tui_module = importlib.import_module("tui")
    except ModuleNotFoundError as exc:  # pragma: no cover - import failure path
        logger.error("Interactive mode requires %s; install the project dependencies.", exc.name)
        print(
            f"Error: interactive mode requires the '{exc.name}' package. "
            "Reinstall with `pip install -e .`.",
            file=sys.stderr,
        )
        return 1
    launch_callable = cast("Callable[[SessionMachine], str | None]", tui_module.launch_prompt_shelf)

    try:
        session = build_session(settings, manage=bool(getattr(args, "manage", False)))
    except PromptShelfError as exc:
        report_error(logger, exc)
        return 1

    message = launch_callable(session)
    if message:
        print(message)
    copied = session.state.copied_name
    if copied is not None:
        logger.info("Quick select copied %s", copied)
    return 0
