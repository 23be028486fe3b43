"""Application entry point for Prompt Shelf.

Updates:
  v0.3.0 - 2026-10-14 - Send interactive-session logs to a file instead of the terminal.
  v0.2.0 - 2026-10-12 - Seed example prompts before the first subcommand runs.
  v0.1.0 - 2026-09-30 - Wire settings, CLI subcommands and the terminal interface.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS, CommandContext
from cli.parser import parse_args
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from cli.tui_launcher import run_default_mode
from cli.utils import report_error
from config import SettingsError, load_settings
from core import (
    PromptShelfError,
    build_clipboard,
    build_editor,
    build_renderer,
    build_repository,
)
from models.prompt_model import PromptDocumentError

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from config import PromptShelfSettings


def _build_context(settings: PromptShelfSettings) -> CommandContext:
    return CommandContext(
        settings=settings,
        repository=build_repository(settings),
        renderer=build_renderer(settings),
        clipboard=build_clipboard(),
        editor=build_editor(settings),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config, verbose=args.verbose)

    logger = logging.getLogger("prompt_shelf.main")
    try:
        settings = load_settings(storage_path=args.path)
    except SettingsError as exc:
        logger.error("Failed to load settings: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    command = getattr(args, "command", None)
    spec = COMMAND_SPECS.get(command) if command else None
    if spec is not None:
        context = _build_context(settings)
        try:
            if spec.requires_storage and settings.seed_defaults:
                context.repository.ensure_initialized()
            return spec.handler(context, args, logger)
        except (PromptShelfError, PromptDocumentError) as exc:
            report_error(logger, exc)
            return 1

    # The terminal belongs to the interface from here on.
    setup_logging(
        args.logging_config,
        verbose=args.verbose,
        log_file=settings.resolved_log_file,
    )
    return run_default_mode(settings, args, logger)


if __name__ == "__main__":
    raise SystemExit(main())
