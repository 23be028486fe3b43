"""CLI command handlers for Prompt Shelf.

Handlers raise :class:`core.exceptions.PromptShelfError` subclasses for user
errors; :func:`main.main` reports them on stderr and exits with status 1.

Updates:
  v0.3.0 - 2026-10-14 - Ask for delete confirmation on a terminal instead of always failing.
  v0.2.0 - 2026-10-12 - Add tag and templates commands.
  v0.1.0 - 2026-09-30 - Initial list/get/create/edit/delete/copy/search commands.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core import PromptNotFoundError, PromptShelfError, search
from core.search import filter_by_tags
from models.prompt_model import (
    PromptDocumentError,
    normalise_tags,
    normalize_prompt_name,
    parse_prompt_document,
)
from prompt_templates import CREATION_TEMPLATE_DESCRIPTIONS

from .utils import confirm, format_prompt_line, format_tags, print_and_log

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import PromptShelfSettings
    from core import ClipboardService, EditorLauncher, PromptRepository, TemplateRenderer
else:  # pragma: no cover - runtime placeholders for type-only imports
    PromptShelfSettings = PromptRepository = TemplateRenderer = Any
    ClipboardService = EditorLauncher = Any


class CommandAborted(PromptShelfError):
    """Raised when the user declines or cannot confirm a destructive command."""


@dataclass(slots=True)
class CommandContext:
    """Services shared by command handlers."""

    settings: PromptShelfSettings
    repository: PromptRepository
    renderer: TemplateRenderer
    clipboard: ClipboardService
    editor: EditorLauncher


CommandHandler = Callable[[CommandContext, argparse.Namespace, logging.Logger], int]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_storage: bool = True


def _print_prompts(prompts: list[Any]) -> None:
    width = max((len(prompt.name) for prompt in prompts), default=0)
    for prompt in prompts:
        print(format_prompt_line(prompt, width=width))


def run_list(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    tags = normalise_tags(getattr(args, "tags", None))
    prompts = filter_by_tags(context.repository.snapshot(), tags)
    if not prompts:
        if tags:
            print(f"No prompts found with tags: {format_tags(sorted(tags))}")
        else:
            print("No prompts found")
        return 0
    _print_prompts(prompts)
    logger.debug("Listed %d prompts", len(prompts))
    return 0


def run_get(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    prompt = context.repository.get(args.name)
    content = prompt.content
    sys.stdout.write(content if content.endswith("\n") else f"{content}\n")
    return 0


def run_create(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    name = normalize_prompt_name(args.name)
    tags = normalise_tags(getattr(args, "tags", None))
    template: str | None
    if getattr(args, "from_clipboard", False):
        content = context.clipboard.paste()
        if not content.strip():
            raise CommandAborted("Clipboard is empty; nothing to create.")
        template = None
    else:
        template = args.template or context.settings.default_template
        content = context.renderer.render(template, name=name)
    context.repository.create(name, content, tags, template_origin=template)
    print_and_log(
        logger,
        logging.INFO,
        f"Created prompt '{name}' at {context.repository.path_for(name)}",
    )
    return 0


def run_edit(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    current = context.repository.get(args.name)
    seed = current.to_document()
    result = context.editor.edit(seed)
    if result is None or result == seed:
        print(f"No changes made to '{current.name}'")
        return 0
    try:
        document = parse_prompt_document(result)
    except PromptDocumentError as exc:
        raise CommandAborted(f"Edited prompt was not saved: {exc}") from exc
    context.repository.update(current.name, document.content, document.tags)
    print_and_log(logger, logging.INFO, f"Updated prompt '{current.name}'")
    return 0


def run_delete(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    name = args.name
    if not context.repository.exists(name):
        raise PromptNotFoundError(name)
    force = bool(getattr(args, "force", False))
    if not force:
        if not sys.stdin.isatty():
            raise CommandAborted("Deletion cancelled. Use --force to skip confirmation.")
        if not confirm(f"Delete prompt '{name}'?"):
            raise CommandAborted("Deletion cancelled.")
    context.repository.delete(name, force=force)
    print_and_log(logger, logging.INFO, f"Deleted prompt '{name}'")
    return 0


def run_copy(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    prompt = context.repository.get(args.name)
    context.clipboard.copy(prompt.content)
    print_and_log(logger, logging.INFO, f"Copied to clipboard: {prompt.name}")
    return 0


def run_search(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    tags = normalise_tags(getattr(args, "tags", None))
    prompts = [hit.prompt for hit in search(context.repository.list(), args.query)]
    if tags:
        prompts = [prompt for prompt in prompts if prompt.has_tags(tags)]
    if not prompts:
        print(f"No prompts found matching '{args.query}'")
        return 0
    _print_prompts(prompts)
    return 0


def run_tag(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    add = normalise_tags(getattr(args, "add", None))
    remove = normalise_tags(getattr(args, "remove", None))
    if add or remove:
        prompt = context.repository.update_tags(args.name, add=add, remove=remove)
        logger.info("Updated tags for %s: +%s -%s", prompt.name, sorted(add), sorted(remove))
    else:
        prompt = context.repository.get(args.name)
    tags = format_tags(prompt.sorted_tags) or "(no tags)"
    print(f"{prompt.name}: {tags}")
    return 0


def run_templates(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del args, logger
    names = context.renderer.available()
    width = max((len(name) for name in names), default=0)
    for name in names:
        description = CREATION_TEMPLATE_DESCRIPTIONS.get(name, "User template.")
        marker = "*" if name == context.settings.default_template else " "
        print(f"{marker} {name.ljust(width)}  {description}")
    return 0


COMMAND_SPECS: dict[str, CommandSpec] = {
    "list": CommandSpec(run_list),
    "get": CommandSpec(run_get),
    "create": CommandSpec(run_create),
    "edit": CommandSpec(run_edit),
    "delete": CommandSpec(run_delete),
    "copy": CommandSpec(run_copy),
    "search": CommandSpec(run_search),
    "tag": CommandSpec(run_tag),
    "templates": CommandSpec(run_templates, requires_storage=False),
}

__all__ = [
    "COMMAND_SPECS",
    "CommandAborted",
    "CommandContext",
    "CommandHandler",
    "CommandSpec",
]
