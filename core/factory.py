"""Factories for constructing Prompt Shelf services from validated settings.

Configuration flows in explicitly from here; the repository, editor and session
never read environment variables themselves.

Updates:
  v0.2.0 - 2026-10-12 - Build the interactive session with injectable collaborators.
  v0.1.0 - 2026-09-30 - Build repository, renderer, editor and clipboard from settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .clipboard import SystemClipboard
from .editor import ExternalEditor
from .repository import PromptRepository
from .session import SessionMachine
from .templating import TemplateRenderer

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config import PromptShelfSettings

    from .clipboard import ClipboardService
    from .editor import EditorLauncher
else:  # pragma: no cover - typing only
    PromptShelfSettings = Any

factory_logger = logging.getLogger("prompt_shelf.factory")

__all__ = [
    "build_clipboard",
    "build_editor",
    "build_renderer",
    "build_repository",
    "build_session",
]


def build_repository(settings: PromptShelfSettings) -> PromptRepository:
    """Return a repository rooted at the configured storage path."""
    factory_logger.debug("Using prompt storage at %s", settings.storage_path)
    return PromptRepository(settings.storage_path)


def build_renderer(settings: PromptShelfSettings) -> TemplateRenderer:
    return TemplateRenderer(settings.templates_path)


def build_editor(settings: PromptShelfSettings) -> ExternalEditor:
    return ExternalEditor(settings.editor)


def build_clipboard() -> SystemClipboard:
    return SystemClipboard()


def build_session(
    settings: PromptShelfSettings,
    *,
    manage: bool = False,
    repository: PromptRepository | None = None,
    editor: EditorLauncher | None = None,
    clipboard: ClipboardService | None = None,
    renderer: TemplateRenderer | None = None,
) -> SessionMachine:
    """Return a SessionMachine wired to real collaborators unless overrides are given."""
    return SessionMachine(
        repository or build_repository(settings),
        editor=editor or build_editor(settings),
        clipboard=clipboard or build_clipboard(),
        renderer=renderer or build_renderer(settings),
        manage=manage,
        default_template=settings.default_template,
        seed_defaults=settings.seed_defaults,
    )
