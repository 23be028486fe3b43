"""Core service layer for Prompt Shelf.

Updates:
  v0.3.0 - 2026-10-12 - Export the session engine, key map and factories.
  v0.2.0 - 2026-10-05 - Export editor and clipboard collaborators.
  v0.1.0 - 2026-09-30 - Surface PromptRepository, search helpers and exceptions.
"""

from .clipboard import ClipboardService, SystemClipboard
from .editor import EditorLauncher, ExternalEditor
from .exceptions import (
    ClipboardError,
    EditorError,
    ExternalToolError,
    InvalidPromptNameError,
    PromptAlreadyExistsError,
    PromptNotFoundError,
    PromptShelfError,
    PromptStorageError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from .factory import (
    build_clipboard,
    build_editor,
    build_renderer,
    build_repository,
    build_session,
)
from .keymap import KeyPress, resolve_key
from .repository import PromptRepository
from .search import SearchHit, apply_filters, filter_by_tags, search
from .session import BUILD_DELIMITER, SessionMachine, SessionState, SessionView
from .templating import TemplateRenderer

__all__ = [
    "BUILD_DELIMITER",
    "ClipboardError",
    "ClipboardService",
    "EditorError",
    "EditorLauncher",
    "ExternalEditor",
    "ExternalToolError",
    "InvalidPromptNameError",
    "KeyPress",
    "PromptAlreadyExistsError",
    "PromptNotFoundError",
    "PromptRepository",
    "PromptShelfError",
    "PromptStorageError",
    "SearchHit",
    "SessionMachine",
    "SessionState",
    "SessionView",
    "SystemClipboard",
    "TemplateNotFoundError",
    "TemplateRenderError",
    "TemplateRenderer",
    "apply_filters",
    "build_clipboard",
    "build_editor",
    "build_renderer",
    "build_repository",
    "build_session",
    "filter_by_tags",
    "resolve_key",
    "search",
]
