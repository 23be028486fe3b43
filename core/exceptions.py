"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`PromptShelfError`, allowing
callers to catch a single base class for any library failure while still
distinguishing individual error categories when needed. The session engine
treats every subclass as recoverable; the CLI maps all of them to exit code 1.

Updates:
  v0.3.0 - 2026-10-12 - Add template lookup failures for templated creation.
  v0.2.0 - 2026-10-05 - Split external tool failures into editor and clipboard errors.
  v0.1.0 - 2026-09-28 - Created module with repository error hierarchy.
"""

from __future__ import annotations


class PromptShelfError(Exception):
    """Base exception for Prompt Shelf failures."""


# ---------------------------------------------------------------------------
# Repository errors
# ---------------------------------------------------------------------------


class PromptNotFoundError(PromptShelfError):
    """Raised when a prompt cannot be located in the storage directory."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Prompt not found: {name}")
        self.name = name


class PromptAlreadyExistsError(PromptShelfError):
    """Raised when creating a prompt whose name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Prompt already exists: {name}")
        self.name = name


class InvalidPromptNameError(PromptShelfError, ValueError):
    """Raised when a prompt name is empty or not a safe filename."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid prompt name {name!r}: {reason}")
        self.name = name
        self.reason = reason


class PromptStorageError(PromptShelfError):
    """Raised when reading or writing the storage directory fails."""


# ---------------------------------------------------------------------------
# Template errors
# ---------------------------------------------------------------------------


class TemplateNotFoundError(PromptShelfError):
    """Raised when a creation template name is not registered."""

    def __init__(self, name: str, available: tuple[str, ...] = ()) -> None:
        message = f"Unknown template: {name}"
        if available:
            message = f"{message} (available: {', '.join(available)})"
        super().__init__(message)
        self.name = name
        self.available = available


class TemplateRenderError(PromptShelfError):
    """Raised when a creation template fails to render."""


# ---------------------------------------------------------------------------
# External collaborators
# ---------------------------------------------------------------------------


class ExternalToolError(PromptShelfError):
    """Base class for failures of processes or services outside the library."""


class EditorError(ExternalToolError):
    """Raised when the external editor cannot be spawned or exits non-zero."""


class ClipboardError(ExternalToolError):
    """Raised when the system clipboard rejects a copy or paste request."""


__all__ = [
    "ClipboardError",
    "EditorError",
    "ExternalToolError",
    "InvalidPromptNameError",
    "PromptAlreadyExistsError",
    "PromptNotFoundError",
    "PromptShelfError",
    "PromptStorageError",
    "TemplateNotFoundError",
    "TemplateRenderError",
]
