"""System clipboard collaborator backed by pyperclip.

Updates:
  v0.1.0 - 2026-10-05 - Wrap pyperclip failures in ClipboardError.
"""

from __future__ import annotations

import logging
from typing import Protocol

import pyperclip

from .exceptions import ClipboardError

logger = logging.getLogger(__name__)

__all__ = ["ClipboardService", "SystemClipboard"]


class ClipboardService(Protocol):
    """Interface shared by the real clipboard and test doubles."""

    def copy(self, text: str) -> None:
        ...

    def paste(self) -> str:
        ...


class SystemClipboard:
    """Copy and paste text through the platform clipboard."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Clipboard unavailable: {exc}") from exc
        logger.debug("Copied %d characters to the clipboard", len(text))

    def paste(self) -> str:
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Clipboard unavailable: {exc}") from exc
        return text or ""
