"""Data models for Prompt Shelf.

Updates: v0.2.0 - 2026-09-30 - Export RepositorySnapshot.
Updates: v0.1.0 - 2026-09-28 - Export Prompt dataclass.
"""

from .prompt_model import Prompt, PromptDocument, PromptDocumentError
from .snapshot import RepositorySnapshot

__all__ = [
    "Prompt",
    "PromptDocument",
    "PromptDocumentError",
    "RepositorySnapshot",
]
