"""Interactive session engine: modes, actions, state machine and view model.

Updates:
  v0.1.0 - 2026-09-30 - Package the session state machine.
"""

from . import actions
from .machine import BUILD_DELIMITER, SessionMachine, SessionState, compose_build
from .modes import (
    BuildMode,
    CreateField,
    CreateMode,
    DeleteConfirmMode,
    EditMode,
    ManagementMode,
    QuickSelectMode,
    SearchMode,
    SessionMode,
    TagFilterMode,
    mode_label,
)
from .view import DialogView, Notice, NoticeLevel, PromptRow, SessionView, TagRow

__all__ = [
    "BUILD_DELIMITER",
    "BuildMode",
    "CreateField",
    "CreateMode",
    "DeleteConfirmMode",
    "DialogView",
    "EditMode",
    "ManagementMode",
    "Notice",
    "NoticeLevel",
    "PromptRow",
    "QuickSelectMode",
    "SearchMode",
    "SessionMachine",
    "SessionMode",
    "SessionState",
    "SessionView",
    "TagFilterMode",
    "TagRow",
    "actions",
    "compose_build",
    "mode_label",
]
