"""Actions understood by :class:`core.session.machine.SessionMachine`.

Actions are produced by :func:`core.keymap.resolve_key` from raw key presses
and carry no reference to the terminal, so tests can drive the machine with
plain values.

Updates:
  v0.2.0 - 2026-10-12 - Add ClearTags and CycleTemplate for the tag and create dialogs.
  v0.1.0 - 2026-09-30 - Introduce action dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Cancel",
    "ClearTags",
    "Confirm",
    "ConfirmDelete",
    "CopySelected",
    "CycleTemplate",
    "DeleteChar",
    "InsertText",
    "MoveCursor",
    "NextField",
    "Quit",
    "Refresh",
    "SessionAction",
    "StartBuild",
    "StartCreate",
    "StartDelete",
    "StartEdit",
    "StartSearch",
    "StartTagFilter",
    "SwitchSurface",
    "ToggleItem",
]


@dataclass(frozen=True, slots=True)
class MoveCursor:
    """Move the highlighted row by ``delta``; movement saturates at both ends."""

    delta: int


@dataclass(frozen=True, slots=True)
class Confirm:
    """Enter."""


@dataclass(frozen=True, slots=True)
class Cancel:
    """Escape, or any key that aborts the current dialog."""


@dataclass(frozen=True, slots=True)
class Quit:
    """Leave the session from any mode without copying."""


@dataclass(frozen=True, slots=True)
class StartSearch:
    pass


@dataclass(frozen=True, slots=True)
class StartTagFilter:
    pass


@dataclass(frozen=True, slots=True)
class SwitchSurface:
    """Toggle between Quick Select and Management."""


@dataclass(frozen=True, slots=True)
class StartCreate:
    pass


@dataclass(frozen=True, slots=True)
class StartEdit:
    pass


@dataclass(frozen=True, slots=True)
class StartDelete:
    pass


@dataclass(frozen=True, slots=True)
class StartBuild:
    pass


@dataclass(frozen=True, slots=True)
class CopySelected:
    pass


@dataclass(frozen=True, slots=True)
class Refresh:
    """Reload the snapshot from disk, retrying after a storage failure."""


@dataclass(frozen=True, slots=True)
class InsertText:
    text: str


@dataclass(frozen=True, slots=True)
class DeleteChar:
    pass


@dataclass(frozen=True, slots=True)
class ToggleItem:
    """Space: toggle the highlighted tag or build entry."""


@dataclass(frozen=True, slots=True)
class ClearTags:
    pass


@dataclass(frozen=True, slots=True)
class NextField:
    pass


@dataclass(frozen=True, slots=True)
class CycleTemplate:
    step: int


@dataclass(frozen=True, slots=True)
class ConfirmDelete:
    pass


SessionAction = (
    MoveCursor
    | Confirm
    | Cancel
    | Quit
    | StartSearch
    | StartTagFilter
    | SwitchSurface
    | StartCreate
    | StartEdit
    | StartDelete
    | StartBuild
    | CopySelected
    | Refresh
    | InsertText
    | DeleteChar
    | ToggleItem
    | ClearTags
    | NextField
    | CycleTemplate
    | ConfirmDelete
)
