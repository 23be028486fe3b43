"""Map terminal key presses to session actions.

Key names follow Textual (``"enter"``, ``"escape"``, ``"ctrl+y"``, ``"slash"``);
printable keys are matched on their character so ``"Y"`` and ``"/"`` work
regardless of how the terminal names them. The mapping is stateless: it looks
only at the current mode and the key.

Updates:
  v0.2.0 - 2026-10-12 - Treat letters as text inside search and the create dialog.
  v0.1.0 - 2026-09-30 - Introduce per-mode key tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .session import actions as act
from .session.modes import (
    BuildMode,
    CreateField,
    CreateMode,
    DeleteConfirmMode,
    EditMode,
    ManagementMode,
    QuickSelectMode,
    SearchMode,
    TagFilterMode,
)

if TYPE_CHECKING:
    from .session.modes import SessionMode

__all__ = ["PAGE_SIZE", "KeyPress", "resolve_key"]

PAGE_SIZE = 10


@dataclass(frozen=True, slots=True)
class KeyPress:
    """One key event as reported by the front-end."""

    key: str
    character: str | None = None

    @property
    def printable(self) -> str | None:
        """Return the typed character for text input, if any."""
        char = self.character
        if char is not None and len(char) == 1 and char.isprintable():
            return char
        return None

    @property
    def token(self) -> str:
        """Return the lookup name: the character for visible keys, else the key name."""
        char = self.printable
        if char is not None and char != " ":
            return char
        return self.key


_NAVIGATION: dict[str, act.SessionAction] = {
    "up": act.MoveCursor(-1),
    "down": act.MoveCursor(1),
    "pageup": act.MoveCursor(-PAGE_SIZE),
    "pagedown": act.MoveCursor(PAGE_SIZE),
}

_LETTER_NAVIGATION: dict[str, act.SessionAction] = {
    "k": act.MoveCursor(-1),
    "j": act.MoveCursor(1),
}

_BROWSE: dict[str, act.SessionAction] = {
    **_NAVIGATION,
    **_LETTER_NAVIGATION,
    "/": act.StartSearch(),
    "tab": act.SwitchSurface(),
    "escape": act.Cancel(),
    "q": act.Cancel(),
    "ctrl+r": act.Refresh(),
}

_QUICK_SELECT: dict[str, act.SessionAction] = {
    **_BROWSE,
    "enter": act.Confirm(),
    "t": act.StartTagFilter(),
}

_MANAGEMENT: dict[str, act.SessionAction] = {
    **_BROWSE,
    "n": act.StartCreate(),
    "e": act.StartEdit(),
    "d": act.StartDelete(),
    "b": act.StartBuild(),
    "ctrl+y": act.CopySelected(),
    "space": act.StartTagFilter(),
    "t": act.StartTagFilter(),
    "r": act.Refresh(),
}

_TAG_FILTER: dict[str, act.SessionAction] = {
    **_NAVIGATION,
    **_LETTER_NAVIGATION,
    "space": act.ToggleItem(),
    "c": act.ClearTags(),
    "enter": act.Confirm(),
    "escape": act.Cancel(),
}

_BUILD: dict[str, act.SessionAction] = {
    **_NAVIGATION,
    **_LETTER_NAVIGATION,
    "space": act.ToggleItem(),
    "enter": act.Confirm(),
    "escape": act.Cancel(),
}

_SEARCH: dict[str, act.SessionAction] = {
    **_NAVIGATION,
    "enter": act.Confirm(),
    "escape": act.Cancel(),
    "backspace": act.DeleteChar(),
}

_CREATE: dict[str, act.SessionAction] = {
    "enter": act.Confirm(),
    "escape": act.Cancel(),
    "tab": act.NextField(),
    "left": act.CycleTemplate(-1),
    "right": act.CycleTemplate(1),
}

_CREATE_TEMPLATE_FIELD: dict[str, act.SessionAction] = {
    "h": act.CycleTemplate(-1),
    "l": act.CycleTemplate(1),
}


def _text_entry(table: dict[str, act.SessionAction], press: KeyPress) -> act.SessionAction | None:
    action = table.get(press.key)
    if action is not None:
        return action
    char = press.printable
    if char is not None:
        return act.InsertText(char)
    return None


def resolve_key(mode: SessionMode, press: KeyPress) -> act.SessionAction | None:
    """Return the action for *press* in *mode*, or ``None`` when the key does nothing."""
    if press.key == "ctrl+c":
        return act.Quit()

    if isinstance(mode, SearchMode):
        return _text_entry(_SEARCH, press)
    if isinstance(mode, CreateMode):
        if mode.awaiting_editor:
            return act.Cancel() if press.key == "escape" else None
        if mode.field is CreateField.NAME:
            if press.key == "backspace":
                return act.DeleteChar()
            return _text_entry(_CREATE, press)
        return _CREATE.get(press.key) or _CREATE_TEMPLATE_FIELD.get(press.token)
    if isinstance(mode, DeleteConfirmMode):
        return act.ConfirmDelete() if press.token in ("y", "Y") else act.Cancel()
    if isinstance(mode, EditMode):
        return act.Cancel() if press.key == "escape" else None

    if isinstance(mode, QuickSelectMode):
        table = _QUICK_SELECT
    elif isinstance(mode, ManagementMode):
        table = _MANAGEMENT
    elif isinstance(mode, TagFilterMode):
        table = _TAG_FILTER
    elif isinstance(mode, BuildMode):
        table = _BUILD
    else:
        return None
    return table.get(press.token) or table.get(press.key)
