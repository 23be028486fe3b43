"""Render-ready view model produced by the session state machine.

Front-ends draw a :class:`SessionView` without looking at modes or the
repository, which keeps the Textual layer thin and lets tests assert on what
the user would see.

Updates:
  v0.2.0 - 2026-10-12 - Add dialog lines for create and delete confirmation.
  v0.1.0 - 2026-09-30 - Introduce SessionView with rows, preview and hints.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from prompt_templates import CREATION_TEMPLATE_DESCRIPTIONS

from .modes import (
    BuildMode,
    CreateField,
    CreateMode,
    DeleteConfirmMode,
    EditMode,
    ManagementMode,
    QuickSelectMode,
    SearchMode,
    TagFilterMode,
    mode_label,
)

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .machine import SessionState

__all__ = [
    "APP_TITLE",
    "DialogView",
    "Notice",
    "NoticeLevel",
    "PromptRow",
    "SessionView",
    "TagRow",
    "build_session_view",
]

APP_TITLE = "Prompt Shelf"


class NoticeLevel(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    """Transient message shown until the next action."""

    text: str
    level: NoticeLevel = NoticeLevel.INFO

    @property
    def is_error(self) -> bool:
        return self.level is NoticeLevel.ERROR


@dataclass(frozen=True, slots=True)
class PromptRow:
    name: str
    tags: tuple[str, ...]
    selected: bool = False
    build_position: int | None = None


@dataclass(frozen=True, slots=True)
class TagRow:
    tag: str
    active: bool
    highlighted: bool


@dataclass(frozen=True, slots=True)
class DialogView:
    title: str
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SessionView:
    """Everything needed to draw one frame of the session."""

    title: str
    mode_label: str
    query: str
    searching: bool
    active_tags: tuple[str, ...]
    rows: tuple[PromptRow, ...]
    total: int
    tag_rows: tuple[TagRow, ...] = ()
    preview: str | None = None
    dialog: DialogView | None = None
    notice: Notice | None = None
    banner: str | None = None
    hints: tuple[str, ...] = ()

    @property
    def summary(self) -> str:
        return f"{len(self.rows)} of {self.total} prompts"


_BROWSE_HINTS = ("up/down move", "/ search")

_HINTS: dict[type, tuple[str, ...]] = {
    QuickSelectMode: (
        "enter copy & exit",
        *_BROWSE_HINTS,
        "t tags",
        "tab manage",
        "esc quit",
    ),
    ManagementMode: (
        "n new",
        "e edit",
        "d delete",
        "b build",
        "ctrl+y copy",
        *_BROWSE_HINTS,
        "space tags",
        "r reload",
        "tab quick select",
        "esc quit",
    ),
    SearchMode: ("type to filter", "enter keep", "esc restore"),
    TagFilterMode: ("space toggle", "c clear", "enter/esc done"),
    CreateMode: ("tab switch field", "left/right template", "enter open editor", "esc cancel"),
    EditMode: ("waiting for editor",),
    DeleteConfirmMode: ("y delete", "any other key cancels"),
    BuildMode: ("space add/remove", "enter copy build", "esc discard"),
}


def _create_dialog(mode: CreateMode, templates: tuple[str, ...]) -> DialogView:
    template = templates[mode.template_index] if templates else "default"
    name_marker = ">" if mode.field is CreateField.NAME else " "
    template_marker = ">" if mode.field is CreateField.TEMPLATE else " "
    lines = [
        f"{name_marker} Name: {mode.name}",
        f"{template_marker} Template: < {template} >",
    ]
    description = CREATION_TEMPLATE_DESCRIPTIONS.get(template)
    if description:
        lines.append(f"  {description}")
    if mode.awaiting_editor:
        lines.append("Opening editor...")
    return DialogView("New prompt", tuple(lines))


def _dialog_for(state: SessionState, templates: tuple[str, ...]) -> DialogView | None:
    mode = state.mode
    if isinstance(mode, CreateMode):
        return _create_dialog(mode, templates)
    if isinstance(mode, DeleteConfirmMode):
        return DialogView("Delete prompt", (f"Delete '{mode.name}'? (y/N)",))
    if isinstance(mode, EditMode):
        return DialogView("Edit prompt", (f"Editing '{mode.name}' in external editor...",))
    return None


def build_session_view(state: SessionState, templates: tuple[str, ...] = ()) -> SessionView:
    """Project *state* into a :class:`SessionView`."""
    mode = state.mode
    build_order = mode.selected if isinstance(mode, BuildMode) else ()
    rows = tuple(
        PromptRow(
            name=prompt.name,
            tags=prompt.sorted_tags,
            selected=index == state.cursor,
            build_position=build_order.index(prompt.name) + 1
            if prompt.name in build_order
            else None,
        )
        for index, prompt in enumerate(state.visible)
    )

    tag_rows: tuple[TagRow, ...] = ()
    if isinstance(mode, TagFilterMode):
        tag_rows = tuple(
            TagRow(tag=tag, active=tag in state.tags, highlighted=index == mode.tag_cursor)
            for index, tag in enumerate(state.snapshot.tags())
        )

    selected = state.selected
    return SessionView(
        title=APP_TITLE,
        mode_label=mode_label(mode),
        query=state.query,
        searching=isinstance(mode, SearchMode),
        active_tags=tuple(sorted(state.tags, key=lambda tag: (tag.lower(), tag))),
        rows=rows,
        total=len(state.snapshot),
        tag_rows=tag_rows,
        preview=selected.content if selected is not None else None,
        dialog=_dialog_for(state, templates),
        notice=state.notice,
        banner=state.banner,
        hints=_HINTS[type(mode)],
    )
