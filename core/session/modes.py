"""Session modes for the interactive prompt picker.

Each mode is a small frozen dataclass carrying only the data that mode needs.
The union :data:`SessionMode` is closed: the state machine and key map dispatch
on the concrete type, so a delete confirmation without a target or a build
list outside Build mode cannot be expressed.

Updates:
  v0.3.0 - 2026-10-12 - Track the editor hand-off inside CreateMode.
  v0.2.0 - 2026-10-05 - Add Build mode with an ordered selection.
  v0.1.0 - 2026-09-30 - Introduce mode dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "BrowseMode",
    "BuildMode",
    "CreateField",
    "CreateMode",
    "DeleteConfirmMode",
    "EditMode",
    "ManagementMode",
    "QuickSelectMode",
    "SearchMode",
    "SessionMode",
    "TagFilterMode",
    "mode_label",
]


@dataclass(frozen=True, slots=True)
class QuickSelectMode:
    """Pick one prompt, copy it and leave."""


@dataclass(frozen=True, slots=True)
class ManagementMode:
    """Full library management: create, edit, delete, build."""


BrowseMode = QuickSelectMode | ManagementMode


@dataclass(frozen=True, slots=True)
class SearchMode:
    """Live query editing; ``saved_query`` is restored when the search is abandoned."""

    previous: BrowseMode
    saved_query: str = ""


@dataclass(frozen=True, slots=True)
class TagFilterMode:
    previous: BrowseMode
    tag_cursor: int = 0


class CreateField(str, Enum):
    """Input focus inside the create dialog."""

    NAME = "name"
    TEMPLATE = "template"


@dataclass(frozen=True, slots=True)
class CreateMode:
    name: str = ""
    template_index: int = 0
    field: CreateField = CreateField.NAME
    awaiting_editor: bool = False


@dataclass(frozen=True, slots=True)
class EditMode:
    """Waiting for the external editor to return the edited prompt."""

    name: str


@dataclass(frozen=True, slots=True)
class DeleteConfirmMode:
    name: str


@dataclass(frozen=True, slots=True)
class BuildMode:
    """Compose several prompts; ``selected`` keeps the order names were picked in."""

    selected: tuple[str, ...] = ()

    def toggle(self, name: str) -> BuildMode:
        if name in self.selected:
            return BuildMode(tuple(item for item in self.selected if item != name))
        return BuildMode((*self.selected, name))


SessionMode = (
    QuickSelectMode
    | ManagementMode
    | SearchMode
    | TagFilterMode
    | CreateMode
    | EditMode
    | DeleteConfirmMode
    | BuildMode
)

_LABELS: dict[type, str] = {
    QuickSelectMode: "Quick Select",
    ManagementMode: "Management",
    SearchMode: "Search",
    TagFilterMode: "Tag Filter",
    CreateMode: "Create",
    EditMode: "Edit",
    DeleteConfirmMode: "Delete",
    BuildMode: "Build",
}


def mode_label(mode: SessionMode) -> str:
    """Return the human readable name shown in the status line."""
    return _LABELS[type(mode)]
