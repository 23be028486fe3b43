"""Deterministic state machine behind the interactive prompt picker.

The machine owns the single :class:`SessionState` of a session. Front-ends
translate key presses into actions (see :mod:`core.keymap`), feed them to
:meth:`SessionMachine.dispatch` one at a time and render
:meth:`SessionMachine.view`. Work that needs the terminal, namely running the
external editor, is requested by setting :attr:`SessionMachine.awaiting_editor`;
the front-end cedes the terminal and then calls
:meth:`SessionMachine.complete_editor`.

Updates:
  v0.4.1 - 2026-10-19 - Drop active tag filters that no prompt carries after a reload.
  v0.4.0 - 2026-10-14 - Keep the session alive on storage failures with a retry banner.
  v0.3.0 - 2026-10-12 - Route create/edit through the editor hand-off.
  v0.2.0 - 2026-10-05 - Add Build mode composition and tag filtering.
  v0.1.0 - 2026-09-30 - Introduce quick select, search and management transitions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from models.prompt_model import (
    Prompt,
    PromptDocumentError,
    normalize_prompt_name,
    parse_prompt_document,
    prompt_name_problem,
)
from models.snapshot import RepositorySnapshot

from ..exceptions import ClipboardError, PromptShelfError, PromptStorageError
from ..search import apply_filters
from . import actions as act
from .modes import (
    BrowseMode,
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
)
from .view import Notice, NoticeLevel, SessionView, build_session_view

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..clipboard import ClipboardService
    from ..editor import EditorLauncher
    from ..repository import PromptRepository
    from ..templating import TemplateRenderer

logger = logging.getLogger("prompt_shelf.session")

__all__ = [
    "BUILD_DELIMITER",
    "Notice",
    "NoticeLevel",
    "SessionMachine",
    "SessionState",
    "compose_build",
]

BUILD_DELIMITER = "\n\n"


@dataclass(slots=True)
class SessionState:
    """Everything the session knows; owned by the event loop, never persisted."""

    mode: SessionMode = field(default_factory=QuickSelectMode)
    snapshot: RepositorySnapshot = field(default_factory=RepositorySnapshot)
    visible: tuple[Prompt, ...] = ()
    cursor: int | None = None
    query: str = ""
    tags: frozenset[str] = frozenset()
    notice: Notice | None = None
    banner: str | None = None
    finished: bool = False
    exit_message: str | None = None
    copied_name: str | None = None

    @property
    def selected(self) -> Prompt | None:
        if self.cursor is None or not self.visible:
            return None
        return self.visible[self.cursor]


def compose_build(snapshot: RepositorySnapshot, names: Sequence[str]) -> str:
    """Join the contents of *names* in the given order with :data:`BUILD_DELIMITER`.

    Names missing from *snapshot* are skipped.
    """
    parts: list[str] = []
    for name in names:
        prompt = snapshot.get(name)
        if prompt is not None:
            parts.append(prompt.content)
    return BUILD_DELIMITER.join(parts)


class SessionMachine:
    """Apply actions to the session state and expose a render-ready view."""

    def __init__(
        self,
        repository: PromptRepository,
        *,
        editor: EditorLauncher,
        clipboard: ClipboardService,
        renderer: TemplateRenderer,
        manage: bool = False,
        default_template: str | None = None,
        seed_defaults: bool = False,
    ) -> None:
        self._repository = repository
        self._editor = editor
        self._clipboard = clipboard
        self._renderer = renderer
        self._templates: tuple[str, ...] = renderer.available()
        if default_template in self._templates:
            self._default_template_index = self._templates.index(default_template)
        else:
            self._default_template_index = 0
        self._seed_pending = seed_defaults
        self.state = SessionState(mode=ManagementMode() if manage else QuickSelectMode())
        self._load_snapshot()

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------
    @property
    def mode(self) -> SessionMode:
        return self.state.mode

    @property
    def selected(self) -> Prompt | None:
        return self.state.selected

    @property
    def finished(self) -> bool:
        return self.state.finished

    @property
    def exit_message(self) -> str | None:
        return self.state.exit_message

    @property
    def templates(self) -> tuple[str, ...]:
        return self._templates

    @property
    def awaiting_editor(self) -> bool:
        """True while the front-end must run :meth:`complete_editor`."""
        mode = self.state.mode
        return isinstance(mode, EditMode) or (
            isinstance(mode, CreateMode) and mode.awaiting_editor
        )

    def view(self) -> SessionView:
        return build_session_view(self.state, self._templates)

    def dispatch(self, action: act.SessionAction) -> None:
        """Apply one action; the previous notice is cleared first."""
        if self.state.finished:
            return
        if self.awaiting_editor and not isinstance(action, (act.Cancel, act.Quit)):
            logger.debug("Ignoring %s while the editor is pending", type(action).__name__)
            return
        self.state.notice = None
        if isinstance(action, act.Quit):
            self._finish(None)
            return

        mode = self.state.mode
        if isinstance(mode, QuickSelectMode):
            self._handle_quick_select(mode, action)
        elif isinstance(mode, ManagementMode):
            self._handle_management(mode, action)
        elif isinstance(mode, SearchMode):
            self._handle_search(mode, action)
        elif isinstance(mode, TagFilterMode):
            self._handle_tag_filter(mode, action)
        elif isinstance(mode, CreateMode):
            self._handle_create(mode, action)
        elif isinstance(mode, EditMode):
            self._to_management()
        elif isinstance(mode, DeleteConfirmMode):
            self._handle_delete_confirm(mode, action)
        elif isinstance(mode, BuildMode):
            self._handle_build(mode, action)

    def complete_editor(self) -> None:
        """Run the pending editor session and commit its result."""
        mode = self.state.mode
        if isinstance(mode, CreateMode) and mode.awaiting_editor:
            self._finish_create(mode)
        elif isinstance(mode, EditMode):
            self._finish_edit(mode)
        else:
            logger.debug("complete_editor called with no editor pending")

    # ------------------------------------------------------------------
    # Mode handlers
    # ------------------------------------------------------------------
    def _handle_quick_select(self, mode: QuickSelectMode, action: act.SessionAction) -> None:
        if isinstance(action, act.Confirm):
            prompt = self.state.selected
            if prompt is None:
                self._info("No prompt selected")
                return
            try:
                self._clipboard.copy(prompt.content)
            except ClipboardError as exc:
                logger.warning("Quick select copy failed for %s: %s", prompt.name, exc)
                self._finish(f"Could not copy '{prompt.name}': {exc}")
                return
            self.state.copied_name = prompt.name
            self._finish(f"Copied '{prompt.name}' to clipboard")
        elif isinstance(action, act.Cancel):
            self._finish(None)
        else:
            self._handle_browse(mode, action)

    def _handle_management(self, mode: ManagementMode, action: act.SessionAction) -> None:
        selected = self.state.selected
        if isinstance(action, act.StartCreate):
            self.state.mode = CreateMode(template_index=self._default_template_index)
        elif isinstance(action, act.StartEdit):
            if selected is None:
                self._info("Select a prompt to edit")
            else:
                self.state.mode = EditMode(selected.name)
        elif isinstance(action, act.StartDelete):
            if selected is None:
                self._info("Select a prompt to delete")
            else:
                self.state.mode = DeleteConfirmMode(selected.name)
        elif isinstance(action, act.StartBuild):
            self.state.mode = BuildMode()
        elif isinstance(action, act.CopySelected):
            if selected is None:
                self._info("No prompt selected")
                return
            try:
                self._clipboard.copy(selected.content)
            except ClipboardError as exc:
                logger.warning("Copy failed for %s: %s", selected.name, exc)
                self._error(str(exc))
                return
            self._info(f"Copied '{selected.name}' to clipboard")
        elif isinstance(action, act.Cancel):
            self._finish(None)
        else:
            self._handle_browse(mode, action)

    def _handle_browse(self, mode: BrowseMode, action: act.SessionAction) -> None:
        """Transitions shared by Quick Select and Management."""
        if isinstance(action, act.MoveCursor):
            self._move(action.delta)
        elif isinstance(action, act.StartSearch):
            self.state.mode = SearchMode(previous=mode, saved_query=self.state.query)
        elif isinstance(action, act.StartTagFilter):
            self.state.mode = TagFilterMode(previous=mode)
        elif isinstance(action, act.SwitchSurface):
            self.state.mode = (
                ManagementMode() if isinstance(mode, QuickSelectMode) else QuickSelectMode()
            )
        elif isinstance(action, act.Refresh):
            follow = self.state.selected.name if self.state.selected else None
            if self._load_snapshot(follow=follow):
                self._info(f"Loaded {len(self.state.snapshot)} prompts")

    def _handle_search(self, mode: SearchMode, action: act.SessionAction) -> None:
        if isinstance(action, act.InsertText):
            self.state.query += action.text
            self._recompute()
        elif isinstance(action, act.DeleteChar):
            self.state.query = self.state.query[:-1]
            self._recompute()
        elif isinstance(action, act.MoveCursor):
            self._move(action.delta)
        elif isinstance(action, act.Confirm):
            self.state.mode = mode.previous
        elif isinstance(action, act.Cancel):
            self.state.query = mode.saved_query
            self._recompute()
            self.state.mode = mode.previous

    def _handle_tag_filter(self, mode: TagFilterMode, action: act.SessionAction) -> None:
        available = self.state.snapshot.tags()
        if isinstance(action, act.MoveCursor):
            upper = max(len(available) - 1, 0)
            cursor = max(0, min(upper, mode.tag_cursor + action.delta))
            self.state.mode = replace(mode, tag_cursor=cursor)
        elif isinstance(action, act.ToggleItem):
            if not available:
                return
            tag = available[min(mode.tag_cursor, len(available) - 1)]
            self.state.tags = self.state.tags ^ {tag}
            self._recompute()
        elif isinstance(action, act.ClearTags):
            self.state.tags = frozenset()
            self._recompute()
        elif isinstance(action, (act.Confirm, act.Cancel)):
            self.state.mode = mode.previous

    def _handle_create(self, mode: CreateMode, action: act.SessionAction) -> None:
        if isinstance(action, act.InsertText):
            if mode.field is CreateField.NAME:
                self.state.mode = replace(mode, name=mode.name + action.text)
        elif isinstance(action, act.DeleteChar):
            if mode.field is CreateField.NAME:
                self.state.mode = replace(mode, name=mode.name[:-1])
        elif isinstance(action, act.NextField):
            field_ = CreateField.TEMPLATE if mode.field is CreateField.NAME else CreateField.NAME
            self.state.mode = replace(mode, field=field_)
        elif isinstance(action, act.CycleTemplate):
            if self._templates:
                index = (mode.template_index + action.step) % len(self._templates)
                self.state.mode = replace(mode, template_index=index)
        elif isinstance(action, act.Cancel):
            self._to_management()
        elif isinstance(action, act.Confirm):
            name = normalize_prompt_name(mode.name)
            problem = prompt_name_problem(name)
            if problem is not None:
                self._error(f"Invalid prompt name: {problem}")
                return
            if name in self.state.snapshot.names or self._repository.exists(name):
                self._error(f"Prompt already exists: {name}")
                return
            self.state.mode = replace(mode, name=name, awaiting_editor=True)

    def _handle_delete_confirm(self, mode: DeleteConfirmMode, action: act.SessionAction) -> None:
        self._to_management()
        if not isinstance(action, act.ConfirmDelete):
            self._info("Deletion cancelled")
            return
        try:
            self._repository.delete(mode.name)
        except PromptShelfError as exc:
            logger.error("Delete failed for %s: %s", mode.name, exc)
            self._error(str(exc))
            return
        if self._load_snapshot():
            self._info(f"Deleted '{mode.name}'")

    def _handle_build(self, mode: BuildMode, action: act.SessionAction) -> None:
        if isinstance(action, act.MoveCursor):
            self._move(action.delta)
        elif isinstance(action, act.ToggleItem):
            selected = self.state.selected
            if selected is not None:
                self.state.mode = mode.toggle(selected.name)
        elif isinstance(action, act.Cancel):
            self._to_management()
        elif isinstance(action, act.Confirm):
            if not mode.selected:
                self._info("Nothing selected; press space to add prompts")
                return
            text = compose_build(self.state.snapshot, mode.selected)
            self._to_management()
            try:
                self._clipboard.copy(text)
            except ClipboardError as exc:
                logger.warning("Build copy failed: %s", exc)
                self._error(str(exc))
                return
            self._info(f"Copied {len(mode.selected)} prompts to clipboard")

    # ------------------------------------------------------------------
    # Editor hand-off
    # ------------------------------------------------------------------
    def _finish_create(self, mode: CreateMode) -> None:
        template = self._templates[mode.template_index] if self._templates else None
        self._to_management()
        try:
            body = self._renderer.render(template, name=mode.name)
            seed = Prompt(name=mode.name, content=body, template_origin=template).to_document()
            result = self._editor.edit(seed)
        except PromptShelfError as exc:
            logger.error("Create of %s aborted: %s", mode.name, exc)
            self._error(str(exc))
            return
        if result is None:
            self._info("Creation cancelled")
            return
        try:
            document = parse_prompt_document(result)
        except PromptDocumentError as exc:
            self._error(str(exc))
            return
        if not document.content.strip():
            self._info("Creation cancelled: prompt is empty")
            return
        try:
            self._repository.create(
                mode.name,
                document.content,
                document.tags,
                template_origin=template,
            )
        except PromptShelfError as exc:
            logger.error("Create failed for %s: %s", mode.name, exc)
            self._error(str(exc))
            return
        if self._load_snapshot(follow=mode.name):
            self._info(f"Created '{mode.name}'")

    def _finish_edit(self, mode: EditMode) -> None:
        self._to_management()
        try:
            current = self._repository.get(mode.name)
            seed = current.to_document()
            result = self._editor.edit(seed)
        except PromptShelfError as exc:
            logger.error("Edit of %s aborted: %s", mode.name, exc)
            self._error(str(exc))
            return
        if result is None or result == seed:
            self._info(f"No changes to '{mode.name}'")
            return
        try:
            document = parse_prompt_document(result)
        except PromptDocumentError as exc:
            self._error(str(exc))
            return
        if document.content == current.content and document.tags == current.tags:
            self._info(f"No changes to '{mode.name}'")
            return
        try:
            self._repository.update(mode.name, document.content, document.tags)
        except PromptShelfError as exc:
            logger.error("Update failed for %s: %s", mode.name, exc)
            self._error(str(exc))
            return
        if self._load_snapshot(follow=mode.name):
            self._info(f"Updated '{mode.name}'")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _load_snapshot(self, follow: str | None = None) -> bool:
        """Rebuild the snapshot from disk; on failure show the banner and an empty list.

        First-run seeding is retried here until it succeeds.
        """
        try:
            if self._seed_pending:
                self._repository.ensure_initialized()
                self._seed_pending = False
            snapshot = self._repository.snapshot()
        except PromptStorageError as exc:
            logger.error("Unable to load prompts: %s", exc)
            self.state.snapshot = RepositorySnapshot()
            self.state.banner = f"{exc} (press r to retry)"
            self._recompute()
            return False
        self.state.snapshot = snapshot
        self.state.banner = None
        # Tags that vanished from the library can no longer be toggled off.
        self.state.tags = self.state.tags & frozenset(snapshot.tag_index)
        self._recompute(follow=follow)
        return True

    def _recompute(self, follow: str | None = None) -> None:
        """Re-run search and tag filters, then clamp or re-target the cursor."""
        state = self.state
        state.visible = tuple(apply_filters(state.snapshot, state.query, state.tags))
        if not state.visible:
            state.cursor = None
            return
        if follow is not None:
            for index, prompt in enumerate(state.visible):
                if prompt.name == follow:
                    state.cursor = index
                    return
        if state.cursor is None:
            state.cursor = 0
        else:
            state.cursor = min(state.cursor, len(state.visible) - 1)

    def _move(self, delta: int) -> None:
        if not self.state.visible:
            return
        current = self.state.cursor or 0
        self.state.cursor = max(0, min(len(self.state.visible) - 1, current + delta))

    def _to_management(self) -> None:
        self.state.mode = ManagementMode()

    def _finish(self, message: str | None) -> None:
        self.state.finished = True
        self.state.exit_message = message

    def _info(self, text: str) -> None:
        self.state.notice = Notice(text)

    def _error(self, text: str) -> None:
        self.state.notice = Notice(text, NoticeLevel.ERROR)
