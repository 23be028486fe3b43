"""Textual front-end for the Prompt Shelf session engine.

The app owns no state of its own: every key press is resolved through
:func:`core.keymap.resolve_key`, applied to the :class:`SessionMachine` and the
resulting view is redrawn. When the machine asks for the external editor the
terminal is handed over with :meth:`textual.app.App.suspend`.

Updates:
  v0.2.0 - 2026-10-14 - Cancel the editor hand-off when the terminal cannot be suspended.
  v0.1.0 - 2026-10-05 - Initial Textual application.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Header, Static

from core.keymap import KeyPress, resolve_key
from core.session import actions as act

from .render import render_list, render_side, render_status

if TYPE_CHECKING:  # pragma: no cover - typing only
    from core.session import SessionMachine

logger = logging.getLogger(__name__)

__all__ = ["PromptShelfApp", "SessionPanel", "launch_prompt_shelf"]


class SessionPanel(Static, can_focus=True):
    """Focused prompt list; forwards every key to the app."""

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        app = self.app
        if isinstance(app, PromptShelfApp):
            app.handle_key(KeyPress(event.key, event.character))


class PromptShelfApp(App[str | None]):
    """Main TUI application; returns the session's exit message."""

    TITLE = "Prompt Shelf"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }

    #body {
        height: 1fr;
    }

    #list-scroll {
        width: 1fr;
        border-right: solid $primary-darken-2;
    }

    #list-panel {
        padding: 0 1;
    }

    #side-scroll {
        width: 2fr;
        padding: 0 1;
    }

    #status-bar {
        height: auto;
        max-height: 5;
        padding: 0 1;
        background: $primary-darken-3;
    }
    """

    def __init__(self, session: SessionMachine) -> None:
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="body"):
            with VerticalScroll(id="list-scroll"):
                yield SessionPanel(id="list-panel")
            with VerticalScroll(id="side-scroll"):
                yield Static(id="side-panel")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self.query_one(SessionPanel).focus()
        self.refresh_view()

    def handle_key(self, press: KeyPress) -> None:
        """Resolve, dispatch and redraw for one key press."""
        action = resolve_key(self.session.mode, press)
        if action is None:
            return
        self.session.dispatch(action)
        if self.session.awaiting_editor:
            self._run_editor()
        if self.session.finished:
            self.exit(self.session.exit_message)
            return
        self.refresh_view()

    def _run_editor(self) -> None:
        try:
            with self.suspend():
                self.session.complete_editor()
        except SuspendNotSupported:
            logger.warning("Terminal cannot be suspended; editor hand-off cancelled")
            self.session.dispatch(act.Cancel())
            self.notify("External editor is not available in this terminal", severity="error")

    def refresh_view(self) -> None:
        view = self.session.view()
        self.sub_title = view.mode_label
        self.query_one("#list-panel", Static).update(render_list(view))
        self.query_one("#side-panel", Static).update(render_side(view))
        self.query_one("#status-bar", Static).update(render_status(view))


def launch_prompt_shelf(session: SessionMachine) -> str | None:
    """Run the app until the session finishes and return its exit message."""
    return PromptShelfApp(session).run()
