"""Headless Textual application checks.

Updates: v0.1.0 - 2026-10-14 - Drive the app with the Textual pilot.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from conftest import FakeClipboard, ScriptedEditor, add_prompts
from core.repository import PromptRepository
from core.session import ManagementMode, SessionMachine
from tui.application import PromptShelfApp

SessionFactory = Callable[..., SessionMachine]


def _drive(session: SessionMachine, *keys: str) -> PromptShelfApp:
    app = PromptShelfApp(session)

    async def _run() -> None:
        async with app.run_test() as pilot:
            for key in keys:
                await pilot.press(key)

    asyncio.run(_run())
    return app


def test_enter_copies_selection_and_exits(
    repository: PromptRepository,
    make_session: SessionFactory,
    clipboard: FakeClipboard,
) -> None:
    add_prompts(repository, [("alpha", "A", ()), ("beta", "B", ())])
    session = make_session()

    app = _drive(session, "down", "enter")

    assert clipboard.copies == ["B"]
    assert app.return_value == "Copied 'beta' to clipboard"


def test_edit_is_cancelled_when_terminal_cannot_be_suspended(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("alpha", "old body", ())])
    editor = ScriptedEditor(lambda seed: seed.replace("old body", "new body"))
    session = make_session(manage=True, editor=editor)

    # The headless test driver cannot hand the terminal to a subprocess.
    app = _drive(session, "e")

    assert editor.seeds == []
    assert repository.get("alpha").content == "old body"
    assert isinstance(session.mode, ManagementMode)
    assert not session.finished
    assert app.return_value is None
