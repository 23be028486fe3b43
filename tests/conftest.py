"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-12 - Add scripted editor and in-memory clipboard doubles.
  v0.1.0 - 2026-09-30 - Isolate HOME and PROMPT_SHELF_* variables per test.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from core.exceptions import ClipboardError, EditorError
from core.repository import PromptRepository
from core.session import SessionMachine
from core.templating import TemplateRenderer


class FakeClipboard:
    """Clipboard double recording every copy."""

    def __init__(self, *, fail: bool = False, initial: str = "") -> None:
        self.fail = fail
        self.copies: list[str] = []
        self.content = initial

    def copy(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("Clipboard unavailable: no copy mechanism")
        self.copies.append(text)
        self.content = text

    def paste(self) -> str:
        if self.fail:
            raise ClipboardError("Clipboard unavailable: no paste mechanism")
        return self.content


class ScriptedEditor:
    """Editor double returning a canned result or transforming the seed text."""

    def __init__(
        self,
        result: str | None | Callable[[str], str | None] = None,
        *,
        error: str | None = None,
    ) -> None:
        self.result = result
        self.error = error
        self.seeds: list[str] = []

    def edit(self, initial_text: str, *, suffix: str = ".md") -> str | None:
        self.seeds.append(initial_text)
        if self.error is not None:
            raise EditorError(self.error)
        if callable(self.result):
            return self.result(initial_text)
        return self.result


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real user configuration and editors out of every test."""
    for key in list(os.environ):
        if key.startswith("PROMPT_SHELF_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("PROMPT_SHELF_ENV_FILE", "")
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def storage(tmp_path: Path) -> Path:
    return tmp_path / "shelf"


@pytest.fixture
def repository(storage: Path) -> PromptRepository:
    return PromptRepository(storage)


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def make_session(
    repository: PromptRepository,
    clipboard: FakeClipboard,
) -> Callable[..., SessionMachine]:
    """Return a factory building a SessionMachine over the test repository."""

    def _factory(
        *,
        manage: bool = False,
        editor: ScriptedEditor | None = None,
        clipboard_override: FakeClipboard | None = None,
        default_template: str | None = None,
    ) -> SessionMachine:
        return SessionMachine(
            repository,
            editor=editor or ScriptedEditor(),
            clipboard=clipboard_override or clipboard,
            renderer=TemplateRenderer(repository.templates_dir),
            manage=manage,
            default_template=default_template,
        )

    return _factory


def add_prompts(
    repository: PromptRepository,
    entries: Iterable[tuple[str, str, Iterable[str]]],
) -> None:
    """Create ``(name, content, tags)`` entries in *repository*."""
    for name, content, tags in entries:
        repository.create(name, content, tags)
