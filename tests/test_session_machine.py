"""SessionMachine transition tests driven with plain actions.

Updates:
  v0.3.0 - 2026-10-14 - Cover the storage error banner and retry.
  v0.2.0 - 2026-10-12 - Cover create/edit editor hand-off and Build composition.
  v0.1.0 - 2026-09-30 - Initial quick select, search and tag filter coverage.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from conftest import FakeClipboard, ScriptedEditor, add_prompts
from core.repository import PromptRepository
from core.session import (
    BUILD_DELIMITER,
    BuildMode,
    CreateMode,
    DeleteConfirmMode,
    EditMode,
    ManagementMode,
    QuickSelectMode,
    SearchMode,
    SessionMachine,
    TagFilterMode,
    actions as act,
)
from core.templating import TemplateRenderer
from prompt_templates import DEFAULT_PROMPTS

SessionFactory = Callable[..., SessionMachine]

_FIVE = [
    ("alpha", "first", ()),
    ("beta", "second", ()),
    ("delta", "fourth", ()),
    ("epsilon", "fifth", ()),
    ("gamma", "third", ()),
]


def _type(session: SessionMachine, text: str) -> None:
    for char in text:
        session.dispatch(act.InsertText(char))


def test_starts_in_quick_select_with_first_prompt_selected(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session()

    assert isinstance(session.mode, QuickSelectMode)
    assert session.selected is not None
    assert session.selected.name == "alpha"
    assert session.view().summary == "5 of 5 prompts"


def test_manage_flag_starts_in_management(make_session: SessionFactory) -> None:
    session = make_session(manage=True)
    assert isinstance(session.mode, ManagementMode)
    assert session.selected is None


def test_cursor_saturates_at_both_ends(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session()

    session.dispatch(act.MoveCursor(-1))
    assert session.state.cursor == 0
    session.dispatch(act.MoveCursor(10))
    assert session.state.cursor == 4
    session.dispatch(act.MoveCursor(1))
    assert session.state.cursor == 4


def test_filtering_clamps_cursor_to_last_visible_row(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session()
    session.dispatch(act.MoveCursor(4))
    assert session.state.cursor == 4

    session.dispatch(act.StartSearch())
    _type(session, "ta")

    assert [prompt.name for prompt in session.state.visible] == ["beta", "delta"]
    assert session.state.cursor == 1


def test_cursor_is_none_when_nothing_matches(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session()
    session.dispatch(act.StartSearch())
    _type(session, "zzz")

    assert session.state.cursor is None
    assert session.selected is None
    session.dispatch(act.MoveCursor(1))
    assert session.state.cursor is None


def test_quick_select_enter_copies_and_finishes(
    repository: PromptRepository,
    make_session: SessionFactory,
    clipboard: FakeClipboard,
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session()
    session.dispatch(act.MoveCursor(1))

    session.dispatch(act.Confirm())

    assert clipboard.copies == ["second"]
    assert session.finished
    assert session.exit_message == "Copied 'beta' to clipboard"
    assert session.state.copied_name == "beta"


def test_quick_select_clipboard_failure_still_finishes(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session(clipboard_override=FakeClipboard(fail=True))

    session.dispatch(act.Confirm())

    assert session.finished
    assert session.exit_message is not None
    assert session.exit_message.startswith("Could not copy 'alpha'")
    assert session.state.copied_name is None


def test_quick_select_escape_finishes_without_copy(
    repository: PromptRepository,
    make_session: SessionFactory,
    clipboard: FakeClipboard,
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session()

    session.dispatch(act.Cancel())

    assert session.finished
    assert session.exit_message is None
    assert clipboard.copies == []


def test_finished_session_ignores_further_actions(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session()
    session.dispatch(act.Quit())

    session.dispatch(act.MoveCursor(1))

    assert session.finished
    assert session.state.cursor == 0


def test_search_enter_keeps_query_and_returns_to_previous_mode(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session(manage=True)
    session.dispatch(act.StartSearch())
    assert isinstance(session.mode, SearchMode)
    _type(session, "gam")

    session.dispatch(act.Confirm())

    assert isinstance(session.mode, ManagementMode)
    assert session.state.query == "gam"
    assert [prompt.name for prompt in session.state.visible] == ["gamma"]


def test_search_escape_restores_previous_query(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, _FIVE)
    session = make_session()
    session.dispatch(act.StartSearch())
    _type(session, "al")
    session.dispatch(act.Confirm())

    session.dispatch(act.StartSearch())
    session.dispatch(act.DeleteChar())
    _type(session, "zz")
    session.dispatch(act.Cancel())

    assert isinstance(session.mode, QuickSelectMode)
    assert session.state.query == "al"
    assert [prompt.name for prompt in session.state.visible] == ["alpha"]


def test_tag_filter_toggles_and_keeps_filter_on_exit(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(
        repository,
        [
            ("both", "x", ("urgent", "work")),
            ("home", "x", ("home",)),
            ("work-only", "x", ("work",)),
        ],
    )
    session = make_session()
    session.dispatch(act.StartTagFilter())
    assert isinstance(session.mode, TagFilterMode)

    # tags are listed as: home, urgent, work
    session.dispatch(act.MoveCursor(1))
    session.dispatch(act.ToggleItem())
    session.dispatch(act.MoveCursor(1))
    session.dispatch(act.ToggleItem())
    assert session.state.tags == frozenset({"urgent", "work"})
    assert [prompt.name for prompt in session.state.visible] == ["both"]

    session.dispatch(act.Cancel())
    assert isinstance(session.mode, QuickSelectMode)
    assert [prompt.name for prompt in session.state.visible] == ["both"]

    session.dispatch(act.StartTagFilter())
    session.dispatch(act.ClearTags())
    session.dispatch(act.Confirm())
    assert len(session.state.visible) == 3


def test_tag_filter_drops_tags_no_prompt_carries_after_reload(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("alpha", "x", ("old",)), ("beta", "y", ("work",))])
    session = make_session(manage=True)
    session.dispatch(act.StartTagFilter())
    session.dispatch(act.ToggleItem())
    session.dispatch(act.Confirm())
    assert [prompt.name for prompt in session.state.visible] == ["alpha"]

    session.dispatch(act.StartDelete())
    session.dispatch(act.ConfirmDelete())

    assert session.state.tags == frozenset()
    assert [prompt.name for prompt in session.state.visible] == ["beta"]
    assert session.state.cursor == 0


def test_switch_surface_toggles_between_quick_select_and_management(
    make_session: SessionFactory,
) -> None:
    session = make_session()
    session.dispatch(act.SwitchSurface())
    assert isinstance(session.mode, ManagementMode)
    session.dispatch(act.SwitchSurface())
    assert isinstance(session.mode, QuickSelectMode)


def test_create_opens_editor_and_commits_result(make_session: SessionFactory) -> None:
    editor = ScriptedEditor(lambda seed: seed + "Do the thing.\n")
    session = make_session(manage=True, editor=editor)

    session.dispatch(act.StartCreate())
    _type(session, "My Prompt")
    session.dispatch(act.Confirm())
    assert isinstance(session.mode, CreateMode)
    assert session.awaiting_editor
    assert session.mode.name == "my-prompt"

    session.complete_editor()

    assert isinstance(session.mode, ManagementMode)
    assert "# My Prompt" in editor.seeds[0]
    assert session.selected is not None
    assert session.selected.name == "my-prompt"
    assert session.selected.content == "# My Prompt\n\nDo the thing.\n"
    assert session.selected.template_origin == "default"
    assert session.state.notice is not None
    assert session.state.notice.text == "Created 'my-prompt'"


def test_create_uses_cycled_template(make_session: SessionFactory) -> None:
    editor = ScriptedEditor(lambda seed: seed)
    session = make_session(manage=True, editor=editor)
    session.dispatch(act.StartCreate())
    _type(session, "plan")
    session.dispatch(act.NextField())
    session.dispatch(act.CycleTemplate(1))
    chosen = session.templates[1]
    session.dispatch(act.Confirm())
    session.complete_editor()

    assert session.selected is not None
    assert session.selected.template_origin == chosen


def test_create_rejects_existing_and_invalid_names(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("taken", "x", ())])
    session = make_session(manage=True)
    session.dispatch(act.StartCreate())
    _type(session, "Taken")
    session.dispatch(act.Confirm())

    assert isinstance(session.mode, CreateMode)
    assert not session.awaiting_editor
    assert session.state.notice is not None
    assert session.state.notice.is_error

    for _ in range(5):
        session.dispatch(act.DeleteChar())
    session.dispatch(act.Confirm())
    assert isinstance(session.mode, CreateMode)
    assert session.state.notice is not None
    assert "empty" in session.state.notice.text


def test_create_cancelled_by_editor_commits_nothing(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    session = make_session(manage=True, editor=ScriptedEditor(None))
    session.dispatch(act.StartCreate())
    _type(session, "draft")
    session.dispatch(act.Confirm())
    session.complete_editor()

    assert isinstance(session.mode, ManagementMode)
    assert not repository.exists("draft")
    assert session.state.notice is not None
    assert session.state.notice.text == "Creation cancelled"


def test_create_with_empty_body_is_discarded(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    session = make_session(manage=True, editor=ScriptedEditor("---\ntags: []\n---\n   \n"))
    session.dispatch(act.StartCreate())
    _type(session, "draft")
    session.dispatch(act.Confirm())
    session.complete_editor()

    assert not repository.exists("draft")


def test_editor_failure_returns_to_management_without_mutation(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("review", "v1 body", ())])
    editor = ScriptedEditor(error="Editor 'vi' exited with status 1")
    session = make_session(manage=True, editor=editor)

    session.dispatch(act.StartEdit())
    assert isinstance(session.mode, EditMode)
    session.complete_editor()

    assert isinstance(session.mode, ManagementMode)
    assert repository.get("review").content == "v1 body"
    assert session.state.notice is not None
    assert session.state.notice.is_error


def test_broken_user_template_returns_to_management_with_error(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    repository.templates_dir.mkdir(parents=True)
    (repository.templates_dir / "broken.md").write_text("{{ name + 1 }}\n", encoding="utf-8")
    editor = ScriptedEditor(lambda seed: seed)
    session = make_session(manage=True, editor=editor, default_template="broken")

    session.dispatch(act.StartCreate())
    _type(session, "x")
    session.dispatch(act.Confirm())
    session.complete_editor()

    assert isinstance(session.mode, ManagementMode)
    assert editor.seeds == []
    assert not repository.exists("x")
    assert session.state.notice is not None
    assert session.state.notice.is_error
    assert "Template rendering failed" in session.state.notice.text


def test_edit_commits_changed_content_and_tags(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("review", "v1 body", ())])
    editor = ScriptedEditor(
        lambda seed: seed.replace("v1 body", "v2 body").replace("tags: []", "tags: [fresh]")
    )
    session = make_session(manage=True, editor=editor)

    session.dispatch(act.StartEdit())
    session.complete_editor()

    prompt = repository.get("review")
    assert prompt.content == "v2 body"
    assert prompt.tags == frozenset({"fresh"})
    assert session.state.notice is not None
    assert session.state.notice.text == "Updated 'review'"


def test_edit_without_changes_reports_no_changes(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("review", "v1 body", ())])
    before = repository.read_document("review")
    session = make_session(manage=True, editor=ScriptedEditor(lambda seed: seed))

    session.dispatch(act.StartEdit())
    session.complete_editor()

    assert repository.read_document("review") == before
    assert session.state.notice is not None
    assert session.state.notice.text == "No changes to 'review'"


def test_actions_other_than_cancel_are_ignored_while_editor_pending(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("review", "v1 body", ())])
    session = make_session(manage=True)
    session.dispatch(act.StartEdit())

    session.dispatch(act.StartDelete())
    assert isinstance(session.mode, EditMode)

    session.dispatch(act.Cancel())
    assert isinstance(session.mode, ManagementMode)
    assert not session.awaiting_editor


def test_delete_requires_explicit_confirmation(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("keep", "x", ()), ("remove", "y", ())])
    session = make_session(manage=True)
    session.dispatch(act.MoveCursor(1))

    session.dispatch(act.StartDelete())
    assert session.mode == DeleteConfirmMode("remove")
    session.dispatch(act.Cancel())
    assert isinstance(session.mode, ManagementMode)
    assert repository.exists("remove")

    session.dispatch(act.StartDelete())
    session.dispatch(act.ConfirmDelete())
    assert isinstance(session.mode, ManagementMode)
    assert not repository.exists("remove")
    assert session.state.cursor == 0
    assert session.state.notice is not None
    assert session.state.notice.text == "Deleted 'remove'"


def test_delete_failure_surfaces_error(
    repository: PromptRepository, make_session: SessionFactory
) -> None:
    add_prompts(repository, [("remove", "y", ())])
    session = make_session(manage=True)
    session.dispatch(act.StartDelete())
    repository.delete("remove", force=True)

    session.dispatch(act.ConfirmDelete())

    assert isinstance(session.mode, ManagementMode)
    assert session.state.notice is not None
    assert session.state.notice.is_error


def test_build_concatenates_in_selection_order(
    repository: PromptRepository,
    make_session: SessionFactory,
    clipboard: FakeClipboard,
) -> None:
    add_prompts(repository, [("a-first", "AAA", ()), ("b-second", "BBB", ())])
    session = make_session(manage=True)
    session.dispatch(act.StartBuild())
    assert isinstance(session.mode, BuildMode)

    session.dispatch(act.MoveCursor(1))
    session.dispatch(act.ToggleItem())
    session.dispatch(act.MoveCursor(-1))
    session.dispatch(act.ToggleItem())
    assert session.mode == BuildMode(("b-second", "a-first"))
    positions = {row.name: row.build_position for row in session.view().rows}
    assert positions == {"a-first": 2, "b-second": 1}

    session.dispatch(act.Confirm())

    assert clipboard.copies == [f"BBB{BUILD_DELIMITER}AAA"]
    assert isinstance(session.mode, ManagementMode)
    assert not session.finished


def test_build_toggle_twice_removes_entry(
    repository: PromptRepository, make_session: SessionFactory, clipboard: FakeClipboard
) -> None:
    add_prompts(repository, [("a-first", "AAA", ())])
    session = make_session(manage=True)
    session.dispatch(act.StartBuild())
    session.dispatch(act.ToggleItem())
    session.dispatch(act.ToggleItem())

    session.dispatch(act.Confirm())

    assert isinstance(session.mode, BuildMode)
    assert clipboard.copies == []


def test_copy_selected_in_management_keeps_session_open(
    repository: PromptRepository, make_session: SessionFactory, clipboard: FakeClipboard
) -> None:
    add_prompts(repository, [("review", "body", ())])
    session = make_session(manage=True)

    session.dispatch(act.CopySelected())

    assert clipboard.copies == ["body"]
    assert not session.finished


def test_storage_error_shows_banner_and_recovers_on_refresh(
    storage: Path, clipboard: FakeClipboard
) -> None:
    storage.mkdir()
    blocker = storage / "prompts"
    blocker.write_text("not a directory", encoding="utf-8")
    repository = PromptRepository(storage)
    session = SessionMachine(
        repository,
        editor=ScriptedEditor(),
        clipboard=clipboard,
        renderer=TemplateRenderer(),
        manage=True,
    )

    view = session.view()
    assert view.banner is not None
    assert "press r to retry" in view.banner
    assert view.rows == ()

    blocker.unlink()
    repository.create("review", "body")
    session.dispatch(act.Refresh())

    assert session.view().banner is None
    assert [row.name for row in session.view().rows] == ["review"]


def test_seed_defaults_populates_empty_library(
    repository: PromptRepository, clipboard: FakeClipboard
) -> None:
    session = SessionMachine(
        repository,
        editor=ScriptedEditor(),
        clipboard=clipboard,
        renderer=TemplateRenderer(),
        seed_defaults=True,
    )

    assert set(session.state.snapshot.names) == set(DEFAULT_PROMPTS)


@pytest.mark.parametrize("manage", [False, True])
def test_quit_finishes_from_search(make_session: SessionFactory, manage: bool) -> None:
    session = make_session(manage=manage)
    session.dispatch(act.StartSearch())
    session.dispatch(act.Quit())
    assert session.finished
