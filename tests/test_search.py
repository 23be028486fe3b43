"""Search ranking and tag filter tests.

Updates: v0.1.0 - 2026-09-30 - Cover ranking, AND tag filtering and composition.
"""

from __future__ import annotations

from models.prompt_model import Prompt
from models.snapshot import RepositorySnapshot

from core.search import (
    SCORE_CONTENT,
    SCORE_EXACT_NAME,
    SCORE_NAME,
    apply_filters,
    filter_by_tags,
    search,
)


def _snapshot() -> RepositorySnapshot:
    return RepositorySnapshot.build(
        [
            Prompt(name="code-review", content="Review this code.", tags={"work", "code"}),
            Prompt(name="review", content="General review checklist.", tags={"work", "urgent"}),
            Prompt(name="standup", content="Yesterday, today, blockers.", tags={"work"}),
            Prompt(name="poem", content="Write a poem.", tags={"fun", "Reviewed"}),
            Prompt(name="haiku", content="Five seven five."),
        ]
    )


def test_exact_name_match_ranks_before_substring_match() -> None:
    hits = search(_snapshot(), "review")
    names = [hit.prompt.name for hit in hits]
    assert names[:2] == ["review", "code-review"]
    assert hits[0].score == SCORE_EXACT_NAME
    assert hits[1].score == SCORE_NAME


def test_search_is_case_insensitive_over_content_and_tags() -> None:
    hits = search(_snapshot(), "REVIEW")
    by_name = {hit.prompt.name: hit.score for hit in hits}
    assert by_name["poem"] == SCORE_CONTENT
    assert "haiku" not in by_name
    assert [hit.prompt.name for hit in search(_snapshot(), "BLOCKERS")] == ["standup"]


def test_ties_break_by_name() -> None:
    hits = search(_snapshot(), "e")
    scores = [hit.score for hit in hits]
    assert scores == sorted(scores, reverse=True)
    same_score = [hit.prompt.name for hit in hits if hit.score == SCORE_NAME]
    assert same_score == sorted(same_score)


def test_empty_query_returns_everything_in_name_order() -> None:
    snapshot = _snapshot()
    for query in ("", "   ", None):
        hits = search(snapshot, query)
        assert [hit.prompt.name for hit in hits] == list(snapshot.names)


def test_no_match_returns_empty_list() -> None:
    assert search(_snapshot(), "zzz") == []


def test_tag_filter_uses_and_semantics() -> None:
    result = filter_by_tags(_snapshot(), {"work", "urgent"})
    assert [prompt.name for prompt in result] == ["review"]


def test_empty_tag_filter_returns_full_snapshot() -> None:
    snapshot = _snapshot()
    assert [prompt.name for prompt in filter_by_tags(snapshot, set())] == list(snapshot.names)


def test_query_and_tags_intersect_preserving_rank() -> None:
    result = apply_filters(_snapshot(), "review", {"work"})
    assert [prompt.name for prompt in result] == ["review", "code-review"]

    narrowed = apply_filters(_snapshot(), "review", {"urgent"})
    assert [prompt.name for prompt in narrowed] == ["review"]
