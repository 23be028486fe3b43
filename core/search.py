"""Ranked text search and tag filtering over repository snapshots.

Everything here is pure: functions take prompts or a snapshot and return new
lists, so the session engine can recompute results on every keystroke.

Updates:
  v0.2.0 - 2026-10-05 - Resolve tag filters through the snapshot tag index.
  v0.1.0 - 2026-09-30 - Introduce substring ranking with exact-name boost.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.prompt_model import Prompt
    from models.snapshot import RepositorySnapshot

__all__ = [
    "SCORE_CONTENT",
    "SCORE_EXACT_NAME",
    "SCORE_NAME",
    "SearchHit",
    "apply_filters",
    "filter_by_tags",
    "score_prompt",
    "search",
]

SCORE_EXACT_NAME = 3
SCORE_NAME = 2
SCORE_CONTENT = 1


@dataclass(frozen=True, slots=True)
class SearchHit:
    """Prompt matched by a query together with its relevance score."""

    prompt: Prompt
    score: int


def score_prompt(prompt: Prompt, needle: str) -> int:
    """Return the relevance of *prompt* for a lower-cased, non-empty *needle*.

    Zero means no match.
    """
    name = prompt.name.lower()
    if name == needle:
        return SCORE_EXACT_NAME
    if needle in name:
        return SCORE_NAME
    if needle in prompt.content.lower():
        return SCORE_CONTENT
    if any(needle in tag.lower() for tag in prompt.tags):
        return SCORE_CONTENT
    return 0


def search(prompts: Iterable[Prompt], query: str | None) -> list[SearchHit]:
    """Return prompts matching *query*, best first and ties by name.

    An empty or whitespace-only query matches everything with score 0.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return [SearchHit(prompt, 0) for prompt in sorted(prompts, key=lambda p: p.name)]

    hits: list[SearchHit] = []
    for prompt in prompts:
        score = score_prompt(prompt, needle)
        if score:
            hits.append(SearchHit(prompt, score))
    hits.sort(key=lambda hit: (-hit.score, hit.prompt.name))
    return hits


def filter_by_tags(snapshot: RepositorySnapshot, tags: Iterable[str]) -> list[Prompt]:
    """Return snapshot prompts carrying every tag in *tags*, in name order."""
    required = frozenset(tags)
    if not required:
        return list(snapshot.prompts)
    allowed = snapshot.names_with_tags(required)
    return [prompt for prompt in snapshot.prompts if prompt.name in allowed]


def apply_filters(
    snapshot: RepositorySnapshot,
    query: str | None,
    tags: Iterable[str] = (),
) -> list[Prompt]:
    """Search the snapshot, then keep only prompts carrying all *tags*.

    Search ranking is preserved.
    """
    hits = search(snapshot.prompts, query)
    required = frozenset(tags)
    if not required:
        return [hit.prompt for hit in hits]
    allowed = snapshot.names_with_tags(required)
    return [hit.prompt for hit in hits if hit.prompt.name in allowed]
