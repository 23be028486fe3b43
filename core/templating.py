"""Jinja2 templating utilities for templated prompt creation.

Updates: v0.3.1 - 2026-10-19 - Report runtime template failures as TemplateRenderError.
Updates: v0.3.0 - 2026-10-14 - Load user templates from the storage templates directory.
Updates: v0.2.0 - 2026-10-12 - Add contextual hints to Jinja2 syntax errors.
Updates: v0.1.0 - 2026-09-30 - Add strict renderer for built-in creation templates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    StrictUndefined,
    TemplateError,
    TemplateSyntaxError,
    UndefinedError,
)

from prompt_templates import CREATION_TEMPLATES, DEFAULT_TEMPLATE_NAME, template_names

from .exceptions import PromptStorageError, TemplateNotFoundError, TemplateRenderError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".md"


def format_template_syntax_error(template_text: str, exc: TemplateSyntaxError) -> str:
    """Return a descriptive syntax error message with line context and hints."""
    base = f"Template syntax error on line {exc.lineno}: {exc.message}"
    line_text = _line_at(template_text, exc.lineno)
    if line_text:
        snippet = line_text.strip()
        if snippet:
            base = f"{base} | Line {exc.lineno}: {snippet}"
    hint = _delimiter_hint(line_text)
    if hint:
        base = f"{base} Hint: {hint}"
    return base


def _line_at(text: str, number: int) -> str:
    if number <= 0:
        return ""
    lines = text.splitlines()
    if number > len(lines):
        return ""
    return lines[number - 1]


def _delimiter_hint(line_text: str | None) -> str | None:
    if not line_text:
        return None
    if line_text.count("{{") > line_text.count("}}"):
        return "missing closing '}}' for '{{' expression."
    if line_text.count("}}") > line_text.count("{{"):
        return "missing opening '{{' before '}}'."
    if line_text.count("{%") > line_text.count("%}"):
        return "missing closing '%}' for block."
    if line_text.count("%}") > line_text.count("{%"):
        return "missing opening '{%' for '%}'."
    return None


def title_from_name(name: str) -> str:
    """Return a human readable title for a prompt filename such as ``code-review``."""
    words = name.replace("_", " ").replace("-", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words) or name


class TemplateRenderer:
    """Render creation templates with strict variable enforcement.

    Built-in templates come from :mod:`prompt_templates`; files named
    ``<template>.md`` inside *templates_dir* add to (or override) them.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._templates_dir = templates_dir
        self._env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )

    def available(self) -> tuple[str, ...]:
        """Return every known template name, default first."""
        names = list(template_names())
        for extra in sorted(self._user_templates()):
            if extra not in names:
                names.append(extra)
        return tuple(names)

    def source(self, template_name: str | None) -> str:
        """Return the raw Jinja2 source of *template_name*."""
        key = (template_name or DEFAULT_TEMPLATE_NAME).strip()
        user_templates = self._user_templates()
        if key in user_templates:
            try:
                return user_templates[key].read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise PromptStorageError(f"Unable to read template {key}: {exc}") from exc
        if key in CREATION_TEMPLATES:
            return CREATION_TEMPLATES[key]
        raise TemplateNotFoundError(key, self.available())

    def render(self, template_name: str | None, *, name: str, **extra: Any) -> str:
        """Render *template_name* for a prompt called *name*."""
        text = self.source(template_name)
        variables: dict[str, Any] = {"name": name, "title": title_from_name(name)}
        variables.update(extra)
        return self.render_source(text, variables)

    def render_source(self, template_text: str, variables: Mapping[str, Any]) -> str:
        """Render raw template text, raising :class:`TemplateRenderError` on failure."""
        try:
            return self._env.from_string(template_text).render(**variables)
        except TemplateSyntaxError as exc:
            raise TemplateRenderError(format_template_syntax_error(template_text, exc)) from exc
        except UndefinedError as exc:
            raise TemplateRenderError(f"Template variable error: {exc}") from exc
        except TemplateError as exc:
            raise TemplateRenderError(f"Template error: {exc}") from exc
        except Exception as exc:  # runtime errors such as {{ name + 1 }}
            raise TemplateRenderError(f"Template rendering failed: {exc}") from exc

    def _user_templates(self) -> dict[str, Path]:
        if self._templates_dir is None or not self._templates_dir.is_dir():
            return {}
        found: dict[str, Path] = {}
        try:
            for path in self._templates_dir.iterdir():
                if path.suffix == TEMPLATE_SUFFIX and path.is_file() and not path.name.startswith("."):
                    found[path.stem] = path
        except OSError as exc:
            logger.warning("Unable to scan template directory %s: %s", self._templates_dir, exc)
        return found


__all__ = [
    "TEMPLATE_SUFFIX",
    "TemplateRenderer",
    "format_template_syntax_error",
    "title_from_name",
]
