"""Built-in creation templates and seed prompts for Prompt Shelf.

Creation templates are Jinja2 sources rendered by
:class:`core.templating.TemplateRenderer` with ``name`` and ``title``
variables. Seed prompts are written once into an empty library by
:meth:`core.repository.PromptRepository.ensure_initialized`.

Updates: v0.2.0 - 2026-10-12 - Add role and few-shot creation templates.
Updates: v0.1.0 - 2026-09-30 - Centralise creation templates and default prompts.
"""

from __future__ import annotations

from typing import Dict

DEFAULT_TEMPLATE_NAME = "default"

DEFAULT_TEMPLATE = "# {{ title }}\n\n"

BASIC_TEMPLATE = (
    "# Instruction\n"
    "Describe the task for {{ title }}.\n"
    "\n"
    "# Context\n"
    "Background the model needs before answering.\n"
    "\n"
    "# Input Data\n"
    "The material to work on.\n"
    "\n"
    "# Output Indicator\n"
    "The format and length of the expected answer.\n"
)

ROLE_TEMPLATE = (
    "# Role\n"
    "You are an expert assistant for {{ title }}.\n"
    "\n"
    "# Goal\n"
    "State what a successful answer achieves.\n"
    "\n"
    "# Constraints\n"
    "- Keep the answer focused on the request.\n"
    "- Say so when information is missing.\n"
)

FEW_SHOT_TEMPLATE = (
    "# Task\n"
    "{{ title }}\n"
    "\n"
    "# Examples\n"
    "Input: <example input>\n"
    "Output: <example output>\n"
    "\n"
    "Input: <example input>\n"
    "Output: <example output>\n"
    "\n"
    "# Input\n"
)

CREATION_TEMPLATES: Dict[str, str] = {
    DEFAULT_TEMPLATE_NAME: DEFAULT_TEMPLATE,
    "basic": BASIC_TEMPLATE,
    "role": ROLE_TEMPLATE,
    "few-shot": FEW_SHOT_TEMPLATE,
}

CREATION_TEMPLATE_DESCRIPTIONS: Dict[str, str] = {
    DEFAULT_TEMPLATE_NAME: "Title heading only.",
    "basic": "Instruction, context, input data and output indicator sections.",
    "role": "Role, goal and constraints sections.",
    "few-shot": "Task description followed by worked examples.",
}

# name -> (tags, content)
DEFAULT_PROMPTS: Dict[str, tuple[tuple[str, ...], str]] = {
    "code-review": (
        ("code", "review"),
        "Review the following code. Point out bugs, unclear naming, missing tests "
        "and risky edge cases. Order findings by severity and suggest a concrete fix "
        "for each one.\n",
    ),
    "explain-code": (
        ("code", "learning"),
        "Explain what the following code does, step by step. Start with a one "
        "sentence summary, then walk through the important parts. Assume the reader "
        "knows the language but not this codebase.\n",
    ),
    "commit-message": (
        ("git", "writing"),
        "Write a commit message for the following diff. Use an imperative subject "
        "line under 72 characters, a blank line, and a short body explaining what "
        "changed and why.\n",
    ),
    "summarize": (
        ("writing",),
        "Summarise the following text in five bullet points. Keep the author's "
        "terminology and do not add information that is not in the text.\n",
    ),
    "bug-report": (
        ("bug", "writing"),
        "Turn the following notes into a bug report with the sections: Summary, "
        "Steps to Reproduce, Expected Result, Actual Result, Environment.\n",
    ),
}


def template_names() -> tuple[str, ...]:
    """Return registered creation template names, default first."""
    others = sorted(name for name in CREATION_TEMPLATES if name != DEFAULT_TEMPLATE_NAME)
    return (DEFAULT_TEMPLATE_NAME, *others)


__all__ = [
    "BASIC_TEMPLATE",
    "CREATION_TEMPLATES",
    "CREATION_TEMPLATE_DESCRIPTIONS",
    "DEFAULT_PROMPTS",
    "DEFAULT_TEMPLATE",
    "DEFAULT_TEMPLATE_NAME",
    "FEW_SHOT_TEMPLATE",
    "ROLE_TEMPLATE",
    "template_names",
]
