"""Settings management utilities for Prompt Shelf configuration.

Updates:
  v0.3.0 - 2026-10-14 - Add log file and default template settings.
  v0.2.0 - 2026-10-05 - Read ``.env`` values through python-dotenv without touching os.environ.
  v0.1.0 - 2026-09-28 - Introduce PromptShelfSettings with JSON and environment sources.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from prompt_templates import DEFAULT_TEMPLATE_NAME

ENV_PREFIX = "PROMPT_SHELF_"
DEFAULT_STORAGE_PATH = Path("~") / ".prompt-shelf"
DEFAULT_CONFIG_JSON = Path("~") / ".config" / "prompt-shelf" / "config.json"
DEFAULT_EDITOR = "vi"
LOG_FILE_NAME = "prompt-shelf.log"
_DOTENV_FALLBACK_PATH = ".env"

# field -> keys looked up as PROMPT_SHELF_<KEY> in the environment and .env
_ENV_KEYS: dict[str, tuple[str, ...]] = {
    "storage_path": ("STORAGE_PATH", "PATH"),
    "editor": ("EDITOR",),
    "default_template": ("DEFAULT_TEMPLATE", "TEMPLATE"),
    "seed_defaults": ("SEED_DEFAULTS",),
    "log_file": ("LOG_FILE",),
}

_JSON_KEYS = tuple(_ENV_KEYS)


def _default_editor() -> str:
    """Return ``$VISUAL``, then ``$EDITOR``, then ``vi``."""
    for variable in ("VISUAL", "EDITOR"):
        value = os.getenv(variable, "").strip()
        if value:
            return value
    return DEFAULT_EDITOR


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv(f"{ENV_PREFIX}ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class SettingsError(Exception):
    """Raised when Prompt Shelf configuration cannot be loaded or validated."""


class PromptShelfSettings(BaseSettings):
    """Application configuration sourced from keyword overrides, JSON and the environment."""

    storage_path: Path = Field(
        default=DEFAULT_STORAGE_PATH,
        description="Directory holding the prompts/ folder and the initialization flag.",
    )
    editor: str = Field(
        default_factory=_default_editor,
        description="Command used to edit prompts; split with shell rules.",
    )
    default_template: str = Field(
        default=DEFAULT_TEMPLATE_NAME,
        description="Creation template preselected by 'create' and the create dialog.",
    )
    seed_defaults: bool = Field(
        default=True,
        description="Write the built-in example prompts into an empty library on first run.",
    )
    log_file: Path | None = Field(
        default=None,
        description="Log destination for the interactive session; defaults under storage_path.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": ENV_PREFIX,
            "case_sensitive": False,
            "populate_by_name": True,
            "validate_default": True,
            "extra": "ignore",
        },
    )

    @field_validator("storage_path", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None or not str(value).strip():
            raise ValueError("a filesystem path is required")
        return Path(str(value).strip()).expanduser().resolve()

    @field_validator("log_file", mode="before")
    def _normalise_log_file(cls, value: Any) -> Path | None:
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        return Path(text).expanduser()

    @field_validator("editor", mode="before")
    def _strip_editor(cls, value: Any) -> str:
        text = str(value or "").strip()
        return text or _default_editor()

    @field_validator("default_template", mode="before")
    def _strip_template(cls, value: Any) -> str:
        text = str(value or "").strip()
        return text or DEFAULT_TEMPLATE_NAME

    @property
    def prompts_path(self) -> Path:
        return self.storage_path / "prompts"

    @property
    def templates_path(self) -> Path:
        return self.storage_path / "templates"

    @property
    def resolved_log_file(self) -> Path:
        """Return the interactive log destination."""
        return self.log_file or self.storage_path / LOG_FILE_NAME

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(storage_path=...)).
            2. JSON configuration file.
            3. Environment variables, then ``.env`` entries.
        """

        def env_with_dotenv(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            dotenv_data = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_data.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            for field, keys in _ENV_KEYS.items():
                for key in keys:
                    val = _lookup(f"{ENV_PREFIX}{key}")
                    if val is not None:
                        data[field] = val
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_dotenv),
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(f"{ENV_PREFIX}CONFIG_JSON")
            if explicit_path and explicit_path.strip():
                path = Path(explicit_path.strip()).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = DEFAULT_CONFIG_JSON.expanduser()
                if not path.exists():
                    return {}
            try:
                raw_contents = path.read_text(encoding="utf-8")
            except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                raise SettingsError(f"Unable to read configuration file: {path}") from exc
            try:
                data = json.loads(raw_contents)
            except json.JSONDecodeError as exc:
                raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
            if not isinstance(data, dict):
                raise SettingsError(f"Configuration file {path} must contain a JSON object")
            mapping_data = cast("Mapping[object, Any]", data)
            data_dict = {str(key): value for key, value in mapping_data.items()}
            unknown = sorted(key for key in data_dict if key not in _JSON_KEYS)
            if unknown:
                logger.warning(
                    "Ignoring unknown key(s) %s in configuration file %s",
                    ", ".join(unknown),
                    path,
                )
            return {key: data_dict[key] for key in _JSON_KEYS if key in data_dict}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptShelfSettings:
    """Return validated settings, raising SettingsError on failure.

    ``None`` overrides are dropped so CLI flags that were not given fall through
    to the lower-priority sources.
    """
    cleaned = {key: value for key, value in overrides.items() if value is not None}
    try:
        return PromptShelfSettings(**cleaned)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError(f"Invalid Prompt Shelf configuration: {exc}") from exc


logger = logging.getLogger("prompt_shelf.settings")
