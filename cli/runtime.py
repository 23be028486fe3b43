"""Runtime boot helpers for Prompt Shelf CLI.

Updates:
  v0.2.0 - 2026-10-14 - Route interactive session logs to a file so they never draw over the UI.
  v0.1.0 - 2026-09-30 - Extract logging configuration helpers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOGGING_CONF = Path("config/logging.conf")


def setup_logging(
    logging_conf_path: Path | None,
    *,
    verbose: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure logging using *logging_conf_path* when available.

    Without an INI file, records go to stderr, or to *log_file* when given.
    Calling this again replaces the previous configuration.
    """
    path = logging_conf_path or DEFAULT_LOGGING_CONF
    config_error: Exception | None = None
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (OSError, KeyError, ValueError, RuntimeError) as exc:
            config_error = exc

    handlers: list[logging.Handler] | None = None
    file_error: OSError | None = None
    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers = [logging.FileHandler(log_file, encoding="utf-8")]
        except OSError as exc:
            # The terminal belongs to the UI; drop records rather than corrupt it.
            handlers = [logging.NullHandler()]
            file_error = exc
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    runtime_logger = logging.getLogger("prompt_shelf.runtime")
    if config_error is not None:
        runtime_logger.warning("Ignoring logging configuration %s: %s", path, config_error)
    if file_error is not None:
        runtime_logger.warning("Unable to open log file %s: %s", log_file, file_error)
