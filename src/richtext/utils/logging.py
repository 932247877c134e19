"""Opt-in log output for the ``richtext`` package.

The package only creates module loggers; nothing is emitted anywhere until an
embedding application calls :func:`setup_logging`, which routes the package
logger (not the root logger) to a rotating file and, optionally, stderr.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

__all__ = ["setup_logging", "get_logger", "get_log_path"]

PACKAGE_LOGGER = "richtext"
LOG_FILE_NAME = "richtext.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_DIR_ENV = "RICHTEXT_LOG_DIR"

# Third-party loggers that get chatty at DEBUG while Markdown is rendered.
_DEPENDENCY_LOGGERS: tuple[str, ...] = ("markdown_it",)

_state: dict[str, Path | None] = {"log_path": None}


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Send package records to ``<log_dir>/richtext.log`` and return that path.

    A second call is a no-op returning the existing path unless ``force`` is
    set, in which case the previous handlers are closed and replaced.
    ``log_dir`` falls back to ``$RICHTEXT_LOG_DIR`` and then ``~/.richtext/logs``.
    """

    current = _state["log_path"]
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if current is not None and package_logger.handlers and not force:
        return current

    log_path = _resolve_log_dir(log_dir) / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    _detach_handlers(package_logger)
    for handler in _build_handlers(log_path, console, max_bytes, backup_count):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.setLevel(level)

    logging.captureWarnings(True)
    for name in _DEPENDENCY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _state["log_path"] = log_path
    package_logger.debug("Logging to %s", log_path)
    return log_path


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def get_log_path() -> Path | None:
    return _state["log_path"]


def _build_handlers(log_path: Path, console: bool, max_bytes: int, backup_count: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    return handlers


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _resolve_log_dir(log_dir: Path | str | None) -> Path:
    chosen = log_dir or os.environ.get(LOG_DIR_ENV) or Path.home() / ".richtext" / "logs"
    return Path(chosen).expanduser()
