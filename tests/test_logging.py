"""Tests for the logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from richtext.utils import logging as logging_utils


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("richtext")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logging.captureWarnings(False)


def test_setup_logging_writes_to_rotating_file(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"

    log_path = logging_utils.setup_logging(level=logging.INFO, log_dir=log_dir, console=False, force=True)

    logger = logging_utils.get_logger("richtext.tests")
    logger.info("Logging smoke test")
    for handler in logging.getLogger("richtext").handlers:
        handler.flush()

    assert log_path == log_dir / "richtext.log"
    assert logging_utils.get_log_path() == log_path
    assert "Logging smoke test" in log_path.read_text(encoding="utf-8")


def test_setup_logging_respects_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RICHTEXT_LOG_DIR", str(tmp_path / "env-logs"))

    log_path = logging_utils.setup_logging(console=False, force=True)

    assert log_path.parent == tmp_path / "env-logs"
    assert log_path.parent.exists()


def test_setup_logging_is_idempotent_without_force(tmp_path: Path) -> None:
    first = logging_utils.setup_logging(log_dir=tmp_path / "a", console=False, force=True)

    second = logging_utils.setup_logging(log_dir=tmp_path / "b", console=False)

    assert second == first
    assert len(logging.getLogger("richtext").handlers) == 1


def test_get_logger_stays_in_package_namespace() -> None:
    assert logging_utils.get_logger("importers").name == "richtext.importers"
    assert logging_utils.get_logger("richtext.create").name == "richtext.create"
    assert logging_utils.get_logger("richtext").name == "richtext"
