# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the logging helpers."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from shapegen.logging import LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    """Remove whatever configure_logging installed."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_get_logger_names() -> None:
    assert get_logger().name == "shapegen"
    assert get_logger("shapegen").name == "shapegen"
    assert get_logger("shapegen.codegen.director").name == "shapegen.codegen.director"
    assert get_logger("plugin").name == "shapegen.plugin"


def test_configure_logging_levels() -> None:
    assert configure_logging().level == logging.INFO
    assert configure_logging(verbose=True).level == logging.DEBUG


def test_configure_logging_does_not_duplicate_handlers() -> None:
    configure_logging()
    logger = configure_logging()
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_writes_to_stderr(capsys: pytest.CaptureFixture) -> None:
    configure_logging()
    get_logger("test").info("hello")
    assert "[shapegen] INFO hello" in capsys.readouterr().err


def test_configure_logging_with_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"
    logger = configure_logging(verbose=True, log_file=log_file)
    assert len(logger.handlers) == 2
    get_logger("test").debug("details")
    assert "DEBUG shapegen.test: details" in log_file.read_text(encoding="utf-8")
