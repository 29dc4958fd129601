# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging helpers for the shapegen package."""

from __future__ import annotations

import logging
from pathlib import Path

# ###############
# Public Interface
# ###############

LOGGER_NAME = "shapegen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``shapegen`` hierarchy.

    Module names that already start with ``shapegen.`` are used unchanged.
    """
    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Configure the ``shapegen`` logger with console output and an optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[shapegen] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(file_handler)

    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
