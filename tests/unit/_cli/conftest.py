"""Pytest fixtures and plugins."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def restore_loggers() -> Iterator[None]:
    """Undo the handlers and levels installed by ``setup_logging``.

    The handlers would otherwise keep writing to the streams of a finished
    ``CliRunner`` invocation.

    """
    loggers = [logging.getLogger(name) for name in ("stackview", "botocore")]
    saved = [(logger, list(logger.handlers), logger.level) for logger in loggers]
    yield
    for logger, handlers, level in saved:
        logger.handlers[:] = handlers
        logger.setLevel(level)
