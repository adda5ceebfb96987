"""Stackview logging."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, MutableMapping


class LogLevels(IntEnum):
    """Log levels used by Stackview, including ``VERBOSE``."""

    DEBUG = logging.DEBUG
    VERBOSE = 15
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


logging.addLevelName(LogLevels.VERBOSE, LogLevels.VERBOSE.name)


class PrefixAdaptor(logging.LoggerAdapter):  # type: ignore
    """LoggerAdapter that prefixes messages, e.g. with a directory name.

    Example:
        >>> logger = PrefixAdaptor("infra", logging.getLogger("example"))
        ... logger.info("my message")  # infra:my message

    """

    def __init__(self, prefix: str, logger: logging.Logger) -> None:
        """Instantiate class.

        Args:
            prefix: Message prefix.
            logger: Logger where the prefixed messages will be sent.

        """
        super().__init__(logger, {})
        self.prefix = prefix

    def process(
        self, msg: Exception | str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        """Prefix the message."""
        return f"{self.prefix}:{msg}", kwargs

    def verbose(self, msg: Exception | str, *args: Any, **kwargs: Any) -> None:
        """Delegate a verbose call to the underlying logger."""
        self.log(LogLevels.VERBOSE, msg, *args, **kwargs)


class StackviewLogger(logging.Logger):
    """Logger with a ``verbose`` method."""

    def verbose(self, msg: Exception | str, *args: Any, **kwargs: Any) -> None:
        """Log 'msg % args' with severity `VERBOSE`."""
        if self.isEnabledFor(LogLevels.VERBOSE):
            self._log(LogLevels.VERBOSE, msg, args, **kwargs)
