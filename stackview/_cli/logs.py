"""Stackview CLI logging setup.

Logs are written to stderr; stdout only carries rendered tables.

"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import coloredlogs
from humanfriendly.terminal import terminal_supports_colors  # type: ignore

from .._logging import LogLevels

LOGGER = logging.getLogger("stackview")

LOG_FORMAT = "[stackview] %(message)s"
LOG_FORMAT_VERBOSE = "%(levelname)s:%(name)s:%(message)s"
LOG_LEVEL_STYLES: dict[str, dict[str, Any]] = {
    "critical": {"color": "red", "bold": True},
    "debug": {"color": "green"},
    "error": {"color": "red"},
    "verbose": {"color": "cyan"},
    "warning": {"color": 214},
}


def _env_styles(env_var: str, defaults: dict[str, dict[str, Any]]) -> dict[str, Any]:
    """Copy of ``defaults`` updated with the styles encoded in ``env_var``."""
    styles: dict[str, Any] = dict(defaults)
    encoded = os.getenv(env_var)
    if encoded:
        styles.update(coloredlogs.parse_encoded_styles(encoded))  # type: ignore
    return styles


class LogSettings:
    """coloredlogs settings for a combination of CLI flags."""

    def __init__(
        self,
        *,
        debug: int = 0,
        no_color: bool = False,
        verbose: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        """Instantiate class.

        Args:
            debug: Debug level.
            no_color: Disable color in logs.
            verbose: Whether to display verbose logs.
            stream: Stream to log to. Defaults to stderr.

        """
        self.debug = debug
        self.no_color = no_color
        self.verbose = verbose
        self.stream = stream or sys.stderr

    @property
    def level(self) -> LogLevels:
        """Level of the ``stackview`` logger."""
        if self.debug:
            return LogLevels.DEBUG
        if self.verbose:
            return LogLevels.VERBOSE
        return LogLevels.INFO

    @property
    def fmt(self) -> str:
        """Log record format, ``STACKVIEW_LOG_FORMAT`` when set."""
        fmt = os.getenv("STACKVIEW_LOG_FORMAT")
        if fmt:
            return fmt
        if self.debug or self.no_color or self.verbose:
            return LOG_FORMAT_VERBOSE
        return LOG_FORMAT

    def coloredlogs_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``coloredlogs.install``."""
        kwargs: dict[str, Any] = {"fmt": self.fmt, "stream": self.stream}
        if self.no_color:
            kwargs.update(field_styles={}, isatty=False, level_styles={})
        else:
            kwargs.update(
                field_styles=_env_styles("STACKVIEW_LOG_FIELD_STYLES", {}),
                isatty=terminal_supports_colors(self.stream),
                level_styles=_env_styles("STACKVIEW_LOG_LEVEL_STYLES", LOG_LEVEL_STYLES),
            )
        return kwargs


def setup_logging(*, debug: int = 0, no_color: bool = False, verbose: bool = False) -> None:
    """Configure logging for the CLI.

    A debug level of 2 or more also shows botocore's debug logs.

    """
    settings = LogSettings(debug=debug, no_color=no_color, verbose=verbose)
    kwargs = settings.coloredlogs_kwargs()
    coloredlogs.install(settings.level, logger=LOGGER, **kwargs)
    if debug >= 2:
        coloredlogs.install(settings.level, logger=logging.getLogger("botocore"), **kwargs)
    LOGGER.debug("log level set to %s", settings.level.name)
