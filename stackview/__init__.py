"""Set package version."""

from __future__ import annotations

import logging

from ._logging import LogLevels, StackviewLogger  # noqa: F401

logging.setLoggerClass(StackviewLogger)

__version__: str = "0.0.0"
"""Version of the Python package presented as a :class:`string`.

Dynamically set upon release by `setuptools_scm <https://github.com/pypa/setuptools_scm>`__.

"""
