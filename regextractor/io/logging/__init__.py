"""Logging helpers for regextractor.

Library modules only ask for loggers; configuring handlers is left to the
application (see :func:`setup_logging`, used by the command line front end).
"""

from __future__ import annotations

from .manager import LoggerManager, setup_logging, get_logger
from .adapters import StructuredAdapter
from .timing import Timer
from .decorators import log_step
from .formatters import SimpleColorFormatter, JSONFormatter

__all__ = [
    "LoggerManager",
    "setup_logging",
    "get_logger",
    "StructuredAdapter",
    "Timer",
    "log_step",
    "SimpleColorFormatter",
    "JSONFormatter",
]
