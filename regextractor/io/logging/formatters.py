"""Colored text and one-line JSON formatters."""

from __future__ import annotations

import json
import logging
from typing import Optional

from .console import LEVEL_COLORS, RESET, console_supports_color

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class SimpleColorFormatter(logging.Formatter):
    """
    Text formatter that colors the level name when the console supports it.

    :param force_color: True/False to override detection, None to detect.
    """

    def __init__(
        self,
        fmt: str = TEXT_FORMAT,
        datefmt: Optional[str] = DATE_FORMAT,
        force_color: Optional[bool] = None,
    ):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = console_supports_color(force_color)

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)
        orig = record.levelname
        record.levelname = f"{LEVEL_COLORS.get(orig, '')}{orig}{RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = orig


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line: ts, level, logger, message, and an ``extra``
    object holding whatever structured fields the call attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = {
            k: v
            for k, v in record.__dict__.items()
            if k not in _RECORD_ATTRS and not k.startswith("_")
        }
        if extras:
            base["extra"] = extras
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, default=str, ensure_ascii=False)


__all__ = ["SimpleColorFormatter", "JSONFormatter", "TEXT_FORMAT", "DATE_FORMAT"]
