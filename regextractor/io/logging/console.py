"""ANSI level colors and terminal color detection."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

RESET = "\033[0m"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}


def _is_a_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def console_supports_color(
    force: Optional[bool] = None, stream: Optional[TextIO] = None
) -> bool:
    """
    Decide whether to emit ANSI colors.

    ``NO_COLOR`` or ``force=False`` disable, ``force=True`` (or
    ``FORCE_COLOR=1``) enables, otherwise colors are used only on a TTY.
    """
    if os.getenv("NO_COLOR") or force is False:
        return False
    if force is None:
        force = os.getenv("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    if force:
        return True
    return _is_a_tty(stream if stream is not None else sys.stderr)


__all__ = ["RESET", "LEVEL_COLORS", "console_supports_color"]
