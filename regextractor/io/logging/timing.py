from __future__ import annotations

import logging
import time
from contextlib import ContextDecorator
from typing import Optional


class Timer(ContextDecorator):
    """
    Measure elapsed wall time and log it at DEBUG on exit.

    >>> with Timer("update", logger=get_logger(__name__)) as t:
    ...     session.update_data_table()
    >>> t.elapsed
    """

    def __init__(
        self, label: Optional[str] = None, logger: Optional[logging.Logger] = None
    ):
        self.label = label or "timer"
        self.logger = logger or logging.getLogger("regextractor.timer")
        self._start: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        start = self._start if self._start is not None else time.perf_counter()
        self.elapsed = round(time.perf_counter() - start, 6)
        self.logger.debug(
            "timer.elapsed", extra={"label": self.label, "elapsed": self.elapsed}
        )
        return False


__all__ = ["Timer"]
