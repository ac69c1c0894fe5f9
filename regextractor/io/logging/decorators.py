"""``log_step``: start/finish/error events around a method call."""

from __future__ import annotations

import time
from functools import wraps
from typing import Any, Callable, Dict, Optional

from .adapters import StructuredAdapter
from .manager import get_logger


def _try_summary_from(obj: Any) -> Optional[Dict[str, Any]]:
    """Return ``obj.summarize()`` when the object offers one."""
    summarize = getattr(obj, "summarize", None)
    if obj is None or not callable(summarize):
        return None
    return summarize()


def log_step(step_name: Optional[str] = None):
    """
    Decorate a method representing one processing step.

    Emits ``step.start`` and ``step.finish`` (INFO, with ``elapsed`` and the
    result's ``summarize()`` output) or ``step.error`` (with traceback) before
    re-raising. The host's ``logger`` and ``log_context`` attributes are used
    when present.
    """

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            self_obj = args[0] if args else None
            logger = getattr(self_obj, "logger", None) or get_logger(func.__module__)
            ctx = getattr(self_obj, "log_context", None) or {}
            adapter = StructuredAdapter(logger, ctx)
            name = step_name or func.__name__

            adapter.info("step.start", extra={"step": name})
            t0 = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                adapter.exception(
                    "step.error",
                    extra={
                        "step": name,
                        "elapsed": round(time.perf_counter() - t0, 6),
                        "error": str(exc),
                    },
                )
                raise
            adapter.info(
                "step.finish",
                extra={
                    "step": name,
                    "elapsed": round(time.perf_counter() - t0, 6),
                    "summary": _try_summary_from(result),
                },
            )
            return result

        return wrapper

    return decorator


__all__ = ["log_step"]
