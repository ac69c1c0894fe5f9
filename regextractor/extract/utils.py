from __future__ import annotations

import math
import re
from typing import Any, Iterable, List, Optional, Pattern

from tqdm.auto import tqdm

# plain float literal: 12, -3.5, .5, 5., 1e-3, +2.0E+10
FLOAT_LITERAL_RE = re.compile(
    r"[+\-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[Ee][+\-]?\d+)?"
)

# exceptions re.compile can raise for hostile or malformed sources
_COMPILE_ERRORS = (re.error, TypeError, ValueError, OverflowError, RecursionError)


def parse_float(token: Optional[str]) -> Optional[float]:
    """
    Parse ``token`` as a standard floating-point literal.

    Surrounding whitespace is ignored. Returns None for anything else,
    including ``nan``/``inf`` words, digit separators and empty strings.
    """
    if token is None:
        return None
    s = token.strip()
    if not FLOAT_LITERAL_RE.fullmatch(s):
        return None
    value = float(s)
    # overflowing exponents such as 1e999
    if not math.isfinite(value):
        return None
    return value


def compile_or_none(source: Optional[str], flags: int = 0) -> Optional[Pattern[str]]:
    """Compile ``source``; return None when it is not a usable pattern."""
    if source is None:
        return None
    try:
        return re.compile(source, flags)
    except _COMPILE_ERRORS:
        return None


def compile_many(sources: Iterable[str], flags: int = 0) -> List[Pattern[str]]:
    """Compile every source, silently dropping the invalid ones."""
    out: List[Pattern[str]] = []
    for src in sources or ():
        patt = compile_or_none(src, flags)
        if patt is not None:
            out.append(patt)
    return out


def is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def iter_progress(
    iterable: Iterable[Any], verbose: int = 0, desc: str = "", unit: str = ""
) -> Iterable[Any]:
    """
    Wrap ``iterable`` in a tqdm progress bar when ``verbose >= 2``.

    :param verbose: 0=silent, 1=log-only, 2+=progress bar.
    """
    if verbose >= 2:
        return tqdm(iterable, desc=desc, unit=unit)
    return iterable
