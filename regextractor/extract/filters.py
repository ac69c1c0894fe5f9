from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Tuple

from .utils import compile_many


@dataclass(frozen=True)
class LineFilter:
    """
    Include/exclude line filter.

    A line is accepted iff (``includes`` is empty OR it matches at least one
    include) AND it matches none of the ``excludes``. Exclude wins.

    Note that an include list made only of invalid sources compiles to an empty
    include set and therefore accepts every line.
    """

    includes: Tuple[Pattern[str], ...] = ()
    excludes: Tuple[Pattern[str], ...] = ()

    @classmethod
    def from_sources(
        cls,
        includes: Optional[Iterable[str]] = None,
        excludes: Optional[Iterable[str]] = None,
        flags: int = 0,
    ) -> "LineFilter":
        return cls(
            includes=tuple(compile_many(includes or (), flags)),
            excludes=tuple(compile_many(excludes or (), flags)),
        )

    @property
    def is_empty(self) -> bool:
        return not self.includes and not self.excludes

    def accepts(self, line: str) -> bool:
        if any(p.search(line) for p in self.excludes):
            return False
        if not self.includes:
            return True
        return any(p.search(line) for p in self.includes)


ACCEPT_ALL = LineFilter()

__all__ = ["LineFilter", "ACCEPT_ALL"]
