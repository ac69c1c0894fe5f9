"""
Named extraction patterns.

A :class:`NamedRegex` pairs a display/column name with a compiled regular
expression whose capture group holds a numeric value. Instances are built from
user-editable strings on every extraction run; a source that does not compile
simply yields no instance.

Examples
--------
>>> from regextractor.extract.patterns import NamedRegex
>>> nr = NamedRegex.from_source("loss", r"loss=(\\S+)")
>>> nr.try_extract("step 3 loss=0.25")
0.25
>>> NamedRegex.from_source("broken", "(unclosed") is None
True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Tuple

from .utils import compile_or_none, parse_float
from ..io.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class NamedRegex:
    """
    A named pattern with one designated numeric capture slot.

    :param name: non-empty column identifier.
    :param pattern: compiled regular expression.
    :param value_group: index (or group name) of the capture holding the value.
    """

    name: str
    pattern: Pattern[str]
    value_group: int | str = 1

    @classmethod
    def from_source(
        cls,
        name: str,
        source: str,
        value_group: int | str = 1,
        flags: int = 0,
    ) -> Optional["NamedRegex"]:
        """
        Build a NamedRegex from UI strings.

        :returns: the instance, or None when ``name`` is empty or ``source``
                  does not compile.
        """
        if not name:
            return None
        patt = compile_or_none(source, flags)
        if patt is None:
            return None
        return cls(name=name, pattern=patt, value_group=value_group)

    @property
    def source(self) -> str:
        return self.pattern.pattern

    @property
    def has_value_group(self) -> bool:
        if isinstance(self.value_group, str):
            return self.value_group in self.pattern.groupindex
        return 1 <= self.value_group <= self.pattern.groups

    def try_extract(self, line: str, use_group: bool = True) -> Optional[float]:
        """
        Extract the numeric value of ``line``, or None.

        With ``use_group`` the designated capture group is parsed; a pattern
        without that group never yields a value. Without it, the whole match
        is parsed instead.
        """
        if use_group and not self.has_value_group:
            return None
        m = self.pattern.search(line)
        if m is None:
            return None
        token = m.group(self.value_group) if use_group else m.group(0)
        return parse_float(token)


def compile_patterns(
    pairs: Iterable[Tuple[str, str]],
    flags: int = 0,
) -> List[NamedRegex]:
    """
    Build the active pattern set from ``(name, source)`` pairs.

    Invalid entries are dropped, as are later entries reusing a name that is
    already active, so that column names stay unique.
    """
    active: List[NamedRegex] = []
    seen: set[str] = set()
    for name, source in pairs:
        nr = NamedRegex.from_source(name, source, flags=flags)
        if nr is None:
            logger.debug(
                "pattern.dropped", extra={"pattern_name": name, "source": source}
            )
            continue
        if nr.name in seen:
            logger.debug("pattern.duplicate", extra={"pattern_name": name})
            continue
        seen.add(nr.name)
        active.append(nr)
    return active


__all__ = ["NamedRegex", "compile_patterns"]
