# regextractor/extract/engine.py
"""
Line-by-line extraction of named numeric series into a :class:`DataTable`.

This module provides:
- ExtractionEngine: one-pass scanner (decode, split, filter, match, record).
- extract_data(...): functional wrapper around a default engine.
- extract_from_sources(...): same, starting from raw pattern strings as
  stored in configuration (invalid ones are dropped before the run).

Examples
--------
>>> from regextractor.extract import extract_from_sources
>>> table = extract_from_sources(
...     b"t=10 a=5\\nt=20 a=7\\n", [("t", r"t=(\\d+)"), ("a", r"a=(\\d+)")],
...     base_column_name="t",
... )
>>> list(table.aligned_pairs("a"))
[(10.0, 5.0), (20.0, 7.0)]
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from .exceptions import ExtractionError
from .filters import ACCEPT_ALL, LineFilter
from .normalize import Content, decode_content, iter_lines
from .patterns import NamedRegex, compile_patterns
from .table import DataTable
from .utils import iter_progress
from ..io.logging import get_logger, log_step


class ExtractionEngine:
    """
    Stateless extraction engine.

    :param use_regex_group: True to read each pattern's designated capture
                            group, False to parse the whole match as the value.
    :param verbose: 0=silent, 1=debug counters, 2+=progress bar over lines.
    :param logger: logger used for step events (defaults to this module's).
    """

    def __init__(
        self,
        use_regex_group: bool = True,
        verbose: int = 0,
        logger: Optional[logging.Logger] = None,
    ):
        self.use_regex_group = bool(use_regex_group)
        self.verbose = int(verbose)
        self.logger = logger or get_logger(__name__)
        self.log_context: Dict[str, object] = {}

    def __repr__(self) -> str:
        return (
            f"ExtractionEngine(use_regex_group={self.use_regex_group}, "
            f"verbose={self.verbose})"
        )

    def extract(
        self,
        content: Content,
        patterns: Sequence[NamedRegex],
        line_filter: Optional[LineFilter] = None,
        base_column_name: Optional[str] = None,
    ) -> DataTable:
        """
        Scan ``content`` and build the aligned table.

        :param content: raw bytes (lossy UTF-8) or text.
        :param patterns: active patterns; each becomes one column.
        :param line_filter: include/exclude filter, accept-all when None.
        :param base_column_name: column supplying x values; ignored unless it
                                 names one of ``patterns``.
        :raises ExtractionError: when ``patterns`` is empty or ``content`` is
                                 not text; raised before the logged
                                 ``extract`` step begins.
        """
        patterns = list(patterns)
        if not patterns:
            raise ExtractionError("no valid patterns to extract")
        names = [p.name for p in patterns]
        if len(set(names)) != len(names):
            raise ExtractionError(f"pattern names must be unique: {names}")
        text = decode_content(content)
        flt = line_filter if line_filter is not None else ACCEPT_ALL
        return self._scan(text, patterns, flt, base_column_name)

    @log_step("extract")
    def _scan(
        self,
        text: str,
        patterns: Sequence[NamedRegex],
        flt: LineFilter,
        base_column_name: Optional[str],
    ) -> DataTable:
        table = DataTable.with_columns([p.name for p in patterns])
        seen = 0
        lines = iter_progress(
            iter_lines(text), verbose=self.verbose, desc="extract", unit="line"
        )
        for line in lines:
            seen += 1
            if not flt.accepts(line):
                continue
            table.push_row(
                {
                    p.name: p.try_extract(line, use_group=self.use_regex_group)
                    for p in patterns
                }
            )

        if base_column_name is not None and base_column_name in table:
            table.set_base_column(base_column_name)

        if self.verbose >= 1:
            self.logger.debug(
                "extract.counts",
                extra={
                    "lines": seen,
                    "accepted": table.n_rows,
                    "rejected": seen - table.n_rows,
                    "base": table.base_column,
                },
            )
        return table


_default_engine = ExtractionEngine()


def extract_data(
    content: Content,
    patterns: Sequence[NamedRegex],
    line_filter: Optional[LineFilter] = None,
    base_column_name: Optional[str] = None,
    use_regex_group: bool = True,
) -> DataTable:
    """Run one extraction with a default-configured engine."""
    engine = (
        _default_engine
        if use_regex_group == _default_engine.use_regex_group
        else ExtractionEngine(use_regex_group=use_regex_group)
    )
    return engine.extract(
        content, patterns, line_filter=line_filter, base_column_name=base_column_name
    )


def extract_from_sources(
    content: Content,
    named_patterns: Iterable[Tuple[str, str]],
    includes: Optional[Iterable[str]] = None,
    excludes: Optional[Iterable[str]] = None,
    base_column_name: Optional[str] = None,
    use_regex_group: bool = True,
) -> DataTable:
    """
    Extraction from the configuration boundary: pattern sources as strings.

    Sources that fail to compile, and entries with empty names, are dropped;
    if nothing usable remains :class:`ExtractionError` is raised.
    """
    return extract_data(
        content,
        compile_patterns(named_patterns),
        line_filter=LineFilter.from_sources(includes, excludes),
        base_column_name=base_column_name,
        use_regex_group=use_regex_group,
    )


__all__ = ["ExtractionEngine", "extract_data", "extract_from_sources"]
