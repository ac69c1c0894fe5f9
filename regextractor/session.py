"""
Headless session state: series definitions, filters and the current file.

A renderer draws each visible :class:`SeriesLine` from its ``data_points``;
everything else here is configuration that survives a restart via
:meth:`ExtractorSession.save` / :meth:`ExtractorSession.load`. Plot points and
the extracted table are never persisted.

Example
-------
>>> from regextractor.io.file import SelectedFile
>>> s = ExtractorSession()
>>> _ = s.series.add_line(SeriesLine(name="t", regex=r"t=(\\d+)"))
>>> _ = s.series.add_line(SeriesLine(name="a", regex=r"a=(\\d+)"))
>>> s.series.set_base_line(0)
>>> s.data_file.set_file(SelectedFile("run.log", b"t=10 a=5\\nt=20 a=7\\n"))
>>> table = s.update_data_table()
>>> s.series.lines[1].data_points.tolist()
[[10.0, 5.0], [20.0, 7.0]]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import numpy as np

from .config import FilterConfig, dump_mapping, load_mapping, require_mapping
from .extract.engine import ExtractionEngine
from .extract.exceptions import ConfigError, ExtractionError
from .extract.patterns import NamedRegex
from .extract.table import DataTable
from .extract.utils import compile_or_none
from .io.file import DataFile
from .io.logging import Timer, get_logger

logger = get_logger(__name__)


def _empty_points() -> np.ndarray:
    return np.empty((0, 2), dtype=float)


@dataclass
class SeriesLine:
    """One user-defined series: name, pattern source and display attributes."""

    name: str = ""
    regex: str = ""
    color: str = "#ffffff"
    filled: bool = False
    visible: bool = True
    data_points: np.ndarray = field(default_factory=_empty_points, repr=False)

    @property
    def is_regex_valid(self) -> bool:
        return compile_or_none(self.regex) is not None

    def named_regex(self) -> Optional[NamedRegex]:
        return NamedRegex.from_source(self.name, self.regex)

    def update(self, table: DataTable) -> None:
        """Load this series' aligned points, or clear them if it has no column."""
        if self.name in table:
            self.data_points = table.aligned_array(self.name)
        else:
            self.reset()

    def reset(self) -> None:
        self.data_points = _empty_points()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "regex": self.regex,
            "color": self.color,
            "filled": self.filled,
            "visible": self.visible,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeriesLine":
        if not isinstance(data, dict):
            raise ConfigError(f"series entry must be a mapping, got {data!r}")
        return cls(
            name=str(data.get("name", "")),
            regex=str(data.get("regex", "")),
            color=str(data.get("color", "#ffffff")),
            filled=bool(data.get("filled", False)),
            visible=bool(data.get("visible", True)),
        )


@dataclass
class SeriesSet:
    """Ordered series plus the index of the one used as the x axis."""

    lines: List[SeriesLine] = field(default_factory=list)
    selected_base_line: Optional[int] = None

    def __len__(self) -> int:
        return len(self.lines)

    def add_line(self, line: Optional[SeriesLine] = None) -> SeriesLine:
        line = line if line is not None else SeriesLine()
        self.lines.append(line)
        return line

    def remove_line(self, index: int) -> SeriesLine:
        """Remove a series; the base selection keeps following its line."""
        removed = self.lines.pop(index)
        base = self.selected_base_line
        if base is not None:
            if base == index:
                self.selected_base_line = None
            elif base > index:
                self.selected_base_line = base - 1
        return removed

    def set_base_line(self, index: Optional[int]) -> None:
        if index is not None and not 0 <= index < len(self.lines):
            raise IndexError(f"no series at index {index}")
        self.selected_base_line = index

    @property
    def base_line_name(self) -> Optional[str]:
        if self.selected_base_line is None:
            return None
        return self.lines[self.selected_base_line].name

    def named_regexes(self) -> List[NamedRegex]:
        """Active patterns: invalid ones and repeated names are left out."""
        out: List[NamedRegex] = []
        seen: set[str] = set()
        for line in self.lines:
            nr = line.named_regex()
            if nr is None or nr.name in seen:
                continue
            seen.add(nr.name)
            out.append(nr)
        return out

    def visible_lines(self) -> Iterator[SeriesLine]:
        return (ln for ln in self.lines if ln.visible)

    def update(self, table: DataTable) -> None:
        """Refresh plot points; the base series itself is not drawn."""
        for ix, line in enumerate(self.lines):
            if ix == self.selected_base_line:
                line.reset()
                continue
            line.update(table)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines": [ln.to_dict() for ln in self.lines],
            "selected_base_line": self.selected_base_line,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SeriesSet":
        d = require_mapping(data, "series")
        raw_lines = d.get("lines", [])
        if not isinstance(raw_lines, list):
            raise ConfigError(f"series lines must be a list, got {raw_lines!r}")
        lines = [SeriesLine.from_dict(x) for x in raw_lines]
        base = d.get("selected_base_line")
        # bool is an int subclass but never a valid index
        if isinstance(base, bool) or not (
            isinstance(base, int) and 0 <= base < len(lines)
        ):
            base = None
        return cls(lines=lines, selected_base_line=base)


class ExtractorSession:
    """
    Current file, filters and series, with the update action tying them to
    the extraction engine.
    """

    def __init__(
        self,
        series: Optional[SeriesSet] = None,
        filters: Optional[FilterConfig] = None,
        data_file: Optional[DataFile] = None,
    ):
        self.series = series if series is not None else SeriesSet()
        self.filters = filters if filters is not None else FilterConfig()
        self.data_file = data_file if data_file is not None else DataFile()
        self.table: Optional[DataTable] = None
        self.last_error: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"ExtractorSession(file={self.data_file.file_name!r}, "
            f"series={len(self.series)}, base={self.series.base_line_name!r})"
        )

    def update_data_table(self) -> Optional[DataTable]:
        """
        Re-extract the current file with the current configuration.

        On success every series receives fresh points and the table is
        returned. Without a file, or on a run-level failure, the existing
        points are left untouched and None is returned.
        """
        selected = self.data_file.poll()
        if selected is None:
            return None
        engine = ExtractionEngine(use_regex_group=self.filters.use_regex_group)
        engine.log_context = {"file": selected.file_name}
        try:
            with Timer("update_data_table", logger=logger):
                table = engine.extract(
                    selected.content,
                    self.series.named_regexes(),
                    line_filter=self.filters.build_filter(),
                    base_column_name=self.series.base_line_name,
                )
        except ExtractionError as exc:
            self.last_error = str(exc)
            logger.warning(
                "session.update_failed",
                extra={"file": selected.file_name, "error": str(exc)},
            )
            return None
        self.last_error = None
        self.table = table
        self.series.update(table)
        return table

    def to_dict(self) -> Dict[str, Any]:
        return {
            "series": self.series.to_dict(),
            "filters": self.filters.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ExtractorSession":
        d = require_mapping(data, "session")
        return cls(
            series=SeriesSet.from_dict(d.get("series")),
            filters=FilterConfig.from_dict(d.get("filters")),
        )

    def save(self, path: Union[str, Path]) -> Path:
        return dump_mapping(self.to_dict(), path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ExtractorSession":
        return cls.from_dict(load_mapping(path))


__all__ = ["SeriesLine", "SeriesSet", "ExtractorSession"]
