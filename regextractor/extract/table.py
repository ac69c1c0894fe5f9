# regextractor/extract/table.py
"""
Column-aligned numeric table produced by an extraction run.

Every column holds exactly one entry per accepted line; a line that a pattern
did not match still gets an entry (NaN) so that row ``k`` refers to the same
source line in every column. That positional alignment is what lets a base
column and a dependent column, extracted by different patterns, be paired
point-by-point.

Examples
--------
>>> t = DataTable.with_columns(["t", "a"])
>>> t.push_row({"t": 10.0, "a": 5.0})
>>> t.push_row({"t": 20.0})
>>> t.set_base_column("t")
>>> list(t.aligned_pairs("a"))
[(10.0, 5.0)]
"""

from __future__ import annotations

import math
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .exceptions import ColumnNotFoundError
from .utils import is_missing

NAN = float("nan")


class DataTable:
    """
    Named float columns sharing one row axis, with an optional base column.

    :param names: column names, unique, in display order.
    """

    def __init__(self, names: Sequence[str] = ()):
        names = list(names)
        if len(set(names)) != len(names):
            dupes = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"duplicate column names: {dupes}")
        self._columns: Dict[str, List[float]] = {n: [] for n in names}
        self._n_rows = 0
        self._base: Optional[str] = None

    @classmethod
    def with_columns(cls, names: Sequence[str]) -> "DataTable":
        """Create an empty table with the given schema."""
        return cls(names)

    def __repr__(self) -> str:
        return (
            f"DataTable(columns={self.column_names}, rows={self._n_rows}, "
            f"base={self._base!r})"
        )

    def __len__(self) -> int:
        return self._n_rows

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    # ------------------------------
    # building
    # ------------------------------
    def push_row(self, values: Mapping[str, Optional[float]]) -> None:
        """
        Append one row. Columns missing from ``values`` (or given None/NaN)
        receive NaN; names outside the schema are ignored.
        """
        for name, col in self._columns.items():
            v = values.get(name)
            col.append(NAN if is_missing(v) else float(v))
        self._n_rows += 1

    def set_base_column(self, name: Optional[str]) -> None:
        """Select the column supplying x values; None clears the selection."""
        if name is not None and name not in self._columns:
            raise ColumnNotFoundError(name)
        self._base = name

    # ------------------------------
    # read-only queries
    # ------------------------------
    @property
    def column_names(self) -> List[str]:
        return list(self._columns)

    @property
    def base_column(self) -> Optional[str]:
        return self._base

    @property
    def n_rows(self) -> int:
        return self._n_rows

    def _get(self, name: str) -> List[float]:
        try:
            return self._columns[name]
        except KeyError:
            raise ColumnNotFoundError(name) from None

    def column(self, name: str) -> np.ndarray:
        """Return a copy of column ``name`` as a float array (NaN for gaps)."""
        return np.array(self._get(name), dtype=float)

    def aligned_pairs(self, name: str) -> Iterator[Tuple[float, float]]:
        """
        Yield ``(x, y)`` for every row where ``name`` has a value.

        ``x`` is the base column's value when a base column is set, else the
        row index. Rows where either coordinate is missing are skipped.
        """
        ys = self._get(name)
        xs = self._columns[self._base] if self._base is not None else None
        return self._iter_pairs(xs, ys)

    @staticmethod
    def _iter_pairs(
        xs: Optional[List[float]], ys: List[float]
    ) -> Iterator[Tuple[float, float]]:
        for i, y in enumerate(ys):
            if math.isnan(y):
                continue
            if xs is None:
                yield float(i), y
                continue
            x = xs[i]
            if math.isnan(x):
                continue
            yield x, y

    def aligned_array(self, name: str) -> np.ndarray:
        """:meth:`aligned_pairs` materialized as an ``(n, 2)`` float array."""
        pairs = list(self.aligned_pairs(name))
        if not pairs:
            return np.empty((0, 2), dtype=float)
        return np.asarray(pairs, dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """
        Return the table as a :class:`pandas.DataFrame` (one column per
        pattern, NaN for gaps, RangeIndex over accepted lines).
        """
        df = pd.DataFrame(
            {n: pd.Series(col, dtype=float) for n, col in self._columns.items()},
            columns=self.column_names,
        )
        df.index.name = "row"
        return df

    def summarize(self) -> Dict[str, object]:
        """Small dict used by step logging."""
        return {
            "rows": self._n_rows,
            "columns": len(self._columns),
            "base": self._base,
            "values": {
                n: sum(1 for v in col if not math.isnan(v))
                for n, col in self._columns.items()
            },
        }


__all__ = ["DataTable", "NAN"]
