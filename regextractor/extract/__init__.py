"""
Extract subpackage (named-regex series extraction and alignment).

Public API
----------
- NamedRegex, compile_patterns(pairs) -> list[NamedRegex]
- LineFilter.from_sources(includes, excludes)
- DataTable (aligned columns; aligned_pairs(name), to_frame())
- ExtractionEngine, extract_data(...), extract_from_sources(...)
- ExtractionError, ColumnNotFoundError

Examples
--------
>>> from regextractor.extract import extract_from_sources
>>> t = extract_from_sources(b"a=1\\nb=2\\na=3\\n", [("a", r"a=(\\d+)")])
>>> list(t.aligned_pairs("a"))
[(0.0, 1.0), (2.0, 3.0)]
"""

from .exceptions import (
    RegextractorError,
    ExtractionError,
    ColumnNotFoundError,
    ConfigError,
)
from .patterns import NamedRegex, compile_patterns
from .filters import LineFilter
from .table import DataTable
from .engine import ExtractionEngine, extract_data, extract_from_sources

__all__ = [
    "RegextractorError",
    "ExtractionError",
    "ColumnNotFoundError",
    "ConfigError",
    "NamedRegex",
    "compile_patterns",
    "LineFilter",
    "DataTable",
    "ExtractionEngine",
    "extract_data",
    "extract_from_sources",
]
