"""
regextractor: named numeric series from log files via regular expressions.

Subpackages
-----------
- :mod:`regextractor.extract` -- patterns, line filter, aligned table, engine.
- :mod:`regextractor.io` -- file acquisition and logging helpers.
- :mod:`regextractor.session` / :mod:`regextractor.config` -- persisted
  configuration and the headless session model.
"""

from __future__ import annotations

import importlib
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "NamedRegex",
    "compile_patterns",
    "LineFilter",
    "DataTable",
    "ExtractionEngine",
    "extract_data",
    "extract_from_sources",
    "ExtractionError",
    "ColumnNotFoundError",
    "ExtractorSession",
    "SeriesLine",
    "SeriesSet",
    "FilterConfig",
    "PatternList",
    "AsyncFileSelector",
    "DataFile",
    "SelectedFile",
]

# attribute -> (module_name, attr_name); imported on first access
_lazy_map = {
    "NamedRegex": ("regextractor.extract.patterns", "NamedRegex"),
    "compile_patterns": ("regextractor.extract.patterns", "compile_patterns"),
    "LineFilter": ("regextractor.extract.filters", "LineFilter"),
    "DataTable": ("regextractor.extract.table", "DataTable"),
    "ExtractionEngine": ("regextractor.extract.engine", "ExtractionEngine"),
    "extract_data": ("regextractor.extract.engine", "extract_data"),
    "extract_from_sources": ("regextractor.extract.engine", "extract_from_sources"),
    "ExtractionError": ("regextractor.extract.exceptions", "ExtractionError"),
    "ColumnNotFoundError": ("regextractor.extract.exceptions", "ColumnNotFoundError"),
    "ExtractorSession": ("regextractor.session", "ExtractorSession"),
    "SeriesLine": ("regextractor.session", "SeriesLine"),
    "SeriesSet": ("regextractor.session", "SeriesSet"),
    "FilterConfig": ("regextractor.config", "FilterConfig"),
    "PatternList": ("regextractor.config", "PatternList"),
    "AsyncFileSelector": ("regextractor.io.file", "AsyncFileSelector"),
    "DataFile": ("regextractor.io.file", "DataFile"),
    "SelectedFile": ("regextractor.io.file", "SelectedFile"),
}


def __getattr__(name: str) -> Any:
    if name in _lazy_map:
        module_name, attr = _lazy_map[name]
        val = getattr(importlib.import_module(module_name), attr)
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + __all__)
