"""Exception types raised by the extraction package."""

from __future__ import annotations


class RegextractorError(Exception):
    """Base class for all regextractor errors."""


class ExtractionError(RegextractorError):
    """
    Run-level extraction failure.

    Raised only when there is nothing to extract (empty pattern set) or the
    content cannot be treated as text at all. Bad patterns and non-numeric
    captures never end up here; they degrade to missing values.
    """


class ColumnNotFoundError(RegextractorError, KeyError):
    """Requested column is not part of the :class:`DataTable` schema."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown column: {self.name!r}"


class ConfigError(RegextractorError, ValueError):
    """Stored configuration could not be read or has the wrong shape."""


__all__ = [
    "RegextractorError",
    "ExtractionError",
    "ColumnNotFoundError",
    "ConfigError",
]
