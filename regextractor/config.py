"""
Persistable configuration: pattern lists, line filters, and file helpers.

Only source strings are stored. Compiled patterns are derived per extraction
run and the extracted table itself is never persisted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Pattern, Union

import yaml

from .extract.exceptions import ConfigError
from .extract.filters import LineFilter
from .extract.utils import compile_many, compile_or_none

_YAML_SUFFIXES = (".yaml", ".yml")


def require_mapping(data: Any, what: str) -> Dict[str, Any]:
    """``data`` as a dict; None means empty, any other non-mapping is an error."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{what} must be a mapping, got {type(data).__name__}")
    return dict(data)


@dataclass
class PatternList:
    """
    Editable list of regex source strings (e.g. the include list).

    ``add`` only accepts non-empty sources that compile, mirroring an input
    field that refuses invalid entries; lists loaded from disk may still carry
    stale invalid entries, which :meth:`compiled` skips and :meth:`invalid`
    reports.
    """

    name: str = ""
    strings: List[str] = field(default_factory=list)

    @staticmethod
    def is_valid(source: str) -> bool:
        return compile_or_none(source) is not None

    def add(self, source: str) -> bool:
        if not source or not self.is_valid(source):
            return False
        self.strings.append(source)
        return True

    def remove(self, index: int) -> str:
        return self.strings.pop(index)

    def compiled(self, flags: int = 0) -> List[Pattern[str]]:
        return compile_many(self.strings, flags)

    def invalid(self) -> List[str]:
        return [s for s in self.strings if not self.is_valid(s)]

    def __len__(self) -> int:
        return len(self.strings)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "strings": list(self.strings)}

    @classmethod
    def from_dict(
        cls, data: Union[Dict[str, Any], List[str], None], name: str = ""
    ) -> "PatternList":
        if data is None:
            return cls(name=name)
        if isinstance(data, list):
            return cls(name=name, strings=[str(s) for s in data])
        if not isinstance(data, dict):
            raise ConfigError(f"pattern list must be a mapping or list, got {data!r}")
        strings = data.get("strings", [])
        if not isinstance(strings, list):
            raise ConfigError(f"pattern list strings must be a list, got {strings!r}")
        return cls(
            name=str(data.get("name", name)), strings=[str(s) for s in strings]
        )


@dataclass
class FilterConfig:
    """
    Include/exclude lists plus the capture-mode toggle.

    :ivar use_regex_group: True reads each pattern's capture group, False
                           parses the whole match as the value.
    """

    includes: PatternList = field(default_factory=lambda: PatternList("Includes"))
    excludes: PatternList = field(default_factory=lambda: PatternList("Excludes"))
    use_regex_group: bool = True

    def build_filter(self, flags: int = 0) -> LineFilter:
        return LineFilter(
            includes=tuple(self.includes.compiled(flags)),
            excludes=tuple(self.excludes.compiled(flags)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "includes": self.includes.to_dict(),
            "excludes": self.excludes.to_dict(),
            "use_regex_group": self.use_regex_group,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "FilterConfig":
        d = require_mapping(data, "filters")
        return cls(
            includes=PatternList.from_dict(d.get("includes"), name="Includes"),
            excludes=PatternList.from_dict(d.get("excludes"), name="Excludes"),
            use_regex_group=bool(d.get("use_regex_group", True)),
        )


def load_mapping(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JSON or YAML (by suffix) mapping.

    :raises FileNotFoundError: when ``path`` does not exist.
    :raises ConfigError: when the file does not parse to a mapping.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    try:
        text = p.read_text(encoding="utf-8")
        if p.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"cannot parse {p}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{p} must contain a mapping, got {type(data).__name__}")
    return data


def dump_mapping(data: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Write ``data`` as YAML or JSON depending on the suffix of ``path``."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.suffix.lower() in _YAML_SUFFIXES:
        p.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return p


__all__ = [
    "PatternList",
    "require_mapping",
    "FilterConfig",
    "load_mapping",
    "dump_mapping",
]
