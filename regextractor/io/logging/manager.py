"""LoggerManager and convenience helpers (setup_logging, get_logger)."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from .formatters import DATE_FORMAT, TEXT_FORMAT, JSONFormatter, SimpleColorFormatter

PACKAGE_LOGGER = "regextractor"

# library default: stay silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


class LoggerManager:
    """
    Configure root logging for an application embedding regextractor.

    :param log_dir: directory for a rotating log file; None disables the file.
    :param log_file: file name inside ``log_dir``.
    :param max_bytes: rotate after this many bytes.
    :param backup_count: rotated files to keep.
    :param level: level name or number.
    :param colored: color console level names when the terminal allows it.
    :param json: emit one-line JSON instead of text.
    """

    def __init__(
        self,
        log_dir: Optional[Union[str, Path]] = None,
        log_file: str = "regextractor.log",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        level: Union[str, int] = logging.INFO,
        colored: bool = True,
        json: bool = False,
    ):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_file = log_file
        self.max_bytes = int(max_bytes)
        self.backup_count = int(backup_count)
        self.level = self._coerce_level(level)
        self.colored = bool(colored)
        self.json = bool(json)
        self._configured = False

    def __repr__(self) -> str:
        return (
            f"LoggerManager(log_dir={self.log_dir}, log_file={self.log_file}, "
            f"level={self.level_name}, colored={self.colored}, json={self.json})"
        )

    def setup(self) -> "LoggerManager":
        """
        Install console (and optional file) handlers on the root logger.
        Calling it again on a configured manager is a no-op.
        """
        if self._configured:
            return self

        root = logging.getLogger()
        root.setLevel(self.level)
        for h in list(root.handlers):
            root.removeHandler(h)

        if self.json:
            console_formatter: logging.Formatter = JSONFormatter()
        else:
            console_formatter = SimpleColorFormatter(
                fmt=TEXT_FORMAT,
                datefmt=DATE_FORMAT,
                force_color=None if self.colored else False,
            )
        ch = logging.StreamHandler()
        ch.setLevel(self.level)
        ch.setFormatter(console_formatter)
        root.addHandler(ch)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.handlers.RotatingFileHandler(
                self.log_dir / self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding="utf-8",
            )
            fh.setLevel(self.level)
            fh.setFormatter(
                JSONFormatter()
                if self.json
                else logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)
            )
            root.addHandler(fh)

        self._configured = True
        return self

    @staticmethod
    def _coerce_level(level: Union[str, int]) -> int:
        if isinstance(level, int):
            return level
        resolved = logging.getLevelName(str(level).upper())
        return resolved if isinstance(resolved, int) else logging.INFO

    @property
    def configured(self) -> bool:
        return self._configured

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)

    def get_logger(self, name: str) -> logging.Logger:
        """Return ``logging.getLogger(name)``, configuring handlers first."""
        self.setup()
        return logging.getLogger(name)


_default_manager: Optional[LoggerManager] = None


def setup_logging(**kwargs) -> LoggerManager:
    """
    Configure root logging; accepts the keyword arguments of
    :class:`LoggerManager`. Returns the configured manager.
    """
    global _default_manager
    _default_manager = LoggerManager(**kwargs).setup()
    return _default_manager


def get_logger(name: str) -> logging.Logger:
    """
    Logger for library code. Does not touch handlers; output appears once the
    application calls :func:`setup_logging` or configures logging itself.
    """
    return logging.getLogger(name)


__all__ = ["LoggerManager", "setup_logging", "get_logger", "PACKAGE_LOGGER"]
