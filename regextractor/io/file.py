# regextractor/io/file.py
"""
Asynchronous file acquisition.

The selector reads the chosen file on a worker thread so that an interactive
caller can keep polling without blocking. A poll while the read is running
reports ``OPENING``; the finished result is handed out exactly once, after
which the selector reports ``NOT_SELECTED`` again.

Usage
-----
>>> sel = AsyncFileSelector()
>>> sel.select("train.log")
>>> res = sel.get_file()          # OPENING, then OK / FILE_ERROR once
>>> if res.status is FileStatus.OK:
...     data = res.file.content
"""

from __future__ import annotations

import concurrent.futures
import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from .logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]
# zero-argument callable returning the chosen path, or None when cancelled
Picker = Callable[[], Optional[PathLike]]


@dataclass(frozen=True)
class SelectedFile:
    """Display name plus raw bytes of a picked file."""

    file_name: str
    content: bytes

    def __repr__(self) -> str:
        return f"SelectedFile(file_name={self.file_name!r}, size={len(self.content)})"


class FileStatus(enum.Enum):
    NOT_SELECTED = "not_selected"
    OPENING = "opening"
    OK = "ok"
    FILE_ERROR = "file_error"


@dataclass(frozen=True)
class FileResult:
    status: FileStatus
    file: Optional[SelectedFile] = None
    error: Optional[str] = None


class _Cancelled(Exception):
    pass


def _read_selected(source: Union[PathLike, Picker]) -> SelectedFile:
    path = source() if callable(source) else source
    if path is None:
        raise _Cancelled()
    p = Path(path)
    return SelectedFile(file_name=p.name, content=p.read_bytes())


class AsyncFileSelector:
    """
    Non-blocking file picker/reader.

    :param executor: executor running the reads; a private single-thread pool
                     is created lazily when omitted.
    """

    def __init__(self, executor: Optional[concurrent.futures.Executor] = None):
        self._executor = executor
        self._owns_executor = executor is None
        self._pending: Optional[concurrent.futures.Future] = None

    def _get_executor(self) -> concurrent.futures.Executor:
        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="regextractor-file"
            )
        return self._executor

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def select(self, source: Union[PathLike, Picker]) -> None:
        """
        Start acquiring ``source`` (a path, or a picker callable returning a
        path or None). Any earlier unfinished selection is abandoned.
        """
        if self._pending is not None:
            self._pending.cancel()
        self._pending = self._get_executor().submit(_read_selected, source)

    def get_file(self) -> FileResult:
        """Poll the current selection; see the module docstring."""
        fut = self._pending
        if fut is None:
            return FileResult(FileStatus.NOT_SELECTED)
        if not fut.done():
            return FileResult(FileStatus.OPENING)
        self._pending = None
        if fut.cancelled():
            return FileResult(FileStatus.NOT_SELECTED)
        exc = fut.exception()
        if isinstance(exc, _Cancelled):
            return FileResult(FileStatus.NOT_SELECTED)
        if isinstance(exc, OSError):
            logger.warning("file.read_failed", extra={"error": str(exc)})
            return FileResult(FileStatus.FILE_ERROR, error=str(exc))
        if exc is not None:
            raise exc
        return FileResult(FileStatus.OK, file=fut.result())

    def wait(self, timeout: Optional[float] = None) -> FileResult:
        """Block until the pending selection finishes, then poll it."""
        if self._pending is not None:
            concurrent.futures.wait([self._pending], timeout=timeout)
        return self.get_file()

    def shutdown(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None


class DataFile:
    """
    Holds the most recently acquired file.

    ``open`` discards the current file and starts a new selection; ``poll``
    adopts the selection once it has completed.
    """

    def __init__(self, selector: Optional[AsyncFileSelector] = None):
        self._selector = selector or AsyncFileSelector()
        self._file: Optional[SelectedFile] = None

    def open(self, source: Union[PathLike, Picker]) -> None:
        self._file = None
        self._selector.select(source)

    def poll(self) -> Optional[SelectedFile]:
        if self._file is None:
            res = self._selector.get_file()
            if res.status is FileStatus.OK:
                self._file = res.file
        return self._file

    def set_file(self, file: Optional[SelectedFile]) -> None:
        self._file = file

    @property
    def file(self) -> Optional[SelectedFile]:
        return self._file

    @property
    def file_name(self) -> Optional[str]:
        return self._file.file_name if self._file is not None else None

    @property
    def selector(self) -> AsyncFileSelector:
        return self._selector


__all__ = [
    "SelectedFile",
    "FileStatus",
    "FileResult",
    "AsyncFileSelector",
    "DataFile",
]
