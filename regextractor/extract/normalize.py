"""
Decoding and line splitting for raw log content.

Log files occasionally carry stray non-UTF-8 bytes; decoding never fails on
them, invalid sequences become U+FFFD and the rest of the text survives.
"""

from __future__ import annotations

import codecs
from typing import Iterator, Union

from .exceptions import ExtractionError

Content = Union[bytes, bytearray, memoryview, str]


def decode_content(content: Content) -> str:
    """
    Turn ``content`` into text.

    :param content: raw bytes (decoded as UTF-8 with replacement, a leading
                    BOM is dropped) or an already-decoded ``str``.
    :raises ExtractionError: if ``content`` is neither bytes-like nor str.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, (bytes, bytearray, memoryview)):
        raw = bytes(content)
        if raw.startswith(codecs.BOM_UTF8):
            raw = raw[len(codecs.BOM_UTF8):]
        return raw.decode("utf-8", errors="replace")
    raise ExtractionError(
        f"content must be bytes or str, got {type(content).__name__}"
    )


def iter_lines(text: str) -> Iterator[str]:
    """
    Split on ``\\n`` and strip one trailing ``\\r`` per line.

    A trailing newline does not start an extra empty line; empty text has no
    lines at all.
    """
    if not text:
        return
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    for ln in parts:
        if ln.endswith("\r"):
            ln = ln[:-1]
        yield ln


__all__ = ["Content", "decode_content", "iter_lines"]
