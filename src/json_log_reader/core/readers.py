"""Record sources feeding the JSON reader."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Protocol

from .models import Message


class Reader(Protocol):
    """Source interface: return the next Message, raise EOFError when exhausted."""

    def next(self) -> Message:
        """Return the next message."""
        ...


def strip_newline(line: bytes) -> bytes:
    """Drop a trailing \\n or \\r\\n."""
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


class LineReader:
    """Serve an iterable of byte lines as messages."""

    def __init__(self, lines: Iterable[bytes]) -> None:
        self._lines = iter(lines)

    def next(self) -> Message:
        try:
            line = next(self._lines)
        except StopIteration:
            raise EOFError("no more lines") from None
        return Message(ts=datetime.now(UTC), content=strip_newline(line), size=len(line))
