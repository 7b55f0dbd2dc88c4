"""Immutable document snapshots with line/offset conversions."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field, replace
from functools import cached_property
from pathlib import Path

from .positions import Position, Range, split_lines
from .syntax import guess_language_id, read_text


@dataclass(frozen=True)
class Document:
    """Text snapshot as seen by one navigation query.

    Edits produce a new snapshot with a bumped ``version``; queries compare
    versions to detect that their symbol data went stale.
    """

    text: str
    path: Path | None = None
    language_id: str = "plaintext"
    version: int = field(default=0, compare=False)

    @classmethod
    def from_path(cls, path: Path, language_id: str | None = None) -> Document:
        source = read_text(path)
        if language_id is None:
            language_id = guess_language_id(path, source)
        return cls(text=source, path=path, language_id=language_id)

    def with_text(self, text: str) -> Document:
        return replace(self, text=text, version=self.version + 1)

    @cached_property
    def _line_offsets(self) -> tuple[int, ...]:
        """Start offset of every line, plus a trailing end-of-text offset."""
        offsets = [0]
        for line in split_lines(self.text, keepends=True):
            offsets.append(offsets[-1] + len(line))
        return tuple(offsets)

    @cached_property
    def lines(self) -> tuple[str, ...]:
        return tuple(split_lines(self.text))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, line: int) -> str:
        """Text of ``line`` without its terminator; empty past the end."""
        if 0 <= line < len(self.lines):
            return self.lines[line]
        return ""

    def offset_at(self, position: Position) -> int:
        """Convert ``position`` to a text offset, clamping to the document."""
        offsets = self._line_offsets
        if position.line >= len(offsets) - 1:
            return len(self.text)
        line_start = offsets[position.line]
        line_length = len(self.line_at(position.line))
        return line_start + min(position.column, line_length)

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(len(self.text), offset))
        offsets = self._line_offsets
        if self.text.endswith(("\n", "\r")):
            last_line = len(offsets) - 1
        else:
            last_line = max(0, len(offsets) - 2)
        line = min(bisect_right(offsets, offset) - 1, last_line)
        return Position(line, offset - offsets[line])

    def get_text(self, range_: Range | None = None) -> str:
        if range_ is None:
            return self.text
        return self.text[self.offset_at(range_.start) : self.offset_at(range_.end)]
