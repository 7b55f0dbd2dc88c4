"""Line/column positions and inclusive ranges.

Positions order lexicographically by ``(line, column)``.
Ranges are closed on both ends, matching what symbol providers emit.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Only these end a line; form feed and Unicode separators stay inside it.
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# Weight of one line in ``range_size``; must exceed any real column count.
RANGE_SIZE_LINE_WEIGHT = 10_000


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based document position."""

    line: int = 0
    column: int = 0

    def __post_init__(self) -> None:
        if self.line < 0 or self.column < 0:
            raise ValueError(f"negative position: ({self.line}, {self.column})")

    def is_before(self, other: Position) -> bool:
        return self < other

    def is_after(self, other: Position) -> bool:
        return self > other


DOCUMENT_START = Position(0, 0)


@dataclass(frozen=True)
class Range:
    """Closed ``start``..``end`` span with ``start <= end``."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"range end {self.end} precedes start {self.start}")

    def contains(self, position: Position) -> bool:
        """Return whether ``position`` lies inside the range, endpoints included."""
        start, end = self.start, self.end
        if position.line < start.line or position.line > end.line:
            return False
        if position.line == start.line and position.column < start.column:
            return False
        if position.line == end.line and position.column > end.column:
            return False
        return True

    def size(self) -> int:
        """Tie-break magnitude; smaller means more specific."""
        return (self.end.line - self.start.line) * RANGE_SIZE_LINE_WEIGHT + (
            self.end.column - self.start.column
        )


def contains(range_: Range, position: Position) -> bool:
    return range_.contains(position)


def range_size(range_: Range) -> int:
    return range_.size()


def split_lines(text: str, keepends: bool = False) -> list[str]:
    """Split on ``\\r\\n``, ``\\r`` and ``\\n`` like an editor does.

    A final terminator does not open an extra empty line.
    """
    lines: list[str] = []
    start = 0
    for match in LINE_BREAK_RE.finditer(text):
        lines.append(text[start : match.end() if keepends else match.start()])
        start = match.end()
    if start < len(text):
        lines.append(text[start:])
    return lines
