"""Innermost-block lookup and enclosing-context descriptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..positions import Position
from .types import JUMPABLE_KINDS, FlatEntry, FlatOutline, Symbol, SymbolKind

if TYPE_CHECKING:
    from ..document import Document


class BlockQuery(Enum):
    """Which kind of block the caller wants around the cursor."""

    CLASS = "class"
    CALLABLE = "function"

    @property
    def kinds(self) -> frozenset[SymbolKind]:
        if self is BlockQuery.CLASS:
            return frozenset({SymbolKind.CLASS})
        return frozenset({SymbolKind.FUNCTION, SymbolKind.METHOD})


@dataclass(frozen=True)
class BlockMatch:
    """Innermost symbol of the requested kind around the cursor."""

    symbol: Symbol
    ancestors: tuple[Symbol, ...]

    @property
    def selection_in_class(self) -> bool:
        return any(ancestor.kind == SymbolKind.CLASS for ancestor in self.ancestors)


@dataclass(frozen=True)
class BlockSelection:
    """Source details of a located block, ready for summarising or speech."""

    block_type: str
    name: str
    first_line: int
    last_line: int
    first_line_text: str
    last_line_text: str
    text: str
    selection_in_class: bool


def _containing_entries(outline: FlatOutline, cursor: Position) -> list[FlatEntry]:
    return [
        entry
        for entry in outline
        if outline.symbol(entry).range is not None and outline.symbol(entry).range.contains(cursor)
    ]


def detect_current_block(
    outline: FlatOutline,
    cursor: Position,
    query: BlockQuery,
) -> BlockMatch | None:
    """Return the smallest ``query``-kind symbol containing ``cursor``.

    Equal sizes keep the entry seen first in flattening order. ``None`` means
    the cursor is not inside any matching block.
    """
    wanted = query.kinds
    candidates = [
        entry for entry in _containing_entries(outline, cursor) if outline.symbol(entry).kind in wanted
    ]
    if not candidates:
        return None
    innermost = min(candidates, key=lambda entry: outline.symbol(entry).range.size())
    return BlockMatch(symbol=outline.symbol(innermost), ancestors=outline.ancestors(innermost))


def describe_block(document: Document, match: BlockMatch, query: BlockQuery) -> BlockSelection:
    symbol = match.symbol
    if symbol.range is None:
        raise ValueError(f"block {symbol.name!r} has no range")
    first_line = symbol.range.start.line
    last_line = symbol.range.end.line
    return BlockSelection(
        block_type=query.value,
        name=symbol.name,
        first_line=first_line,
        last_line=last_line,
        first_line_text=document.line_at(first_line),
        last_line_text=document.line_at(last_line),
        text=document.get_text(symbol.range),
        selection_in_class=match.selection_in_class,
    )


def enclosing_chain(outline: FlatOutline, cursor: Position) -> tuple[Symbol, ...]:
    """Jumpable symbols around ``cursor``, outermost first."""
    containing = _containing_entries(outline, cursor)
    if not containing:
        return ()
    innermost = min(containing, key=lambda entry: outline.symbol(entry).range.size())
    path = (*outline.ancestors(innermost), outline.symbol(innermost))
    return tuple(
        symbol
        for symbol in path
        if symbol.kind in JUMPABLE_KINDS and symbol.range is not None and symbol.range.contains(cursor)
    )


def describe_location(chain: tuple[Symbol, ...]) -> str:
    """Sentence like ``Inside method foo in class A.``."""
    if not chain:
        return "At top level."
    parts = [f"{symbol.kind.label} {symbol.name.strip() or 'unnamed'}" for symbol in reversed(chain)]
    return "Inside " + " in ".join(parts) + "."
