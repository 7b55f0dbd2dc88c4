"""Shared outline datatypes."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

from ..positions import Position, Range


class SymbolKind(IntEnum):
    """Language Server Protocol symbol kinds (same numeric values)."""

    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


JUMPABLE_KINDS = frozenset(
    {
        SymbolKind.FUNCTION,
        SymbolKind.METHOD,
        SymbolKind.CONSTRUCTOR,
        SymbolKind.CLASS,
        SymbolKind.STRUCT,
    }
)


@dataclass(frozen=True)
class Symbol:
    """One node of a provider-supplied symbol tree.

    ``range`` is ``None`` when the provider sent a missing or inverted range.
    """

    name: str
    kind: SymbolKind
    range: Range | None = None
    children: tuple[Symbol, ...] = ()


@dataclass(frozen=True)
class FlatEntry:
    """Pre-order outline entry referencing the symbol arena by id."""

    symbol_id: int
    ancestor_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class FlatOutline:
    """Flattened symbol tree: an id-indexed arena plus pre-order entries."""

    symbols: tuple[Symbol, ...] = ()
    entries: tuple[FlatEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FlatEntry]:
        return iter(self.entries)

    def symbol(self, entry: FlatEntry) -> Symbol:
        return self.symbols[entry.symbol_id]

    def ancestors(self, entry: FlatEntry) -> tuple[Symbol, ...]:
        """Resolve ancestor ids, root first."""
        return tuple(self.symbols[ancestor_id] for ancestor_id in entry.ancestor_ids)


@dataclass(frozen=True)
class JumpTarget:
    """Navigable position with a breadcrumb-style display name."""

    position: Position
    display_name: str
    kind: SymbolKind | None = None

    @property
    def label(self) -> str:
        """Fixed-width listing row, e.g. ``method     L    3  A::foo``."""
        kind = self.kind.label if self.kind is not None else "symbol"
        name = self.display_name
        clean_name = name if len(name) <= 220 else (name[:217] + "...")
        return f"{kind:11} L{self.position.line + 1:>5}  {clean_name}"
