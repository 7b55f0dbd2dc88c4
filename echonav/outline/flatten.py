"""Nested symbol tree to flat, pre-order outline."""

from __future__ import annotations

from collections.abc import Iterable

from .types import FlatEntry, FlatOutline, Symbol


def flatten(root_symbols: Iterable[Symbol]) -> FlatOutline:
    """Flatten ``root_symbols`` depth-first, pre-order, keeping child order.

    Every node gets the next arena id as it is visited, so entry ``i`` always
    refers to symbol id ``i``. The input tree is never modified.
    """
    symbols: list[Symbol] = []
    entries: list[FlatEntry] = []

    # Explicit stack of (symbol, ancestor ids); pushed in reverse to pop in order.
    stack: list[tuple[Symbol, tuple[int, ...]]] = [
        (symbol, ()) for symbol in reversed(tuple(root_symbols))
    ]
    while stack:
        symbol, ancestor_ids = stack.pop()
        symbol_id = len(symbols)
        symbols.append(symbol)
        entries.append(FlatEntry(symbol_id=symbol_id, ancestor_ids=ancestor_ids))

        if symbol.children:
            child_ancestors = ancestor_ids + (symbol_id,)
            for child in reversed(symbol.children):
                stack.append((child, child_ancestors))

    return FlatOutline(symbols=tuple(symbols), entries=tuple(entries))
