"""Jump-target construction from a flattened outline."""

from __future__ import annotations

from collections.abc import Iterable

from ..positions import DOCUMENT_START, Position
from .types import JUMPABLE_KINDS, FlatOutline, JumpTarget, Symbol

UNNAMED_SYMBOL = "(unnamed)"
NAME_SEPARATOR = "::"


def display_name(symbol: Symbol, ancestors: Iterable[Symbol]) -> str:
    """Build a breadcrumb like ``Outer::Inner::method``."""
    chain = [name for name in ((ancestor.name or "").strip() for ancestor in ancestors) if name]
    own_name = (symbol.name or "").strip()
    if own_name:
        chain.append(own_name)
    return NAME_SEPARATOR.join(chain) or UNNAMED_SYMBOL


def target_position(symbol: Symbol) -> Position:
    """Range start, or the document start when the provider sent no range."""
    if symbol.range is None:
        return DOCUMENT_START
    return symbol.range.start


def sort_jump_targets(targets: Iterable[JumpTarget]) -> list[JumpTarget]:
    """Stable ascending sort by position."""
    return sorted(targets, key=lambda target: target.position)


def build_jump_targets(outline: FlatOutline) -> list[JumpTarget]:
    """Return jumpable symbols as targets in document order."""
    targets = [
        JumpTarget(
            position=target_position(outline.symbol(entry)),
            display_name=display_name(outline.symbol(entry), outline.ancestors(entry)),
            kind=outline.symbol(entry).kind,
        )
        for entry in outline
        if outline.symbol(entry).kind in JUMPABLE_KINDS
    ]
    # Providers usually emit spatial order already; the sort is still required.
    return sort_jump_targets(targets)
