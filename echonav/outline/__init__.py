"""Symbol outline model and the pure navigation algorithms over it.

Nothing here performs I/O; providers and editors live one level up.
"""

from __future__ import annotations

from .blocks import (
    BlockMatch,
    BlockQuery,
    BlockSelection,
    describe_block,
    describe_location,
    detect_current_block,
    enclosing_chain,
)
from .fallback import FallbackScanner, fallback_scanner_for
from .flatten import flatten
from .jumps import build_jump_targets, display_name
from .types import JUMPABLE_KINDS, FlatEntry, FlatOutline, JumpTarget, Symbol, SymbolKind

__all__ = [
    "BlockMatch",
    "BlockQuery",
    "BlockSelection",
    "FallbackScanner",
    "FlatEntry",
    "FlatOutline",
    "JUMPABLE_KINDS",
    "JumpTarget",
    "Symbol",
    "SymbolKind",
    "build_jump_targets",
    "describe_block",
    "describe_location",
    "detect_current_block",
    "display_name",
    "enclosing_chain",
    "fallback_scanner_for",
    "flatten",
]
