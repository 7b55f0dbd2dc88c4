"""Tree-sitter backed symbol provider.

Builds the nested symbol tree a language server would report, using
``tree_sitter_language_pack`` or ``tree_sitter_languages`` grammars.
"""

from __future__ import annotations

import asyncio
import logging
import re
from functools import lru_cache
from typing import TYPE_CHECKING

from ..positions import Position, Range
from .languages import (
    CLASS_NODE_TYPES,
    CONSTRUCTOR_NAMES,
    CONSTRUCTOR_NODE_TYPES,
    DECORATED_NODE_TYPES,
    FUNCTION_NODE_TYPES,
    IDENTIFIER_NODE_TYPES,
    IMPL_NODE_TYPES,
    LANGUAGE_BY_SUFFIX,
    METHOD_NODE_TYPES,
    MISSING_PARSER_ERROR,
    STRUCT_NODE_TYPES,
    normalize_language_id,
)
from .types import Symbol, SymbolKind

if TYPE_CHECKING:
    from ..document import Document

logger = logging.getLogger(__name__)

_CONTAINER_KINDS = {SymbolKind.CLASS, SymbolKind.STRUCT}


def supported_languages() -> set[str]:
    return set(LANGUAGE_BY_SUFFIX.values())


def _normalize_whitespace(text: str) -> str:
    """Collapse internal whitespace to single spaces for stable names."""
    return re.sub(r"\s+", " ", text).strip()


@lru_cache(maxsize=32)
def _load_parser(language_name: str):
    """Load a Tree-sitter parser using supported grammar packages.

    Tries ``tree_sitter_language_pack`` first, then ``tree_sitter_languages``.
    Returns ``(parser, error_message)``.
    """
    errors: list[str] = []

    try:
        from tree_sitter_language_pack import get_parser

        return get_parser(language_name), None
    except ModuleNotFoundError:
        pass
    except Exception as exc:
        errors.append(f"Failed to load Tree-sitter parser for {language_name}: {exc}")

    try:
        from tree_sitter_languages import get_parser

        return get_parser(language_name), None
    except ModuleNotFoundError:
        pass
    except Exception as exc:
        errors.append(f"Failed to load Tree-sitter parser for {language_name}: {exc}")

    if errors:
        return None, errors[0]

    return None, MISSING_PARSER_ERROR


def _node_text(source_bytes: bytes, node) -> str:
    """Decode source slice covered by a Tree-sitter node."""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _name_from_node(source_bytes: bytes, node) -> str:
    """Extract display name for a definition node."""
    for field_name in ("name", "declarator"):
        child = node.child_by_field_name(field_name)
        if child is None:
            continue
        nested = child.child_by_field_name("declarator")
        if nested is None:
            nested = child.child_by_field_name("name")
        if nested is not None:
            return _normalize_whitespace(_node_text(source_bytes, nested))
        return _normalize_whitespace(_node_text(source_bytes, child))

    for child in node.named_children:
        if child.type in IDENTIFIER_NODE_TYPES:
            return _normalize_whitespace(_node_text(source_bytes, child))

    return ""


def _symbol_kind(node_type: str, enclosing_kind: SymbolKind | None) -> SymbolKind | None:
    """Map Tree-sitter node type to a symbol kind given the enclosing symbol."""
    if node_type in CLASS_NODE_TYPES:
        return SymbolKind.CLASS
    if node_type in STRUCT_NODE_TYPES:
        return SymbolKind.STRUCT
    if node_type in CONSTRUCTOR_NODE_TYPES:
        return SymbolKind.CONSTRUCTOR
    if node_type in METHOD_NODE_TYPES:
        return SymbolKind.METHOD
    if node_type in FUNCTION_NODE_TYPES:
        return SymbolKind.METHOD if enclosing_kind in _CONTAINER_KINDS else SymbolKind.FUNCTION
    return None


class _PointMapper:
    """Convert Tree-sitter byte columns to character columns."""

    def __init__(self, source_bytes: bytes) -> None:
        self._lines = source_bytes.split(b"\n")

    def position(self, point) -> Position:
        row, byte_column = int(point[0]), int(point[1])
        if 0 <= row < len(self._lines):
            prefix = self._lines[row][:byte_column]
            column = len(prefix.decode("utf-8", errors="replace"))
        else:
            column = byte_column
        return Position(row, column)

    def range(self, node) -> Range | None:
        try:
            return Range(self.position(node.start_point), self.position(node.end_point))
        except ValueError:
            return None


def collect_symbol_tree(
    source: str,
    language_name: str,
    max_symbols: int = 4000,
) -> tuple[list[Symbol], str | None]:
    """Parse ``source`` and return ``(root_symbols, error_message)``."""
    parser, parser_error = _load_parser(language_name)
    if parser is None:
        return [], (parser_error or MISSING_PARSER_ERROR)

    source_bytes = source.encode("utf-8", errors="replace")
    try:
        tree = parser.parse(source_bytes)
    except Exception as exc:
        return [], f"Tree-sitter parse failed: {exc}"

    points = _PointMapper(source_bytes)
    count = 0

    def walk(node, enclosing_kind: SymbolKind | None) -> list[Symbol]:
        """Return the outermost symbols found in ``node``'s subtree."""
        nonlocal count
        if count >= max_symbols:
            return []

        if node.type in DECORATED_NODE_TYPES:
            definition = node.child_by_field_name("definition")
            if definition is not None:
                return walk(definition, enclosing_kind)

        child_enclosing = SymbolKind.STRUCT if node.type in IMPL_NODE_TYPES else enclosing_kind
        kind = _symbol_kind(node.type, enclosing_kind)
        if kind is None:
            found: list[Symbol] = []
            for child in node.named_children:
                found.extend(walk(child, child_enclosing))
            return found

        count += 1
        name = _name_from_node(source_bytes, node)
        if kind == SymbolKind.METHOD and name in CONSTRUCTOR_NAMES:
            kind = SymbolKind.CONSTRUCTOR

        children: list[Symbol] = []
        for child in node.named_children:
            children.extend(walk(child, kind))
        return [Symbol(name=name, kind=kind, range=points.range(node), children=tuple(children))]

    return walk(tree.root_node, None), None


class TreeSitterSymbolProvider:
    """Symbol provider parsing documents off the event loop."""

    def __init__(self, language_name: str | None = None, max_symbols: int = 4000) -> None:
        self.language_name = language_name
        self.max_symbols = max_symbols

    async def get_document_symbols(self, document: Document) -> list[Symbol]:
        language = normalize_language_id(self.language_name or document.language_id)
        symbols, error = await asyncio.to_thread(
            collect_symbol_tree,
            document.text,
            language,
            self.max_symbols,
        )
        if error is not None:
            logger.info("No Tree-sitter symbols for %s: %s", language, error)
        return symbols
