"""Symbol providers: the structural-analysis input to navigation.

A provider turns a document into a nested symbol tree. Providers may be
slow or fail; ``fetch_document_symbols`` bounds the wait and converts any
failure into an empty result so navigation can degrade instead of crash.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .document import Document
from .outline.languages import normalize_language_id
from .outline.treesitter import TreeSitterSymbolProvider, supported_languages
from .outline.types import Symbol, SymbolKind
from .positions import Position, Range

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_TIMEOUT = 5.0


class SymbolProvider(Protocol):
    async def get_document_symbols(self, document: Document) -> Sequence[Symbol]: ...


class NoOpSymbolProvider:
    """Provider for languages without structural support."""

    async def get_document_symbols(self, document: Document) -> Sequence[Symbol]:
        return []


class StaticSymbolProvider:
    """Serve a fixed symbol tree, whatever the document."""

    def __init__(self, symbols: Sequence[Symbol]) -> None:
        self.symbols = tuple(symbols)

    async def get_document_symbols(self, document: Document) -> Sequence[Symbol]:
        return self.symbols


def _coerce_position(raw: object) -> Position | None:
    if not isinstance(raw, dict):
        return None
    line = raw.get("line")
    column = raw.get("character", raw.get("column"))
    if isinstance(line, bool) or isinstance(column, bool):
        return None
    if not isinstance(line, int) or not isinstance(column, int):
        return None
    if line < 0 or column < 0:
        return None
    return Position(line, column)


def _coerce_range(raw: object) -> Range | None:
    """Parse an LSP range, returning ``None`` for missing or inverted ones."""
    if not isinstance(raw, dict):
        return None
    start = _coerce_position(raw.get("start"))
    end = _coerce_position(raw.get("end"))
    if start is None or end is None:
        return None
    try:
        return Range(start, end)
    except ValueError:
        return None


def _coerce_kind(raw: object) -> SymbolKind:
    if isinstance(raw, bool):
        return SymbolKind.NULL
    if isinstance(raw, int):
        try:
            return SymbolKind(raw)
        except ValueError:
            return SymbolKind.NULL
    if isinstance(raw, str):
        return SymbolKind.__members__.get(raw.strip().upper().replace(" ", "_"), SymbolKind.NULL)
    return SymbolKind.NULL


def symbols_from_lsp(payload: object) -> list[Symbol]:
    """Convert LSP ``DocumentSymbol[]`` (or ``SymbolInformation[]``) JSON data.

    Non-object entries are skipped. Missing or inverted ranges become
    ``None``; unknown kinds become ``SymbolKind.NULL``.
    """
    if not isinstance(payload, list):
        return []

    symbols: list[Symbol] = []
    for raw in payload:
        if not isinstance(raw, dict):
            continue
        raw_range = raw.get("range")
        if raw_range is None and isinstance(raw.get("location"), dict):
            raw_range = raw["location"].get("range")
        name = raw.get("name")
        symbols.append(
            Symbol(
                name=name if isinstance(name, str) else "",
                kind=_coerce_kind(raw.get("kind")),
                range=_coerce_range(raw_range),
                children=tuple(symbols_from_lsp(raw.get("children"))),
            )
        )
    return symbols


class JsonSymbolProvider:
    """Read symbols a language server already produced, from a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    async def get_document_symbols(self, document: Document) -> Sequence[Symbol]:
        raw = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        payload = json.loads(raw)
        return symbols_from_lsp(payload)


def provider_for_language(language_id: str | None) -> SymbolProvider:
    """Pick the structural provider for an editor language id."""
    language = normalize_language_id(language_id)
    if language in supported_languages():
        return TreeSitterSymbolProvider(language)
    return NoOpSymbolProvider()


async def fetch_document_symbols(
    provider: SymbolProvider,
    document: Document,
    timeout: float | None = DEFAULT_PROVIDER_TIMEOUT,
) -> list[Symbol]:
    """Ask ``provider`` for symbols; failures and timeouts yield ``[]``."""
    try:
        symbols = await asyncio.wait_for(provider.get_document_symbols(document), timeout)
    except asyncio.TimeoutError:
        logger.warning("Symbol provider timed out after %.1fs", timeout)
        return []
    except Exception as exc:
        logger.warning("Symbol provider failed: %s", exc)
        return []
    return list(symbols or [])
