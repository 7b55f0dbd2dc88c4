"""Cursor navigation over a document's structural symbols.

Each query fetches a fresh symbol tree for the active document, flattens it,
and answers from that snapshot alone. Nothing is cached between queries.
A query whose symbols arrive after a newer query started, or after the
document changed, is discarded as stale.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .config import NavigationSettings
from .document import Document
from .editor import EditorControl
from .outline import (
    BlockQuery,
    BlockSelection,
    FallbackScanner,
    FlatOutline,
    JumpTarget,
    build_jump_targets,
    describe_block,
    describe_location,
    detect_current_block,
    enclosing_chain,
    fallback_scanner_for,
    flatten,
)
from .positions import Position
from .providers import SymbolProvider, fetch_document_symbols, provider_for_language
from .speech import AnnouncementDebouncer, AnnouncementSink, ConsoleSink

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"


class NavigationStatus(Enum):
    MOVED = "moved"
    NO_EDITOR = "no_editor"
    NO_SYMBOLS = "no_symbols"
    NO_NEXT = "no_next"
    NO_PREVIOUS = "no_previous"
    STALE = "stale"


NO_EDITOR_MESSAGE = "No active editor."
NO_SYMBOLS_MESSAGE = "No symbols found to jump to."
STALE_MESSAGE = "Document changed before symbols were ready."


@dataclass(frozen=True)
class NavigationResult:
    """Outcome of one jump request. Only ``MOVED`` changes the cursor."""

    status: NavigationStatus
    message: str
    target: JumpTarget | None = None
    degraded: bool = False

    @property
    def moved(self) -> bool:
        return self.status is NavigationStatus.MOVED


def select_jump_target(
    targets: Sequence[JumpTarget],
    cursor: Position,
    direction: Direction,
) -> JumpTarget | None:
    """Nearest target strictly after (next) or before (previous) ``cursor``.

    ``targets`` must be in ascending position order. There is no wraparound.
    """
    if direction is Direction.NEXT:
        for target in targets:
            if target.position.is_after(cursor):
                return target
        return None
    for target in reversed(targets):
        if target.position.is_before(cursor):
            return target
    return None


class Navigator:
    """Jump, block-lookup, and where-am-I commands for one editor."""

    def __init__(
        self,
        editor: EditorControl,
        provider: SymbolProvider | None = None,
        sink: AnnouncementSink | None = None,
        settings: NavigationSettings | None = None,
        fallback_scanner: FallbackScanner | None = None,
    ) -> None:
        self.editor = editor
        self.provider = provider
        self.settings = settings if settings is not None else NavigationSettings()
        self.fallback_scanner = fallback_scanner
        self.debouncer = AnnouncementDebouncer(
            sink if sink is not None else ConsoleSink(),
            delay=self.settings.announce_delay_seconds,
        )
        self._generation = 0

    def _provider_for(self, document: Document) -> SymbolProvider:
        if self.provider is not None:
            return self.provider
        return provider_for_language(document.language_id)

    def _scanner_for(self, document: Document) -> FallbackScanner:
        if self.fallback_scanner is not None:
            return self.fallback_scanner
        return fallback_scanner_for(self.settings.fallback_language or document.language_id)

    def _is_superseded(self, generation: int, document: Document) -> bool:
        if generation != self._generation:
            return True
        current = self.editor.active_document()
        return current is None or current.version != document.version or current.path != document.path

    async def _load_outline(self, document: Document) -> FlatOutline | None:
        """Fetch and flatten symbols; ``None`` when the result went stale."""
        self._generation += 1
        generation = self._generation
        symbols = await fetch_document_symbols(
            self._provider_for(document),
            document,
            timeout=self.settings.provider_timeout_seconds,
        )
        if self._is_superseded(generation, document):
            logger.debug("Discarding stale symbols for %s (version %s)", document.path, document.version)
            return None
        return flatten(symbols)

    def _jump_targets(self, document: Document, outline: FlatOutline) -> tuple[list[JumpTarget], bool]:
        """Return ``(targets, degraded)``, scanning text when the tree has none."""
        targets = build_jump_targets(outline)
        if targets or not self.settings.fallback_enabled:
            return targets, False

        scanner = self._scanner_for(document)
        fallback = scanner.scan(document.text)
        if fallback:
            logger.info("No structural symbols; using %s line scan (%d targets)", scanner.language, len(fallback))
            return fallback, True
        return [], False

    def _inform(self, status: NavigationStatus, message: str) -> NavigationResult:
        if self.settings.announce_messages:
            self.debouncer.schedule(message)
        return NavigationResult(status=status, message=message)

    async def outline(self) -> tuple[list[JumpTarget], bool]:
        """Ordered jump targets for the active document, plus the degraded flag."""
        document = self.editor.active_document()
        if document is None:
            return [], False
        outline = await self._load_outline(document)
        if outline is None:
            return [], False
        return self._jump_targets(document, outline)

    async def move_cursor_to_symbol(self, direction: Direction | str) -> NavigationResult:
        """Move to the next/previous jumpable symbol and announce it."""
        direction = Direction(direction)
        document = self.editor.active_document()
        if document is None:
            return self._inform(NavigationStatus.NO_EDITOR, NO_EDITOR_MESSAGE)

        outline = await self._load_outline(document)
        if outline is None:
            return NavigationResult(status=NavigationStatus.STALE, message=STALE_MESSAGE)

        targets, degraded = self._jump_targets(document, outline)
        if not targets:
            return self._inform(NavigationStatus.NO_SYMBOLS, NO_SYMBOLS_MESSAGE)

        target = select_jump_target(targets, self.editor.get_active_cursor(), direction)
        if target is None:
            status = NavigationStatus.NO_NEXT if direction is Direction.NEXT else NavigationStatus.NO_PREVIOUS
            return self._inform(status, f"No {direction.value} symbol.")

        self.editor.set_selection(target.position)
        self.editor.reveal_position(target.position)
        message = f"Moved {direction.value} to {target.display_name}."
        self.debouncer.schedule(message)
        return NavigationResult(
            status=NavigationStatus.MOVED,
            message=message,
            target=target,
            degraded=degraded,
        )

    async def current_block(self, query: BlockQuery | str) -> BlockSelection | None:
        """Innermost class or function around the cursor, or ``None``."""
        query = BlockQuery(query)
        document = self.editor.active_document()
        if document is None:
            return None
        outline = await self._load_outline(document)
        if outline is None:
            return None
        match = detect_current_block(outline, self.editor.get_active_cursor(), query)
        if match is None:
            return None
        return describe_block(document, match, query)

    async def where_am_i(self) -> str:
        """Announce and return the enclosing class/function chain."""
        document = self.editor.active_document()
        if document is None:
            message = NO_EDITOR_MESSAGE
        else:
            outline = await self._load_outline(document)
            if outline is None:
                return STALE_MESSAGE
            message = describe_location(enclosing_chain(outline, self.editor.get_active_cursor()))
        self.debouncer.schedule(message)
        return message

    async def flush_announcements(self) -> None:
        await self.debouncer.flush()
