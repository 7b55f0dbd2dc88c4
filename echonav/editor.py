"""Editor control: the host's cursor, selection, and viewport.

Navigation only reads the cursor and asks the editor to move and reveal.
``BufferEditor`` is an in-memory editor used by the CLI and tests.
"""

from __future__ import annotations

from typing import Protocol

from .document import Document
from .positions import DOCUMENT_START, Position


class EditorControl(Protocol):
    def active_document(self) -> Document | None: ...

    def get_active_cursor(self) -> Position: ...

    def set_selection(self, position: Position) -> None: ...

    def reveal_position(self, position: Position) -> None: ...


class BufferEditor:
    """Single-document editor state held in memory."""

    def __init__(self, document: Document | None = None, cursor: Position = DOCUMENT_START) -> None:
        self.document = document
        self.cursor = cursor
        self.revealed: Position | None = None

    def active_document(self) -> Document | None:
        return self.document

    def get_active_cursor(self) -> Position:
        return self.cursor

    def set_selection(self, position: Position) -> None:
        self.cursor = position

    def reveal_position(self, position: Position) -> None:
        self.revealed = position

    def replace_text(self, text: str) -> Document:
        """Swap in edited text as a new document version."""
        if self.document is None:
            self.document = Document(text=text)
        else:
            self.document = self.document.with_text(text)
        return self.document
