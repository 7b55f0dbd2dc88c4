"""Source loading, language detection, and syntax highlighting.

Language ids come from the file suffix first, then from Pygments lexers.
Highlighting is Pygments-only; plain text is returned when it fails.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from .outline.languages import LANGUAGE_BY_SUFFIX

logger = logging.getLogger(__name__)

PLAINTEXT_LANGUAGE = "plaintext"
DEFAULT_STYLE = "monokai"


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def guess_language_id(path: Path | None, source: str = "") -> str:
    """Map a document to a language id (``python``, ``cpp``, ...)."""
    if path is None:
        return PLAINTEXT_LANGUAGE
    language = LANGUAGE_BY_SUFFIX.get(path.suffix.lower())
    if language is not None:
        return language

    from pygments.lexers import get_lexer_for_filename
    from pygments.util import ClassNotFound

    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        return PLAINTEXT_LANGUAGE
    aliases = getattr(lexer, "aliases", None) or []
    return aliases[0] if aliases else PLAINTEXT_LANGUAGE


@lru_cache(maxsize=16)
def _formatter_for_style(style: str):
    """Return cached terminal formatter, falling back to the default style."""
    from pygments.formatters import TerminalFormatter
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.debug("Unknown Pygments style %r, using %s", style, DEFAULT_STYLE)
        style = DEFAULT_STYLE
    return TerminalFormatter(style=style)


def colorize_source(source: str, path: Path | None, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` for a terminal; returns ``source`` on any failure."""
    from pygments import highlight
    from pygments.lexers import TextLexer, get_lexer_for_filename

    try:
        lexer = get_lexer_for_filename(path.name, source) if path is not None else TextLexer()
    except Exception:
        lexer = TextLexer()

    try:
        return highlight(source, lexer, _formatter_for_style(style))
    except Exception as exc:
        logger.debug("Highlighting failed: %s", exc)
        return source
