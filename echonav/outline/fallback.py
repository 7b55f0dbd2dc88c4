"""Degraded-mode symbol scan over raw text.

Used only when no symbol tree is available. Results come from line
regexes for a single language: there is no nesting and no qualification,
so ``A.foo`` is reported as plain ``foo``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..positions import Position, split_lines
from .languages import DEFAULT_FALLBACK_LANGUAGE, FALLBACK_PATTERNS_BY_LANGUAGE, normalize_language_id
from .types import JumpTarget, SymbolKind


@dataclass(frozen=True)
class FallbackScanner:
    """Line-pattern scanner for one language's definition syntax."""

    language: str
    patterns: tuple[tuple[SymbolKind, re.Pattern[str]], ...]

    def scan(self, text: str, max_symbols: int = 4000) -> list[JumpTarget]:
        """Return definition lines as jump targets, in textual order.

        Each pattern must define ``name``; the target column is the start of
        the optional ``keyword`` group, else the start of the match.
        """
        targets: list[JumpTarget] = []
        for line_idx, line in enumerate(split_lines(text)):
            for kind, pattern in self.patterns:
                match = pattern.match(line)
                if match is None:
                    continue
                name = match.group("name").strip()
                if not name:
                    continue
                if "keyword" in pattern.groupindex:
                    column = match.start("keyword")
                else:
                    column = match.start()
                targets.append(JumpTarget(position=Position(line_idx, column), display_name=name, kind=kind))
                break
            if len(targets) >= max_symbols:
                break
        return targets


def fallback_scanner_for(language_id: str | None) -> FallbackScanner:
    """Scanner for ``language_id``; unknown languages get the Python scanner."""
    language = normalize_language_id(language_id)
    if language not in FALLBACK_PATTERNS_BY_LANGUAGE:
        language = DEFAULT_FALLBACK_LANGUAGE
    return FallbackScanner(language=language, patterns=FALLBACK_PATTERNS_BY_LANGUAGE[language])
