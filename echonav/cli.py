"""Command-line front door for echonav.

Loads one source file into an in-memory editor at the given cursor, runs a
single navigation command, and prints announcements to stdout.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import (
    MAX_ANNOUNCE_DELAY,
    load_navigation_settings,
    save_announce_delay,
    save_fallback_enabled,
    save_fallback_language,
)
from .document import Document
from .editor import BufferEditor
from .logging_config import setup_logging
from .navigator import Direction, Navigator
from .outline import BlockQuery
from .positions import Position
from .providers import JsonSymbolProvider
from .speech import ConsoleSink
from .syntax import DEFAULT_STYLE, colorize_source


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _non_negative_int(value: str) -> int:
    """argparse type for character offsets."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _delay_seconds(value: str) -> float:
    """argparse type for the announcement delay, in (0, 10] seconds."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if not 0 < parsed <= MAX_ANNOUNCE_DELAY:
        raise argparse.ArgumentTypeError(f"delay must be in (0, {MAX_ANNOUNCE_DELAY:g}]")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="echonav",
        description="Step through functions and classes of a source file and announce where you are.",
    )
    parser.add_argument("path", help="Source file to navigate.")
    parser.add_argument("--line", type=_positive_int, default=1, help="Cursor line (1-based).")
    parser.add_argument("--column", type=_positive_int, default=1, help="Cursor column (1-based).")
    parser.add_argument(
        "--offset",
        type=_non_negative_int,
        default=None,
        help="Cursor as a 0-based character offset; overrides --line/--column.",
    )

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("--next", dest="action", action="store_const", const="next", help="Jump to the next symbol.")
    actions.add_argument(
        "--previous",
        dest="action",
        action="store_const",
        const="previous",
        help="Jump to the previous symbol.",
    )
    actions.add_argument(
        "--block",
        choices=[query.value for query in BlockQuery],
        help="Print the innermost class or function around the cursor.",
    )
    actions.add_argument("--where", dest="action", action="store_const", const="where", help="Announce the enclosing symbols.")
    actions.add_argument("--outline", dest="action", action="store_const", const="outline", help="List jump targets (default).")

    parser.add_argument("--language", default=None, help="Override the detected language id.")
    parser.add_argument("--symbols-json", type=Path, default=None, help="LSP DocumentSymbol JSON to use instead of Tree-sitter.")
    parser.add_argument("--no-fallback", action="store_true", help="Never fall back to the line-pattern scan.")
    parser.add_argument("--fallback-language", default=None, help="Pattern table for the line scan (blank clears).")
    parser.add_argument("--announce-delay", type=_delay_seconds, default=None, help="Seconds before an announcement is spoken.")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Persist --announce-delay, --no-fallback and --fallback-language to the config file.",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for --block output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output for --block.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file instead of stderr.")
    return parser


async def _run(args: argparse.Namespace, navigator: Navigator, editor: BufferEditor) -> int:
    """Run the selected command; returns the process exit code."""
    out = sys.stdout
    try:
        if args.block is not None:
            selection = await navigator.current_block(args.block)
            if selection is None:
                out.write(f"Cursor is not inside a {args.block}.\n")
                return 1
            suffix = " (inside a class)" if selection.selection_in_class else ""
            out.write(
                f"{selection.block_type} {selection.name}: "
                f"lines {selection.first_line + 1}-{selection.last_line + 1}{suffix}\n"
            )
            document = editor.active_document()
            text = selection.text
            if not args.no_color and out.isatty():
                text = colorize_source(text, document.path if document else None, args.style)
            out.write(text if text.endswith("\n") else text + "\n")
            return 0

        if args.action in (Direction.NEXT.value, Direction.PREVIOUS.value):
            result = await navigator.move_cursor_to_symbol(args.action)
            if not navigator.settings.announce_messages and not result.moved:
                out.write(result.message + "\n")
            await navigator.flush_announcements()
            cursor = editor.get_active_cursor()
            out.write(f"cursor {cursor.line + 1}:{cursor.column + 1}\n")
            return 0 if result.moved else 1

        if args.action == "where":
            await navigator.where_am_i()
            return 0

        targets, degraded = await navigator.outline()
        if not targets:
            out.write("No symbols found.\n")
            return 1
        if degraded:
            sys.stderr.write("Structural symbols unavailable; showing line-pattern matches.\n")
        for target in targets:
            out.write(target.label + "\n")
        return 0
    finally:
        await navigator.flush_announcements()


def _save_settings(args: argparse.Namespace) -> None:
    """Persist the preference flags given on this command line."""
    if args.announce_delay is not None:
        save_announce_delay(args.announce_delay)
    if args.no_fallback:
        save_fallback_enabled(False)
    if args.fallback_language is not None:
        save_fallback_language(args.fallback_language)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one navigation command on a file."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"File not found: {path}")
    if args.symbols_json is not None and not args.symbols_json.is_file():
        raise SystemExit(f"Symbols file not found: {args.symbols_json}")

    if args.save:
        _save_settings(args)
    settings = load_navigation_settings()
    if args.no_fallback:
        settings = replace(settings, fallback_enabled=False)
    if args.fallback_language is not None:
        settings = replace(settings, fallback_language=args.fallback_language.strip() or None)
    if args.announce_delay is not None:
        settings = replace(settings, announce_delay_seconds=args.announce_delay)

    document = Document.from_path(path, language_id=args.language)
    if args.offset is not None:
        cursor = document.position_at(args.offset)
    else:
        cursor = Position(args.line - 1, args.column - 1)
    editor = BufferEditor(document, cursor)
    provider = JsonSymbolProvider(args.symbols_json) if args.symbols_json is not None else None
    navigator = Navigator(editor, provider=provider, sink=ConsoleSink(), settings=settings)

    exit_code = asyncio.run(_run(args, navigator, editor))
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
