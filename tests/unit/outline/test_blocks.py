"""Tests for innermost-block lookup and enclosing-context descriptions."""

from __future__ import annotations

import unittest

from sample_trees import class_with_method, nested_module, span

from echonav.document import Document
from echonav.outline import (
    BlockMatch,
    BlockQuery,
    describe_block,
    describe_location,
    detect_current_block,
    enclosing_chain,
    flatten,
)
from echonav.outline.types import Symbol, SymbolKind
from echonav.positions import Position


class DetectCurrentBlockTests(unittest.TestCase):
    def test_method_and_class_around_cursor(self) -> None:
        outline = flatten(class_with_method())
        cursor = Position(3, 0)

        method = detect_current_block(outline, cursor, BlockQuery.CALLABLE)
        klass = detect_current_block(outline, cursor, BlockQuery.CLASS)

        assert method is not None and klass is not None
        self.assertEqual(method.symbol.name, "foo")
        self.assertTrue(method.selection_in_class)
        self.assertEqual(klass.symbol.name, "A")
        self.assertFalse(klass.selection_in_class)

    def test_nested_classes_pick_the_smallest(self) -> None:
        outline = flatten(nested_module())
        match = detect_current_block(outline, Position(5, 0), BlockQuery.CLASS)
        assert match is not None
        self.assertEqual(match.symbol.name, "Inner")
        self.assertTrue(match.selection_in_class)

    def test_constructors_are_not_callable_blocks(self) -> None:
        outline = flatten(nested_module())
        self.assertIsNone(detect_current_block(outline, Position(2, 10), BlockQuery.CALLABLE))

    def test_cursor_outside_every_matching_range(self) -> None:
        outline = flatten(class_with_method())
        self.assertIsNone(detect_current_block(outline, Position(1, 0), BlockQuery.CALLABLE))
        self.assertIsNone(detect_current_block(outline, Position(11, 0), BlockQuery.CLASS))

    def test_equal_sizes_keep_first_in_flattening_order(self) -> None:
        first = Symbol("first", SymbolKind.FUNCTION, span(1, 0, 3, 0))
        second = Symbol("second", SymbolKind.FUNCTION, span(1, 0, 3, 0))
        outline = flatten([first, second])

        match = detect_current_block(outline, Position(2, 0), BlockQuery.CALLABLE)

        assert match is not None
        self.assertEqual(match.symbol.name, "first")

    def test_symbols_without_range_never_match(self) -> None:
        outline = flatten([Symbol("ghost", SymbolKind.FUNCTION, None)])
        self.assertIsNone(detect_current_block(outline, Position(0, 0), BlockQuery.CALLABLE))

    def test_query_accepts_its_string_value(self) -> None:
        self.assertIs(BlockQuery("class"), BlockQuery.CLASS)
        self.assertIs(BlockQuery("function"), BlockQuery.CALLABLE)


class DescribeBlockTests(unittest.TestCase):
    def test_selection_exposes_lines_and_text(self) -> None:
        text = "class A:\n    x = 1\n    def foo(self):\n        return 1\n    # end\n"
        method = Symbol("foo", SymbolKind.METHOD, span(2, 4, 3, 16))
        roots = [Symbol("A", SymbolKind.CLASS, span(0, 0, 4, 9), (method,))]
        outline = flatten(roots)
        match = detect_current_block(outline, Position(3, 4), BlockQuery.CALLABLE)
        assert match is not None

        selection = describe_block(Document(text), match, BlockQuery.CALLABLE)

        self.assertEqual(selection.block_type, "function")
        self.assertEqual(selection.name, "foo")
        self.assertEqual((selection.first_line, selection.last_line), (2, 3))
        self.assertEqual(selection.first_line_text, "    def foo(self):")
        self.assertEqual(selection.last_line_text, "        return 1")
        self.assertEqual(selection.text, "def foo(self):\n        return 1")
        self.assertTrue(selection.selection_in_class)

    def test_form_feed_does_not_start_a_new_line(self) -> None:
        text = "\x0c\ndef greet():\n    return 1\n"
        greet = Symbol("greet", SymbolKind.FUNCTION, span(1, 0, 2, 12))
        match = detect_current_block(flatten([greet]), Position(1, 4), BlockQuery.CALLABLE)
        assert match is not None

        selection = describe_block(Document(text), match, BlockQuery.CALLABLE)

        self.assertEqual(selection.first_line_text, "def greet():")
        self.assertEqual(selection.last_line_text, "    return 1")
        self.assertEqual(selection.text, "def greet():\n    return 1")

    def test_symbol_without_range_is_rejected(self) -> None:
        match = BlockMatch(symbol=Symbol("loose", SymbolKind.FUNCTION), ancestors=())
        with self.assertRaises(ValueError):
            describe_block(Document("def loose(): pass\n"), match, BlockQuery.CALLABLE)


class EnclosingChainTests(unittest.TestCase):
    def test_chain_runs_outermost_first(self) -> None:
        outline = flatten(nested_module())
        chain = enclosing_chain(outline, Position(5, 0))
        self.assertEqual([symbol.name for symbol in chain], ["Outer", "Inner", "run"])
        self.assertEqual(describe_location(chain), "Inside method run in class Inner in class Outer.")

    def test_chain_skips_non_jumpable_symbols(self) -> None:
        outline = flatten(nested_module())
        chain = enclosing_chain(outline, Position(1, 6))
        self.assertEqual([symbol.name for symbol in chain], ["Outer"])

    def test_top_level(self) -> None:
        outline = flatten(nested_module())
        chain = enclosing_chain(outline, Position(9, 0))
        self.assertEqual(chain, ())
        self.assertEqual(describe_location(chain), "At top level.")


if __name__ == "__main__":
    unittest.main()
