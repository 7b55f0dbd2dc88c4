"""Tests for position ordering and inclusive range containment."""

from __future__ import annotations

import unittest

from echonav.positions import RANGE_SIZE_LINE_WEIGHT, Position, Range, contains, range_size, split_lines


def _range(start_line: int, start_col: int, end_line: int, end_col: int) -> Range:
    return Range(Position(start_line, start_col), Position(end_line, end_col))


class PositionTests(unittest.TestCase):
    def test_ordering_compares_line_then_column(self) -> None:
        self.assertTrue(Position(1, 9).is_before(Position(2, 0)))
        self.assertTrue(Position(2, 3).is_after(Position(2, 2)))
        self.assertFalse(Position(2, 2).is_after(Position(2, 2)))
        self.assertFalse(Position(2, 2).is_before(Position(2, 2)))

    def test_negative_coordinates_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Position(-1, 0)


class RangeTests(unittest.TestCase):
    def test_inverted_range_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            _range(4, 0, 2, 0)

    def test_contains_is_inclusive_of_both_endpoints(self) -> None:
        block = _range(2, 2, 4, 2)
        self.assertTrue(contains(block, Position(2, 2)))
        self.assertTrue(contains(block, Position(4, 2)))
        self.assertTrue(contains(block, Position(3, 0)))
        self.assertTrue(contains(block, Position(3, 500)))

    def test_contains_checks_columns_on_boundary_lines(self) -> None:
        block = _range(2, 2, 4, 2)
        self.assertFalse(block.contains(Position(2, 1)))
        self.assertFalse(block.contains(Position(4, 3)))
        self.assertFalse(block.contains(Position(1, 5)))
        self.assertFalse(block.contains(Position(5, 0)))

    def test_single_line_range(self) -> None:
        block = _range(7, 4, 7, 10)
        self.assertTrue(block.contains(Position(7, 4)))
        self.assertTrue(block.contains(Position(7, 10)))
        self.assertFalse(block.contains(Position(7, 11)))

    def test_size_weights_lines_over_columns(self) -> None:
        self.assertEqual(range_size(_range(2, 2, 4, 2)), 2 * RANGE_SIZE_LINE_WEIGHT)
        self.assertEqual(range_size(_range(0, 0, 0, 7)), 7)
        self.assertLess(_range(3, 0, 3, 9000).size(), _range(3, 0, 4, 0).size())


class SplitLinesTests(unittest.TestCase):
    def test_only_real_terminators_break_lines(self) -> None:
        text = "a\x0cb\nc\u2028d\r\ne\x85f\rg"
        self.assertEqual(split_lines(text), ["a\x0cb", "c\u2028d", "e\x85f", "g"])

    def test_keepends_preserves_terminators(self) -> None:
        self.assertEqual(split_lines("a\r\nb\n", keepends=True), ["a\r\n", "b\n"])

    def test_trailing_terminator_opens_no_extra_line(self) -> None:
        self.assertEqual(split_lines("x\n"), ["x"])
        self.assertEqual(split_lines(""), [])
        self.assertEqual(split_lines("\n\n"), ["", ""])


if __name__ == "__main__":
    unittest.main()
