"""Tests for jump-target naming, filtering, and ordering."""

from __future__ import annotations

import unittest

from sample_trees import class_with_method, nested_module, span

from echonav.outline import build_jump_targets, display_name, flatten
from echonav.outline.types import JumpTarget, Symbol, SymbolKind
from echonav.positions import Position


class DisplayNameTests(unittest.TestCase):
    def test_joins_trimmed_ancestor_names(self) -> None:
        outer = Symbol(" Outer ", SymbolKind.CLASS)
        blank = Symbol("   ", SymbolKind.NAMESPACE)
        method = Symbol("run ", SymbolKind.METHOD)
        self.assertEqual(display_name(method, [outer, blank]), "Outer::run")

    def test_empty_chain_uses_placeholder(self) -> None:
        self.assertEqual(display_name(Symbol("", SymbolKind.FUNCTION), []), "(unnamed)")

    def test_unnamed_symbol_keeps_ancestors(self) -> None:
        outer = Symbol("Outer", SymbolKind.CLASS)
        self.assertEqual(display_name(Symbol("", SymbolKind.FUNCTION), [outer]), "Outer")


class BuildJumpTargetsTests(unittest.TestCase):
    def test_single_method_in_class(self) -> None:
        targets = build_jump_targets(flatten(class_with_method()))
        self.assertEqual(
            targets,
            [
                JumpTarget(Position(0, 0), "A", SymbolKind.CLASS),
                JumpTarget(Position(2, 2), "A::foo", SymbolKind.METHOD),
            ],
        )

    def test_filters_to_jumpable_kinds(self) -> None:
        roots = [
            Symbol("CONFIG", SymbolKind.CONSTANT, span(0, 0, 0, 10)),
            Symbol("Point", SymbolKind.STRUCT, span(1, 0, 3, 1)),
            Symbol("Shape", SymbolKind.INTERFACE, span(4, 0, 6, 1)),
            Symbol("area", SymbolKind.FUNCTION, span(7, 0, 9, 1)),
        ]
        names = [target.display_name for target in build_jump_targets(flatten(roots))]
        self.assertEqual(names, ["Point", "area"])

    def test_nested_names_are_qualified(self) -> None:
        names = [target.display_name for target in build_jump_targets(flatten(nested_module()))]
        self.assertEqual(names, ["Outer", "Outer::__init__", "Outer::Inner", "Outer::Inner::run", "helper"])

    def test_output_is_sorted_whatever_the_input_order(self) -> None:
        roots = [
            Symbol("late", SymbolKind.FUNCTION, span(20, 0, 22, 0)),
            Symbol("early", SymbolKind.FUNCTION, span(2, 4, 3, 0)),
            Symbol("same_line", SymbolKind.FUNCTION, span(2, 0, 2, 3)),
        ]
        targets = build_jump_targets(flatten(roots))
        self.assertEqual([target.display_name for target in targets], ["same_line", "early", "late"])

    def test_missing_range_falls_back_to_document_start(self) -> None:
        roots = [
            Symbol("placed", SymbolKind.FUNCTION, span(5, 0, 6, 0)),
            Symbol("lost", SymbolKind.FUNCTION, None),
        ]
        targets = build_jump_targets(flatten(roots))
        self.assertEqual(targets[0], JumpTarget(Position(0, 0), "lost", SymbolKind.FUNCTION))

    def test_repeated_builds_are_identical(self) -> None:
        outline = flatten(nested_module())
        self.assertEqual(build_jump_targets(outline), build_jump_targets(outline))

    def test_label_is_fixed_width(self) -> None:
        target = JumpTarget(Position(2, 2), "A::foo", SymbolKind.METHOD)
        self.assertEqual(target.label, "method      L    3  A::foo")


if __name__ == "__main__":
    unittest.main()
