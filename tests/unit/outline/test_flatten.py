"""Tests for pre-order flattening into the id-indexed outline arena."""

from __future__ import annotations

import unittest

from sample_trees import class_with_method, nested_module

from echonav.outline import flatten
from echonav.outline.types import Symbol, SymbolKind


class FlattenTests(unittest.TestCase):
    def test_visits_every_node_once_in_pre_order(self) -> None:
        outline = flatten(nested_module())
        names = [outline.symbol(entry).name for entry in outline]
        self.assertEqual(names, ["Outer", "count", "__init__", "Inner", "run", "helper"])
        self.assertEqual(len(outline), 6)

    def test_entries_record_root_first_ancestor_ids(self) -> None:
        outline = flatten(nested_module())
        by_name = {outline.symbol(entry).name: entry for entry in outline}

        run_ancestors = [symbol.name for symbol in outline.ancestors(by_name["run"])]
        self.assertEqual(run_ancestors, ["Outer", "Inner"])
        self.assertEqual(outline.ancestors(by_name["helper"]), ())
        self.assertEqual(outline.ancestors(by_name["Outer"]), ())

    def test_entry_ids_follow_visit_order(self) -> None:
        outline = flatten(nested_module())
        self.assertEqual([entry.symbol_id for entry in outline], list(range(6)))
        self.assertEqual(outline.entries[4].ancestor_ids, (0, 3))

    def test_empty_input_yields_empty_outline(self) -> None:
        outline = flatten([])
        self.assertEqual(len(outline), 0)
        self.assertEqual(list(outline), [])

    def test_input_tree_is_not_modified(self) -> None:
        roots = class_with_method()
        before = repr(roots)
        flatten(roots)
        flatten(roots)
        self.assertEqual(repr(roots), before)

    def test_deep_chain_does_not_hit_recursion_limit(self) -> None:
        node = Symbol("leaf", SymbolKind.FUNCTION)
        for depth in range(3000):
            node = Symbol(f"level{depth}", SymbolKind.NAMESPACE, children=(node,))

        outline = flatten([node])

        self.assertEqual(len(outline), 3001)
        self.assertEqual(len(outline.entries[-1].ancestor_ids), 3000)


if __name__ == "__main__":
    unittest.main()
