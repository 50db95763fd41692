"""Tests for building filter trees from nested mappings."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CloudSearchKit.core.filters import AnyOf, Equality, Group, Range, filter_from_mapping
from CloudSearchKit.errors import UnsupportedValueTypeError
from CloudSearchKit.query.boolean import compile_filters


class TestFilterFromMapping(unittest.TestCase):
    def test_reserved_keys_become_groups(self) -> None:
        result = filter_from_mapping({"and": {"foo": "bar", "baz": "bug"}})
        self.assertEqual(
            result,
            (Group("and", (Equality("foo", "bar"), Equality("baz", "bug"))),),
        )

    def test_value_types_pick_node_kind(self) -> None:
        result = filter_from_mapping({"year": range(2000, 2011), "tag": ["a", "b"], "name": "x", "n": 3})
        self.assertEqual(
            result,
            (
                Range("year", 2000, 2010),
                AnyOf("tag", ("a", "b")),
                Equality("name", "x"),
                Equality("n", 3),
            ),
        )

    def test_reserved_key_with_scalar_value_is_a_field(self) -> None:
        self.assertEqual(filter_from_mapping({"not": "really"}), (Equality("not", "really"),))

    def test_expression_values_pass_through(self) -> None:
        rng = Range("lat", 1, 2)
        self.assertEqual(filter_from_mapping({"ignored": rng}), (rng,))

    def test_unsupported_value_raises(self) -> None:
        with self.assertRaises(UnsupportedValueTypeError) as ctx:
            filter_from_mapping({"and": {"when": object()}})
        self.assertEqual(ctx.exception.field, "when")

    def test_empty_range_rejected(self) -> None:
        with self.assertRaises(ValueError):
            filter_from_mapping({"year": range(5, 5)})

    def test_nested_mapping_compiles_like_hand_built_tree(self) -> None:
        compiled = compile_filters(
            filter_from_mapping({"or": {"is_donut": True, "and": {"round": "", "frosting": None, "fried": True}}})
        )
        self.assertEqual(compiled, "(or%20is_donut:'true'(and%20fried:'true'))")


if __name__ == "__main__":
    unittest.main()
