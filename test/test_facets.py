"""Tests for facet parameter compilation."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CloudSearchKit.core.request import FacetSpec
from CloudSearchKit.query.facets import compile_facets


class TestCompileFacets(unittest.TestCase):
    def test_single_field(self) -> None:
        self.assertEqual(compile_facets(FacetSpec.of_fields(["genres"])), "&facet.genres=%7B%7D")

    def test_many_fields_keep_order(self) -> None:
        self.assertEqual(
            compile_facets(FacetSpec.of_fields(["genres", "year"])),
            "&facet.genres=%7B%7D&facet.year=%7B%7D",
        )

    def test_options_literal(self) -> None:
        spec = FacetSpec.of_options({"genres": {"sort": "count", "size": 5}})
        self.assertEqual(compile_facets(spec), "&facet.genres=%7Bsort%3A%27count%27%2Csize%3A5%7D")

    def test_unsupported_option_values_are_dropped(self) -> None:
        spec = FacetSpec.of_options({"genres": {"sort": "count", "flag": True, "extra": None, "size": 5}})
        self.assertEqual(compile_facets(spec), "&facet.genres=%7Bsort%3A%27count%27%2Csize%3A5%7D")

    def test_empty_options(self) -> None:
        self.assertEqual(compile_facets(FacetSpec.of_options({"year": {}})), "&facet.year=%7B%7D")

    def test_coerce_accepts_list_mapping_and_string(self) -> None:
        self.assertEqual(FacetSpec.coerce(["a", "b"]).fields, ("a", "b"))
        self.assertEqual(FacetSpec.coerce("a").fields, ("a",))
        spec = FacetSpec.coerce({"a": {"size": 1}})
        self.assertEqual(spec.fields, ("a",))
        self.assertEqual(dict(spec.options["a"]), {"size": 1})


if __name__ == "__main__":
    unittest.main()
