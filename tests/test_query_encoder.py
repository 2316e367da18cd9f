# tests/test_query_encoder.py

"""Tests for canonical query encoding."""

import unittest

from catalog_browser.models.filter_criteria import FilterCriteria
from catalog_browser.services.query_encoder import encode, to_query_string


class TestEncode(unittest.TestCase):
    """encode() ordering, omission and determinism."""

    def test_category_and_city(self) -> None:
        criteria = FilterCriteria(
            text="", category="Lawn", size="", city="Karachi"
        )
        self.assertEqual(
            encode(criteria),
            (("category", "Lawn"), ("city", "Karachi")),
        )

    def test_defaults_encode_city_only(self) -> None:
        self.assertEqual(encode(FilterCriteria()), (("city", "Karachi"),))

    def test_all_fields_in_fixed_order(self) -> None:
        """Text is sent as ``q`` and fields keep a fixed order."""
        criteria = FilterCriteria(
            city="Lahore", size="M", category="Pret", text="kurti"
        )
        self.assertEqual(
            encode(criteria),
            (
                ("q", "kurti"),
                ("category", "Pret"),
                ("size", "M"),
                ("city", "Lahore"),
            ),
        )

    def test_blank_fields_never_emitted(self) -> None:
        """Whitespace-only values are treated as empty."""
        criteria = FilterCriteria(text="   ", category="\t", size="")
        keys = [key for key, _ in encode(criteria)]
        self.assertEqual(keys, ["city"])

    def test_values_are_trimmed(self) -> None:
        self.assertEqual(
            encode(FilterCriteria(text="  abaya ")),
            encode(FilterCriteria(text="abaya")),
        )

    def test_equal_criteria_encode_identically(self) -> None:
        a = FilterCriteria(text="lawn", size="S")
        b = FilterCriteria(text="lawn", size="S")
        self.assertEqual(encode(a), encode(b))
        self.assertEqual(encode(a), encode(a))

    def test_result_is_immutable(self) -> None:
        query = encode(FilterCriteria(size="XS"))
        self.assertIsInstance(query, tuple)
        self.assertTrue(all(isinstance(p, tuple) for p in query))


class TestToQueryString(unittest.TestCase):
    """to_query_string() URL serialisation."""

    def test_keeps_pair_order(self) -> None:
        query = encode(FilterCriteria(category="Lawn", size="M"))
        self.assertEqual(
            to_query_string(query), "category=Lawn&size=M&city=Karachi"
        )

    def test_escapes_values(self) -> None:
        query = encode(FilterCriteria(text="lawn & chiffon"))
        self.assertEqual(
            to_query_string(query), "q=lawn+%26+chiffon&city=Karachi"
        )

    def test_empty_query(self) -> None:
        self.assertEqual(to_query_string(()), "")


if __name__ == "__main__":
    unittest.main()
