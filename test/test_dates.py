"""Tests for lenient date parsing."""

import sys
import unittest
from datetime import date, datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from RuleQuery.utils.dates import parse_date

NOW = datetime(2024, 5, 15, 12, 0)


class TestParseDate(unittest.TestCase):
    def test_absolute_formats(self) -> None:
        cases = {
            "2020-01-31": date(2020, 1, 31),
            "Jan 5 2020": date(2020, 1, 5),
            "31 January 2020": date(2020, 1, 31),
            "2020/02/29": date(2020, 2, 29),
        }
        for value, expected in cases.items():
            with self.subTest(value=value):
                self.assertEqual(parse_date(value, now=NOW), expected)

    def test_keywords(self) -> None:
        self.assertEqual(parse_date("now", now=NOW), date(2024, 5, 15))
        self.assertEqual(parse_date("Today", now=NOW), date(2024, 5, 15))
        self.assertEqual(parse_date("yesterday", now=NOW), date(2024, 5, 14))
        self.assertEqual(parse_date("tomorrow", now=NOW), date(2024, 5, 16))

    def test_relative_offsets(self) -> None:
        self.assertEqual(parse_date("2 weeks ago", now=NOW), date(2024, 5, 1))
        self.assertEqual(parse_date("3daysago", now=NOW), date(2024, 5, 12))
        self.assertEqual(parse_date("+1 month", now=NOW), date(2024, 6, 15))
        self.assertEqual(parse_date("-1 year", now=NOW), date(2023, 5, 15))

    def test_base_date_with_offset(self) -> None:
        self.assertEqual(parse_date("2020-01-31 +1 month", now=NOW), date(2020, 2, 29))
        self.assertEqual(parse_date("2020-01-01-1day", now=NOW), date(2019, 12, 31))

    def test_invalid_values(self) -> None:
        self.assertIsNone(parse_date("", now=NOW))
        self.assertIsNone(parse_date("   ", now=NOW))
        self.assertIsNone(parse_date("notadate", now=NOW))
        self.assertIsNone(parse_date("*", now=NOW))

    def test_out_of_range_results(self) -> None:
        self.assertIsNone(parse_date("9999-12-31 +1 day", now=NOW))
        self.assertIsNone(parse_date("100000 years ago", now=NOW))
        self.assertIsNone(parse_date("99999999999999 days", now=NOW))
        self.assertEqual(parse_date("0001-01-01", now=NOW), date(1, 1, 1))


if __name__ == "__main__":
    unittest.main()
