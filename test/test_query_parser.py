"""Tests for query scanning and rule parsing."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from RuleQuery.core.parser import parse_rules, scan_terms
from RuleQuery.core.rules import QueryTerm, Rule


class TestScanTerms(unittest.TestCase):
    def test_field_and_bareword(self) -> None:
        self.assertEqual(
            scan_terms("author:Joe search"),
            [QueryTerm(field="author", value="Joe"), QueryTerm(field=None, value="search")],
        )

    def test_whitespace_after_colon(self) -> None:
        self.assertEqual(scan_terms("status:   draft"), [QueryTerm(field="status", value="draft")])

    def test_quoted_values(self) -> None:
        terms = scan_terms("title: 'hello world' \"exact phrase\"")
        self.assertEqual(
            terms,
            [
                QueryTerm(field="title", value="hello world", quote="'"),
                QueryTerm(field=None, value="exact phrase", quote='"'),
            ],
        )

    def test_escaped_quote_is_kept_raw(self) -> None:
        terms = scan_terms("title:'it\\'s'")
        self.assertEqual(terms, [QueryTerm(field="title", value="it\\'s", quote="'")])

    def test_leading_dash_sets_negated(self) -> None:
        self.assertEqual(
            scan_terms("-status:trash"),
            [QueryTerm(field="status", value="trash", negated=True)],
        )

    def test_lone_dash_is_text(self) -> None:
        self.assertEqual(
            scan_terms("- foo"),
            [QueryTerm(field=None, value="-"), QueryTerm(field=None, value="foo")],
        )

    def test_colon_without_value_is_text(self) -> None:
        self.assertEqual(scan_terms("foo:"), [QueryTerm(field=None, value="foo:")])

    def test_longest_field_name_wins(self) -> None:
        self.assertEqual(
            scan_terms("url:http://example.com"),
            [QueryTerm(field="url:http", value="//example.com")],
        )

    def test_unterminated_quote_falls_back_to_bareword(self) -> None:
        self.assertEqual(
            scan_terms('"open ended'),
            [QueryTerm(field=None, value='"open'), QueryTerm(field=None, value="ended")],
        )

    def test_empty_and_blank_queries(self) -> None:
        self.assertEqual(scan_terms(""), [])
        self.assertEqual(scan_terms(" \t "), [])


class TestParseRules(unittest.TestCase):
    def test_field_and_text(self) -> None:
        rules = parse_rules(["author:Joe search"])
        self.assertEqual(len(rules), 1)
        self.assertEqual(rules[0].to_dict(), {"author": ["Joe"], "text": ["search"]})

    def test_quoted_phrase_and_escaped_quote(self) -> None:
        rules = parse_rules(['"quoted phrase" field:"value with \\" escaped"'])
        self.assertEqual(len(rules), 1)
        self.assertEqual(rules[0].values("text"), ("quoted phrase",))
        value = rules[0].first("field")
        self.assertIn('"', value)
        self.assertEqual(value, 'value with \\" escaped')

    def test_case_is_preserved(self) -> None:
        rules = parse_rules(["Author:JOE"])
        self.assertEqual(rules[0].to_dict(), {"Author": ["JOE"]})

    def test_repeated_field_accumulates_values(self) -> None:
        rule = parse_rules(["a:1 a:2"])[0]
        self.assertEqual(rule.values("a"), ("1", "2"))
        self.assertEqual(rule.first("a"), "1")

    def test_one_rule_per_query_and_empty_queries_dropped(self) -> None:
        rules = parse_rules(["", "a:x", "   ", "a:y"])
        self.assertEqual([rule.to_dict() for rule in rules], [{"a": ["x"]}, {"a": ["y"]}])

    def test_empty_values_dropped_by_default(self) -> None:
        self.assertEqual(parse_rules(['status:""']), ())
        rule = parse_rules(['status:"" a:b'])[0]
        self.assertEqual(rule.to_dict(), {"a": ["b"]})

    def test_empty_values_kept_when_allowed(self) -> None:
        rules = parse_rules(["status:''"], allow_empty=True)
        self.assertEqual(rules[0].to_dict(), {"status": [""]})

    def test_negated_term_is_stored_like_any_other(self) -> None:
        rule = parse_rules(["-status:trash"])[0]
        self.assertEqual(rule.to_dict(), {"status": ["trash"]})
        self.assertTrue(rule.terms[0].negated)

    def test_rule_is_read_only(self) -> None:
        rule = parse_rules(["a:x"])[0]
        with self.assertRaises(TypeError):
            rule.fields["b"] = ("y",)  # type: ignore[index]

    def test_rule_rejects_fields_without_values(self) -> None:
        with self.assertRaisesRegex(ValueError, "'status'"):
            Rule(fields={"author": ("Joe",), "status": ()})
        with self.assertRaisesRegex(ValueError, "at least one field"):
            Rule(fields={})


if __name__ == "__main__":
    unittest.main()
