"""Tests for matching records against rule sets."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from RuleQuery.compilers.matcher import EntityMatcher, entity_matches_some_rule
from RuleQuery.core.parser import parse_rules


def _matches(record: dict, *queries: str, fold_case: bool = True) -> bool:
    return entity_matches_some_rule(record, parse_rules(queries), fold_case=fold_case)


class TestEntityMatcher(unittest.TestCase):
    def test_wildcard_value(self) -> None:
        self.assertTrue(_matches({"status": "publish"}, "status:publish*"))
        self.assertTrue(_matches({"status": "published"}, "status:publish*"))
        self.assertFalse(_matches({"status": "draft"}, "status:publish*"))

    def test_rules_are_combined_with_or(self) -> None:
        queries = ("a:x", "a:y")
        self.assertTrue(_matches({"a": "x"}, *queries))
        self.assertTrue(_matches({"a": "y"}, *queries))
        self.assertFalse(_matches({"a": "z"}, *queries))

    def test_fields_in_rule_are_combined_with_and(self) -> None:
        record = {"a": "x", "b": "y"}
        self.assertTrue(_matches(record, "a:x b:y"))
        self.assertFalse(_matches(record, "a:x b:z"))

    def test_missing_or_null_field_fails_rule(self) -> None:
        self.assertFalse(_matches({}, "a:x"))
        self.assertFalse(_matches({"a": None}, "a:*"))

    def test_empty_rule_set_matches_nothing(self) -> None:
        self.assertFalse(entity_matches_some_rule({"a": "x"}, ()))

    def test_case_folding_of_names_and_values(self) -> None:
        self.assertTrue(_matches({"status": "publish"}, "Status:PUBLISH"))
        self.assertTrue(_matches({"Post_Type": "page_revision"}, "post_type:Page*"))

    def test_wildcard_follows_fold_case(self) -> None:
        self.assertTrue(_matches({"name": "post-1"}, "name:Post*"))
        self.assertFalse(_matches({"name": "post-1"}, "name:Post*", fold_case=False))
        self.assertTrue(_matches({"name": "Post-1"}, "name:Post*", fold_case=False))

    def test_case_sensitive_matcher(self) -> None:
        self.assertFalse(_matches({"status": "publish"}, "Status:publish", fold_case=False))
        self.assertFalse(_matches({"status": "publish"}, "status:PUBLISH", fold_case=False))
        self.assertFalse(_matches({"post_type": "page"}, "post_type:Pa*", fold_case=False))
        self.assertTrue(_matches({"status": "publish"}, "status:publish", fold_case=False))

    def test_only_first_value_per_field_is_used(self) -> None:
        self.assertTrue(_matches({"a": "x"}, "a:x a:y"))
        self.assertFalse(_matches({"a": "y"}, "a:x a:y"))

    def test_non_string_values_are_compared_as_strings(self) -> None:
        self.assertTrue(_matches({"count": 5}, "count:5"))
        self.assertTrue(_matches({"count": 15}, "count:*5"))

    def test_escaped_wildcard_matches_literally(self) -> None:
        self.assertTrue(_matches({"name": "a*"}, "name:a\\*"))
        self.assertFalse(_matches({"name": "ab"}, "name:a\\*"))

    def test_regex_metacharacters_are_literal(self) -> None:
        self.assertTrue(_matches({"name": "a.cd"}, "name:a.c*"))
        self.assertFalse(_matches({"name": "abcd"}, "name:a.c*"))

    def test_text_field_is_matched_like_any_field(self) -> None:
        self.assertTrue(_matches({"text": "hello"}, "hello"))

    def test_matcher_is_reusable(self) -> None:
        matcher = EntityMatcher()
        rules = parse_rules(["option_name:_transient_*"])
        self.assertTrue(matcher.matches({"option_name": "_transient_doing_cron"}, rules))
        self.assertFalse(matcher.matches({"option_name": "siteurl"}, rules))


if __name__ == "__main__":
    unittest.main()
