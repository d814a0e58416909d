"""Tests for SQL restriction compilation."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from RuleQuery.compilers.sql import SqlRestrictionBuilder, build_sql_restriction, build_sql_restrictions
from RuleQuery.core.fragments import SQL
from RuleQuery.core.parser import parse_rules


def _restriction(query: str, **kwargs) -> str:
    return build_sql_restriction(parse_rules([query])[0], **kwargs).text


class TestSqlRestriction(unittest.TestCase):
    def test_wildcard_uses_like(self) -> None:
        self.assertEqual(_restriction("name:foo*"), '(`name` LIKE "foo%")')

    def test_plain_value_uses_equality(self) -> None:
        self.assertEqual(_restriction("name:foo"), '(`name` = "foo")')

    def test_fields_are_joined_with_and(self) -> None:
        self.assertEqual(
            _restriction("name:foo status:draft*"),
            '(`name` = "foo" AND `status` LIKE "draft%")',
        )

    def test_double_quotes_are_escaped(self) -> None:
        self.assertEqual(_restriction("title:'say \"hi\"'"), '(`title` = "say \\"hi\\"")')

    def test_underscore_escaped_only_in_like(self) -> None:
        self.assertEqual(_restriction("post_type:my_type*"), '(`post_type` LIKE "my\\_type%")')
        self.assertEqual(_restriction("post_type:my_type"), '(`post_type` = "my_type")')

    def test_escaped_wildcard_is_literal_star(self) -> None:
        self.assertEqual(_restriction("name:100\\*"), '(`name` = "100*")')

    def test_only_first_value_is_used(self) -> None:
        self.assertEqual(_restriction("a:1 a:2"), '(`a` = "1")')

    def test_case_is_preserved_by_default(self) -> None:
        self.assertEqual(_restriction("Name:Foo"), '(`Name` = "Foo")')

    def test_fold_case_lowers_column_and_value(self) -> None:
        self.assertEqual(_restriction("Name:Foo*", fold_case=True), '(LOWER(`Name`) LIKE "foo%")')

    def test_rule_set_is_joined_with_or(self) -> None:
        fragment = build_sql_restrictions(parse_rules(["a:x", "a:y*"]))
        self.assertEqual(fragment.text, '(`a` = "x") OR (`a` LIKE "y%")')

    def test_fragment_target_and_idempotence(self) -> None:
        builder = SqlRestrictionBuilder()
        rule = parse_rules(["name:foo* status:draft"])[0]
        first = builder.build(rule)
        self.assertEqual(first.target, SQL)
        self.assertEqual(first, builder.build(rule))


if __name__ == "__main__":
    unittest.main()
