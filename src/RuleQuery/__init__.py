"""RuleQuery: a small query language for filtering records and history.

One query string, three targets::

    from RuleQuery import parse_rules, entity_matches_some_rule
    from RuleQuery import build_git_log_query, build_sql_restriction

    rules = parse_rules(["status:publish*", "author:Joe"])
    entity_matches_some_rule({"status": "publish"}, rules)   # True
    build_sql_restriction(rules[0]).text                     # (`status` LIKE "publish%")
    build_git_log_query(rules[1]).text                       # -i --all-match --author="^Joe <.*>$"
"""

from __future__ import annotations

from RuleQuery.compilers import (
    EntityMatcher,
    GitLogQueryBuilder,
    SqlRestrictionBuilder,
    build_git_log_query,
    build_sql_restriction,
    build_sql_restrictions,
    entity_matches_some_rule,
)
from RuleQuery.core.fragments import UnsanitizedFragment
from RuleQuery.core.parser import parse_rules, scan_terms
from RuleQuery.core.rules import QueryTerm, Rule, RuleSet
from RuleQuery.core.tokens import (
    Token,
    contains_wildcard,
    tokenize_value,
    tokens_to_filter_string,
    tokens_to_regex,
)

__all__ = [
    "EntityMatcher",
    "GitLogQueryBuilder",
    "QueryTerm",
    "Rule",
    "RuleSet",
    "SqlRestrictionBuilder",
    "Token",
    "UnsanitizedFragment",
    "build_git_log_query",
    "build_sql_restriction",
    "build_sql_restrictions",
    "contains_wildcard",
    "entity_matches_some_rule",
    "parse_rules",
    "scan_terms",
    "tokenize_value",
    "tokens_to_filter_string",
    "tokens_to_regex",
]
