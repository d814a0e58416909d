"""Rule compilers: record matcher, ``git log`` query and SQL restriction."""

from __future__ import annotations

from RuleQuery.compilers.git_log import GitLogQueryBuilder, build_git_log_query
from RuleQuery.compilers.matcher import EntityMatcher, entity_matches_some_rule
from RuleQuery.compilers.registry import build_compiler, supported_targets
from RuleQuery.compilers.sql import SqlRestrictionBuilder, build_sql_restriction, build_sql_restrictions

__all__ = [
    "EntityMatcher",
    "GitLogQueryBuilder",
    "SqlRestrictionBuilder",
    "build_compiler",
    "build_git_log_query",
    "build_sql_restriction",
    "build_sql_restrictions",
    "entity_matches_some_rule",
    "supported_targets",
]
