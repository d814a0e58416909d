"""SQL restriction compiler.

Compiles one rule into a bracketed ``WHERE`` fragment::

    {"field": ["value"], "other_field": ["with_prefix*"]}
    -> (`field` = "value" AND `other_field` LIKE "with_prefix%")

Only the first value of each field is used. Double quotes in values are
backslash-escaped; in ``LIKE`` patterns ``_`` is escaped as well so that it is
matched literally. Field names are inserted as typed. Case sensitivity is left
to the column collation unless ``fold_case`` is set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from RuleQuery.core.fragments import SQL, UnsanitizedFragment
from RuleQuery.core.rules import Rule
from RuleQuery.core.tokens import contains_wildcard, tokenize_value, tokens_to_filter_string
from RuleQuery.utils.log import log


@dataclass(frozen=True, slots=True)
class SqlRestrictionBuilder:
    """Compile rules into SQL restrictions.

    Attributes:
        fold_case: Compare ``LOWER(column)`` against a lowercased value instead
            of relying on the collation.
    """

    fold_case: bool = False

    def build(self, rule: Rule) -> UnsanitizedFragment:
        parts = [self._comparison(name, rule.first(name)) for name in rule]
        text = "({})".format(" AND ".join(parts))
        log.debug("SQL restriction for %s: %s", rule.to_dict(), text)
        return UnsanitizedFragment(text=text, target=SQL)

    def build_any(self, rules: Sequence[Rule]) -> UnsanitizedFragment:
        """Compile a rule set; rules are combined with ``OR``."""
        text = " OR ".join(self.build(rule).text for rule in rules)
        return UnsanitizedFragment(text=text, target=SQL)

    def _comparison(self, name: str, value: str) -> str:
        tokens = tokenize_value(value)
        is_wildcard = contains_wildcard(tokens)
        operator = "LIKE" if is_wildcard else "="

        searched = tokens_to_filter_string(tokens)
        if self.fold_case:
            searched = searched.lower()
        escaped = searched.replace('"', '\\"')
        if is_wildcard:
            escaped = escaped.replace("_", "\\_")

        column = f"`{name}`"
        if self.fold_case:
            column = f"LOWER({column})"
        return f'{column} {operator} "{escaped}"'


def build_sql_restriction(rule: Rule, *, fold_case: bool = False) -> UnsanitizedFragment:
    """Compile one rule with a one-off builder."""
    return SqlRestrictionBuilder(fold_case=fold_case).build(rule)


def build_sql_restrictions(rules: Sequence[Rule], *, fold_case: bool = False) -> UnsanitizedFragment:
    """Compile a whole rule set into ``(...) OR (...)``."""
    return SqlRestrictionBuilder(fold_case=fold_case).build_any(rules)
