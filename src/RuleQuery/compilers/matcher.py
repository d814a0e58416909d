"""In-process rule matching for records.

Decides whether a record (field -> value mapping) satisfies a rule set, for
example when checking whether an entity is ignored or frequently written.

Semantics
- The rule set matches if any rule matches.
- A rule matches if every one of its fields matches.
- A field the record lacks (or holds as None) fails the rule.
- Only the first value recorded for a field is used.
- Wildcard values match as anchored patterns; anything else, and a wildcard
  value whose pattern did not match, is compared as a plain string.
- With fold_case, wildcard patterns ignore case too, so ``Post*`` matches
  ``post-1``. Pattern matching that honours case is only available with
  fold_case off.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from RuleQuery.core.rules import Rule
from RuleQuery.core.tokens import contains_wildcard, tokenize_value, tokens_to_regex


@dataclass(frozen=True, slots=True)
class EntityMatcher:
    """Rule-set predicate over records.

    Attributes:
        fold_case: Compare field names and values case-insensitively.
    """

    fold_case: bool = True

    def matches(self, record: Mapping[str, Any], rules: Sequence[Rule]) -> bool:
        """Return True if ``record`` satisfies at least one rule."""
        fields = self._normalize_record(record)
        return any(self._rule_matches(fields, rule) for rule in rules)

    def _normalize_record(self, record: Mapping[str, Any]) -> dict[str, Any]:
        if not self.fold_case:
            return dict(record)
        # Later keys win when names collide after folding.
        return {str(name).lower(): value for name, value in record.items()}

    def _rule_matches(self, fields: Mapping[str, Any], rule: Rule) -> bool:
        for name in rule:
            key = name.lower() if self.fold_case else name
            actual = fields.get(key)
            if actual is None:
                return False
            if not self._value_matches(rule.first(name), str(actual)):
                return False
        return True

    def _value_matches(self, expected: str, actual: str) -> bool:
        tokens = tokenize_value(expected)
        if contains_wildcard(tokens):
            flags = re.IGNORECASE if self.fold_case else 0
            if re.search(tokens_to_regex(tokens), actual, flags | re.DOTALL):
                return True
        if self.fold_case:
            return actual.lower() == expected.lower()
        return actual == expected


def entity_matches_some_rule(
    record: Mapping[str, Any],
    rules: Sequence[Rule],
    *,
    fold_case: bool = True,
) -> bool:
    """Test a record against a rule set with a one-off matcher."""
    return EntityMatcher(fold_case=fold_case).matches(record, rules)
