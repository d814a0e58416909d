"""Command implementations for the RuleQuery CLI.

Each command parses its queries with the configured parser settings and
returns text lines; printing is left to the CLI layer.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Sequence

from RuleQuery.compilers.matcher import EntityMatcher
from RuleQuery.compilers.registry import build_compiler
from RuleQuery.config import AppConfig
from RuleQuery.core.parser import parse_rules
from RuleQuery.core.rules import Rule
from RuleQuery.utils.log import log


def _parse(config: AppConfig, queries: Sequence[str]) -> tuple[Rule, ...]:
    rules = parse_rules(queries, allow_empty=config.parser.allow_empty)
    log.info("Parsed %d rule(s) from %d query string(s)", len(rules), len(queries))
    return rules


@dataclass(slots=True)
class ParseCommand:
    """Show the rules parsed from query strings as JSON."""

    config: AppConfig
    queries: Sequence[str]

    def execute(self) -> list[str]:
        rules = _parse(self.config, self.queries)
        payload = [
            {
                "fields": rule.to_dict(),
                "terms": [
                    {
                        "field": term.field,
                        "value": term.value,
                        "negated": term.negated,
                        "quote": term.quote,
                    }
                    for term in rule.terms
                ],
            }
            for rule in rules
        ]
        return [json.dumps(payload, ensure_ascii=False, indent=2)]


@dataclass(slots=True)
class MatchCommand:
    """Test one record against the rule set."""

    config: AppConfig
    queries: Sequence[str]
    record: Mapping[str, str]

    def execute(self) -> bool:
        rules = _parse(self.config, self.queries)
        matcher = EntityMatcher(fold_case=self.config.matcher.fold_case)
        matched = matcher.matches(self.record, rules)
        log.debug("Record %s matched=%s", dict(self.record), matched)
        return matched


@dataclass(slots=True)
class CompileCommand:
    """Compile every rule for one target, one fragment per line."""

    config: AppConfig
    queries: Sequence[str]
    target: str

    def execute(self) -> list[str]:
        compile_rule = build_compiler(self.target, config=self.config)
        rules = _parse(self.config, self.queries)
        return [compile_rule(rule).text for rule in rules]
