"""Query parser.

Turns raw query strings into rules.

Grammar of one term (terms are separated by whitespace)::

    term   := ["-"] [field ":" ws*] value
    field  := non-whitespace run
    value  := "'" quoted "'" | '"' quoted '"' | bareword
    quoted := (any char except the quote or "\\" | "\\" char)*

Examples
- ``author:Joe search``          -> author=Joe, text=search
- ``"exact phrase" status: draft`` -> text=exact phrase, status=draft
- ``-status:trash``              -> status=trash (negation is carried, not applied)

Matching is greedy with fallback: the longest ``field:`` prefix is tried
first, then shorter ones, then no field at all; a quote that never closes is
read as part of a bareword. The scanner never fails, it just moves on to the
next non-whitespace character.
"""

from __future__ import annotations

from typing import Iterable, Optional

from RuleQuery.core.rules import QueryTerm, Rule
from RuleQuery.utils.log import log

_QUOTES = ("'", '"')


def scan_terms(query: str) -> list[QueryTerm]:
    """Scan one raw query string into terms.

    Args:
        query: Raw query text.

    Returns:
        Terms in input order, empty values included.
    """
    terms: list[QueryTerm] = []
    pos = 0
    n = len(query)
    while pos < n:
        if query[pos].isspace():
            pos += 1
            continue
        term, pos = _scan_term(query, pos)
        terms.append(term)
    return terms


def parse_rules(queries: Iterable[str], allow_empty: bool = False) -> tuple[Rule, ...]:
    """Parse raw query strings into a rule set.

    Each query string yields at most one rule. Strings that produce no value
    are omitted, so indices in the result do not line up with the input.

    Args:
        queries: Raw query strings, one rule each.
        allow_empty: Keep values that are empty (``field:''``).

    Returns:
        Rules in input order.
    """
    rules: list[Rule] = []
    for query in queries:
        terms = [t for t in scan_terms(query) if t.value != "" or allow_empty]
        if not terms:
            log.debug("Query %r produced no rule", query)
            continue
        rule = Rule.from_terms(terms)
        log.debug("Query %r -> %s", query, rule.to_dict())
        rules.append(rule)
    return tuple(rules)


def _scan_term(query: str, start: int) -> tuple[QueryTerm, int]:
    """Scan the term beginning at ``start`` (a non-whitespace character)."""
    if query[start] == "-":
        scanned = _scan_labelled(query, start + 1)
        if scanned is not None:
            field, value, quote, end = scanned
            return QueryTerm(field=field, value=value, negated=True, quote=quote), end

    # A non-whitespace start always yields at least a bareword.
    field, value, quote, end = _scan_labelled(query, start) or (None, query[start], None, start + 1)
    return QueryTerm(field=field, value=value, quote=quote), end


def _scan_labelled(query: str, start: int) -> Optional[tuple[Optional[str], str, Optional[str], int]]:
    """Scan ``[field:] value`` at ``start``.

    Returns:
        ``(field, value, quote, end)`` or None if no value starts here.
    """
    for colon in _field_colons(query, start):
        value_start = colon + 1
        while value_start < len(query) and query[value_start].isspace():
            value_start += 1
        scanned = _scan_value(query, value_start)
        if scanned is not None:
            value, quote, end = scanned
            return query[start:colon], value, quote, end

    scanned = _scan_value(query, start)
    if scanned is None:
        return None
    value, quote, end = scanned
    return None, value, quote, end


def _field_colons(query: str, start: int) -> list[int]:
    """Return colon positions that can end a field name, longest field first."""
    end = start
    while end < len(query) and not query[end].isspace():
        end += 1
    return [i for i in range(end - 1, start, -1) if query[i] == ":"]


def _scan_value(query: str, start: int) -> Optional[tuple[str, Optional[str], int]]:
    """Scan a quoted value or a bareword at ``start``."""
    if start >= len(query) or query[start].isspace():
        return None

    if query[start] in _QUOTES:
        closing = _find_closing_quote(query, start + 1, query[start])
        if closing is not None:
            return query[start + 1 : closing], query[start], closing + 1

    end = start
    while end < len(query) and not query[end].isspace():
        end += 1
    return query[start:end], None, end


def _find_closing_quote(query: str, pos: int, quote: str) -> Optional[int]:
    while pos < len(query):
        char = query[pos]
        if char == quote:
            return pos
        if char == "\\":
            # The escaped character may be anything but a line break.
            if pos + 1 >= len(query) or query[pos + 1] == "\n":
                return None
            pos += 2
            continue
        pos += 1
    return None
