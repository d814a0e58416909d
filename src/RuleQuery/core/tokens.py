"""Wildcard tokenizer for single field values.

A value such as ``draft*`` is split into literal text and wildcard markers so
that each compiler can render the same value in its own pattern syntax.

Rules (consecutive literal pieces are merged into one token)
- ``*``   -> wildcard (zero or more characters)
- ``\\*`` -> literal ``*``
- ``\\\\`` -> literal ``\\``
- anything else is literal text, kept verbatim
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

WILDCARD = "WILDCARD"
LITERAL = "LITERAL"

_ESCAPED_WILDCARD = "\\*"
_ESCAPED_BACKSLASH = "\\\\"


@dataclass(frozen=True, slots=True)
class Token:
    """One unit of a tokenized value.

    Attributes:
        kind: Either ``WILDCARD`` or ``LITERAL``.
        text: Decoded literal text. Always empty for wildcards.
    """

    kind: str
    text: str = ""

    @property
    def is_wildcard(self) -> bool:
        return self.kind == WILDCARD


def wildcard() -> Token:
    return Token(WILDCARD)


def literal(text: str) -> Token:
    return Token(LITERAL, text)


def tokenize_value(value: str) -> tuple[Token, ...]:
    """Split a raw value into literal and wildcard tokens.

    Scans left to right, resolving escapes as it goes. Literal text between
    two wildcards always ends up in a single token, so ``a\\*b`` is one
    literal ``a*b``. Any input is accepted: a backslash that does not start a
    known escape is kept as literal text.

    Args:
        value: Raw field value as typed in the query.

    Returns:
        Tokens in input order. Empty for an empty value.
    """
    tokens: list[Token] = []
    pending: list[str] = []
    i = 0
    n = len(value)

    while i < n:
        pair = value[i : i + 2]
        if pair == _ESCAPED_WILDCARD:
            pending.append("*")
            i += 2
        elif pair == _ESCAPED_BACKSLASH:
            pending.append("\\")
            i += 2
        elif value[i] == "*":
            if pending:
                tokens.append(literal("".join(pending)))
                pending = []
            tokens.append(wildcard())
            i += 1
        else:
            pending.append(value[i])
            i += 1

    if pending:
        tokens.append(literal("".join(pending)))
    return tuple(tokens)


def contains_wildcard(tokens: Sequence[Token]) -> bool:
    """Return True if any token is a wildcard."""
    return any(token.is_wildcard for token in tokens)


def tokens_to_regex(tokens: Sequence[Token]) -> str:
    """Render tokens as an anchored regular expression.

    For tokens of ``prefix*`` this returns ``^prefix.*$``.
    """
    body = "".join(".*" if token.is_wildcard else re.escape(token.text) for token in tokens)
    return f"^{body}$"


def tokens_to_filter_string(tokens: Sequence[Token]) -> str:
    """Render tokens as a SQL ``LIKE`` pattern (wildcard becomes ``%``)."""
    return "".join("%" if token.is_wildcard else token.text for token in tokens)
