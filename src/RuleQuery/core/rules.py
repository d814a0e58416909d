from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence

TEXT_FIELD = "text"


@dataclass(frozen=True, slots=True)
class QueryTerm:
    """One term scanned from a raw query string.

    Attributes:
        field: Field name as typed, or None for unlabelled text.
        value: Raw value. Quoted values keep their inner text verbatim,
            including backslash escapes.
        negated: Whether the term had a leading ``-``. Accepted by the
            grammar but not interpreted by any compiler.
        quote: The quote character that enclosed the value, or None for a
            bareword.
    """

    field: Optional[str]
    value: str
    negated: bool = False
    quote: Optional[str] = None

    @property
    def key(self) -> str:
        """Field name the value is stored under in a rule."""
        return self.field if self.field else TEXT_FIELD


@dataclass(frozen=True, slots=True)
class Rule:
    """Constraints parsed from one raw query string.

    Fields are AND-combined. Field names keep their original case; folding is
    left to each compiler. A field may collect several values, but compilers
    only look at the first one (see ``first``), so repeating a field inside a
    single query does not widen it. Use separate query strings for OR.

    Attributes:
        fields: Field name -> raw values, in first-seen order. Every field holds at
            least one value.
        terms: Scanned terms that contributed a value, in input order.
    """

    fields: Mapping[str, tuple[str, ...]]
    terms: Sequence[QueryTerm] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        fields = {name: tuple(values) for name, values in self.fields.items()}
        if not fields:
            raise ValueError("Rule must have at least one field")
        for name, values in fields.items():
            if not values:
                raise ValueError(f"Rule field {name!r} has no values")
        object.__setattr__(self, "fields", MappingProxyType(fields))
        object.__setattr__(self, "terms", tuple(self.terms))

    @classmethod
    def from_terms(cls, terms: Sequence[QueryTerm]) -> Rule:
        collected: dict[str, list[str]] = {}
        for term in terms:
            collected.setdefault(term.key, []).append(term.value)
        return cls(fields={name: tuple(values) for name, values in collected.items()}, terms=terms)

    def first(self, name: str) -> str:
        """Return the first value recorded for ``name``.

        Raises:
            KeyError: If the field is not part of the rule.
        """
        return self.fields[name][0]

    def values(self, name: str) -> tuple[str, ...]:
        return self.fields.get(name, ())

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def to_dict(self) -> dict[str, list[str]]:
        """Plain mapping view, handy for JSON output."""
        return {name: list(values) for name, values in self.fields.items()}


RuleSet = tuple[Rule, ...]
