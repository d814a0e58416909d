"""``git log`` query compiler.

Compiles one rule into arguments for ``git log``, meant to be appended to the
command line as they are (values are wrapped in double quotes for a POSIX
shell).

Mapping
- author            -> --author="^name <.*>$" / "^.* <email>$" / "^name <email>$"
- date              -> --after / --before bounds (see ``_date_bounds``)
- before / after    -> --before / --after
- action, vp-action -> --grep on the ``VP-Action: Scope/Action/Id`` trailer
- entity, scope     -> scope segment of that trailer
- vpid              -> id segment of that trailer
- text              -> --grep="value"
- anything else     -> --grep on a ``<prefix><field>: value`` trailer

Every field uses all of its values. ``-i`` leaves case handling to git and
``--all-match`` makes all ``--grep`` patterns required.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, Mapping, Optional, Sequence

from RuleQuery.core.fragments import GIT_LOG, UnsanitizedFragment
from RuleQuery.core.rules import Rule
from RuleQuery.utils.dates import parse_date
from RuleQuery.utils.log import log

ACTION_TRAILER = "VP-Action"

_DATE_FIELDS = frozenset({"date", "before", "after"})
_KNOWN_FIELDS = frozenset(
    {"author", "date", "before", "after", "entity", "scope", "vp-action", "action", "vpid", "text"}
)
_DATE_OPERATORS = (">=", "<=", ">", "<")
_RE_WHITESPACE = re.compile(r"\s+")

# Trailer prefixes: current ``X-VP-`` form and the legacy ``VP-`` form.
_PREFIX_ANY = r"\(X-VP-\|VP-\)"
_PREFIX_OPTIONAL_X = r"\(X-\)\?"


def escape_git_log_argument(value: str) -> str:
    """Escape a value for a double-quoted basic regex passed through a shell.

    ``\\`` and ``$`` survive both the shell and the regex, ``.`` and ``[``
    lose their regex meaning, and ``*`` becomes ``.*`` so it keeps working as
    a wildcard.
    """
    out: list[str] = []
    for char in value:
        if char in "\\$":
            out.append("\\\\\\" + char)
        elif char in ".[":
            out.append("\\" + char)
        elif char == "*":
            out.append(".*")
        else:
            out.append(char)
    return "".join(out)


@dataclass(frozen=True, slots=True)
class GitLogQueryBuilder:
    """Compile rules into ``git log`` arguments.

    Attributes:
        ignore_case: Emit ``-i``.
        all_match: Emit ``--all-match``.
        clock: Returns the reference time for relative dates.
    """

    ignore_case: bool = True
    all_match: bool = True
    clock: Callable[[], datetime] = field(default=datetime.now)

    def build(self, rule: Rule) -> UnsanitizedFragment:
        """Compile one rule.

        Args:
            rule: Parsed rule.

        Returns:
            Fragment with space-separated ``git log`` options.
        """
        fields = _escape_rule(rule)
        now = self.clock()

        parts: list[str] = []
        if self.ignore_case:
            parts.append("-i")
        if self.all_match:
            parts.append("--all-match")

        for value in fields.get("author", ()):
            parts.append(f'--author="{_author_pattern(value)}"')

        for value in fields.get("date", ()):
            after, before = _date_bounds(value, now)
            if after is not None:
                parts.append(f"--after={after.isoformat()}")
            if before is not None:
                parts.append(f"--before={before.isoformat()}")

        for value in fields.get("before", ()):
            parsed = _parse_or_warn(value, now)
            if parsed is not None:
                parts.append(f"--before={parsed.isoformat()}")

        for value in fields.get("after", ()):
            parsed = _parse_or_warn(value, now)
            if parsed is not None:
                parts.append(f"--after={parsed.isoformat()}")

        parts.extend(_action_greps(fields))

        for value in fields.get("text", ()):
            parts.append(f'--grep="{value}"')

        for name, values in fields.items():
            if name.lower() in _KNOWN_FIELDS:
                continue
            parts.append(f'--grep="^{_trailer_prefix(name)}{name}: \\({_alternation(values)}\\)$"')

        text = " ".join(parts)
        log.debug("git log query for %s: %s", rule.to_dict(), text)
        return UnsanitizedFragment(text=text, target=GIT_LOG)


def build_git_log_query(
    rule: Rule,
    *,
    ignore_case: bool = True,
    all_match: bool = True,
    clock: Optional[Callable[[], datetime]] = None,
) -> UnsanitizedFragment:
    """Compile one rule with a one-off builder."""
    builder = GitLogQueryBuilder(
        ignore_case=ignore_case,
        all_match=all_match,
        clock=clock or datetime.now,
    )
    return builder.build(rule)


def _escape_rule(rule: Rule) -> dict[str, list[str]]:
    """Escape field names and values, keyed so known fields are found by lowercase name.

    Date values are left alone since they are parsed, not matched.
    """
    escaped: dict[str, list[str]] = {}
    for name, values in rule.fields.items():
        lowered = name.lower()
        key = lowered if lowered in _KNOWN_FIELDS else escape_git_log_argument(name)
        if lowered in _DATE_FIELDS:
            converted = list(values)
        else:
            converted = [escape_git_log_argument(v) for v in values]
        escaped.setdefault(key, []).extend(converted)
    return escaped


def _author_pattern(value: str) -> str:
    has_email = value.find("@") > 0
    if has_email and value.find("<") > 0:
        return f"^{value}$"
    if has_email:
        return f"^.* <{value}>$"
    return f"^{value} <.*>$"


def _date_bounds(value: str, now: datetime) -> tuple[Optional[date], Optional[date]]:
    """Translate a ``date`` value into exclusive ``(after, before)`` bounds.

    Forms
    - ``lo..hi``  -> after lo - 1 day, before hi + 1 day; ``*`` leaves a side open
    - ``>=d``     -> after d - 1 day
    - ``>d``      -> after d
    - ``<=d``     -> before d
    - ``<d``      -> before d - 1 day
    - ``d``       -> after d - 1 day, before d
    """
    compact = _RE_WHITESPACE.sub("", value)
    one_day = timedelta(days=1)

    bounds = compact.split("..")
    if len(bounds) > 1:
        lower, upper = bounds[0], bounds[1]
        after = _shift(_parse_or_warn(lower, now), -one_day, lower) if lower != "*" else None
        before = _shift(_parse_or_warn(upper, now), one_day, upper) if upper != "*" else None
        return after, before

    operator = next((op for op in _DATE_OPERATORS if compact.startswith(op)), "")
    parsed = _parse_or_warn(compact[len(operator) :], now)
    if parsed is None:
        return None, None

    if operator == ">=":
        return _shift(parsed, -one_day, compact), None
    if operator == ">":
        return parsed, None
    if operator == "<=":
        return None, parsed
    if operator == "<":
        return None, _shift(parsed, -one_day, compact)
    return _shift(parsed, -one_day, compact), parsed


def _shift(value: Optional[date], delta: timedelta, source: str) -> Optional[date]:
    """Move a bound by one day, or drop it when that leaves the calendar."""
    if value is None:
        return None
    try:
        return value + delta
    except OverflowError:
        log.warning("Skipping unrecognized date in query: %r", source)
        return None


def _parse_or_warn(value: str, now: datetime) -> Optional[date]:
    parsed = parse_date(value, now=now)
    if parsed is None:
        log.warning("Skipping unrecognized date in query: %r", value)
    return parsed


def _action_greps(fields: Mapping[str, Sequence[str]]) -> list[str]:
    """Build ``--grep`` options for the ``VP-Action: Scope/Action/Id`` trailer.

    Actions containing ``/`` are already qualified (``post/create``) and are
    matched together with ``vp-action``. Plain actions, scopes and ids each
    restrict one segment of a second pattern.
    """
    greps: list[str] = []
    actions = list(fields.get("action", ()))
    plain_actions = [value for value in actions if "/" not in value]
    qualified = [value for value in actions if "/" in value] + list(fields.get("vp-action", ()))

    if qualified:
        greps.append(f'--grep="^{ACTION_TRAILER}: \\({_alternation(qualified)}\\)\\(/.*\\)\\?$"')

    scopes = list(fields.get("entity", ())) + list(fields.get("scope", ()))
    ids = list(fields.get("vpid", ()))
    if scopes or plain_actions or ids:
        scope_part = f"\\({_alternation(scopes)}\\)" if scopes else ".*"
        action_part = f"\\({_alternation(plain_actions)}\\)" if plain_actions else ".*"
        id_part = f"/\\({_alternation(ids)}\\)" if ids else "\\(/.*\\)\\?"
        greps.append(f'--grep="^{ACTION_TRAILER}: {scope_part}/{action_part}{id_part}$"')

    return greps


def _trailer_prefix(name: str) -> str:
    lowered = name.lower()
    if lowered.startswith("x-vp-"):
        return ""
    if lowered.startswith("vp-"):
        return _PREFIX_OPTIONAL_X
    return _PREFIX_ANY


def _alternation(values: Sequence[str]) -> str:
    return "\\|".join(values)
