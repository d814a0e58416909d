"""Lenient date parsing for query values.

Accepts what people type into a search box: absolute dates in any format
``dateutil`` understands (``2020-01-31``, ``31 Jan 2020``, ``01/31/2020``),
the keywords ``now``/``today``/``yesterday``/``tomorrow``, and relative
offsets such as ``3 days ago``, ``-2 weeks`` or ``2020-01-01 +1 month``.

Relative forms are resolved against the ``now`` passed in by the caller,
which is the only time-dependent input of the compilers.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as dt_parser
from dateutil.relativedelta import relativedelta

_KEYWORD_OFFSETS = {
    "now": 0,
    "today": 0,
    "yesterday": -1,
    "tomorrow": 1,
}

# Trailing "[+-]N unit[s] [ago]"; whitespace may already have been removed.
_RE_OFFSET = re.compile(
    r"(?P<sign>[+-]?)\s*(?P<amount>\d+)\s*(?P<unit>day|week|month|year)s?(?P<ago>\s*ago)?\s*$",
    re.IGNORECASE,
)


def parse_date(value: str, *, now: datetime) -> Optional[date]:
    """Parse an absolute or relative date expression.

    Args:
        value: Raw date text.
        now: Reference time for relative expressions and missing date parts.

    Returns:
        The calendar date, or None if the text is not a date or the result
        falls outside the supported calendar range.
    """
    text = value.strip()
    if not text:
        return None

    offset = relativedelta()
    while True:
        match = _RE_OFFSET.search(text)
        if match is None:
            break
        amount = int(match.group("amount"))
        if match.group("sign") == "-":
            amount = -amount
        if match.group("ago"):
            amount = -amount
        offset += relativedelta(**{match.group("unit").lower() + "s": amount})
        text = text[: match.start()].strip()

    base = _parse_base(text, now)
    if base is None:
        return None
    try:
        return base + offset
    except (ValueError, OverflowError):
        # offset pushed the date outside date.min..date.max
        return None


def _parse_base(text: str, now: datetime) -> Optional[date]:
    if not text:
        return now.date()
    keyword = _KEYWORD_OFFSETS.get(text.lower())
    if keyword is not None:
        return now.date() + timedelta(days=keyword)
    default = datetime(now.year, now.month, now.day)
    try:
        return dt_parser.parse(text, default=default).date()
    except (ValueError, OverflowError):
        return None
