"""Output type for compiled query fragments.

Fragments are built from query text typed by an administrator. Only the
escaping rules of each compiler are applied; nothing else is sanitized, so a
fragment must only be combined with other trusted-origin text. Keeping the
text behind an explicit attribute makes every call site spell that out.
"""

from __future__ import annotations

from dataclasses import dataclass

GIT_LOG = "git-log"
SQL = "sql"


@dataclass(frozen=True, slots=True)
class UnsanitizedFragment:
    """Compiled text for one downstream tool.

    Attributes:
        text: Fragment exactly as it should be handed to the target. Callers
            must not re-quote or re-interpret it.
        target: Target language name (``git-log`` or ``sql``).
    """

    text: str
    target: str

    def __bool__(self) -> bool:
        return bool(self.text)
