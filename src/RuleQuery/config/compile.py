"""Parser and compiler configuration.

Case handling is configured per compiler on purpose: the matcher folds case
itself, while the git and SQL outputs keep values as typed and leave case to
``git -i`` and to the column collation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from RuleQuery.config.common import get_section, read_bool, reject_unknown_keys


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Parser settings.

    Attributes:
        allow_empty: Keep empty values such as ``field:""``.
    """

    allow_empty: bool


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    fold_case: bool


@dataclass(frozen=True, slots=True)
class GitLogConfig:
    ignore_case: bool
    all_match: bool


@dataclass(frozen=True, slots=True)
class SqlConfig:
    fold_case: bool


def load_parser(raw: Mapping[str, Any]) -> ParserConfig:
    section = get_section(raw, "parser")
    reject_unknown_keys(section, {"allow_empty"}, "parser")
    return ParserConfig(allow_empty=read_bool(section, "allow_empty", "parser"))


def load_matcher(raw: Mapping[str, Any]) -> MatcherConfig:
    section = get_section(raw, "matcher")
    reject_unknown_keys(section, {"fold_case"}, "matcher")
    return MatcherConfig(fold_case=read_bool(section, "fold_case", "matcher"))


def load_git_log(raw: Mapping[str, Any]) -> GitLogConfig:
    section = get_section(raw, "git_log")
    reject_unknown_keys(section, {"ignore_case", "all_match"}, "git_log")
    return GitLogConfig(
        ignore_case=read_bool(section, "ignore_case", "git_log"),
        all_match=read_bool(section, "all_match", "git_log"),
    )


def load_sql(raw: Mapping[str, Any]) -> SqlConfig:
    section = get_section(raw, "sql")
    reject_unknown_keys(section, {"fold_case"}, "sql")
    return SqlConfig(fold_case=read_bool(section, "fold_case", "sql"))
