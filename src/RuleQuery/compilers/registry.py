"""Compile target registry.

Maps target names (as used by the CLI ``--target`` option) to builders that
turn a rule into an ``UnsanitizedFragment``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from RuleQuery.core.fragments import GIT_LOG, SQL, UnsanitizedFragment
from RuleQuery.core.rules import Rule

if TYPE_CHECKING:
    from RuleQuery.config import AppConfig

RuleCompiler = Callable[[Rule], UnsanitizedFragment]
CompilerBuilder = Callable[["AppConfig"], RuleCompiler]


def build_compiler(target: str, *, config: AppConfig) -> RuleCompiler:
    """Build the rule compiler registered under ``target``.

    Args:
        target: Target name, see ``supported_targets``.
        config: Parsed application configuration.

    Returns:
        Callable compiling one rule.

    Raises:
        ValueError: If ``target`` is not registered.
    """
    builder = _compiler_builders().get(target)
    if builder is None:
        raise ValueError(f"Unsupported compile target: {target}")
    return builder(config)


def supported_targets() -> tuple[str, ...]:
    """Return registered target names in registry order."""
    return tuple(_compiler_builders().keys())


def _compiler_builders() -> dict[str, CompilerBuilder]:
    return {
        GIT_LOG: _build_git_log,
        SQL: _build_sql,
    }


def _build_git_log(config: AppConfig) -> RuleCompiler:
    from RuleQuery.compilers.git_log import GitLogQueryBuilder

    return GitLogQueryBuilder(
        ignore_case=config.git_log.ignore_case,
        all_match=config.git_log.all_match,
    ).build


def _build_sql(config: AppConfig) -> RuleCompiler:
    from RuleQuery.compilers.sql import SqlRestrictionBuilder

    return SqlRestrictionBuilder(fold_case=config.sql.fold_case).build
