from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from RuleQuery.config.compile import (
    GitLogConfig,
    MatcherConfig,
    ParserConfig,
    SqlConfig,
    load_git_log,
    load_matcher,
    load_parser,
    load_sql,
)
from RuleQuery.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG: Mapping[str, Any] = {
    "log": {"level": "INFO", "to_file": False, "dir": "log"},
    "parser": {"allow_empty": False},
    "matcher": {"fold_case": True},
    "git_log": {"ignore_case": True, "all_match": True},
    "sql": {"fold_case": False},
}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    parser: ParserConfig
    matcher: MatcherConfig
    git_log: GitLogConfig
    sql: SqlConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse a complete mapping into AppConfig."""
    runtime = load_runtime(raw)
    check_runtime(runtime)

    unknown = sorted(set(raw) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(unknown)}")

    return AppConfig(
        runtime=runtime,
        parser=load_parser(raw),
        matcher=load_matcher(raw),
        git_log=load_git_log(raw),
        sql=load_sql(raw),
    )


def default_config() -> AppConfig:
    """Return the built-in configuration."""
    return parse_config_dict(DEFAULT_CONFIG)


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load a YAML config file merged over the built-in defaults.

    Args:
        path: Override file. None returns the defaults.

    Returns:
        Parsed configuration.
    """
    if path is None:
        return default_config()
    override = parse_yaml(path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(DEFAULT_CONFIG, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
