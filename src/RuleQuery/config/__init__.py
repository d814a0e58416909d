from __future__ import annotations

"""Public configuration API for RuleQuery."""

from RuleQuery.config.app import (
    DEFAULT_CONFIG,
    AppConfig,
    default_config,
    load_config,
    parse_config_dict,
)
from RuleQuery.config.compile import GitLogConfig, MatcherConfig, ParserConfig, SqlConfig
from RuleQuery.config.runtime import RuntimeConfig

__all__ = [
    "DEFAULT_CONFIG",
    "RuntimeConfig",
    "ParserConfig",
    "MatcherConfig",
    "GitLogConfig",
    "SqlConfig",
    "AppConfig",
    "default_config",
    "load_config",
    "parse_config_dict",
]
