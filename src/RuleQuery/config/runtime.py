"""Runtime configuration (logging of CLI runs)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from RuleQuery.config.common import (
    expect_str,
    get_required_value,
    get_section,
    read_bool,
    reject_unknown_keys,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Logging settings used by the command runner.

    Attributes:
        level: Console log level name.
        to_file: Mirror every run's log into ``dir/<command>/``.
        dir: Base directory for log files.
    """

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load the ``log`` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing or unknown keys are present.
    """
    section = get_section(raw, "log")
    reject_unknown_keys(section, {"level", "to_file", "dir"}, "log")
    return RuntimeConfig(
        level=expect_str(get_required_value(section, "level", "log.level"), "log.level").upper(),
        to_file=read_bool(section, "to_file", "log"),
        dir=expect_str(get_required_value(section, "dir", "log.dir"), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime constraints.

    Raises:
        ValueError: If values violate runtime constraints.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file=true")
