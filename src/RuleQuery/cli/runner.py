"""Command runner for coordinating CLI execution.

Configures logging and turns unexpected failures into a clean CLI abort.
"""

from __future__ import annotations

from typing import Callable, TypeVar

import click

from RuleQuery.config import AppConfig
from RuleQuery.utils.log import configure_logging, log

T = TypeVar("T")


class CommandRunner:
    """Run one command with logging configured from the app config."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(self, action: str, execute: Callable[[], T]) -> T:
        """Execute a command.

        Args:
            action: The CLI command name (e.g., 'compile').
            execute: Command body.

        Returns:
            Whatever ``execute`` returns.

        Raises:
            click.Abort: When the command fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            return execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e
