"""CLI package for RuleQuery.

Splits the command line into interface definitions (``ui``), command
implementations (``commands``) and execution handling (``runner``).
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from RuleQuery.cli.runner import CommandRunner
from RuleQuery.cli.ui import cli


def main() -> None:
    """Run RuleQuery CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
