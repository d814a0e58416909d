"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from RuleQuery.cli.commands import CompileCommand, MatchCommand, ParseCommand
from RuleQuery.cli.runner import CommandRunner
from RuleQuery.compilers.registry import supported_targets
from RuleQuery.config import load_config

_QUERIES = click.argument("queries", nargs=-1, required=True)


def _parse_fields(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a record."""
    record: dict[str, str] = {}
    for item in value:
        key, sep, field_value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}", ctx=ctx, param=param)
        record[key] = field_value
    return record


@click.group(help="RuleQuery: parse queries and compile them for records, git log and SQL.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="Path to YAML config file, merged over the built-in defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]) -> None:
    """CLI entry group.

    Args:
        ctx: Click context.
        config_path: Optional path to YAML config file.
    """
    try:
        ctx.obj = load_config(config_path)
    except (TypeError, ValueError) as e:
        raise click.BadParameter(str(e), param_hint="--config") from e


@cli.command("parse")
@_QUERIES
@click.pass_context
def parse_cmd(ctx: click.Context, queries: tuple[str, ...]) -> None:
    """Print the rules parsed from QUERIES as JSON."""
    command = ParseCommand(config=ctx.obj, queries=queries)
    for line in CommandRunner(ctx.obj).run(ctx.command.name, command.execute):
        click.echo(line)


@cli.command("match")
@_QUERIES
@click.option(
    "--field",
    "-f",
    "record",
    multiple=True,
    callback=_parse_fields,
    metavar="KEY=VALUE",
    help="Record field; repeat for each field.",
)
@click.pass_context
def match_cmd(ctx: click.Context, queries: tuple[str, ...], record: dict[str, str]) -> None:
    """Check whether a record matches any of QUERIES.

    Prints ``match`` or ``no match``; the exit status is 1 for no match.
    """
    command = MatchCommand(config=ctx.obj, queries=queries, record=record)
    matched = CommandRunner(ctx.obj).run(ctx.command.name, command.execute)
    click.echo("match" if matched else "no match")
    if not matched:
        ctx.exit(1)


@cli.command("compile")
@_QUERIES
@click.option(
    "--target",
    "-t",
    type=click.Choice(supported_targets()),
    required=True,
    help="Output language.",
)
@click.pass_context
def compile_cmd(ctx: click.Context, queries: tuple[str, ...], target: str) -> None:
    """Compile each rule parsed from QUERIES, one fragment per line.

    The output is not sanitized beyond the target's escaping rules; only use
    it with queries from trusted users.
    """
    command = CompileCommand(config=ctx.obj, queries=queries, target=target)
    for line in CommandRunner(ctx.obj).run(ctx.command.name, command.execute):
        click.echo(line)
