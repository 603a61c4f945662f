"""
classx CLI: inspect attribute schemas and check construction input.

- describe: print the declared attributes of a ClassX subclass
- check: build an instance from a YAML/JSON input file and show its values
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from classx.cli.formatters import build_delegation_table, build_instance_table, build_schema_table
from classx.cli.load_helpers import load_input_or_exit, resolve_target_or_exit
from classx.core.errors import ClassXError
from classx.utils.logging import configure_logging

app = typer.Typer(help="classx CLI: describe attribute schemas and check construction input.")
console = Console()
logger = logging.getLogger(__name__)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="CLASSX_LOG_LEVEL",
        help="Log level for classx messages (debug|info|warning|error)",
    ),
) -> None:
    """Describe attribute schemas and check construction input."""
    if not isinstance(logging.getLevelName(log_level.upper()), int):
        raise typer.BadParameter(f"unknown log level: {log_level}", param_hint="--log-level")
    configure_logging(log_level)


@app.command()
def describe(
    target: str = typer.Argument(..., help="Class to describe, as package.module:ClassName"),
) -> None:
    """Show the attribute schema of a ClassX subclass."""
    cls = resolve_target_or_exit(target, console=console)
    required = sorted(cls.required_names())

    console.print(f"[bold]{cls.__qualname__}[/bold] ({cls.__module__})")
    console.print(f"Attributes: {len(cls.attribute_names())}, Required: {', '.join(required) or 'none'}")
    console.print(build_schema_table(cls))
    delegations = build_delegation_table(cls)
    if delegations is not None:
        console.print(delegations)


@app.command()
def check(
    input_path: str = typer.Argument(..., help="YAML or JSON file with 'values' (and optionally 'target')"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Class to build, overrides the file's target"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Build an instance from an input file and show the resulting attributes."""
    spec = load_input_or_exit(input_path, console=console, verbose_errors=verbose)
    target_name = target or spec.target
    if not target_name:
        console.print("[red]No target given[/red]: use --target or set 'target' in the input file")
        raise typer.Exit(code=2)
    cls = resolve_target_or_exit(target_name, console=console)

    try:
        instance = cls(spec.values)
    except ClassXError as err:
        logger.debug("Construction of %s failed", target_name, exc_info=True)
        console.print(f"[red]Invalid input[/red] ({type(err).__name__}): {escape(str(err))}", soft_wrap=True)
        raise typer.Exit(code=1)

    console.print(f"[green]OK[/green] Built {cls.__qualname__} from {len(spec.values)} value(s)")
    console.print(build_instance_table(instance))
