"""
casedata CLI - inspect recorded test-case fixture data.

Provides commands for listing test cases in fixture files, printing stored
values, showing inferred lookup keys and writing a starter configuration.
"""

from __future__ import annotations

import importlib
import json
import logging
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from casedata.config import CONFIG_FILENAME, ConfigLoader
from casedata.errors import CaseDataError
from casedata.loader import FixtureCatalog, FixtureLoader
from casedata.models import FixtureCase, Namespace
from casedata.naming import infer_key

app = typer.Typer(
    name="casedata",
    help="Recorded input and mock data for automated test cases",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        from casedata import __version__

        console.print(f"[bold blue]casedata[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
) -> None:
    """casedata - recorded fixture data for tests."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _load(path: Path) -> FixtureCatalog:
    """Load a fixture file or directory, exiting with an error message on failure."""
    loader = FixtureLoader(ConfigLoader.discover(path if path.is_dir() else path.parent))
    try:
        if path.is_dir():
            return loader.load_directory(path)
        return loader.load_file(path)
    except (FileNotFoundError, CaseDataError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


def _count(case: FixtureCase, namespace: Namespace) -> int:
    store = case.locate(namespace)
    return len(store) if store is not None else 0


@app.command()
def show(
    path: str = typer.Argument(..., help="Fixture file or directory"),
) -> None:
    """
    List the test cases in a fixture file or directory.

    Shows how many values each case defines per namespace.
    """
    target = Path(path)
    if not target.exists():
        console.print(f"[red]Error:[/red] Path not found: {path}")
        raise typer.Exit(1)

    catalog = _load(target)
    if not len(catalog):
        console.print("[yellow]No test cases found[/yellow]")
        return

    table = Table(title=f"Test cases in {path}")
    table.add_column("Test case", style="cyan")
    table.add_column("Variables", justify="right")
    for namespace in Namespace:
        table.add_column(namespace.value, justify="right")

    for case in catalog.list_all():
        table.add_row(
            case.name,
            str(len(case.variables)),
            *(str(_count(case, namespace)) for namespace in Namespace),
        )
    console.print(table)


@app.command()
def get(
    path: str = typer.Argument(..., help="Fixture file or directory"),
    case_name: str = typer.Argument(..., help="Test case name"),
    key: str = typer.Argument(..., help="Key of the stored value"),
    namespace: str = typer.Option(
        Namespace.INPUT.value,
        "--namespace",
        "-n",
        help="Namespace: input, mock_input, mock_output",
    ),
    format_: str = typer.Option("yaml", "--format", "-f", help="Output format: yaml, json"),
) -> None:
    """
    Print a stored value as recorded (no type casting).
    """
    catalog = _load(Path(path))
    try:
        case = catalog.get(case_name)
        store = case.locate(namespace)
        if store is None:
            console.print(f"[red]Error:[/red] Test case '{case_name}' has no {namespace} data")
            raise typer.Exit(1)
        value: Any = store.raw(key)
    except CaseDataError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    if format_ == "json":
        typer.echo(json.dumps(value, indent=2, default=str))
    else:
        typer.echo(yaml.safe_dump(value, default_flow_style=False, sort_keys=False).rstrip())


@app.command()
def key(
    type_path: str = typer.Argument(..., help="Type to inspect, as 'module:TypeName'"),
) -> None:
    """
    Show the key a type's values are looked up under by default.
    """
    module_name, _, attr = type_path.partition(":")
    if not attr:
        console.print("[red]Error:[/red] Expected 'module:TypeName'")
        raise typer.Exit(1)
    try:
        target = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        console.print(f"[red]Error:[/red] Cannot import {escape(type_path)}: {escape(str(e))}")
        raise typer.Exit(1) from e

    try:
        inferred = infer_key(target)
    except CaseDataError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    typer.echo(inferred)


@app.command()
def init(
    directory: str = typer.Argument(".", help="Directory to write the configuration into"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing configuration"),
) -> None:
    """
    Write a sample casedata.yaml configuration.
    """
    target = Path(directory) / CONFIG_FILENAME
    if target.exists() and not force:
        console.print(f"[yellow]Configuration already exists:[/yellow] {target}")
        raise typer.Exit(1)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(ConfigLoader.generate_sample_config())
    console.print(f"[green]✓[/green] Wrote {target}")


if __name__ == "__main__":
    app()
