#!/usr/bin/env python3
"""
animexport CLI Main Application

Typer-based command-line interface with a multi-command structure and
rich formatting.
"""

import sys
from typing import Optional

import typer
from rich.console import Console

from animexport.cli import __version__
from animexport.cli.commands import config, export
from animexport.cli.utils import setup_locale

console = Console()

app = typer.Typer(
    name="animexport",
    help="Export an anime library to MyAnimeList XML and Markdown",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.add_typer(export.app, name="export", help="Export the anime library")
app.add_typer(config.app, name="config", help="Create and inspect configuration files")


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]animexport[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
):
    """
    animexport - anime library exporter

    [bold]Quick Start:[/bold]

    • MyAnimeList XML: [cyan]animexport export xml library.yaml animelist.xml --user NAME[/cyan]
    • Markdown summary: [cyan]animexport export markdown library.yaml animelist.md[/cyan]
    • Both formats: [cyan]animexport export all library.yaml ./exports[/cyan]
    """
    setup_locale()


def main():
    """Entry point for the animexport console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
