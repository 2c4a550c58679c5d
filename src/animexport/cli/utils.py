"""
CLI Utilities

Shared utilities for CLI commands: console output, logging setup and
assembling an export context from configuration.
"""

import locale
import logging
from typing import Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from animexport import __version__
from animexport.core.config import AppConfig, ConfigManager
from animexport.core.exceptions import ConfigurationError, ErrorCode
from animexport.exporters import ExportContext, ExportResult
from animexport.library import AnimeLibrary, PendingQueue, load_library, load_queue

console = Console()
logger = logging.getLogger(__name__)


def setup_locale() -> bool:
    """
    Adopt the user's collation rules for sorting titles.

    Returns:
        True if the environment locale was applied, False if the process
        keeps the "C" collation
    """
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Cannot use the environment locale for sorting: {e}")
        return False
    return True


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Set up logging configuration for the application."""
    level = logging.WARNING
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[RichHandler(console=Console(stderr=True), show_path=debug)],
        force=True
    )


def load_config_from_cli(config_file: Optional[str] = None, **cli_args) -> AppConfig:
    """
    Load configuration, with CLI arguments overriding other sources.

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    config_manager = ConfigManager(config_file=config_file)
    return config_manager.load_config(cli_args=cli_args)


def load_library_from_config(config: AppConfig) -> Tuple[AnimeLibrary, PendingQueue]:
    """
    Load the library and pending queue named by the configuration.

    A separate queue file, when configured, replaces the queue stored in the
    library file.
    """
    if config.library.library_file is None:
        raise ConfigurationError(
            "No library file given",
            error_code=ErrorCode.CONFIG_MISSING_REQUIRED,
            config_key="library.library_file"
        )

    library, queue = load_library(config.library.library_file)
    if config.library.queue_file is not None:
        queue = load_queue(config.library.queue_file)
    return library, queue


def build_context(config: AppConfig, library: AnimeLibrary, queue: PendingQueue) -> ExportContext:
    """Create the export context for a configured run."""
    return ExportContext(
        library=library,
        queue=queue,
        username=config.export.username,
        tool_name=config.export.tool_name,
        tool_version=__version__,
        prefer_english_titles=config.export.prefer_english_titles,
    )


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header for CLI output."""
    if subtitle:
        header_text = f"[bold cyan]{title}[/bold cyan]\n[dim]{subtitle}[/dim]"
    else:
        header_text = f"[bold cyan]{title}[/bold cyan]"

    console.print(Panel(header_text, border_style="cyan"))


def print_result(result: ExportResult) -> None:
    """Print the outcome of one export."""
    if result.success:
        console.print(
            f"[green]✓[/green] {result.format_name}: {result.records_exported} entries "
            f"written to [cyan]{result.output_path}[/cyan] ({result.file_size:,} bytes)"
        )
    else:
        console.print(f"[red]✗[/red] {result.format_name}: export failed")
        for error in result.errors:
            console.print(f"  [red]{error}[/red]")

    for warning in result.warnings:
        console.print(f"  [yellow]{warning}[/yellow]")


def print_config_summary(config: AppConfig) -> None:
    """Print a summary of the current configuration."""
    table = Table(title="Configuration", show_header=True, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Username", config.export.username or "[dim](none)[/dim]")
    table.add_row("Tool name", config.export.tool_name)
    table.add_row("Formats", ", ".join(config.export.formats))
    table.add_row("Output directory", str(config.export.output_dir))
    table.add_row("Overwrite", str(config.export.overwrite))
    table.add_row("English titles", str(config.export.prefer_english_titles))
    table.add_row("Library file", str(config.library.library_file or "[dim](none)[/dim]"))
    table.add_row("Queue file", str(config.library.queue_file or "[dim](none)[/dim]"))

    console.print(table)


def confirm_action(message: str, default: bool = False) -> bool:
    """Ask for user confirmation with rich formatting."""
    return typer.confirm(message, default=default)
