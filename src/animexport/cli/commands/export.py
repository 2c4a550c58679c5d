"""
Export Command

Commands for writing the anime library as MyAnimeList XML, as a Markdown
summary, or in every configured format at once.
"""

from pathlib import Path
from typing import Annotated, List, Optional, Tuple

import typer

from animexport.cli.error_handling import handle_error
from animexport.cli.utils import (
    build_context,
    console,
    load_config_from_cli,
    load_library_from_config,
    print_header,
    print_result,
    setup_logging,
)
from animexport.core.config import AppConfig
from animexport.core.exceptions import AnimExportError, ErrorCode, ExportError
from animexport.exporters import ExportContext, ExportResult, get_exporter, list_exporters

app = typer.Typer(
    name="export",
    help="Export the anime library",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _prepare(config_file: Optional[str], **cli_args) -> Tuple[AppConfig, ExportContext]:
    config = load_config_from_cli(config_file, **cli_args)
    setup_logging(verbose=config.verbose, debug=config.debug)
    library, queue = load_library_from_config(config)
    return config, build_context(config, library, queue)


def _run_export(format_name: str, context: ExportContext, output: str,
                config: AppConfig) -> ExportResult:
    exporter = get_exporter(format_name)
    if exporter is None:
        raise ExportError(
            f"Unknown export format '{format_name}' (available: {', '.join(list_exporters())})",
            error_code=ErrorCode.EXPORT_UNKNOWN_FORMAT,
            export_format=format_name,
        )
    result = exporter.export(context, output, {'overwrite': config.export.overwrite})
    print_result(result)
    return result


@app.command("xml")
def export_xml(
    library_file: Annotated[str, typer.Argument(help="Library file (JSON or YAML)")],
    output: Annotated[str, typer.Argument(help="Destination XML file")],

    # Configuration
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,

    # Export settings
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="Username for the XML header")] = None,
    queue_file: Annotated[Optional[str], typer.Option("--queue", "-q", help="File listing entry ids with pending changes")] = None,
    overwrite: Annotated[Optional[bool], typer.Option("--overwrite/--no-overwrite", help="Replace an existing file")] = None,
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
    debug: Annotated[Optional[bool], typer.Option("--debug", help="Enable debug logging")] = None,
):
    """
    Export the library in the MyAnimeList XML import format.

    [bold]Examples:[/bold]

    • [cyan]animexport export xml library.yaml animelist.xml --user alice[/cyan]
    """
    try:
        app_config, context = _prepare(
            config, library_file=library_file, user=user, queue_file=queue_file,
            overwrite=overwrite, verbose=verbose, debug=debug
        )
        result = _run_export("xml", context, output, app_config)
    except AnimExportError as e:
        handle_error(e)

    if not result.success:
        raise typer.Exit(code=1)


@app.command("markdown")
def export_markdown(
    library_file: Annotated[str, typer.Argument(help="Library file (JSON or YAML)")],
    output: Annotated[str, typer.Argument(help="Destination Markdown file")],

    # Configuration
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,

    # Export settings
    english_titles: Annotated[Optional[bool], typer.Option("--english-titles/--main-titles", help="Prefer English titles")] = None,
    overwrite: Annotated[Optional[bool], typer.Option("--overwrite/--no-overwrite", help="Replace an existing file")] = None,
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
    debug: Annotated[Optional[bool], typer.Option("--debug", help="Enable debug logging")] = None,
):
    """
    Export a Markdown summary of the library grouped by watch status.

    [bold]Examples:[/bold]

    • [cyan]animexport export markdown library.yaml animelist.md[/cyan]
    """
    try:
        app_config, context = _prepare(
            config, library_file=library_file, english_titles=english_titles,
            overwrite=overwrite, verbose=verbose, debug=debug
        )
        result = _run_export("markdown", context, output, app_config)
    except AnimExportError as e:
        handle_error(e)

    if not result.success:
        raise typer.Exit(code=1)


@app.command("all")
def export_all(
    library_file: Annotated[str, typer.Argument(help="Library file (JSON or YAML)")],
    output_dir: Annotated[Optional[str], typer.Argument(help="Destination directory")] = None,

    # Configuration
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,

    # Export settings
    formats: Annotated[Optional[List[str]], typer.Option("--format", "-f", help="Formats to write (xml, markdown)")] = None,
    name: Annotated[str, typer.Option("--name", "-n", help="Base file name for the exports")] = "animelist",
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="Username for the XML header")] = None,
    queue_file: Annotated[Optional[str], typer.Option("--queue", "-q", help="File listing entry ids with pending changes")] = None,
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
    debug: Annotated[Optional[bool], typer.Option("--debug", help="Enable debug logging")] = None,
):
    """
    Export the library in every configured format.

    [bold]Examples:[/bold]

    • [cyan]animexport export all library.yaml ./exports[/cyan]
    • [cyan]animexport export all library.yaml ./exports -f md[/cyan]
    """
    try:
        app_config, context = _prepare(
            config, library_file=library_file, output_dir=output_dir, formats=formats,
            user=user, queue_file=queue_file, verbose=verbose, debug=debug
        )
        print_header("Exporting library", f"{len(app_config.export.formats)} format(s)")

        failures = 0
        for format_name in app_config.export.formats:
            output = Path(app_config.export.output_dir) / name
            result = _run_export(format_name, context, str(output), app_config)
            if not result.success:
                failures += 1
    except AnimExportError as e:
        handle_error(e)

    if failures:
        console.print(f"[red]{failures} export(s) failed[/red]")
        raise typer.Exit(code=1)
