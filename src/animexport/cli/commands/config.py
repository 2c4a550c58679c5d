"""
Config Command

Commands for creating and inspecting animexport configuration files.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from animexport.cli.error_handling import handle_error
from animexport.cli.utils import confirm_action, console, load_config_from_cli, print_config_summary
from animexport.core.config import ConfigManager
from animexport.core.exceptions import AnimExportError

app = typer.Typer(
    name="config",
    help="Create and inspect configuration files",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.command("init")
def config_init(
    path: Annotated[str, typer.Argument(help="Where to write the configuration file")] = "animexport.yaml",
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file without asking")] = False,
):
    """
    Write a configuration file with the default settings.
    """
    output_file = Path(path)
    if output_file.exists() and not force:
        if not confirm_action(f"{output_file} exists. Overwrite?"):
            console.print("[yellow]Aborted[/yellow]")
            raise typer.Exit(code=1)

    ConfigManager().create_example_config(output_file)
    console.print(f"[green]✓[/green] Configuration written to [cyan]{output_file}[/cyan]")


@app.command("show")
def config_show(
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
):
    """
    Show the effective configuration after files and environment are applied.
    """
    try:
        app_config = load_config_from_cli(config)
    except AnimExportError as e:
        handle_error(e)

    print_config_summary(app_config)
