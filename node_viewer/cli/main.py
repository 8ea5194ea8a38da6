# node_viewer/cli/main.py

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from node_viewer.core.config_manager import (
    DEFAULT_SETTINGS_PATH, THEMES, UI_SCALES, load_settings, save_settings
)
from node_viewer.core.content_classifier import classify_content, format_hex_dump
from node_viewer.core.errors import FileError, SettingsError
from node_viewer.core.file_sources import PICKER_MODES, read_file_details

# A single Console object manages all rich-formatted output.
console = Console()
logger = logging.getLogger(__name__)


def _yes_no(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


# --- Main Command Group ---
@click.group(context_settings=dict(help_option_names=['-h', '--help']))
@click.version_option(version="0.1.0", prog_name="Node Viewer")
def nv():
    """
    Node Viewer - inspect the raw bytes of a file from the terminal.

    Use `[COMMAND] --help` for more information on a specific command.
    """
    pass


# --- Inspect Command ---
@nv.command()
@click.argument('path', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--elements/--no-elements', default=True, show_default=True,
              help="List the XML element names when the file looks like XML.")
@click.option('--hex/--no-hex', 'show_hex', default=True, show_default=True,
              help="Print the hex dump (first 1024 bytes for larger files).")
def inspect(path: Path, elements: bool, show_hex: bool):
    """Classifies a file and prints its hex dump and XML element names."""
    try:
        details = read_file_details(path)
    except FileError as e:
        logger.error(f"Could not open '{path}' for inspection: {e}")
        console.print(f"[bold red]Error opening file: {e}[/bold red]")
        sys.exit(1)

    report = classify_content(details)

    table = Table(title=f"File: {report.file_name}", show_header=False, title_style="bold magenta")
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Size", f"{report.size} bytes")
    table.add_row("Detected kind", f"[bold]{report.kind}[/bold]")
    table.add_row("Looks like text", _yes_no(report.is_text))
    table.add_row("Looks like XML", _yes_no(report.is_xml))
    table.add_row("Full hex view", _yes_no(report.hex_expandable))
    if report.element_names is not None:
        table.add_row("XML elements", str(len(report.element_names)))
    console.print(table)

    for note in report.notes:
        console.print(f"[yellow]{note}[/yellow]")

    if elements and report.is_xml:
        if report.element_error:
            # The listing failing does not affect the rest of the report.
            console.print(f"[bold red]Could not list elements: {report.element_error}[/bold red]")
        else:
            console.print("[bold cyan]Elements:[/bold cyan]")
            for name in report.element_names:
                console.print(f"  {name}", markup=False, highlight=False)

    if show_hex and report.size:
        console.print("[bold cyan]Hex dump:[/bold cyan]")
        console.print(format_hex_dump(details.file_content), markup=False, highlight=False)


# --- Settings Commands ---
@nv.group()
def settings():
    """Show or change the saved viewer preferences."""
    pass


@settings.command(name="show")
@click.option('--config', 'settings_path', type=click.Path(dir_okay=False, path_type=Path),
              default=DEFAULT_SETTINGS_PATH, help="Path to a custom settings.json.")
def show_settings(settings_path: Path):
    """Prints the current preferences."""
    current = load_settings(settings_path)
    table = Table(title="Viewer Settings", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="bold magenta")
    for name, value in current.to_dict().items():
        table.add_row(name, "none" if value is None else str(value))
    console.print(table)


@settings.command(name="set")
@click.option('--scale', type=click.Choice([str(s) for s in UI_SCALES]), default=None, help="UI scale factor.")
@click.option('--theme', type=click.Choice(THEMES, case_sensitive=False), default=None, help="Color theme.")
@click.option('--picker', type=click.Choice(PICKER_MODES, case_sensitive=False), default=None,
              help="File picker strategy.")
@click.option('--timeout', type=float, default=None,
              help="Seconds to wait for a non-blocking file selection (0 waits forever).")
@click.option('--config', 'settings_path', type=click.Path(dir_okay=False, path_type=Path),
              default=DEFAULT_SETTINGS_PATH, help="Path to a custom settings.json.")
def set_settings(scale, theme, picker, timeout, settings_path: Path):
    """Changes one or more preferences and saves them."""
    current = load_settings(settings_path)
    if scale is not None:
        current.ui_scale = float(scale)
    if theme is not None:
        current.theme = theme.lower()
    if picker is not None:
        current.picker_mode = picker.lower()
    if timeout is not None:
        current.pending_timeout = timeout if timeout > 0 else None

    try:
        saved = save_settings(current, settings_path)
    except SettingsError as e:
        console.print(f"[bold red]Invalid setting: {e}[/bold red]")
        sys.exit(2)

    if not saved:
        console.print("[bold red]Could not write the settings file. See node_viewer.log for details.[/bold red]")
        sys.exit(1)
    console.print(f"[bold green]Settings saved to {settings_path}.[/bold green]")
