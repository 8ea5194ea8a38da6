# node_viewer/main.py

import click

from node_viewer.cli.main import nv
from node_viewer.core.file_sources import PICKER_MODES


@click.group(context_settings=dict(help_option_names=['-h', '--help']))
def main():
    """
    Node Viewer: open a file and inspect its raw bytes.

    Use the 'gui' command for the graphical viewer, or 'cli' followed by its
    own sub-commands for terminal inspection.

    Example (GUI): python -m node_viewer.main gui
    Example (CLI): python -m node_viewer.main cli inspect notes.xml
    """
    pass


@click.command()
@click.option('--picker', type=click.Choice(PICKER_MODES, case_sensitive=False), default=None,
              help="Override the saved file picker strategy for this session.")
def gui(picker):
    """Launches the graphical viewer."""
    # Imported here so the CLI works without a display or Qt platform plugin.
    from node_viewer.gui.main_window import run_gui
    run_gui(picker.lower() if picker else None)


# --- Command Registration ---
main.add_command(gui)
main.add_command(nv, name='cli')

if __name__ == '__main__':
    main()
