#!/usr/bin/env python3
"""osximg CLI - list, clone and write disk devices on macOS."""
from typing import Optional

import typer
from rich.console import Console

from osximg.cli_disk_commands import register_disk_commands
from osximg.cli_support import CliState, UsageExitGroup, print_plain
from osximg.cli_utility_commands import register_utility_commands
from osximg.core.config import USAGE
from osximg.core.logger import set_verbose, setup_file_logging

app = typer.Typer(
    name="osximg",
    cls=UsageExitGroup,
    help="""osximg - clone and restore disk images on macOS

Quick start:
  osximg list                              # Show disks and volumes
  osximg clone /dev/disk4 ~/sdcard.img     # Device -> image
  osximg write ~/sdcard.img /dev/disk4     # Image -> device
""",
    add_completion=False,
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to osximg.yml"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and tracebacks"),
):
    """Entry point shared by every subcommand."""
    ctx.obj = CliState(config_path=config, verbose=verbose)

    set_verbose(verbose)
    if log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    if ctx.invoked_subcommand is None:
        print_plain(console, USAGE)
        raise typer.Exit(1)


register_disk_commands(app, console)
register_utility_commands(app, console)

if __name__ == "__main__":
    app()
