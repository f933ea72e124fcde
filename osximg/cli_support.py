"""Shared utilities for osximg CLI modules."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

import click
import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperGroup

from osximg.core.config import OsximgConfig, load_config


class UsageExitGroup(TyperGroup):
    """Typer group whose usage errors exit with status 1 instead of click's 2."""

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@dataclass
class CliState:
    """Global options shared by every subcommand through ctx.obj."""
    config_path: Optional[str] = None
    verbose: bool = False
    _config: Optional[OsximgConfig] = None

    @property
    def config(self) -> OsximgConfig:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config


def get_state(ctx: typer.Context) -> CliState:
    return ctx.ensure_object(CliState)


def is_mock() -> bool:
    """Return True when copy pipelines should only be printed."""
    return os.environ.get("OSXIMG_MOCK") == "1"


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_plain(console: Console, line: str) -> None:
    """Print text verbatim: no markup, emoji codes, highlighting or wrapping."""
    console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)


def print_aborted(console: Console) -> None:
    console.print("Aborted.")

