"""Disk CLI commands - list, clone, write."""
from pathlib import Path

import typer
from rich.console import Console

from osximg.cli_support import (
    get_state,
    handle_cli_error,
    is_mock,
    print_aborted,
    print_plain,
)
from osximg.core.copier import DiskCopier
from osximg.core.disk_tree import render_disks
from osximg.core.errors import DiskutilError, OsximgError
from osximg.core.logger import get_logger
from osximg.core.safety import SafetyGate
from osximg.discovery.diskutil import DiskUtility

logger = get_logger(__name__)

# Module-level console instance (will be set by register function)
console: Console = Console()


def list_disks(ctx: typer.Context):
    """List disks, partitions and APFS volumes as a tree."""
    state = get_state(ctx)
    try:
        disks = DiskUtility(state.config).list_disks()
    except OsximgError as e:
        handle_cli_error(e, console, state.verbose)

    for line in render_disks(disks):
        print_plain(console, line)


def clone(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Source device, e.g. /dev/disk4"),
    dest: str = typer.Argument(..., help="Image file to create, e.g. ~/backup.img"),
):
    """Clone a physical device into an image file.

    Examples:
        osximg clone /dev/disk4 ~/sdcard.img
    """
    state = get_state(ctx)
    source = SafetyGate(console=console).offer_raw_device(source)

    try:
        config = state.config
        try:
            size = DiskUtility(config).disk_size(source)
        except DiskutilError as e:
            raise DiskutilError(f"failed to get disk size: {e}") from e
        DiskCopier(config, console, mock=is_mock()).clone(source, dest, size)
    except OsximgError as e:
        handle_cli_error(e, console, state.verbose)


def write(
    ctx: typer.Context,
    image: str = typer.Argument(..., help="Image file to write, e.g. ~/sdcard.img"),
    device: str = typer.Argument(..., help="Destination device, e.g. /dev/disk4"),
):
    """Write an image file onto a physical device.

    All data on the device is overwritten. Internal disks need an extra
    INTERNAL confirmation.
    """
    state = get_state(ctx)
    gate = SafetyGate(console=console)
    device = gate.offer_raw_device(device)

    try:
        config = state.config
        try:
            image_size = Path(image).stat().st_size
        except OSError as e:
            raise OsximgError(f"failed to get source image size: {e}") from e

        try:
            internal = DiskUtility(config).is_internal(device)
        except DiskutilError as e:
            logger.warning(f"Could not check whether {device} is internal: {e}")
            internal = False

        if internal and not gate.confirm_internal(device):
            print_aborted(console)
            return

        if not gate.confirm_overwrite(device, image_size):
            print_aborted(console)
            return

        print_plain(console, f"Writing {image} → {device}")
        DiskCopier(config, console, mock=is_mock()).write(image, device, image_size)
    except OsximgError as e:
        handle_cli_error(e, console, state.verbose)


def register_disk_commands(app: typer.Typer, shared_console: Console):
    """Register disk commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command("list")(list_disks)
    app.command()(clone)
    app.command()(write)
