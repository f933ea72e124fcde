"""Confirmation gate in front of anything that overwrites a device.

Every destructive step asks for a literal answer. Anything else, including
an empty line or end of input, declines.
"""
import re
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from osximg.core.logger import get_logger
from osximg.models.disk import format_size

logger = get_logger(__name__)

BUFFERED_DISK_RE = re.compile(r"^/dev/disk(\d+)$")

INTERNAL_ANSWER = "INTERNAL"
OVERWRITE_ANSWER = "YES"


class ConfirmationPrompter:
    """Reads one line of user input per question."""

    def ask(self, message: str) -> str:
        try:
            return typer.prompt(message, default="", show_default=False)
        except typer.Abort as e:
            # click raises Abort for both Ctrl-C and EOF; only EOF is an empty answer
            if isinstance(e.__context__, KeyboardInterrupt):
                raise
            return ""


class SafetyGate:
    """Asks the user before raw-device substitution and destructive writes."""

    def __init__(self, prompter: Optional[ConfirmationPrompter] = None, console: Optional[Console] = None):
        self.prompter = prompter or ConfirmationPrompter()
        self.console = console or Console()

    def offer_raw_device(self, path: str) -> str:
        """Offer /dev/rdiskN in place of /dev/diskN.

        Returns:
            The raw device path if the user answers y/Y, otherwise `path`
        """
        match = BUFFERED_DISK_RE.match(path)
        if not match:
            return path

        raw_path = f"/dev/rdisk{match.group(1)}"
        answer = self.prompter.ask(
            f"{path} detected. Do you want to use {raw_path} instead for faster performance? [y/N]"
        )
        if answer.strip().lower() == "y":
            logger.debug(f"Using raw device {raw_path} instead of {path}")
            return raw_path
        return path

    def confirm_internal(self, device: str) -> bool:
        """Require typing INTERNAL before touching an internal disk."""
        self.console.print(f"[bold red]⚠ WARNING:[/bold red] {escape(device)} is an INTERNAL disk!", highlight=False)
        answer = self.prompter.ask(
            f"Are you absolutely sure you want to continue? Type {INTERNAL_ANSWER} to confirm"
        )
        return answer.strip() == INTERNAL_ANSWER

    def confirm_overwrite(self, device: str, image_size: int) -> bool:
        """Require typing YES before overwriting `device`."""
        self.console.print(f"[yellow]⚠ WARNING:[/yellow] This will overwrite all data on {escape(device)}", highlight=False)
        self.console.print(f"Source image size: {format_size(image_size)} ({image_size} bytes)", highlight=False)
        answer = self.prompter.ask(f"Type {OVERWRITE_ANSWER} to continue")
        return answer.strip() == OVERWRITE_ANSWER
