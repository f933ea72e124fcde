"""dd/pv copy pipelines for cloning and writing disk images."""
import shlex
import subprocess
from typing import List, Optional

from rich.console import Console

from osximg.core.config import OsximgConfig
from osximg.core.errors import CopyError
from osximg.core.logger import get_logger

logger = get_logger(__name__)


class DiskCopier:
    """Builds and runs the shell pipelines that move the actual bytes.

    The pipeline runs in the foreground with the terminal's stdin, stdout and
    stderr so that sudo can prompt and pv can draw its progress bar.
    """

    def __init__(self, config: Optional[OsximgConfig] = None, console: Optional[Console] = None,
                 mock: bool = False):
        self.config = config or OsximgConfig()
        self.console = console or Console()
        self.mock = mock

    def clone_command(self, source: str, dest: str, size: int) -> str:
        cfg = self.config
        return (
            f"{cfg.dd} if={shlex.quote(source)} bs={cfg.block_size}"
            f" | {cfg.pv} -s {size}"
            f" | {cfg.dd} of={shlex.quote(dest)} bs={cfg.block_size}"
        )

    def write_command(self, image: str, device: str, size: int) -> str:
        cfg = self.config
        return (
            f"{cfg.pv} -s {size} {shlex.quote(image)}"
            f" | {cfg.dd} of={shlex.quote(device)} bs={cfg.block_size}"
        )

    def argv(self, command: str) -> List[str]:
        args = ["bash", "-c", command]
        if self.config.use_sudo:
            args.insert(0, "sudo")
        return args

    def run(self, command: str) -> None:
        """Run a pipeline and wait for it.

        Raises:
            CopyError: If the pipeline cannot start or exits nonzero
        """
        label = "Running (sudo required):" if self.config.use_sudo else "Running:"
        self.console.print(f"{label} {command}", markup=False, highlight=False, soft_wrap=True)

        if self.mock:
            logger.info(f"MOCK: Would run {command}")
            return

        args = self.argv(command)
        logger.debug(f"Executing: {args}")
        try:
            result = subprocess.run(args)
        except OSError as e:
            raise CopyError(f"Failed to start {args[0]}: {e}") from e

        if result.returncode != 0:
            raise CopyError(f"Copy pipeline exited with status {result.returncode}")
        logger.debug("Copy pipeline finished")

    def clone(self, source: str, dest: str, size: int) -> None:
        """Copy `size` bytes of device `source` into image file `dest`."""
        self.run(self.clone_command(source, dest, size))

    def write(self, image: str, device: str, size: int) -> None:
        """Write image file `image` (of `size` bytes) onto `device`."""
        self.run(self.write_command(image, device, size))
