"""diskutil/plutil wrappers for disk enumeration and per-device facts."""
import json
import subprocess
from typing import Any, Callable, List, Mapping, Optional

from osximg.core.config import OsximgConfig
from osximg.core.errors import DiskutilError, UnexpectedStructureError
from osximg.core.logger import get_logger
from osximg.models.disk import DeviceInfo, DiskNode

logger = get_logger(__name__)

RunCmd = Callable[..., bytes]

ALL_DISKS_KEY = "AllDisksAndPartitions"


def build_disk_forest(root: Any) -> List[DiskNode]:
    """Build the top-level disk trees from a decoded `diskutil list -plist`."""
    if not isinstance(root, Mapping):
        raise UnexpectedStructureError("unexpected plist structure")

    disks = root.get(ALL_DISKS_KEY)
    if not isinstance(disks, list):
        raise UnexpectedStructureError("unexpected plist structure")

    return [DiskNode.from_plist(d) for d in disks]


class DiskUtility:
    """Runs diskutil and converts its property lists via plutil.

    Args:
        config: Tool names to invoke
        run_cmd: Callable(args, input=None) -> stdout bytes; raises
            subprocess.CalledProcessError or OSError on failure
    """

    def __init__(self, config: Optional[OsximgConfig] = None, run_cmd: Optional[RunCmd] = None):
        self.config = config or OsximgConfig()
        self.run_cmd = run_cmd or self._run

    def list_disks(self) -> List[DiskNode]:
        root = self._plist_command([self.config.diskutil, "list", "-plist"])
        return build_disk_forest(root)

    def info(self, device: str) -> DeviceInfo:
        raw = self._plist_command([self.config.diskutil, "info", "-plist", device])
        return DeviceInfo.from_plist(raw)

    def disk_size(self, device: str) -> int:
        """Total size of a device in bytes."""
        size = self.info(device).total_size
        if size is None:
            raise DiskutilError("disk size not found")
        return size

    def is_internal(self, device: str) -> bool:
        """True when diskutil flags the device as internal."""
        return self.info(device).internal

    def plist_to_json(self, data: bytes) -> Any:
        """Convert a plist document to Python data through plutil's JSON output."""
        out = self._call([self.config.plutil, "-convert", "json", "-o", "-", "--", "-"], input=data)
        try:
            return json.loads(out)
        except ValueError as e:
            raise DiskutilError(f"{self.config.plutil} produced invalid JSON: {e}") from e

    def _plist_command(self, args: List[str]) -> Any:
        return self.plist_to_json(self._call(args))

    def _call(self, args: List[str], input: Optional[bytes] = None) -> bytes:
        logger.debug(f"Running: {' '.join(args)}")
        try:
            return self.run_cmd(args, input=input)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            detail = f": {stderr}" if stderr else ""
            raise DiskutilError(f"{args[0]} exited with status {e.returncode}{detail}") from e
        except OSError as e:
            raise DiskutilError(f"Failed to run {args[0]}: {e}") from e

    @staticmethod
    def _run(args: List[str], input: Optional[bytes] = None) -> bytes:
        result = subprocess.run(args, input=input, capture_output=True, check=True)
        return result.stdout
