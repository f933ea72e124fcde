"""Disk hierarchy models decoded from diskutil property lists."""
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

SIZE_UNITS = ['B', 'KB', 'MB', 'GB', 'TB', 'PB']


def format_size(size: int) -> str:
    """Human-readable size using binary (1024) units."""
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.1f} {SIZE_UNITS[unit_index]}"


def _plist_str(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else ""


def _plist_int(raw: Mapping[str, Any], key: str) -> Optional[int]:
    value = raw.get(key)
    # bool is an int subclass but never a byte count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return int(value)
    except (OverflowError, ValueError):
        # inf / nan from a float field
        return None


def _plist_list(raw: Mapping[str, Any], key: str) -> List[Any]:
    value = raw.get(key)
    return value if isinstance(value, list) else []


@dataclass
class DiskNode:
    """A disk, partition or APFS volume as reported by `diskutil list`."""
    device_identifier: str = ""   # disk2s1
    content: str = ""             # Apple_APFS, EFI, ...
    volume_name: str = ""
    size: int = 0                 # bytes, 0 when unknown
    partitions: List["DiskNode"] = field(default_factory=list)
    apfs_volumes: List["DiskNode"] = field(default_factory=list)

    @classmethod
    def from_plist(cls, raw: Any) -> "DiskNode":
        """Build a node (and its subtree) from a decoded plist record.

        Missing or mistyped fields fall back to empty values instead of
        failing, so a partial record still yields a usable node.
        """
        if not isinstance(raw, Mapping):
            return cls()

        size = _plist_int(raw, "Size") or 0
        return cls(
            device_identifier=_plist_str(raw, "DeviceIdentifier"),
            content=_plist_str(raw, "Content"),
            volume_name=_plist_str(raw, "VolumeName"),
            size=max(size, 0),
            partitions=[cls.from_plist(p) for p in _plist_list(raw, "Partitions")],
            apfs_volumes=[cls.from_plist(v) for v in _plist_list(raw, "APFSVolumes")],
        )

    @property
    def device_path(self) -> str:
        return f"/dev/{self.device_identifier}"

    @property
    def children(self) -> List["DiskNode"]:
        """Partitions first, then APFS volumes, each in input order."""
        return [*self.partitions, *self.apfs_volumes]

    @property
    def display_content(self) -> str:
        """Content label, treating an unlabelled APFS container as "APFS"."""
        if self.content:
            return self.content
        if self.apfs_volumes:
            return "APFS"
        return ""

    @property
    def size_human(self) -> Optional[str]:
        """Human-readable size, or None when the size is unknown."""
        if self.size <= 0:
            return None
        return format_size(self.size)


@dataclass
class DeviceInfo:
    """Per-device facts from `diskutil info -plist <device>`."""
    total_size: Optional[int]   # None when diskutil omits TotalSize
    internal: bool

    @classmethod
    def from_plist(cls, raw: Any) -> "DeviceInfo":
        if not isinstance(raw, Mapping):
            return cls(total_size=None, internal=False)

        internal = raw.get("Internal")
        return cls(
            total_size=_plist_int(raw, "TotalSize"),
            internal=internal if isinstance(internal, bool) else False,
        )
