"""Text rendering of the disk hierarchy as a box-drawing tree."""
from typing import Iterable, List

from osximg.models.disk import DiskNode

BRANCH = "├─ "
LAST_BRANCH = "└─ "
PIPE_INDENT = "│  "
SPACE_INDENT = "   "
PLACEHOLDER = "-"


def describe(node: DiskNode) -> str:
    """Bracket field for a node: label first, then content type."""
    label = node.volume_name or PLACEHOLDER
    content = node.display_content or PLACEHOLDER

    if content == PLACEHOLDER:
        return label
    if label == PLACEHOLDER:
        return content
    return f"{label} | {content}"


def render_disk(node: DiskNode, prefix: str = "", is_last: bool = True) -> List[str]:
    """Render one node and its subtree.

    Example:
        └─ /dev/disk2 [-] (465.7 GB)
           └─ /dev/disk2s1 [EFI] (200.0 MB)
    """
    connector = LAST_BRANCH if is_last else BRANCH
    line = f"{prefix}{connector}{node.device_path} [{describe(node)}]"
    size = node.size_human
    if size is not None:
        line += f" ({size})"

    lines = [line]
    child_prefix = prefix + (SPACE_INDENT if is_last else PIPE_INDENT)
    children = node.children
    for index, child in enumerate(children):
        lines.extend(render_disk(child, child_prefix, index == len(children) - 1))
    return lines


def render_disks(disks: Iterable[DiskNode]) -> List[str]:
    """Render top-level disks, separated by a single blank line."""
    lines: List[str] = []
    for index, disk in enumerate(disks):
        if index:
            lines.append("")
        lines.extend(render_disk(disk))
    return lines
