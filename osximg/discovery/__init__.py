"""Disk discovery through diskutil."""
from osximg.discovery.diskutil import DiskUtility, build_disk_forest

__all__ = ['DiskUtility', 'build_disk_forest']
