"""Data models for osximg."""
from osximg.models.disk import DeviceInfo, DiskNode, format_size

__all__ = [
    'DeviceInfo',
    'DiskNode',
    'format_size',
]
