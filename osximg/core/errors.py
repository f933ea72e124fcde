"""Exceptions raised by osximg operations."""


class OsximgError(Exception):
    """Base class for errors reported to the user as `Error: ...`."""


class DiskutilError(OsximgError):
    """diskutil, plutil or their output could not be used."""


class UnexpectedStructureError(DiskutilError):
    """The decoded property list is missing the expected top-level layout."""


class CopyError(OsximgError):
    """The dd/pv copy pipeline failed to start or exited nonzero."""


class ConfigError(OsximgError):
    """The configuration file could not be loaded."""
