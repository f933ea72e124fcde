"""osximg - list, clone and write macOS disk devices."""

__version__ = "0.1.4"
