"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/exceptions.py
Error taxonomy of the duplicate finder.

- ScanRootError is fatal: the scan cannot start.
- ShortReadError is a per-file I/O failure; like any other OSError raised while
  hashing, it only excludes the affected file.
"""


class DuplicateFinderError(Exception):
    """Base class for all dupfinder errors."""
    pass


class ScanRootError(DuplicateFinderError):
    """Root directory does not exist or is not a directory."""
    pass


class ShortReadError(OSError):
    """File content no longer matches the size observed during discovery."""

    def __init__(self, path: str, expected: int, actual: int):
        super().__init__(f"Read {actual} bytes from {path}, expected {expected}")
        self.path = path
        self.expected = expected
        self.actual = actual
