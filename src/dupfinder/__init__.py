"""
dupfinder: fast duplicate file finder.

Core features:
- Staged detection: size → quick xxHash of the first bytes → full SHA-256
- Hashing spread over a bounded thread pool
- Read-only scan: files are never modified, moved or deleted
- Plain-text report grouped by size, largest first
- CLI interface (`dupfinder`)
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupfinder")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from dupfinder.commands import DuplicateScanCommand
from dupfinder.core import (
    DuplicateFinderImpl, FileScannerImpl, FileEntry, DuplicateGroup, DuplicateReport,
    ScanParams, ScanStats, EmptyFilePolicy, QuickHashAlgorithm, ScanRootError)
from dupfinder.utils.convert_utils import ConvertUtils
from dupfinder.services import ReportService

__all__ = [
    "DuplicateScanCommand",
    "DuplicateFinderImpl",
    "FileScannerImpl",
    "FileEntry",
    "DuplicateGroup",
    "DuplicateReport",
    "ScanParams",
    "ScanStats",
    "EmptyFilePolicy",
    "QuickHashAlgorithm",
    "ScanRootError",
    "ConvertUtils",
    "ReportService",
    "__version__",
]
