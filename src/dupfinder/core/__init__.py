"""
Core duplicate detection engine: scanner, hashers, scheduler, grouper, and pipeline orchestrator.

- FileScannerImpl: recursive directory traversal yielding FileEntry objects
- QuickHasher / FullHasher: xxHash prefix digest and SHA-256 whole-file digest
- WorkScheduler + GroupMap: bounded thread pool and synchronized result buckets
- FileGrouperImpl: size and digest based grouping with singleton pruning
- DuplicateFinderImpl: multi-stage pipeline (size → quick hash → full hash)
- Models: FileEntry, DuplicateGroup, DuplicateReport and configuration objects

No console or GUI dependencies.
"""

from .exceptions import DuplicateFinderError, ScanRootError, ShortReadError
from .scanner import FileScannerImpl
from .hasher import QuickHasher, FullHasher, XXHashAlgorithmImpl, Sha256AlgorithmImpl
from .scheduler import GroupMap, WorkScheduler
from .grouper import FileGrouperImpl
from .stages import SizeStageImpl, QuickHashStage, FullHashStage
from .deduplicator import DuplicateFinderImpl
from .models import (
    FileEntry, DuplicateGroup, DuplicateReport, ExcludedFile, ScanParams, ScanStats,
    EmptyFilePolicy, QuickHashAlgorithm, Stage)

__all__ = [
    "DuplicateFinderError",
    "ScanRootError",
    "ShortReadError",
    "FileScannerImpl",
    "QuickHasher",
    "FullHasher",
    "XXHashAlgorithmImpl",
    "Sha256AlgorithmImpl",
    "GroupMap",
    "WorkScheduler",
    "FileGrouperImpl",
    "SizeStageImpl",
    "QuickHashStage",
    "FullHashStage",
    "DuplicateFinderImpl",
    "FileEntry",
    "DuplicateGroup",
    "DuplicateReport",
    "ExcludedFile",
    "ScanParams",
    "ScanStats",
    "EmptyFilePolicy",
    "QuickHashAlgorithm",
    "Stage",
]
