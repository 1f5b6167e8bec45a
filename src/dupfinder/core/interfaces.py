"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate finder.
These protocols enforce structural typing using Python's `typing.Protocol` so that
hashers, groupers and stages can be swapped or faked in tests.

Key Components:
---------------
- HashState / HashAlgorithm: Incremental digest objects and the factories producing them.
- Hasher: Interface for computing a digest of one file.
- FileScanner: Interface for traversing root directories and yielding FileEntry objects.
- FileGrouper: Interface for grouping files by size or digest.
- SizeStage / HashStage: Interfaces for individual stages in the pipeline.
- DuplicateFinder: Interface for the engine coordinating all stages.
"""

from typing import Protocol, List, Dict, Tuple, Optional, Callable, Iterable, Iterator, Any

from dupfinder.core.models import (
    FileEntry,
    DuplicateGroup,
    DuplicateReport,
    ExcludedFile,
    EmptyFilePolicy,
    ScanStats,
)

ProgressCallback = Callable[[str, int, Optional[int]], None]


# ===== Interfaces =====

class HashState(Protocol):
    """Incremental digest object (hashlib and xxhash objects both qualify)."""
    def update(self, data: bytes) -> Any: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    def hash(self, data: bytes) -> bytes:
        """Computes the hash of the provided byte data."""
        ...

    def new(self) -> HashState:
        """Returns a fresh incremental digest object."""
        ...


class Hasher(Protocol):
    """Interface for hashing the content of a file."""
    def compute(self, file: FileEntry) -> bytes:
        """
        Returns the digest of the file.

        Raises:
            OSError: if the file cannot be read or changed since discovery.
        """
        ...


class FileScanner(Protocol):
    """
    Interface for traversing root directories.
    """
    def validate_roots(self) -> None:
        """Raise ScanRootError if any root directory is unusable."""
        ...

    def iter_files(self) -> Iterator[FileEntry]:
        """Yield every regular file under the roots in a stable order."""
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files based on size or content digests.
    Every method drops groups with fewer than two members.
    """
    def group_by_size(self, files: List[FileEntry]) -> Dict[int, List[FileEntry]]:
        """Group files by their size in bytes."""
        ...

    def group_by_quick_hash(
        self,
        files: List[FileEntry],
        excluded: List[ExcludedFile],
        progress_callback: Optional[ProgressCallback] = None
    ) -> Dict[Tuple[int, bytes], List[FileEntry]]:
        """Group files by (size, quick digest)."""
        ...

    def group_by_full_hash(
        self,
        files: List[FileEntry],
        excluded: List[ExcludedFile],
        progress_callback: Optional[ProgressCallback] = None
    ) -> Dict[Tuple[int, bytes], List[FileEntry]]:
        """Group files by (size, full digest)."""
        ...


# =============================
# Stage Interfaces
# =============================

class SizeStage(Protocol):
    """
    First stage: grouping files by size.
    """
    def process(
        self,
        files: List[FileEntry],
        confirmed_duplicates: List[DuplicateGroup],
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Group files by size to find initial duplicate candidates.

        Args:
            files: Discovered files.
            confirmed_duplicates: List to append groups that need no hashing to
                                  (zero-byte files).
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            Candidate groups of 2+ files of the same size that still need hashing.
        """
        ...


class HashStage(Protocol):
    """
    A stage that splits candidate groups by a content digest.
    """
    def get_stage_name(self) -> str:
        """Return the name of this stage (used in logging and stats)."""
        ...

    def process(
        self,
        groups: List[DuplicateGroup],
        excluded: List[ExcludedFile],
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Refine candidate groups.

        Args:
            groups: Groups surviving the previous stage.
            excluded: List to append unreadable files to.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            Groups of 2+ files sharing the stage digest.
        """
        ...


class DuplicateFinder(Protocol):
    """
    Interface for the duplicate detection engine.
    """
    def find_duplicates(
        self,
        files: Iterable[FileEntry],
        empty_files: EmptyFilePolicy = EmptyFilePolicy.INCLUDE,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[DuplicateReport, ScanStats]:
        """
        Run size → quick hash → full hash over the given files.

        Returns:
            A tuple containing:
                - Report of confirmed duplicate groups, largest first
                - Statistics collected during processing
        """
        ...
