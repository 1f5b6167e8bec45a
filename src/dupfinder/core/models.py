"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for file discovery, duplicate grouping and scan configuration.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Union


# =============================
# Enums
# =============================

class QuickHashAlgorithm(Enum):
    """
    Non-cryptographic digest used by the quick-hash stage.
    Values are the constructor names exposed by the xxhash library.
    """
    XXH64 = "xxh64"
    XXH3_64 = "xxh3_64"
    XXH3_128 = "xxh3_128"
    XXH128 = "xxh128"

    @property
    def display_name(self) -> str:
        """Human-readable name for log messages."""
        mapping = {
            QuickHashAlgorithm.XXH64: "xxHash64",
            QuickHashAlgorithm.XXH3_64: "XXH3 (64-bit)",
            QuickHashAlgorithm.XXH3_128: "XXH3 (128-bit)",
            QuickHashAlgorithm.XXH128: "XXH128",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class EmptyFilePolicy(Enum):
    """
    What to do with zero-byte files.
    INCLUDE groups all of them together without hashing, SKIP ignores them.
    """
    INCLUDE = "include"
    SKIP = "skip"

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    DISCOVERY = "Discovering files"
    SIZE = "Size grouping"
    QUICK = "Quick hash"
    FULL = "Full hash"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileEntry:
    """
    A regular file found during traversal.
    Size is the value observed at discovery; later stages verify it.
    """
    path: str
    size: int  # in bytes

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __repr__(self):
        return f"<FileEntry path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    Files sharing the same size (and, after hashing, the same digests).
    Members keep the order in which they were discovered.
    """
    size: int
    files: List[FileEntry]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    @property
    def reclaimable_bytes(self) -> int:
        """Space freed by keeping a single copy."""
        return self.size * max(0, self.duplicate_count - 1)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


class DuplicateReport:
    """
    Final result of a scan: duplicate groups ordered by size, largest first.
    Groups of equal size are ordered by their first path.
    """

    def __init__(self, groups: Optional[List[DuplicateGroup]] = None):
        self._groups: List[DuplicateGroup] = list(groups or [])

    @classmethod
    def from_groups(cls, groups: Iterable[DuplicateGroup]) -> "DuplicateReport":
        kept = [g for g in groups if g.is_duplicate()]
        kept.sort(key=lambda g: (-g.size, g.files[0].path))
        return cls(kept)

    @property
    def groups(self) -> List[DuplicateGroup]:
        return list(self._groups)

    @property
    def is_empty(self) -> bool:
        return not self._groups

    @property
    def total_files(self) -> int:
        return sum(g.duplicate_count for g in self._groups)

    @property
    def total_reclaimable_bytes(self) -> int:
        return sum(g.reclaimable_bytes for g in self._groups)

    def __iter__(self) -> Iterator[DuplicateGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __getitem__(self, index: int) -> DuplicateGroup:
        return self._groups[index]

    def __repr__(self):
        return f"<DuplicateReport groups={len(self._groups)}, files={self.total_files}>"


@dataclass(frozen=True)
class ExcludedFile:
    """A file dropped from grouping because it could not be read."""
    path: str
    stage: str
    reason: str


class ScanStats:
    """
    Statistics collected during one scan.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.files_discovered: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.excluded: List[ExcludedFile] = []

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def add_excluded(self, excluded: Iterable[ExcludedFile]) -> None:
        self.excluded.extend(excluded)

    def print_summary(self) -> str:
        lines = [
            "Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files Discovered: {self.files_discovered}",
            f"Files Excluded: {len(self.excluded)}\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            lines.append(f"{stage}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


"""
DTO for scan parameters with built-in validation.
"""
from dupfinder.utils.convert_utils import ConvertUtils

DEFAULT_SAMPLE_SIZE = 8 * 1024


@dataclass
class ScanParams:
    """Parameters for a duplicate scan with validation."""
    root_dirs: List[str]
    sample_size: int = DEFAULT_SAMPLE_SIZE
    quick_hash: QuickHashAlgorithm = QuickHashAlgorithm.XXH64
    empty_files: EmptyFilePolicy = EmptyFilePolicy.INCLUDE
    max_workers: Optional[int] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if isinstance(self.root_dirs, str):
            self.root_dirs = [self.root_dirs]
        self.root_dirs = [str(d) for d in self.root_dirs if str(d).strip()]
        if not self.root_dirs:
            raise ValueError("At least one root directory is required")

        if self.sample_size <= 0:
            raise ValueError("Sample size must be positive")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("Worker count must be at least 1")

        if not isinstance(self.quick_hash, QuickHashAlgorithm):
            self.quick_hash = QuickHashAlgorithm(self.quick_hash)

    @staticmethod
    def from_human_readable(
            root_dirs: List[str],
            sample_size_str: str = "8K",
            quick_hash: QuickHashAlgorithm = QuickHashAlgorithm.XXH64,
            skip_empty: bool = False,
            max_workers: Optional[int] = None,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        Used by the CLI to turn argument strings into a validated object.
        """
        return ScanParams(
            root_dirs=root_dirs,
            sample_size=ConvertUtils.human_to_bytes(sample_size_str),
            quick_hash=quick_hash,
            empty_files=EmptyFilePolicy.SKIP if skip_empty else EmptyFilePolicy.INCLUDE,
            max_workers=max_workers,
        )
