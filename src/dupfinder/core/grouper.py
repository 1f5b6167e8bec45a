"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping strategies using FileEntry objects, hashers and the WorkScheduler.
A single class implements FileGrouper for size, quick-hash and full-hash grouping.
"""

import logging
from collections import defaultdict
from typing import List, Dict, Tuple, Any, Callable, Optional

from dupfinder.core.hasher import QuickHasher, FullHasher, XXHashAlgorithmImpl
from dupfinder.core.interfaces import FileGrouper, Hasher, ProgressCallback
from dupfinder.core.models import FileEntry, ExcludedFile, ScanParams, Stage
from dupfinder.core.scheduler import GroupMap, WorkScheduler

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Hashers and the scheduler are injected for flexibility and testability.
    """

    def __init__(
            self,
            quick_hasher: Optional[Hasher] = None,
            full_hasher: Optional[Hasher] = None,
            scheduler: Optional[WorkScheduler] = None
    ):
        self.quick_hasher = quick_hasher or QuickHasher()
        self.full_hasher = full_hasher or FullHasher()
        self.scheduler = scheduler or WorkScheduler()

    @classmethod
    def from_params(cls, params: ScanParams) -> "FileGrouperImpl":
        """Builds a grouper configured by scan parameters."""
        return cls(
            quick_hasher=QuickHasher(XXHashAlgorithmImpl(params.quick_hash), params.sample_size),
            full_hasher=FullHasher(),
            scheduler=WorkScheduler(params.max_workers),
        )

    def group_by_size(self, files: List[FileEntry]) -> Dict[int, List[FileEntry]]:
        """Groups files by their size."""
        return self._group_by(files, lambda f: f.size)

    def group_by_quick_hash(
            self,
            files: List[FileEntry],
            excluded: List[ExcludedFile],
            progress_callback: Optional[ProgressCallback] = None
    ) -> Dict[Tuple[int, bytes], List[FileEntry]]:
        """Groups files by size and quick (prefix) hash."""
        return self._group_by_digest(files, self.quick_hasher, Stage.QUICK, excluded, progress_callback)

    def group_by_full_hash(
            self,
            files: List[FileEntry],
            excluded: List[ExcludedFile],
            progress_callback: Optional[ProgressCallback] = None
    ) -> Dict[Tuple[int, bytes], List[FileEntry]]:
        """Groups files by size and full content hash."""
        return self._group_by_digest(files, self.full_hasher, Stage.FULL, excluded, progress_callback)

    def _group_by_digest(
            self,
            files: List[FileEntry],
            hasher: Hasher,
            stage: Stage,
            excluded: List[ExcludedFile],
            progress_callback: Optional[ProgressCallback]
    ) -> Dict[Tuple[int, bytes], List[FileEntry]]:
        """
        Hashes every file on the worker pool and buckets it by (size, digest).
        Unreadable files are logged, appended to `excluded` and left out of every bucket.
        """
        buckets = GroupMap()

        def hash_one(job: Tuple[int, FileEntry]) -> None:
            position, file = job
            try:
                digest = hasher.compute(file)
            except OSError as e:
                logger.warning(f"Excluded {file.path} ({stage.value}): {e}")
                buckets.exclude(ExcludedFile(path=file.path, stage=stage.value, reason=str(e)))
                return
            buckets.add((file.size, digest), position, file)

        self.scheduler.run(stage.value, list(enumerate(files)), hash_one, progress_callback)

        skipped = buckets.excluded
        if skipped:
            logger.warning(f"Skipped {len(skipped)} files during {stage.value.lower()}")
            excluded.extend(skipped)

        return buckets.groups()

    @staticmethod
    def _group_by(files: List[FileEntry], key_func: Callable[[FileEntry], Any]) -> Dict[Any, List[FileEntry]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a FileEntry
        Returns:
            Dict[key, List[FileEntry]] with groups of 2+ files, in discovery order
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
