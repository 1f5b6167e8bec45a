"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages of the duplicate detection engine.

CLASS HIERARCHY
---------------
SizeStageImpl    : Initial size-based grouping (SizeStage interface)
HashStageBase    : Shared flatten → hash → rebuild logic for digest stages
QuickHashStage   : Splits size groups by a digest of the first bytes of each file
FullHashStage    : Splits quick-hash groups by a SHA-256 digest of the whole file

STAGE CONTRACTS
---------------
Each stage implements a `process()` method that:
  • Accepts the groups surviving the previous stage
  • Returns only groups of 2+ files, so every stage prunes monotonically
  • Reports progress via callback (stage name, processed count, total count)

Hash stages flatten all incoming groups into one job list so the worker pool stays
busy across small groups and progress counts are monotonic for the whole stage.
Bucket keys always include the file size, so files from different size groups
can never be merged.
"""

import logging
from typing import List, Dict, Optional, Tuple

from dupfinder.core.grouper import FileGrouperImpl
from dupfinder.core.interfaces import SizeStage, HashStage, ProgressCallback
from dupfinder.core.models import FileEntry, DuplicateGroup, ExcludedFile, EmptyFilePolicy, Stage

logger = logging.getLogger(__name__)


# =============================
# Size Stage
# =============================
class SizeStageImpl(SizeStage):
    def __init__(self, grouper: FileGrouperImpl, empty_files: EmptyFilePolicy = EmptyFilePolicy.INCLUDE):
        self.grouper = grouper
        self.empty_files = empty_files

    def process(
            self,
            files: List[FileEntry],
            confirmed_duplicates: List[DuplicateGroup],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Group by file size.
        Zero-byte files are identical by definition: they go straight to
        confirmed_duplicates (or are dropped when empty files are skipped).
        Returns DuplicateGroups with 2+ non-empty files of the same size.
        """
        groups = []
        for size, files_list in self.grouper.group_by_size(files).items():
            if size == 0:
                if self.empty_files == EmptyFilePolicy.INCLUDE:
                    confirmed_duplicates.append(DuplicateGroup(size=0, files=files_list))
                else:
                    logger.debug(f"Skipping {len(files_list)} zero-byte files")
                continue
            groups.append(DuplicateGroup(size=size, files=files_list))

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SIZE.value, total_files, total_files)

        return groups


# =============================
# Hash Stages
# =============================
class HashStageBase(HashStage):
    """
    Base class for stages that split groups by a content digest.
    Subclasses choose the digest through `_group_files`.
    """

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        raise NotImplementedError

    def _group_files(
            self,
            files: List[FileEntry],
            excluded: List[ExcludedFile],
            progress_callback: Optional[ProgressCallback]
    ) -> Dict[Tuple[int, bytes], List[FileEntry]]:
        """
        Groups files by (size, digest).

        Args:
            files: Files of all incoming groups, flattened.
            excluded: List to append unreadable files to.
            progress_callback: Per-file progress callback.

        Returns:
            Dict[(size, digest), List[FileEntry]] with 2+ files per key.
        """
        raise NotImplementedError

    def process(
            self,
            groups: List[DuplicateGroup],
            excluded: List[ExcludedFile],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        files = [file for group in groups for file in group.files]
        if not files:
            return []

        hash_groups = self._group_files(files, excluded, progress_callback)
        return [
            DuplicateGroup(size=size, files=files_in_group)
            for (size, _digest), files_in_group in hash_groups.items()
        ]


class QuickHashStage(HashStageBase):
    def get_stage_name(self) -> str:
        return Stage.QUICK.value

    def _group_files(self, files, excluded, progress_callback):
        return self.grouper.group_by_quick_hash(files, excluded, progress_callback)


class FullHashStage(HashStageBase):
    def get_stage_name(self) -> str:
        return Stage.FULL.value

    def _group_files(self, files, excluded, progress_callback):
        return self.grouper.group_by_full_hash(files, excluded, progress_callback)
