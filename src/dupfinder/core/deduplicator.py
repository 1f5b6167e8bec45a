"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the pipeline-based duplicate detection engine:
    discover → size → quick hash → full hash → report
"""
import logging
import time
from typing import Iterable, List, Tuple, Optional

from dupfinder.core.grouper import FileGrouperImpl
from dupfinder.core.interfaces import DuplicateFinder, HashStage, ProgressCallback
from dupfinder.core.models import (
    FileEntry, DuplicateGroup, DuplicateReport, EmptyFilePolicy, ExcludedFile, ScanStats, Stage)
from dupfinder.core.stages import SizeStageImpl, QuickHashStage, FullHashStage

logger = logging.getLogger(__name__)


# =============================
# Main Engine Class
# =============================
class DuplicateFinderImpl(DuplicateFinder):
    """
    Implements multi-stage duplicate detection using a pipeline architecture.
    Each stage only sees the groups that survived the previous one.
    """
    def __init__(self, grouper: Optional[FileGrouperImpl] = None):
        self.grouper = grouper or FileGrouperImpl()

    def find_duplicates(
        self,
        files: Iterable[FileEntry],
        empty_files: EmptyFilePolicy = EmptyFilePolicy.INCLUDE,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[DuplicateReport, ScanStats]:
        """
        Main duplicate detection pipeline.
        Args:
            files: Discovered files; may be a lazy iterator fed by the scanner
            empty_files: Whether zero-byte files form a duplicate group
            progress_callback: Reports progress per stage as (stage, current, total).
        Returns:
            Tuple[DuplicateReport, ScanStats]
        """
        stats = ScanStats()
        total_start_time = time.time()
        logger.info("Scan started")

        # Discover
        start_time = time.time()
        discovered = self._discover(files, progress_callback)
        stats.files_discovered = len(discovered)
        self._update_stats(stats, Stage.DISCOVERY.value, time.time() - start_time, [], len(discovered))

        # Size partition
        confirmed_duplicates: List[DuplicateGroup] = []
        start_time = time.time()
        groups = SizeStageImpl(self.grouper, empty_files).process(
            discovered,
            confirmed_duplicates,
            progress_callback=progress_callback
        )
        self._update_stats(stats, Stage.SIZE.value, time.time() - start_time, groups + confirmed_duplicates)

        # Quick and full partitions
        excluded: List[ExcludedFile] = []
        for stage in self._build_pipeline():
            start_time = time.time()
            groups = stage.process(groups, excluded, progress_callback=progress_callback)
            self._update_stats(stats, stage.get_stage_name(), time.time() - start_time, groups)

        stats.add_excluded(excluded)

        # Emit
        report = DuplicateReport.from_groups(confirmed_duplicates + groups)
        stats.total_time = time.time() - total_start_time
        logger.info(
            f"Scan complete: {len(report)} duplicate groups, {report.total_files} files, "
            f"{len(stats.excluded)} excluded, {stats.total_time:.3f}s"
        )
        return report, stats

    def _build_pipeline(self) -> List[HashStage]:
        """Hash stages run after size grouping, cheapest first."""
        return [QuickHashStage(self.grouper), FullHashStage(self.grouper)]

    @staticmethod
    def _discover(files: Iterable[FileEntry], progress_callback: Optional[ProgressCallback]) -> List[FileEntry]:
        discovered = []
        for file in files:
            discovered.append(file)
            if progress_callback:
                progress_callback(Stage.DISCOVERY.value, len(discovered), None)
        return discovered

    @staticmethod
    def _update_stats(
        stats: ScanStats,
        stage: str,
        duration: float,
        groups: List[DuplicateGroup],
        files_processed: Optional[int] = None
    ) -> None:
        """
        Records one stage in ScanStats and emits the stage-complete log event.
        Unless given, files_processed is the number of files left in groups.
        """
        if files_processed is None:
            files_processed = sum(len(g.files) for g in groups)
        stats.update_stage(
            stage_name=stage,
            groups_found=len(groups),
            files_processed=files_processed,
            duration=duration
        )
        logger.info(f"Stage complete: {stage}: {len(groups)} groups, {files_processed} files, {duration:.3f}s")
