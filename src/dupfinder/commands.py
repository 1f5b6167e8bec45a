"""
Unified command orchestrator for duplicate scans.
This is the single entry point for business logic; the CLI only parses arguments and prints.
"""
import logging
from typing import Optional, Tuple

from dupfinder.core.deduplicator import DuplicateFinderImpl
from dupfinder.core.grouper import FileGrouperImpl
from dupfinder.core.interfaces import ProgressCallback
from dupfinder.core.models import DuplicateReport, ScanParams, ScanStats
from dupfinder.core.scanner import FileScannerImpl

logger = logging.getLogger(__name__)


class DuplicateScanCommand:
    """
    Orchestrates the entire workflow:
    1. Validate root directories (fatal on failure)
    2. Stream discovered files from the scanner into the engine
    3. Return the report and statistics

    Usage:
        params = ScanParams(root_dirs=["/data"])
        report, stats = DuplicateScanCommand().execute(
            params,
            progress_callback=cli_progress_printer
        )
    """

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[DuplicateReport, ScanStats]:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (report, statistics)

        Raises:
            ScanRootError: If a root directory is missing or not a directory
        """
        scanner = FileScannerImpl(params.root_dirs)
        scanner.validate_roots()

        logger.info(
            f"Starting duplicate file detection in {', '.join(scanner.root_dirs)} "
            f"(quick hash: {params.quick_hash.display_name}, sample: {params.sample_size} bytes)"
        )

        finder = DuplicateFinderImpl(FileGrouperImpl.from_params(params))
        return finder.find_duplicates(
            scanner.iter_files(),
            empty_files=params.empty_files,
            progress_callback=progress_callback
        )
