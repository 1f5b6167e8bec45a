"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Serializes a DuplicateReport to the plain-text report file.
"""
import getpass
import logging
import time
from typing import List, Optional

from dupfinder.core.models import DuplicateReport
from dupfinder.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

DEFAULT_REPORT_FILENAME = "duplicate_file_report.txt"
REPORT_TITLE = "Duplicate File Finder Report"


class ReportService:
    @staticmethod
    def render(
            report: DuplicateReport,
            start_time: str,
            root_dirs: List[str],
            end_time: Optional[str] = None,
            username: Optional[str] = None
    ) -> str:
        """
        Builds the report text: header, potential savings, then one block per group
        with its size and paths, in report order (largest first).
        """
        if end_time is None:
            end_time = ConvertUtils.timestamp_to_human(time.time())
        if username is None:
            username = ReportService._current_user()

        lines = [
            REPORT_TITLE,
            f"Generated by: {username}",
            f"Start Time: {start_time}",
            f"End Time: {end_time}",
        ]
        if len(root_dirs) == 1:
            lines.append(f"Base Directory: {root_dirs[0]}")
        else:
            lines.append("Base Directories:")
            lines.extend(f" - {root}" for root in root_dirs)
        lines.append("")

        savings = ConvertUtils.bytes_to_human(report.total_reclaimable_bytes)
        lines.append(f"Total Potential Space Savings: {savings}")
        lines.append("")

        for group in report:
            lines.append(f"Size: {ConvertUtils.bytes_to_human(group.size)}")
            lines.extend(group.paths)
            lines.append("")

        return "\n".join(lines) + "\n"

    @staticmethod
    def write_report(
            report: DuplicateReport,
            output_file: str,
            start_time: str,
            root_dirs: List[str]
    ) -> None:
        """
        Writes the report to output_file.
        Raises:
            OSError: if the file cannot be created or written
        """
        text = ReportService.render(report, start_time, root_dirs)
        # Paths from undecodable file names carry surrogates; write their original bytes back
        with open(output_file, "w", encoding="utf-8", errors="surrogateescape") as f:
            f.write(text)
        logger.info(f"Duplicate files saved to {output_file}")

    @staticmethod
    def _current_user() -> str:
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            return "unknown"
