#!/usr/bin/env python3
"""
dupfinder CLI: command line interface for duplicate file detection.
Scans one or more directories, shows live progress and writes a text report.
The scan is read-only: no file is ever modified, moved or deleted.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, NoReturn

from tqdm import tqdm

from dupfinder.aliases import (
    QUICK_HASH_ALIASES, QUICK_HASH_CHOICES, QUICK_HASH_HELP_TEXT,
    SAMPLE_SIZE_HELP_TEXT, EPILOG_TEXT
)
from dupfinder.commands import DuplicateScanCommand
from dupfinder.core.exceptions import ScanRootError
from dupfinder.core.models import DuplicateReport, ScanParams, ScanStats
from dupfinder.services.report_service import ReportService, DEFAULT_REPORT_FILENAME
from dupfinder.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILENAME = "duplicate_finder.log"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y%m%d %H:%M:%S"


class ProgressDisplay:
    """
    Renders engine progress callbacks as one tqdm bar per stage on stderr.
    """

    def __init__(self, disable: bool = False):
        self.disable = disable
        self._stage: Optional[str] = None
        self._bar: Optional[tqdm] = None

    def __call__(self, stage: str, current: int, total: Optional[int]) -> None:
        if stage != self._stage:
            self.close()
            self._stage = stage
            self._bar = tqdm(
                total=total,
                desc=stage,
                unit="file",
                file=sys.stderr,
                disable=self.disable,
                leave=False
            )
        if current > self._bar.n:
            self._bar.update(current - self._bar.n)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
        self._bar = None
        self._stage = None


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse and validate command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupfinder",
            description="Scans the specified directory recursively for duplicate files.",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Input directories
        inputs = parser.add_mutually_exclusive_group()
        inputs.add_argument(
            "directory",
            nargs="?",
            default=None,
            help="Directory to scan for duplicates. Default: current directory"
        )
        inputs.add_argument(
            "--directories", "-d",
            nargs="+",
            default=None,
            metavar="DIR",
            help="One or more directories to scan for duplicates"
        )

        # Output options
        parser.add_argument(
            "--output", "-o",
            default=DEFAULT_REPORT_FILENAME,
            metavar="FILE",
            help=f"Output file or directory for the report. Default: {DEFAULT_REPORT_FILENAME}"
        )
        parser.add_argument(
            "--log-file",
            default=DEFAULT_LOG_FILENAME,
            metavar="FILE",
            help=f"Log file. Default: {DEFAULT_LOG_FILENAME}"
        )

        # Engine options
        parser.add_argument(
            "--sample-size", "-s",
            default="8K",
            type=str,
            metavar="SIZE",
            help=SAMPLE_SIZE_HELP_TEXT
        )
        parser.add_argument(
            "--quick-hash",
            choices=QUICK_HASH_CHOICES,
            default="xxh64",
            type=str,
            help=QUICK_HASH_HELP_TEXT
        )
        parser.add_argument(
            "--skip-empty",
            action="store_true",
            help="Ignore zero-byte files instead of reporting them as duplicates"
        )
        parser.add_argument(
            "--workers", "-w",
            type=int,
            default=None,
            metavar="N",
            help="Number of hashing threads. Default: number of CPUs"
        )

        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress progress bars and non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics and log debug messages"
        )

        return parser.parse_args(args)

    @staticmethod
    def configure_logging(log_file: str, verbose: bool = False) -> None:
        """Send package log records to log_file with a timestamp and level."""
        handler = logging.FileHandler(log_file, encoding="utf-8", errors="backslashreplace")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

        package_logger = logging.getLogger("dupfinder")
        for old_handler in list(package_logger.handlers):
            package_logger.removeHandler(old_handler)
            old_handler.close()
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    @staticmethod
    def resolve_directories(args: argparse.Namespace) -> List[str]:
        if args.directories:
            return args.directories
        if args.directory:
            return [args.directory]
        return [os.getcwd()]

    @staticmethod
    def resolve_output_file(output: str) -> str:
        """An existing directory gets the default report file name inside it."""
        output_path = Path(output)
        if output_path.is_dir():
            output_path = output_path / DEFAULT_REPORT_FILENAME
        return str(output_path)

    def validate_args(self, args: argparse.Namespace, dirs: List[str]) -> None:
        """Validate command-line arguments before execution."""
        for d in dirs:
            root_path = Path(d)
            if not root_path.exists() or not root_path.is_dir():
                logger.error(f"Invalid directory: {d}")
                self.error_exit(f"'{d}' is not a valid directory")

        if not ConvertUtils.is_valid_size_format(args.sample_size):
            self.error_exit(f"Invalid sample size: {args.sample_size}")

        if args.workers is not None and args.workers < 1:
            self.error_exit("--workers must be at least 1")

    def create_params(self, args: argparse.Namespace, dirs: List[str]) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_human_readable(
                root_dirs=[str(Path(d).resolve()) for d in dirs],
                sample_size_str=args.sample_size,
                quick_hash=QUICK_HASH_ALIASES[args.quick_hash],
                skip_empty=args.skip_empty,
                max_workers=args.workers,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def run_scan(self, params: ScanParams) -> tuple[DuplicateReport, ScanStats]:
        """Execute the scan, rendering progress unless quiet."""
        progress = ProgressDisplay(disable=self.quiet)
        try:
            return DuplicateScanCommand().execute(params, progress_callback=progress)
        except ScanRootError as e:
            self.error_exit(str(e))
        finally:
            progress.close()

    def output_results(
            self,
            report: DuplicateReport,
            stats: ScanStats,
            params: ScanParams,
            output_file: str,
            start_time: str
    ) -> None:
        if self.verbose:
            print(stats.print_summary())

        if stats.excluded and not self.quiet:
            print(f"{len(stats.excluded)} files could not be read and were skipped (see log).",
                  file=sys.stderr)

        if report.is_empty:
            print("No duplicate files found.")
            logger.info("No duplicate files found.")
            return

        if not self.quiet:
            print(f"Found {len(report)} duplicate groups ({report.total_files} files), "
                  f"potential savings: {ConvertUtils.bytes_to_human(report.total_reclaimable_bytes)}")

        try:
            ReportService.write_report(report, output_file, start_time, params.root_dirs)
        except OSError as e:
            logger.error(f"Failed to write output: {e}")
            self.error_exit(f"Error writing output: {e}")

        print(f"Duplicate file report saved to {output_file}")

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.configure_logging(args.log_file, verbose=self.verbose)

        dirs = self.resolve_directories(args)
        self.validate_args(args, dirs)
        params = self.create_params(args, dirs)
        output_file = self.resolve_output_file(args.output)
        start_time = ConvertUtils.timestamp_to_human(self.start_time)

        if not self.quiet:
            if len(params.root_dirs) == 1:
                print(f"Scanning directory: {params.root_dirs[0]}")
            else:
                print(f"Scanning {len(params.root_dirs)} directories")
            print(f"Output will be saved to: {output_file}")

        report, stats = self.run_scan(params)
        self.output_results(report, stats, params, output_file, start_time)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        logger.exception("Unexpected error")
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
