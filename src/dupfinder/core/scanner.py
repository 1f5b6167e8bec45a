"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory traversal for one or more root directories.
Features:
- Recursively scans directories with os.walk in sorted order (stable discovery order)
- Skips symbolic links and unreadable subdirectories, logging why
- Yields each physical file once even when roots overlap
"""

import logging
import os
import stat
from pathlib import Path
from typing import Iterator, List, Optional, Set

from dupfinder.core.exceptions import ScanRootError
from dupfinder.core.interfaces import FileScanner
from dupfinder.core.models import FileEntry

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Walks root directories and yields FileEntry objects for regular files.

    Attributes:
        root_dirs: Absolute paths of the directories to scan
    """

    def __init__(self, root_dirs: List[str]):
        if isinstance(root_dirs, (str, Path)):
            root_dirs = [root_dirs]
        self.root_dirs = [os.path.abspath(str(d)) for d in root_dirs]

    def validate_roots(self) -> None:
        """
        Fails fast before any work starts.
        Raises:
            ScanRootError: if a root does not exist or is not a directory
        """
        for root in self.root_dirs:
            root_path = Path(root)
            if not root_path.exists():
                error_msg = f"Directory does not exist: {root}"
                logger.error(error_msg)
                raise ScanRootError(error_msg)
            if not root_path.is_dir():
                error_msg = f"Not a directory: {root}"
                logger.error(error_msg)
                raise ScanRootError(error_msg)

    def iter_files(self) -> Iterator[FileEntry]:
        """
        Yields every regular file under the roots.
        Traversal errors skip the affected subtree; stat errors skip the file.
        """
        self.validate_roots()
        seen: Set[str] = set()

        for root in self.root_dirs:
            logger.debug(f"Scanning directory: {root}")
            for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
                dirnames.sort()
                for filename in sorted(filenames):
                    entry = self._process_file(os.path.join(dirpath, filename))
                    if entry is None:
                        continue
                    real_path = os.path.realpath(entry.path)
                    if real_path in seen:
                        logger.debug(f"Skipping already discovered file: {entry.path}")
                        continue
                    seen.add(real_path)
                    yield entry

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Skipping unreadable directory {error.filename}: {error.strerror or error}")

    @staticmethod
    def _process_file(path: str) -> Optional[FileEntry]:
        """
        Stat a single path and return a FileEntry for regular files.
        Args:
            path: Absolute path of a directory entry
        Returns:
            Optional[FileEntry]: FileEntry if the path is a readable regular file, else None
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.warning(f"Could not get size of {path}: {e}")
            return None

        if stat.S_ISLNK(st.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None
        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        return FileEntry(path=path, size=st.st_size)
