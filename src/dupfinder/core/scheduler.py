"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scheduler.py
Bounded parallel execution of per-file hashing tasks.

GroupMap      : lock-protected buckets that worker threads insert into
WorkScheduler : fixed-size thread pool with a cap on in-flight tasks and
                per-completion progress reporting

Tasks run on worker threads; progress callbacks always run on the calling thread,
so a slow progress consumer delays submission of new work but never a running task.
"""

import itertools
import logging
import os
import threading
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, wait, FIRST_COMPLETED
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from dupfinder.core.interfaces import ProgressCallback
from dupfinder.core.models import FileEntry, ExcludedFile

logger = logging.getLogger(__name__)


def default_worker_count() -> int:
    """Pool size used when none is configured: one worker per logical CPU."""
    return os.cpu_count() or 1


class GroupMap:
    """
    Thread-safe mapping from a bucket key to the files that produced it.

    Every insertion carries the file's position in the stage input, so the order
    of members returned by `groups()` does not depend on which worker finished first.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._buckets: Dict[Hashable, List[Tuple[int, FileEntry]]] = defaultdict(list)
        self._excluded: List[ExcludedFile] = []

    def add(self, key: Hashable, position: int, file: FileEntry) -> None:
        with self._lock:
            self._buckets[key].append((position, file))

    def exclude(self, excluded: ExcludedFile) -> None:
        with self._lock:
            self._excluded.append(excluded)

    @property
    def excluded(self) -> List[ExcludedFile]:
        with self._lock:
            return list(self._excluded)

    def groups(self, min_count: int = 2) -> Dict[Hashable, List[FileEntry]]:
        """
        Returns buckets with at least `min_count` members, each ordered by position.
        Buckets are ordered by the position of their first member.
        """
        with self._lock:
            ordered = [
                (key, sorted(members, key=lambda m: m[0]))
                for key, members in self._buckets.items()
                if len(members) >= min_count
            ]
        ordered.sort(key=lambda item: item[1][0][0])
        return {key: [file for _, file in members] for key, members in ordered}

    def file_count(self) -> int:
        with self._lock:
            return sum(len(members) for members in self._buckets.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)


class WorkScheduler:
    """
    Runs one task per job on a fixed-size thread pool.

    At most `max_workers * backlog_factor` tasks are submitted at any time; the next
    job is only handed to the pool when an earlier one completes.
    """

    def __init__(self, max_workers: Optional[int] = None, backlog_factor: int = 2):
        self.max_workers = max_workers or default_worker_count()
        if self.max_workers < 1:
            raise ValueError("Worker count must be at least 1")
        self.backlog_factor = max(1, backlog_factor)

    @property
    def max_in_flight(self) -> int:
        return self.max_workers * self.backlog_factor

    def run(
            self,
            stage_name: str,
            jobs: Sequence[Any],
            task: Callable[[Any], None],
            progress_callback: Optional[ProgressCallback] = None
    ) -> int:
        """
        Executes `task(job)` for every job and waits for all of them.

        Args:
            stage_name: Label passed to the progress callback.
            jobs: Independent work items.
            task: Callable run on a worker thread; it stores its own result.
            progress_callback: (stage, completed, total) after every completion.

        Returns:
            Number of completed tasks.

        Raises:
            Any exception raised by a task. Tasks are expected to handle per-file
            I/O errors themselves.
        """
        total = len(jobs)
        if total == 0:
            return 0

        logger.debug(f"{stage_name}: scheduling {total} tasks on {self.max_workers} workers")
        pending_jobs = iter(jobs)
        completed = 0

        with ThreadPoolExecutor(max_workers=self.max_workers,
                                thread_name_prefix="dupfinder-worker") as executor:
            in_flight = {executor.submit(task, job)
                         for job in itertools.islice(pending_jobs, self.max_in_flight)}

            while in_flight:
                done, in_flight = wait(in_flight, return_when=FIRST_COMPLETED)
                for future in done:
                    future.result()
                    completed += 1
                    if progress_callback:
                        progress_callback(stage_name, completed, total)

                for job in itertools.islice(pending_jobs, len(done)):
                    in_flight.add(executor.submit(task, job))

        return completed
