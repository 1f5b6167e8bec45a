"""
Shared fixtures for duplicate finder tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'dupfinder' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dupfinder.core import FileEntry, FileGrouperImpl, WorkScheduler  # noqa: E402


@pytest.fixture
def grouper():
    """Grouper with a small pool so concurrency is exercised on any machine."""
    return FileGrouperImpl(scheduler=WorkScheduler(max_workers=4))


@pytest.fixture
def make_entry():
    """Writes content to a path and returns the matching FileEntry."""
    def _make(path: Path, content: bytes) -> FileEntry:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return FileEntry(path=str(path), size=len(content))
    return _make


@pytest.fixture
def test_files(tmp_path) -> Dict[str, Path]:
    """
    Creates controlled test files:
    - 3 identical 1KB files (one in a subdirectory)
    - 2 identical 2KB files
    - 2 unique files of distinct sizes
    - 1 file with the same size as the 1KB group but different content
    - 2 empty files
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = tmp_path / "dup1_a.txt"
    files["dup1_b"] = tmp_path / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = tmp_path / "dup2_a.txt"
    files["dup2_b"] = tmp_path / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["unique1"] = tmp_path / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = tmp_path / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    files["same_size_other"] = tmp_path / "same_size_other.txt"
    files["same_size_other"].write_bytes(b"E" * 1024)

    files["empty_a"] = tmp_path / "empty_a.txt"
    files["empty_b"] = tmp_path / "empty_b.txt"
    files["empty_a"].write_bytes(b"")
    files["empty_b"].write_bytes(b"")

    subdir = tmp_path / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files
