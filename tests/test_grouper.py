"""
Unit tests for FileGrouperImpl.
Verifies grouping by size, quick hash and full hash with singleton pruning
and exclusion of unreadable files.
"""
import logging
from unittest.mock import Mock

from dupfinder.core import (
    FileEntry, FileGrouperImpl, QuickHasher, FullHasher, WorkScheduler, ScanParams,
    QuickHashAlgorithm, Stage)


class TestFileGrouperImpl:
    def test_groups_by_size_filters_single_files(self):
        files = [
            FileEntry(path="/a.txt", size=1024),
            FileEntry(path="/b.txt", size=1024),
            FileEntry(path="/c.txt", size=2048),
        ]
        size_groups = FileGrouperImpl().group_by_size(files)

        assert list(size_groups) == [1024]
        assert [f.path for f in size_groups[1024]] == ["/a.txt", "/b.txt"]

    def test_size_groups_keep_discovery_order(self):
        files = [FileEntry(f"/{name}", 10) for name in ["z", "a", "m"]]
        assert FileGrouperImpl().group_by_size(files)[10] == files

    def test_quick_hash_groups_by_size_and_digest(self, tmp_path, make_entry, grouper):
        a = make_entry(tmp_path / "a.bin", b"same-content")
        b = make_entry(tmp_path / "b.bin", b"same-content")
        c = make_entry(tmp_path / "c.bin", b"diff-content")

        excluded = []
        groups = grouper.group_by_quick_hash([a, b, c], excluded)

        assert len(groups) == 1
        (size, digest), members = next(iter(groups.items()))
        assert size == len(b"same-content")
        assert isinstance(digest, bytes)
        assert members == [a, b]
        assert excluded == []

    def test_full_hash_separates_quick_collisions(self, tmp_path, make_entry):
        prefix = b"Q" * 64
        a = make_entry(tmp_path / "a.bin", prefix + b"1")
        b = make_entry(tmp_path / "b.bin", prefix + b"2")
        c = make_entry(tmp_path / "c.bin", prefix + b"1")

        grouper = FileGrouperImpl(quick_hasher=QuickHasher(sample_size=16),
                                  scheduler=WorkScheduler(max_workers=2))
        excluded = []
        quick = grouper.group_by_quick_hash([a, b, c], excluded)
        assert [len(m) for m in quick.values()] == [3]

        full = grouper.group_by_full_hash([a, b, c], excluded)
        assert list(full.values()) == [[a, c]]

    def test_unreadable_file_excluded_with_warning(self, tmp_path, make_entry, grouper, caplog):
        a = make_entry(tmp_path / "a.bin", b"content")
        b = make_entry(tmp_path / "b.bin", b"content")
        missing = FileEntry(path=str(tmp_path / "missing.bin"), size=len(b"content"))

        excluded = []
        with caplog.at_level(logging.WARNING, logger="dupfinder"):
            groups = grouper.group_by_full_hash([a, missing, b], excluded)

        assert list(groups.values()) == [[a, b]]
        assert [e.path for e in excluded] == [missing.path]
        assert excluded[0].stage == Stage.FULL.value
        assert missing.path in caplog.text

    def test_hashers_are_injected(self):
        quick = Mock()
        quick.compute.side_effect = lambda f: b"same"
        files = [FileEntry("/a", 5), FileEntry("/b", 5), FileEntry("/c", 6)]

        grouper = FileGrouperImpl(quick_hasher=quick, scheduler=WorkScheduler(max_workers=1))
        groups = grouper.group_by_quick_hash(files, [])

        assert quick.compute.call_count == 3
        assert groups == {(5, b"same"): files[:2]}

    def test_progress_reported_per_file(self, tmp_path, make_entry, grouper):
        files = [make_entry(tmp_path / f"{i}.bin", b"x") for i in range(5)]
        calls = []
        grouper.group_by_quick_hash(files, [], lambda stage, current, total: calls.append((stage, current, total)))
        assert calls[-1] == (Stage.QUICK.value, 5, 5)
        assert len(calls) == 5

    def test_from_params(self):
        params = ScanParams(root_dirs=["/d"], sample_size=4096,
                            quick_hash=QuickHashAlgorithm.XXH3_64, max_workers=3)
        grouper = FileGrouperImpl.from_params(params)
        assert isinstance(grouper.quick_hasher, QuickHasher)
        assert grouper.quick_hasher.sample_size == 4096
        assert grouper.quick_hasher.algorithm.name == "xxh3_64"
        assert isinstance(grouper.full_hasher, FullHasher)
        assert grouper.scheduler.max_workers == 3
