"""
Unit tests for core data models and scan parameters.
"""
import pytest
from dupfinder.core.models import (
    FileEntry, DuplicateGroup, DuplicateReport, ScanParams, ScanStats, ExcludedFile,
    EmptyFilePolicy, QuickHashAlgorithm, Stage)


class TestFileEntry:
    def test_entry_is_immutable(self):
        entry = FileEntry(path="/data/a.txt", size=10)
        with pytest.raises(AttributeError):
            entry.size = 20

    def test_name_is_basename(self):
        assert FileEntry(path="/data/photos/a.jpg", size=1).name == "a.jpg"

    def test_entries_compare_by_value(self):
        assert FileEntry("/a", 1) == FileEntry("/a", 1)
        assert len({FileEntry("/a", 1), FileEntry("/a", 1)}) == 1


class TestDuplicateGroup:
    def test_reclaimable_bytes_counts_all_but_one_copy(self):
        group = DuplicateGroup(size=100, files=[FileEntry(f"/{i}", 100) for i in range(3)])
        assert group.duplicate_count == 3
        assert group.reclaimable_bytes == 200
        assert group.is_duplicate()

    def test_single_file_group_is_not_duplicate(self):
        group = DuplicateGroup(size=5, files=[FileEntry("/a", 5)])
        assert not group.is_duplicate()
        assert group.reclaimable_bytes == 0


class TestDuplicateReport:
    def test_groups_sorted_descending_by_size(self):
        groups = [
            DuplicateGroup(size=10, files=[FileEntry("/a", 10), FileEntry("/b", 10)]),
            DuplicateGroup(size=300, files=[FileEntry("/c", 300), FileEntry("/d", 300)]),
            DuplicateGroup(size=0, files=[FileEntry("/e", 0), FileEntry("/f", 0)]),
        ]
        report = DuplicateReport.from_groups(groups)
        assert [g.size for g in report] == [300, 10, 0]

    def test_equal_sizes_ordered_by_first_path(self):
        groups = [
            DuplicateGroup(size=10, files=[FileEntry("/z1", 10), FileEntry("/z2", 10)]),
            DuplicateGroup(size=10, files=[FileEntry("/a1", 10), FileEntry("/a2", 10)]),
        ]
        report = DuplicateReport.from_groups(groups)
        assert [g.files[0].path for g in report] == ["/a1", "/z1"]

    def test_singleton_groups_are_dropped(self):
        report = DuplicateReport.from_groups([DuplicateGroup(size=1, files=[FileEntry("/a", 1)])])
        assert report.is_empty
        assert len(report) == 0

    def test_totals(self):
        report = DuplicateReport.from_groups([
            DuplicateGroup(size=10, files=[FileEntry("/a", 10), FileEntry("/b", 10)]),
            DuplicateGroup(size=5, files=[FileEntry(f"/c{i}", 5) for i in range(3)]),
        ])
        assert report.total_files == 5
        assert report.total_reclaimable_bytes == 20
        assert report[0].size == 10


class TestScanParams:
    def test_defaults(self):
        params = ScanParams(root_dirs=["/data"])
        assert params.sample_size == 8 * 1024
        assert params.quick_hash == QuickHashAlgorithm.XXH64
        assert params.empty_files == EmptyFilePolicy.INCLUDE
        assert params.max_workers is None

    def test_single_root_string_is_wrapped(self):
        assert ScanParams(root_dirs="/data").root_dirs == ["/data"]

    @pytest.mark.parametrize("kwargs", [
        {"root_dirs": []},
        {"root_dirs": ["/data"], "sample_size": 0},
        {"root_dirs": ["/data"], "max_workers": 0},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            ScanParams(**kwargs)

    def test_quick_hash_accepts_algorithm_name(self):
        assert ScanParams(root_dirs=["/d"], quick_hash="xxh3_128").quick_hash == QuickHashAlgorithm.XXH3_128

    def test_unknown_quick_hash_raises(self):
        with pytest.raises(ValueError):
            ScanParams(root_dirs=["/d"], quick_hash="md5")

    def test_from_human_readable(self):
        params = ScanParams.from_human_readable(["/d"], "64K", skip_empty=True, max_workers=2)
        assert params.sample_size == 64 * 1024
        assert params.empty_files == EmptyFilePolicy.SKIP
        assert params.max_workers == 2


class TestScanStats:
    def test_update_stage_accumulates(self):
        stats = ScanStats()
        stats.update_stage(Stage.QUICK.value, groups_found=2, files_processed=5, duration=0.5)
        stats.update_stage(Stage.QUICK.value, groups_found=1, files_processed=3, duration=0.25)
        assert stats.stage_stats[Stage.QUICK.value] == {"groups": 3, "files": 8, "time": 0.75}

    def test_summary_mentions_stages_and_exclusions(self):
        stats = ScanStats()
        stats.files_discovered = 7
        stats.update_stage(Stage.SIZE.value, 1, 2, 0.0)
        stats.add_excluded([ExcludedFile(path="/x", stage=Stage.FULL.value, reason="gone")])
        summary = stats.print_summary()
        assert "Files Discovered: 7" in summary
        assert "Files Excluded: 1" in summary
        assert Stage.SIZE.value in summary
