"""
Unit tests for QuickHasher and FullHasher.
Verifies prefix-only quick hashing, SHA-256 full hashing and read failure behavior.
"""
import hashlib

import pytest
import xxhash

from dupfinder.core import FileEntry, QuickHasher, FullHasher, XXHashAlgorithmImpl, Sha256AlgorithmImpl
from dupfinder.core import QuickHashAlgorithm, ShortReadError


class TestHashAlgorithms:
    @pytest.mark.parametrize("variant", list(QuickHashAlgorithm))
    def test_xxhash_variants_match_library(self, variant):
        algorithm = XXHashAlgorithmImpl(variant)
        expected = getattr(xxhash, variant.value)(b"payload").digest()
        assert algorithm.hash(b"payload") == expected

    def test_incremental_state_matches_one_shot(self):
        algorithm = Sha256AlgorithmImpl()
        state = algorithm.new()
        state.update(b"pay")
        state.update(b"load")
        assert state.digest() == algorithm.hash(b"payload")


class TestQuickHasher:
    def test_only_prefix_is_hashed(self, tmp_path, make_entry):
        """Files that differ only after the sample budget share a quick digest."""
        prefix = b"P" * 4096
        a = make_entry(tmp_path / "a.bin", prefix + b"tail-one")
        b = make_entry(tmp_path / "b.bin", prefix + b"tail-two")

        hasher = QuickHasher(sample_size=4096)
        assert hasher.compute(a) == hasher.compute(b)

    def test_difference_within_prefix_changes_digest(self, tmp_path, make_entry):
        a = make_entry(tmp_path / "a.bin", b"x" * 10)
        b = make_entry(tmp_path / "b.bin", b"y" * 10)
        hasher = QuickHasher()
        assert hasher.compute(a) != hasher.compute(b)

    def test_short_file_hashed_whole(self, tmp_path, make_entry):
        entry = make_entry(tmp_path / "short.bin", b"hello")
        assert QuickHasher().compute(entry) == xxhash.xxh64(b"hello").digest()

    def test_empty_file_hashes_empty_input(self, tmp_path, make_entry):
        entry = make_entry(tmp_path / "empty.bin", b"")
        assert QuickHasher().compute(entry) == xxhash.xxh64(b"").digest()

    def test_missing_file_raises_oserror(self, tmp_path):
        entry = FileEntry(path=str(tmp_path / "gone.bin"), size=10)
        with pytest.raises(OSError):
            QuickHasher().compute(entry)

    def test_truncated_file_raises_short_read(self, tmp_path):
        path = tmp_path / "shrunk.bin"
        path.write_bytes(b"abc")
        entry = FileEntry(path=str(path), size=100)
        with pytest.raises(ShortReadError):
            QuickHasher().compute(entry)

    def test_sample_size_must_be_positive(self):
        with pytest.raises(ValueError):
            QuickHasher(sample_size=0)


class TestFullHasher:
    def test_known_sha256(self, tmp_path, make_entry):
        entry = make_entry(tmp_path / "hello.txt", b"Hello, world!\n")
        digest = FullHasher().compute(entry)
        assert digest.hex() == "d9014c4624844aa5bac314773d6b689ad467fa4e1d1a50a1b8a99d5a95f72ff5"

    def test_reads_beyond_buffer(self, tmp_path, make_entry):
        content = bytes(range(256)) * 1000
        entry = make_entry(tmp_path / "big.bin", content)
        digest = FullHasher(buffer_size=1000).compute(entry)
        assert digest == hashlib.sha256(content).digest()

    def test_differs_after_quick_prefix(self, tmp_path, make_entry):
        prefix = b"P" * 8192
        a = make_entry(tmp_path / "a.bin", prefix + b"1")
        b = make_entry(tmp_path / "b.bin", prefix + b"2")
        hasher = FullHasher()
        assert hasher.compute(a) != hasher.compute(b)

    def test_grown_file_raises_short_read(self, tmp_path):
        path = tmp_path / "grown.bin"
        path.write_bytes(b"abcdef")
        entry = FileEntry(path=str(path), size=3)
        with pytest.raises(ShortReadError) as exc_info:
            FullHasher().compute(entry)
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 6

    def test_missing_file_raises_oserror(self, tmp_path):
        entry = FileEntry(path=str(tmp_path / "gone.bin"), size=1)
        with pytest.raises(OSError):
            FullHasher().compute(entry)
