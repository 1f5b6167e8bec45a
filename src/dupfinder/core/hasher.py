"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing using FileEntry objects and pluggable hash algorithms.

- QuickHasher digests a bounded prefix of a file with a fast xxHash variant.
- FullHasher streams the whole file through SHA-256.

Both raise OSError (ShortReadError included) when a file cannot be read in full;
deciding what to do with such files is left to the grouper.
"""

import hashlib

import xxhash

from dupfinder.core.exceptions import ShortReadError
from dupfinder.core.interfaces import Hasher, HashAlgorithm, HashState
from dupfinder.core.models import FileEntry, QuickHashAlgorithm, DEFAULT_SAMPLE_SIZE

FULL_HASH_BUFFER_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    def __init__(self, variant: QuickHashAlgorithm = QuickHashAlgorithm.XXH64):
        self.variant = variant
        self.name = variant.value
        self._factory = getattr(xxhash, variant.value)

    def hash(self, data: bytes) -> bytes:
        return self._factory(data).digest()

    def new(self) -> HashState:
        return self._factory()


class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    def hash(self, data: bytes) -> bytes:
        return hashlib.sha256(data).digest()

    def new(self) -> HashState:
        return hashlib.sha256()


class QuickHasher(Hasher):
    """
    Hashes the first `sample_size` bytes of a file (the whole file if shorter).
    Equal digests only make files candidates; different digests prove they differ.
    """

    def __init__(self, algorithm: HashAlgorithm = None, sample_size: int = DEFAULT_SAMPLE_SIZE):
        if sample_size <= 0:
            raise ValueError("Sample size must be positive")
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.sample_size = sample_size

    def compute(self, file: FileEntry) -> bytes:
        expected = min(file.size, self.sample_size)
        with open(file.path, 'rb') as f:
            data = f.read(self.sample_size)
        if len(data) != expected:
            raise ShortReadError(file.path, expected, len(data))
        return self.algorithm.hash(data)


class FullHasher(Hasher):
    """
    Computes a SHA-256 digest over the entire file, reading it in fixed-size blocks.
    """

    def __init__(self, algorithm: HashAlgorithm = None, buffer_size: int = FULL_HASH_BUFFER_SIZE):
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.buffer_size = buffer_size

    def compute(self, file: FileEntry) -> bytes:
        state = self.algorithm.new()
        total = 0
        with open(file.path, 'rb') as f:
            while True:
                chunk = f.read(self.buffer_size)
                if not chunk:
                    break
                state.update(chunk)
                total += len(chunk)
        if total != file.size:
            raise ShortReadError(file.path, file.size, total)
        return state.digest()
