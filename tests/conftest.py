import io
import random

import pytest

from secretgen.errors import ErrorTracker


class SeededBytes:
    """Endless deterministic stand-in for an EntropySource."""

    def __init__(self, seed: int):
        self._rng = random.Random(seed)
        self.tracker = ErrorTracker()
        self.bytes_read = 0

    def next_byte(self) -> int:
        self.bytes_read += 1
        return self._rng.randrange(256)


def scripted(*values) -> io.BytesIO:
    return io.BytesIO(bytes(values))


def seeded_stream(seed: int, size: int = 20000) -> io.BytesIO:
    return io.BytesIO(random.Random(seed).randbytes(size))


def chi_square(counts, expected: float) -> float:
    return sum((c - expected) ** 2 / expected for c in counts)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    path = tmp_path / "secretgen-config.json"
    monkeypatch.setenv("SECRETGEN_CONFIG", str(path))
    return path


@pytest.fixture
def entropy_file(tmp_path):
    p = tmp_path / "entropy.bin"
    p.write_bytes(random.Random(99).randbytes(20000))
    return str(p)
