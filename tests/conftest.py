import pytest

from entropyforge.core.pool import EntropyPool


class RecordingSource:
    """Deterministic stand-in for the system CSPRNG that counts calls."""

    def __init__(self, fill: int = 0x42):
        self.fill = fill
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        return bytes([self.fill]) * n


@pytest.fixture
def pool():
    with EntropyPool() as p:
        yield p


@pytest.fixture
def seeded_pool(pool):
    pool.mix(b"initial sample")
    return pool


@pytest.fixture
def recording_source():
    return RecordingSource()
