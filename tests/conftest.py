import pytest
import numpy as np

from cryptonoise.core.entropy import EntropyUnavailableError, RandomSource, SystemRandomSource


class ZeroSource(RandomSource):
    """Deterministic double: every byte, and so every draw, is zero."""

    def random_bytes(self, n):
        return np.zeros(n, dtype=np.uint8)


class ScriptedSource(RandomSource):
    """
    Returns scripted randbelow() results and records each requested bound.

    Once the script runs out every draw returns 0.
    """

    def __init__(self, values=()):
        self.values = list(values)
        self.bounds = []

    def random_bytes(self, n):
        return np.zeros(n, dtype=np.uint8)

    def randbelow(self, n):
        self.bounds.append(n)
        if self.values:
            value = self.values.pop(0)
            assert 0 <= value < n
            return value
        return 0


class ByteSequenceSource(RandomSource):
    """Serves a fixed byte stream, for exercising rejection sampling."""

    def __init__(self, data):
        self.data = np.array(data, dtype=np.uint8)
        self.offset = 0

    def random_bytes(self, n):
        chunk = self.data[self.offset:self.offset + n]
        if len(chunk) < n:
            raise AssertionError("byte script exhausted")
        self.offset += n
        return chunk


class FailingSource(RandomSource):
    """Serves zero bytes until a byte budget runs out, then fails like a dead CSPRNG."""

    def __init__(self, budget):
        self.budget = budget

    def random_bytes(self, n):
        if n > self.budget:
            raise EntropyUnavailableError("No cryptographically secure random source is available")
        self.budget -= n
        return np.zeros(n, dtype=np.uint8)


@pytest.fixture
def zero_source():
    return ZeroSource()


@pytest.fixture
def system_source():
    return SystemRandomSource()


@pytest.fixture
def config_path(tmp_path):
    """Config file location inside the test's temp directory."""
    return tmp_path / "cryptonoise" / "config.json"
