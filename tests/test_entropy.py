"""Tests for the random source capability and range sampling."""

import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from cryptonoise.core.entropy import (
    EntropyUnavailableError,
    SystemRandomSource,
    is_system_entropy_available,
)
from cryptonoise.core.quality import UniformityTests

from conftest import ByteSequenceSource


def test_random_bytes_shape_and_dtype(system_source):
    data = system_source.random_bytes(32)
    assert isinstance(data, np.ndarray)
    assert data.dtype == np.uint8
    assert len(data) == 32


def test_random_bytes_rejects_negative_count(system_source):
    with pytest.raises(ValueError):
        system_source.random_bytes(-1)


def test_random_byte_in_range(system_source):
    for _ in range(200):
        assert 0 <= system_source.random_byte() <= 255


def test_randint_single_value_range_always_zero(system_source):
    assert all(system_source.randint(0, 0) == 0 for _ in range(10000))


def test_randint_window_bounds_and_uniformity(system_source):
    result = UniformityTests.range_test(system_source, 15, 20, draws=10000, alpha=1e-4)
    assert result['out_of_range'] == 0
    assert len(result['counts']) == 6
    assert all(count > 0 for count in result['counts'])
    assert result['passed']


def test_randint_inclusive_upper_bound_reached(system_source):
    values = {system_source.randint(0, 3) for _ in range(2000)}
    assert values == {0, 1, 2, 3}


def test_randbelow_invalid_bound(system_source):
    with pytest.raises(ValueError):
        system_source.randbelow(0)
    with pytest.raises(ValueError):
        system_source.randint(5, 4)


def test_randbelow_one_consumes_no_entropy():
    source = ByteSequenceSource([])
    assert source.randbelow(1) == 0
    assert source.offset == 0


def test_randbelow_rejects_masked_values_out_of_range():
    # n = 6 -> 3-bit mask; 0xFF & 7 = 7 and 0x0E & 7 = 6 are rejected, 0x0B & 7 = 3 accepted
    source = ByteSequenceSource([0xFF, 0x0E, 0x0B])
    assert source.randbelow(6) == 3
    assert source.offset == 3


def test_randbelow_combines_bytes_big_endian():
    # n = 1000 -> 10 bits over 2 bytes: (0x01 << 8 | 0x2C) & 0x3FF = 300
    source = ByteSequenceSource([0x01, 0x2C])
    assert source.randbelow(1000) == 300


def test_randbelow_large_bound(system_source):
    n = 2 ** 40 + 7
    for _ in range(100):
        assert 0 <= system_source.randbelow(n) < n


def test_system_source_failure_is_loud(monkeypatch, system_source):
    def broken_urandom(n):
        raise NotImplementedError("no entropy here")

    monkeypatch.setattr(os, "urandom", broken_urandom)

    with pytest.raises(EntropyUnavailableError) as excinfo:
        system_source.random_bytes(4)
    assert isinstance(excinfo.value.__cause__, NotImplementedError)
    assert not is_system_entropy_available()


def test_system_entropy_available():
    assert is_system_entropy_available()


def test_system_source_shared_across_threads(system_source):
    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(lambda _: system_source.randint(15, 20), range(400)))
    assert all(15 <= v <= 20 for v in values)
