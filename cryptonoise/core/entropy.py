"""
CryptoNoise Entropy - Secure random sources and unbiased range sampling.
"""

import os
from abc import ABC, abstractmethod

import numpy as np

from cryptonoise.core.log import get_logger

logger = get_logger('entropy')


class EntropyUnavailableError(Exception):
    """The operating system could not supply cryptographic randomness."""
    pass


# =============================================================================
# Random source capability
# =============================================================================

class RandomSource(ABC):
    """
    Uniform bytes and uniform integers drawn from an entropy provider.

    Subclasses only supply random_bytes(); range sampling is built on top
    of it with rejection sampling so no modulo bias is introduced.
    """

    @abstractmethod
    def random_bytes(self, n: int) -> np.ndarray:
        """Return n uniformly distributed bytes as a numpy uint8 array."""

    def random_byte(self) -> int:
        """Return a single uniform byte value in [0, 255]."""
        return int(self.random_bytes(1)[0])

    def randbelow(self, n: int) -> int:
        """
        Return a uniform integer in [0, n).

        Draws just enough bytes to cover bit_length(n - 1) bits, masks off
        the excess high bits and rejects values >= n. Expected number of
        draws is below 2 for any n.

        Raises:
            ValueError: If n < 1
        """
        if n < 1:
            raise ValueError(f"Upper bound must be positive, got {n}")
        if n == 1:
            return 0

        k = (n - 1).bit_length()
        n_bytes = (k + 7) // 8
        mask = (1 << k) - 1

        while True:
            chunk = self.random_bytes(n_bytes)
            value = 0
            for byte in chunk:
                value = (value << 8) | int(byte)
            value &= mask

            if value < n:
                return value

    def randint(self, low: int, high: int) -> int:
        """
        Return a uniform integer in the inclusive range [low, high].

        Raises:
            ValueError: If high < low
        """
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")
        return low + self.randbelow(high - low + 1)


class SystemRandomSource(RandomSource):
    """
    Operating system CSPRNG (getrandom / /dev/urandom / BCryptGenRandom).

    Stateless: every call goes straight to os.urandom, which is safe to
    call from several threads at once.
    """

    name = "CSPRNG"

    def random_bytes(self, n: int) -> np.ndarray:
        if n < 0:
            raise ValueError(f"Byte count must be non-negative, got {n}")
        try:
            raw = os.urandom(n)
        except (NotImplementedError, OSError) as e:
            logger.error("System CSPRNG unavailable: %s", e)
            raise EntropyUnavailableError(
                "No cryptographically secure random source is available"
            ) from e
        return np.frombuffer(raw, dtype=np.uint8)


def is_system_entropy_available() -> bool:
    """Check that the OS CSPRNG answers a one-byte request."""
    try:
        SystemRandomSource().random_bytes(1)
    except EntropyUnavailableError:
        return False
    return True
