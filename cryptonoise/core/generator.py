# -*- coding: utf-8 -*-
"""
CryptoNoise Generator - Weighted, shuffled, sub-extracted noise strings.
"""

import string
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Tuple

import numpy as np

from cryptonoise.core.entropy import RandomSource, SystemRandomSource
from cryptonoise.core.log import get_logger
from cryptonoise.core.security import secure_zero

logger = get_logger('generator')

# Character pools
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
ALPHANUMERIC = string.ascii_uppercase + string.ascii_lowercase + string.digits

_SYMBOL_CODES = np.frombuffer(SYMBOLS.encode('ascii'), dtype=np.uint8)
_ALPHANUMERIC_CODES = np.frombuffer(ALPHANUMERIC.encode('ascii'), dtype=np.uint8)


@dataclass(frozen=True)
class NoiseParams:
    """Shape constants for the base sequence and the extraction window."""

    base_length: int = 64
    symbol_ratio: float = 0.7
    min_length: int = 15
    max_length: int = 20

    @property
    def symbol_count(self) -> int:
        return int(self.base_length * self.symbol_ratio)

    @property
    def alpha_count(self) -> int:
        return self.base_length - self.symbol_count

    def validate(self) -> "NoiseParams":
        """
        Check the constants describe a possible extraction.

        Returns:
            self, so construction and validation can be chained

        Raises:
            ValueError: On an empty, inverted or oversized window, or a
                ratio outside [0, 1]
        """
        if self.min_length < 1:
            raise ValueError(f"min_length must be >= 1, got {self.min_length}")
        if self.min_length > self.max_length:
            raise ValueError(
                f"min_length ({self.min_length}) exceeds max_length ({self.max_length})"
            )
        if self.max_length > self.base_length:
            raise ValueError(
                f"max_length ({self.max_length}) exceeds base_length ({self.base_length})"
            )
        if not 0.0 <= self.symbol_ratio <= 1.0:
            raise ValueError(f"symbol_ratio must be in [0, 1], got {self.symbol_ratio}")
        return self

    @classmethod
    def from_config(cls, config) -> "NoiseParams":
        """Build params from the 'generator' section of a Config."""
        defaults = cls()
        values = {}
        for key, cast in (("base_length", int), ("symbol_ratio", float),
                          ("min_length", int), ("max_length", int)):
            value = config.get("generator", key)
            values[key] = getattr(defaults, key) if value is None else cast(value)
        return cls(**values).validate()


class NoiseTrace(NamedTuple):
    """A noise value together with the shuffled base it was cut from."""
    noise: str
    base: str
    start: int


class NoiseGenerator:
    """
    Produces noise strings from a secure random source.

    Each call builds a fresh base of symbol_count symbol draws followed by
    alpha_count alphanumeric draws, applies a Fisher-Yates shuffle, then
    returns a random-length window at a random offset. No state is carried
    between calls.
    """

    def __init__(self, source: Optional[RandomSource] = None,
                 params: Optional[NoiseParams] = None):
        self.source = source if source is not None else SystemRandomSource()
        self.params = (params if params is not None else NoiseParams()).validate()

    def generate(self) -> str:
        """Return a new noise string."""
        noise, _ = self._extract()
        return noise

    def generate_with_trace(self) -> NoiseTrace:
        """
        Generate noise and also return the shuffled base and start offset.

        For tests and diagnostics: the trace holds the full base sequence,
        so it must not be shown or stored in place of the noise itself.
        """
        captured = []
        noise, start = self._extract(on_base=captured.append)
        return NoiseTrace(noise, captured[0], start)

    def _extract(self, on_base: Optional[Callable[[str], None]] = None) -> Tuple[str, int]:
        """
        Compose, shuffle and cut one window; returns (noise, start).

        Only the window leaves as a str unless on_base is given, in which
        case it receives the shuffled base before the buffer is wiped.
        """
        base = self._build_base()
        try:
            self._shuffle(base)

            n = len(base)
            target = self.source.randint(self.params.min_length, self.params.max_length)
            start = self.source.randint(0, n - target)

            noise = base[start:start + target].tobytes().decode('ascii')
            if on_base is not None:
                on_base(base.tobytes().decode('ascii'))
        finally:
            secure_zero(base)

        logger.debug("Generated noise: %d chars from %d-char base", target, n)
        return noise, start

    def _build_base(self) -> np.ndarray:
        """Symbol draws first, then alphanumeric draws, uniform with replacement."""
        source = self.source
        base = np.empty(self.params.base_length, dtype=np.uint8)
        pos = 0

        for _ in range(self.params.symbol_count):
            base[pos] = _SYMBOL_CODES[source.randbelow(len(_SYMBOL_CODES))]
            pos += 1

        for _ in range(self.params.alpha_count):
            base[pos] = _ALPHANUMERIC_CODES[source.randbelow(len(_ALPHANUMERIC_CODES))]
            pos += 1

        return base

    def _shuffle(self, base: np.ndarray) -> None:
        """In-place Fisher-Yates: i from len-1 down to 1, j uniform in [0, i]."""
        for i in range(len(base) - 1, 0, -1):
            j = self.source.randbelow(i + 1)
            base[i], base[j] = base[j], base[i]


def generate_noise(source: Optional[RandomSource] = None) -> str:
    """One-shot generation with the default shape constants."""
    return NoiseGenerator(source).generate()
