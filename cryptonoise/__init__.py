"""
CryptoNoise - Short, unpredictable noise strings for one-time secrets.

This package draws from the operating system CSPRNG, builds a weighted
symbol/alphanumeric base, shuffles it and cuts a random window from it.
"""

__version__ = "1.0.0"

from cryptonoise.core.entropy import (
    RandomSource,
    SystemRandomSource,
    EntropyUnavailableError,
    is_system_entropy_available,
)

from cryptonoise.core.generator import (
    NoiseGenerator,
    NoiseParams,
    NoiseTrace,
    generate_noise,
    SYMBOLS,
    ALPHANUMERIC,
)

from cryptonoise.core.quality import UniformityTests

from cryptonoise.core.security import secure_zero

__all__ = [
    # Version
    "__version__",
    # Entropy
    "RandomSource",
    "SystemRandomSource",
    "EntropyUnavailableError",
    "is_system_entropy_available",
    # Generator
    "NoiseGenerator",
    "NoiseParams",
    "NoiseTrace",
    "generate_noise",
    "SYMBOLS",
    "ALPHANUMERIC",
    # Quality
    "UniformityTests",
    # Security
    "secure_zero",
]
