"""
CryptoNoise Core - Secure random sources, noise generation, and uniformity tests.
"""

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
    "RandomSource",
    "SystemRandomSource",
    "EntropyUnavailableError",
    "is_system_entropy_available",
    "NoiseGenerator",
    "NoiseParams",
    "NoiseTrace",
    "generate_noise",
    "SYMBOLS",
    "ALPHANUMERIC",
    "UniformityTests",
    "secure_zero",
]
