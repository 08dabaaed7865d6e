"""
CryptoNoise Security - Wiping of working buffers.
"""

import numpy as np


def secure_zero(buffer: np.ndarray) -> None:
    """Overwrite a writable numpy buffer with zeros (best-effort)."""
    if buffer.flags.writeable:
        buffer[:] = 0
