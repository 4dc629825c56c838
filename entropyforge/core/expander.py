"""
EntropyForge Expander - Counter-mode SHA-256 byte stream.
"""

import hashlib

import numpy as np

from entropyforge.core.security import secure_zero, wiped

BLOCK_SIZE = 32
MAX_BLOCKS = 2 ** 32


def expand(seed: bytes, needed_bytes: int) -> np.ndarray:
    """
    Expand a seed into ``needed_bytes`` pseudorandom bytes.

    Block ``c`` is ``SHA256(seed || LE32(c))`` for c = 0, 1, 2, ...; blocks
    are concatenated in counter order and the result truncated. The output
    of a shorter request is always a prefix of a longer one for the same
    seed.

    The caller owns the seed and must wipe it once expansion completes.

    Args:
        seed: 32-byte seed
        needed_bytes: Number of bytes to produce (> 0)

    Returns:
        Writable numpy uint8 array of length ``needed_bytes``

    Raises:
        ValueError: On a bad seed size, a non-positive length, or a length
            that would overflow the 32-bit block counter
    """
    if len(seed) != BLOCK_SIZE:
        raise ValueError(f"seed must be {BLOCK_SIZE} bytes, got {len(seed)}")
    if needed_bytes <= 0:
        raise ValueError("needed_bytes must be positive")

    num_blocks = -(-needed_bytes // BLOCK_SIZE)
    if num_blocks > MAX_BLOCKS:
        raise ValueError(f"needed_bytes too large for a 32-bit counter: {needed_bytes}")

    output = np.empty(needed_bytes, dtype=np.uint8)

    with wiped(bytearray(BLOCK_SIZE + 4)) as block_input:
        block_input[:BLOCK_SIZE] = seed
        pos = 0

        for counter in range(num_blocks):
            block_input[BLOCK_SIZE:] = counter.to_bytes(4, 'little')
            block = np.frombuffer(
                bytearray(hashlib.sha256(block_input).digest()), dtype=np.uint8
            )

            take = min(BLOCK_SIZE, needed_bytes - pos)
            output[pos:pos + take] = block[:take]
            pos += take

            secure_zero(block)

    return output
