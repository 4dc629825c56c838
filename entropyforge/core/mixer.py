"""
EntropyForge Mixer - Combine the pool digest with system randomness.
"""

import hashlib

from entropyforge.core.security import wiped

SEED_SIZE = 32


def combine(pool_digest: bytes, external_random: bytes) -> bytearray:
    """
    Derive a generation seed as ``SHA256(pool_digest || external_random)``.

    The seed is unpredictable as long as either input is. The caller owns
    both inputs and must wipe ``external_random`` after the call.

    Args:
        pool_digest: 32-byte digest snapshot from an EntropyPool
        external_random: 32 bytes from a secure random source

    Returns:
        32-byte seed as a wipeable bytearray

    Raises:
        ValueError: If either input is not exactly 32 bytes
    """
    if len(pool_digest) != SEED_SIZE:
        raise ValueError(f"pool_digest must be {SEED_SIZE} bytes, got {len(pool_digest)}")
    if len(external_random) != SEED_SIZE:
        raise ValueError(f"external_random must be {SEED_SIZE} bytes, got {len(external_random)}")

    with wiped(bytearray(pool_digest)) as concat:
        concat += external_random
        return bytearray(hashlib.sha256(concat).digest())
