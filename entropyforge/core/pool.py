"""
EntropyForge Pool - Running SHA-256 digest of caller-supplied samples.
"""

import hashlib
import threading
from typing import Optional

from entropyforge.core.errors import NoEntropyCollectedError
from entropyforge.core.log import get_logger
from entropyforge.core.security import secure_zero, wiped

logger = get_logger('pool')

DIGEST_SIZE = 32

BITS_PER_SAMPLE = 2
BITS_PER_GENERATION = 16
MAX_BITS = 256


class EntropyPool:
    """
    Thread-safe entropy pool.

    Each sample is absorbed as ``digest = SHA256(digest || sample)``, so the
    final digest depends on every sample and on the order they arrived in.
    The "collected bits" figure is an advisory estimate for display only;
    the only gate on generation is that at least one sample was mixed.

    All operations are serialized by one lock per instance. The lock is
    held only for a hash and a copy, never across I/O.

    The pool starts zeroed and can be used as a context manager, which
    wipes it on exit::

        with EntropyPool() as pool:
            pool.mix(sample)
            ...
    """

    def __init__(
        self,
        bits_per_sample: int = BITS_PER_SAMPLE,
        bits_per_generation: int = BITS_PER_GENERATION,
        max_bits: int = MAX_BITS,
    ):
        if bits_per_sample < 0 or bits_per_generation < 0:
            raise ValueError("Bit increments must be non-negative")
        if max_bits <= 0:
            raise ValueError("max_bits must be positive")

        self.bits_per_sample = bits_per_sample
        self.bits_per_generation = bits_per_generation
        self.max_bits = max_bits

        self._lock = threading.Lock()
        self._digest = bytearray(DIGEST_SIZE)
        self._collected_bits = 0
        self._has_sample = False

    @classmethod
    def from_config(cls, config) -> "EntropyPool":
        """Build a pool from the 'pool' section of a Config."""
        return cls(
            bits_per_sample=config.get('pool', 'bits_per_sample'),
            bits_per_generation=config.get('pool', 'bits_per_generation'),
            max_bits=config.get('pool', 'max_bits'),
        )

    def reset(self) -> None:
        """Zero the digest and counters; the pool is Empty afterwards."""
        with self._lock:
            self._clear()
        logger.debug("Entropy pool reset")

    def mix(self, sample: bytes) -> None:
        """
        Absorb one sample into the digest.

        Args:
            sample: Non-empty bytes-like sample, treated as opaque.

        Raises:
            ValueError: If the sample is empty.
        """
        if len(sample) == 0:
            raise ValueError("Sample must be non-empty")

        with self._lock:
            with wiped(bytearray(self._digest)) as concat:
                concat += sample
                self._digest[:] = hashlib.sha256(concat).digest()

            self._collected_bits = min(
                self.max_bits, self._collected_bits + self.bits_per_sample
            )
            self._has_sample = True

    def digest_snapshot(self) -> bytearray:
        """Return a copy of the current digest; the caller may wipe it."""
        with self._lock:
            return bytearray(self._digest)

    def seeded_snapshot(self) -> bytearray:
        """
        Copy of the digest, taken only if the pool is Seeded.

        The state check and the copy share one lock hold, so a concurrent
        reset() either happens before (and this raises) or after (and the
        copy is of the seeded digest).

        Raises:
            NoEntropyCollectedError: If no sample was mixed since the last reset
        """
        with self._lock:
            if not self._has_sample:
                raise NoEntropyCollectedError()
            return bytearray(self._digest)

    def collected_bits_estimate(self) -> int:
        with self._lock:
            return self._collected_bits

    def has_collected_sample(self) -> bool:
        with self._lock:
            return self._has_sample

    def credit_generation(self) -> None:
        """
        Advisory bump of the bit estimate after a successful generation.

        Ignored while the pool is Empty, so a reset that raced a generation
        leaves the counter at zero.
        """
        with self._lock:
            if not self._has_sample:
                return
            self._collected_bits = min(
                self.max_bits, self._collected_bits + self.bits_per_generation
            )

    def wipe(self) -> None:
        """Teardown hook: overwrite the digest in place and clear counters."""
        with self._lock:
            self._clear()
        logger.debug("Entropy pool wiped")

    def _clear(self) -> None:
        # Zero in place so the old digest bytes do not linger in the buffer.
        secure_zero(self._digest)
        self._collected_bits = 0
        self._has_sample = False

    def __enter__(self) -> "EntropyPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.wipe()
        return None

    def __repr__(self) -> str:
        state = "Seeded" if self.has_collected_sample() else "Empty"
        return f"<EntropyPool {state} bits={self.collected_bits_estimate()}/{self.max_bits}>"
