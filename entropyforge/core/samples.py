"""
EntropyForge Samples - Byte encoding of pointer-movement samples.

Sample producers (a GUI mouse handler, a terminal key-timing loop, ...)
throttle their own events and hand each one to EntropyPool.mix(). The pool
treats samples as opaque; this module only fixes a compact encoding.
"""

import struct
import time
from typing import Optional

# x, y, timestamp ^ counter, millisecond-of-second, low 32 bits of counter
SAMPLE_FORMAT = '<iiQII'
SAMPLE_SIZE = struct.calcsize(SAMPLE_FORMAT)

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def encode_sample(
    x: int,
    y: int,
    timestamp_ns: Optional[int] = None,
    counter_ns: Optional[int] = None,
) -> bytes:
    """
    Encode one pointer sample as 24 little-endian bytes.

    Args:
        x: Pointer x coordinate (signed 32-bit)
        y: Pointer y coordinate (signed 32-bit)
        timestamp_ns: Wall-clock time in ns (default: time.time_ns())
        counter_ns: High-resolution counter in ns (default: time.perf_counter_ns())

    Returns:
        24-byte sample ready for EntropyPool.mix()
    """
    if timestamp_ns is None:
        timestamp_ns = time.time_ns()
    if counter_ns is None:
        counter_ns = time.perf_counter_ns()

    stamp = (timestamp_ns ^ counter_ns) & _MASK64
    millis = (timestamp_ns // 1_000_000) % 1000

    return struct.pack(
        SAMPLE_FORMAT,
        x,
        y,
        stamp,
        millis,
        counter_ns & _MASK32,
    )
