"""
EntropyForge Security - Sensitive buffer handling.
"""

import contextlib
from typing import Any, Iterator, Union

import numpy as np

Wipeable = Union[np.ndarray, bytearray, memoryview]


def secure_zero(data: Union[Wipeable, bytes, None]) -> None:
    """
    Overwrite a sensitive buffer with zeros in place (best-effort).

    Python may already hold copies elsewhere (immutable ``bytes`` returned
    by ``hashlib``, interpreter caches), so this only clears the buffer it
    is given. ``bytes`` and ``None`` are accepted and left untouched, since
    they cannot be modified.

    Args:
        data: A writable numpy array, bytearray or memoryview.
    """
    if data is None:
        return
    try:
        if isinstance(data, np.ndarray):
            if data.flags.writeable:
                data[...] = 0
        elif isinstance(data, bytearray):
            data[:] = bytes(len(data))
        elif isinstance(data, memoryview):
            if not data.readonly:
                # numpy honours strides, so sliced views are zeroed too
                np.asarray(data)[...] = 0
        # bytes objects are immutable, cannot be zeroed
    except (TypeError, ValueError):
        pass


@contextlib.contextmanager
def wiped(*buffers: Wipeable) -> Iterator[Any]:
    """
    Scope one or more sensitive buffers; zero all of them on exit.

    The wipe runs on every exit path, including exceptions. With a single
    buffer the buffer itself is yielded, otherwise the tuple.

    Example::

        with wiped(bytearray(seed)) as seed_buf:
            stream = expand(seed_buf, 64)
    """
    try:
        yield buffers[0] if len(buffers) == 1 else buffers
    finally:
        for buf in buffers:
            secure_zero(buf)
