# -*- coding: utf-8 -*-
"""
EntropyForge Selector - Unbiased mapping of random bytes onto a character set.
"""

import string
from typing import Dict, List, Literal, Sequence, Union

import numpy as np

from entropyforge.core.errors import EmptyCharsetError, InsufficientRandomnessError

# Character categories
LOWER = string.ascii_lowercase
UPPER = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+[]{};:,.<>/?"
AMBIGUOUS = "Il1O0"

CHARSETS: Dict[str, str] = {
    "lower": LOWER,
    "upper": UPPER,
    "digits": DIGITS,
    "symbols": SYMBOLS,
}

CategoryName = Literal["lower", "upper", "digits", "symbols"]

RandomBytes = Union[np.ndarray, bytes, bytearray, memoryview]


def build_charset(
    lower: bool = True,
    upper: bool = True,
    digits: bool = True,
    symbols: bool = True,
    exclude_ambiguous: bool = True,
) -> str:
    """
    Assemble a character set from the enabled categories.

    Categories are appended in the order lower, upper, digits, symbols.
    The result may be empty; build_password rejects an empty set.
    """
    enabled = {"lower": lower, "upper": upper, "digits": digits, "symbols": symbols}
    charset = ''.join(CHARSETS[name] for name, on in enabled.items() if on)

    if exclude_ambiguous:
        charset = ''.join(c for c in charset if c not in AMBIGUOUS)

    return charset


def acceptance_threshold(charset_size: int) -> int:
    """Largest multiple of ``charset_size`` not above 255; bytes below it are kept."""
    return (255 // charset_size) * charset_size


def build_password(random_bytes: RandomBytes, charset: Sequence[str], length: int) -> str:
    """
    Build a password with rejection sampling for uniform distribution.

    Bytes are consumed left to right. A byte ``v`` is accepted when
    ``v < (255 // N) * N`` and maps to ``charset[v % N]``; any other byte is
    discarded, so every character is equally likely even when 256 is not
    a multiple of N.

    Args:
        random_bytes: Random stream (numpy uint8 array or bytes-like)
        charset: Sequence of N distinct characters
        length: Number of characters to produce (>= 1)

    Returns:
        Generated password string

    Raises:
        EmptyCharsetError: If the charset is empty
        ValueError: If length < 1 or the charset has duplicate characters
        InsufficientRandomnessError: If the stream runs out first
    """
    base = len(charset)
    if base == 0:
        raise EmptyCharsetError()
    if length < 1:
        raise ValueError("length must be at least 1")
    if len(set(charset)) != base:
        raise ValueError("Character set contains duplicate characters")

    threshold = acceptance_threshold(base)

    password: List[str] = []
    idx = 0
    available = len(random_bytes)

    while len(password) < length and idx < available:
        byte = int(random_bytes[idx])
        idx += 1

        if byte < threshold:
            password.append(charset[byte % base])

    if len(password) < length:
        raise InsufficientRandomnessError(len(password), length, available)

    return ''.join(password)


def calculate_password_entropy(length: int, charset: Sequence[str]) -> float:
    """
    Calculate theoretical entropy of a password.

    Args:
        length: Password length
        charset: Character set used

    Returns:
        Entropy in bits (0.0 for an empty charset)
    """
    if len(charset) == 0:
        return 0.0
    return float(length * np.log2(len(charset)))
