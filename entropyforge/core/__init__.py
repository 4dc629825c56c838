"""
EntropyForge Core - Entropy pooling, seed derivation and password selection.
"""

from entropyforge.core.errors import (
    EntropyForgeError,
    NoEntropyCollectedError,
    EmptyCharsetError,
    InsufficientRandomnessError,
    RandomSourceError,
)

from entropyforge.core.pool import EntropyPool

from entropyforge.core.mixer import combine

from entropyforge.core.expander import expand

from entropyforge.core.selector import (
    build_password,
    build_charset,
    calculate_password_entropy,
    CHARSETS,
    AMBIGUOUS,
)

from entropyforge.core.generator import PasswordGenerator, system_random_source

from entropyforge.core.samples import encode_sample

from entropyforge.core.security import secure_zero, wiped

__all__ = [
    "EntropyForgeError",
    "NoEntropyCollectedError",
    "EmptyCharsetError",
    "InsufficientRandomnessError",
    "RandomSourceError",
    "EntropyPool",
    "combine",
    "expand",
    "build_password",
    "build_charset",
    "calculate_password_entropy",
    "CHARSETS",
    "AMBIGUOUS",
    "PasswordGenerator",
    "system_random_source",
    "encode_sample",
    "secure_zero",
    "wiped",
]
