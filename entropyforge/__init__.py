"""
EntropyForge - Password generation from user-collected entropy.

Unpredictable samples (e.g. mouse movements) are chained into a SHA-256
pool, mixed with the system CSPRNG, expanded in counter mode and mapped
onto a character set without modulo bias.
"""

__version__ = "1.0.0"

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
    CategoryName,
    AMBIGUOUS,
)

from entropyforge.core.generator import PasswordGenerator, system_random_source

from entropyforge.core.samples import encode_sample

from entropyforge.core.quality import character_frequency_test, byte_frequency_test

from entropyforge.core.security import secure_zero, wiped

from entropyforge.core.log import setup_logging

from entropyforge.config import Config

__all__ = [
    # Version
    "__version__",
    # Errors
    "EntropyForgeError",
    "NoEntropyCollectedError",
    "EmptyCharsetError",
    "InsufficientRandomnessError",
    "RandomSourceError",
    # Pool
    "EntropyPool",
    "encode_sample",
    # Derivation
    "combine",
    "expand",
    # Selection
    "build_password",
    "build_charset",
    "calculate_password_entropy",
    "CHARSETS",
    "CategoryName",
    "AMBIGUOUS",
    # Generation
    "PasswordGenerator",
    "system_random_source",
    # Quality
    "character_frequency_test",
    "byte_frequency_test",
    # Security
    "secure_zero",
    "wiped",
    # Ambient
    "setup_logging",
    "Config",
]
