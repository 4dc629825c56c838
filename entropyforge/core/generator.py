# -*- coding: utf-8 -*-
"""
EntropyForge Generator - Password generation from pooled and system entropy.
"""

import secrets
from typing import Callable, Optional, Sequence

from entropyforge.core.errors import (
    EmptyCharsetError,
    NoEntropyCollectedError,
    RandomSourceError,
)
from entropyforge.core.expander import expand
from entropyforge.core.log import get_logger
from entropyforge.core.mixer import SEED_SIZE, combine
from entropyforge.core.pool import EntropyPool
from entropyforge.core.security import wiped
from entropyforge.core.selector import build_charset, build_password

logger = get_logger('generator')

DEFAULT_LENGTH = 16
DEFAULT_MARGIN_FACTOR = 4

RandomSource = Callable[[int], bytes]


def system_random_source(n: int) -> bytes:
    """Return n bytes from the operating system CSPRNG."""
    return secrets.token_bytes(n)


class PasswordGenerator:
    """
    Derives passwords from an EntropyPool mixed with a secure random source.

    Per request: check the pool has a sample, draw 32 external bytes,
    seed = SHA256(digest || external), expand the seed to
    ``length * margin_factor`` bytes and rejection-sample the password.
    Seed, stream and the external bytes are wiped on every exit path.
    """

    def __init__(
        self,
        pool: EntropyPool,
        random_source: RandomSource = system_random_source,
        margin_factor: int = DEFAULT_MARGIN_FACTOR,
        default_length: int = DEFAULT_LENGTH,
        charset_options: Optional[dict] = None,
    ):
        if margin_factor < 1:
            raise ValueError("margin_factor must be at least 1")
        self.pool = pool
        self.random_source = random_source
        self.margin_factor = margin_factor
        self.default_length = default_length
        self.charset_options = dict(charset_options or {})

    @classmethod
    def from_config(
        cls,
        pool: EntropyPool,
        config,
        random_source: RandomSource = system_random_source,
    ) -> "PasswordGenerator":
        """Build a generator from the 'generator' section of a Config."""
        return cls(
            pool,
            random_source=random_source,
            margin_factor=config.get('generator', 'margin_factor'),
            default_length=config.get('generator', 'length'),
            charset_options={
                key: config.get('generator', key)
                for key in ('lower', 'upper', 'digits', 'symbols', 'exclude_ambiguous')
            },
        )

    def _external_random(self) -> bytearray:
        try:
            data = self.random_source(SEED_SIZE)
        except Exception as e:
            raise RandomSourceError(f"Secure random source failed: {e}") from e

        if data is None or len(data) != SEED_SIZE:
            got = 0 if data is None else len(data)
            raise RandomSourceError(
                f"Secure random source returned {got} bytes, expected {SEED_SIZE}"
            )
        return bytearray(data)

    def generate(self, charset: Sequence[str], length: Optional[int] = None) -> str:
        """
        Generate one password.

        Args:
            charset: Sequence of distinct characters
            length: Password length (default: generator default)

        Returns:
            Generated password string

        Raises:
            NoEntropyCollectedError: If the pool has no sample yet
            EmptyCharsetError: If the charset is empty
            RandomSourceError: If the external random source fails
            InsufficientRandomnessError: If the stream was too short
        """
        if length is None:
            length = self.default_length

        if not self.pool.has_collected_sample():
            raise NoEntropyCollectedError()
        if len(charset) == 0:
            raise EmptyCharsetError()
        if length < 1:
            raise ValueError("length must be at least 1")

        # Gate and digest copy happen under one lock hold; a reset after
        # this point cannot turn the request into one from an Empty pool.
        with wiped(self.pool.seeded_snapshot()) as digest:
            with wiped(self._external_random()) as external:
                seed = combine(digest, external)

        with wiped(seed):
            stream = expand(seed, length * self.margin_factor)

        with wiped(stream):
            password = build_password(stream, charset, length)

        self.pool.credit_generation()
        logger.debug("Generated %d-character password from %d-character set", length, len(charset))
        return password

    def generate_from_options(
        self,
        length: Optional[int] = None,
        lower: Optional[bool] = None,
        upper: Optional[bool] = None,
        digits: Optional[bool] = None,
        symbols: Optional[bool] = None,
        exclude_ambiguous: Optional[bool] = None,
    ) -> str:
        """
        Generate a password from category switches.

        Switches left as None fall back to the generator's configured
        defaults, then to build_charset's own defaults.
        """
        options = {
            'lower': lower,
            'upper': upper,
            'digits': digits,
            'symbols': symbols,
            'exclude_ambiguous': exclude_ambiguous,
        }
        merged = {k: v for k, v in self.charset_options.items() if v is not None}
        merged.update((k, v) for k, v in options.items() if v is not None)
        charset = build_charset(**merged)
        return self.generate(charset, length)
