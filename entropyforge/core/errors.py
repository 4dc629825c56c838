"""
EntropyForge errors.

Every failure of the generation path is a distinct exception type so that
callers can tell a user-correctable condition (no entropy yet) from a
configuration error (empty character set) or an undersized stream.
Caller programming errors (wrong buffer sizes, empty samples) raise
ValueError instead.
"""


class EntropyForgeError(Exception):
    """Base class for EntropyForge errors."""
    pass


class NoEntropyCollectedError(EntropyForgeError):
    """Generation requested before any sample was mixed into the pool."""

    def __init__(self, message: str = "No entropy sample collected yet; "
                                      "mix at least one sample before generating"):
        super().__init__(message)


class EmptyCharsetError(EntropyForgeError):
    """The character set has no members."""

    def __init__(self, message: str = "Character set is empty; "
                                      "enable at least one character category"):
        super().__init__(message)


class InsufficientRandomnessError(EntropyForgeError):
    """The byte stream ran out before the password was complete."""

    def __init__(self, produced: int, length: int, available: int):
        self.produced = produced
        self.length = length
        self.available = available
        super().__init__(
            f"Not enough random bytes: produced {produced}/{length} characters "
            f"from {available} bytes. Request a longer stream."
        )


class RandomSourceError(EntropyForgeError):
    """The external secure random source failed or returned bad output."""
    pass
