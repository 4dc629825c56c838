"""
EntropyForge Quality - Chi-square uniformity checks for streams and passwords.

Used to confirm that rejection sampling leaves no modulo bias. Results use
the same dict shape as a statistical test report:
{'name', 'p_value', 'passed', 'statistic'}.
"""

from typing import Any, Dict, Sequence, Union

import numpy as np
from scipy import stats

from entropyforge.core.log import get_logger

logger = get_logger('quality')


def _chi_square_uniform(counts: np.ndarray, name: str, alpha: float) -> Dict[str, Any]:
    """Chi-square goodness-of-fit of ``counts`` against a uniform distribution."""
    statistic, p_value = stats.chisquare(counts)
    result = {
        'name': name,
        'p_value': float(p_value),
        'passed': bool(p_value >= alpha),
        'statistic': float(statistic),
    }
    logger.debug("%s: chi2=%.3f p=%.4f", name, result['statistic'], result['p_value'])
    return result


def character_frequency_test(
    text: str,
    charset: Sequence[str],
    alpha: float = 0.01,
) -> Dict[str, Any]:
    """
    Test that characters of ``text`` are uniformly distributed over ``charset``.

    Args:
        text: Concatenated generated output
        charset: Character set the text was drawn from
        alpha: Significance level

    Returns:
        Test result dict

    Raises:
        ValueError: If text is empty, charset has fewer than 2 characters,
            or text contains characters outside the charset
    """
    if len(charset) < 2:
        raise ValueError("Need at least 2 characters for a frequency test")
    if not text:
        raise ValueError("Text is empty")

    index = {c: i for i, c in enumerate(charset)}
    try:
        codes = np.fromiter((index[c] for c in text), dtype=np.int64, count=len(text))
    except KeyError as e:
        raise ValueError(f"Character {e.args[0]!r} is not in the character set") from None

    counts = np.bincount(codes, minlength=len(charset))
    return _chi_square_uniform(counts, 'Character Frequency', alpha)


def byte_frequency_test(
    data: Union[np.ndarray, bytes, bytearray],
    alpha: float = 0.01,
) -> Dict[str, Any]:
    """
    Test that byte values of ``data`` are uniformly distributed over 0..255.

    Args:
        data: Byte stream
        alpha: Significance level

    Returns:
        Test result dict
    """
    arr = np.frombuffer(bytes(data), dtype=np.uint8) if not isinstance(data, np.ndarray) else data
    if len(arr) == 0:
        raise ValueError("Data is empty")

    counts = np.bincount(arr.astype(np.int64), minlength=256)
    return _chi_square_uniform(counts, 'Byte Frequency', alpha)
