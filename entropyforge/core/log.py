"""
EntropyForge structured logging.

Every core module logs through a child of the 'entropyforge' logger.
Secret material (digests, seeds, streams, passwords) is never logged,
only sizes and counters.
"""

import logging

LOG_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under 'entropyforge'."""
    return logging.getLogger(f'entropyforge.{name}')


def setup_logging(level=logging.INFO, log_file=None) -> logging.Logger:
    """
    Configure the entropyforge root logger.

    Calling this more than once replaces the handlers installed by the
    previous call instead of stacking duplicates.

    Args:
        level: Logging level (default INFO)
        log_file: Optional file path for file logging

    Returns:
        The configured 'entropyforge' logger
    """
    logger = logging.getLogger('entropyforge')
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(LOG_FORMAT)

    handler = logging.StreamHandler()
    handler.setFormatter(fmt)
    logger.addHandler(handler)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger
