"""
CryptoNoise structured logging.

Core modules log under the 'cryptonoise' namespace. Noise values and base
sequences are never passed to a logger, only their lengths.
CLI output (cli.py) uses print() for user-facing values.
"""

import logging
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under 'cryptonoise'."""
    return logging.getLogger(f'cryptonoise.{name}')


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the cryptonoise root logger.

    Calling it again replaces the handlers installed by a previous call,
    so repeated CLI invocations in one process do not duplicate output.

    Args:
        level: Logging level or level name (default INFO)
        log_file: Optional file path for file logging

    Returns:
        The configured 'cryptonoise' logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger('cryptonoise')
    logger.setLevel(level)

    for old in [h for h in logger.handlers if getattr(h, '_cryptonoise', False)]:
        logger.removeHandler(old)
        old.close()

    fmt = logging.Formatter(LOG_FORMAT)

    handler = logging.StreamHandler()
    handler.setFormatter(fmt)
    handler._cryptonoise = True
    logger.addHandler(handler)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(fmt)
        fh._cryptonoise = True
        logger.addHandler(fh)

    return logger
