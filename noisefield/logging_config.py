"""Logging setup for the noisefield command line."""

import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'


def setup_logging(level=logging.INFO, log_file=None):
    """Send 'noisefield' log records to stderr and, optionally, a file.

    Handlers installed by an earlier call are closed and replaced, so the
    command line can be run repeatedly in one process (as the tests do)
    without leaking file handles or duplicating lines.

    Args:
        level: Logging level, as a number or a name such as "DEBUG".
        log_file: Optional path that receives the same records.

    Returns:
        The configured 'noisefield' logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger("noisefield")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w',
                                            encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
