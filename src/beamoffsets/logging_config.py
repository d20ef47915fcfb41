"""
Logging Configuration
=====================
Sets up the package logger for a correction run.

Inside the host, stdout is the scripting console that already receives the
run's summary lines (`ElementHost.console`). Log records therefore go to
stderr by default so nothing shows up twice in the console.
"""
import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures the logger for the 'beamoffsets' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also save logs to a file.
        stream: Stream for log records, stderr when omitted.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("beamoffsets")
    logger.setLevel(level)
    # The host may configure the root logger on its own stdout
    logger.propagate = False

    # Loading the script again in the same host session must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    stream_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
