"""
Logging Configuration
Sets up the package logger for the simulation pipeline.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(verbose: bool = False, log_file: Optional[str] = None,
                  fmt: str = LOG_FORMAT) -> logging.Logger:
    """
    Configures the logger for the 'mdcompute' namespace.

    The console shows INFO and above, or everything down to the per-dispatch
    DEBUG trace when verbose. A log file always receives the full trace.

    Args:
        verbose: Show DEBUG records on the console
        log_file: Optional path to save logs to a file
        fmt: Record format shared by all handlers

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("mdcompute")
    console_level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(logging.DEBUG if log_file else console_level)

    # Replace handlers from an earlier call
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
