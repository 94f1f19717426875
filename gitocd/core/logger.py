"""Logging configuration and utilities."""

import os
import sys
import logging
from datetime import datetime
from typing import Optional

LOGGER_NAME = 'gitocd'
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(
    operation: str = "scan",
    log_dir: Optional[str] = None,
    debug: bool = False
) -> logging.Logger:
    """Configure logging to stderr and, optionally, a file.

    The report goes to stdout, so console logging stays on stderr and only
    shows warnings unless ``debug`` is set.

    Args:
        operation: Name of the operation for log filename
        log_dir: Directory for a timestamped log file (None = no file)
        debug: Log everything to the console

    Returns:
        Configured logger instance
    """
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    handlers = [console]

    log_file = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = os.path.join(log_dir, f'gitocd_{operation}_{timestamp}.log')
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True  # Reset any existing configuration
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.info(f"Starting gitocd {operation}")
    if log_file:
        logger.info(f"Log file: {log_file}")

    return logger

