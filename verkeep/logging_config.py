"""
Configures verkeep's logging setup.

This module sets up a root logger that writes to stderr and, optionally, to a
log file.
"""

import sys
import logging
from pathlib import Path
from typing import Optional


def setup_logging(log_level_str: str = 'WARNING', log_file: Optional[Path] = None):
    """
    Configures the root logger for console and optional file logging.

    Args:
        log_level_str: The minimum logging level for stderr (e.g., 'INFO').
        log_file: If given, every record from DEBUG up is also appended here.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG) # Capture all levels at the root

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    log_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)-8s - %(name)-25s - %(message)s'
    )

    console_level = getattr(logging, log_level_str.upper(), logging.WARNING)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(log_formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(log_formatter)
        root_logger.addHandler(file_handler)

    logging.debug(f"Console log level set to: {logging.getLevelName(console_level)}")
