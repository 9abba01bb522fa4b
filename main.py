"""
Script entry point for verkeep.

Installs a process-wide exception hook, then hands the command line to
`verkeep.cli.main`.
"""

import sys
import logging
from types import TracebackType
from typing import Type

from verkeep.cli import main

def handle_exception(exc_type: Type[BaseException], exc_value: BaseException, exc_traceback: TracebackType):
    """Logs unhandled exceptions from synchronous code."""
    logger = logging.getLogger()
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.critical("Unhandled exception:", exc_info=(exc_type, exc_value, exc_traceback))


if __name__ == "__main__":
    sys.excepthook = handle_exception
    sys.exit(main())
