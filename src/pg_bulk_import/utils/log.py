"""
Logging configuration for the import entry points.

Entry points call `setup_logging()` once; every module logs through
`logging.getLogger(__name__)`.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_configured = False


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT,
) -> None:
    """
    Configure console logging and optional file logging.

    Only the first call has an effect, so entry points and tests can call
    it freely.

    Args:
        level: Logging level (default: logging.INFO)
        log_file: Optional path to a log file; its directory is created
        format_string: Log record format
    """
    global _logging_configured
    if _logging_configured:
        return

    formatter = logging.Formatter(format_string)
    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    _logging_configured = True
