"""Logging configuration for gogimport."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Constants
AUDIT_LOGGER = "gogimport.audit"
DEBUG_LOGGER = "gogimport.debug"
# Format for files; the console handler renders time and level itself
FILE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(log_dir: Optional[Path] = None, debug: bool = False) -> None:
    """Configure logging for gogimport.

    Console output goes to stderr through rich so it never mixes with
    rewritten source on stdout. Without ``debug`` only warnings, such as a
    missing Go toolchain, reach the console.

    Args:
        log_dir: Directory to store log files. If None, logs to stderr only.
        debug: Whether to enable debug logging.
    """
    audit_logger = logging.getLogger(AUDIT_LOGGER)
    audit_logger.setLevel(logging.INFO)

    debug_logger = logging.getLogger(DEBUG_LOGGER)
    debug_logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    console_handler = RichHandler(console=Console(stderr=True), show_path=False)
    debug_logger.addHandler(console_handler)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # One audit line per rewritten file
        audit_file = log_dir / f"gogimport_audit_{datetime.now():%Y%m%d}.log"
        audit_handler = logging.FileHandler(audit_file)
        audit_handler.setFormatter(logging.Formatter("%(asctime)s - [AUDIT] %(message)s"))
        audit_logger.addHandler(audit_handler)

        if debug:
            debug_file = log_dir / f"gogimport_debug_{datetime.now():%Y%m%d}.log"
            debug_handler = logging.FileHandler(debug_file)
            debug_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            debug_logger.addHandler(debug_handler)


def get_audit_logger() -> logging.Logger:
    """Get the audit logger."""
    return logging.getLogger(AUDIT_LOGGER)


def get_debug_logger() -> logging.Logger:
    """Get the debug logger."""
    return logging.getLogger(DEBUG_LOGGER)
