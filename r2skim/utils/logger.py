#!/usr/bin/env python3
"""
Logging utilities for r2skim
"""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "r2skim"


class _StderrProxy:
    """Resolve sys.stderr on every write so redirected streams are honoured"""

    def write(self, data: str) -> int:
        return sys.stderr.write(data)

    def flush(self) -> None:
        sys.stderr.flush()


def setup_logger(name: str = LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """Setup logger with console and file handlers"""

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(_StderrProxy())
    console_handler.setLevel(level)

    try:
        log_dir = Path.home() / ".r2skim" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "r2skim.log")
        file_handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        console_handler.setFormatter(formatter)
        file_handler.setFormatter(formatter)

        logger.addHandler(console_handler)
        logger.addHandler(file_handler)

    except OSError:
        # Fallback to console only
        formatter = logging.Formatter("%(levelname)s - %(message)s")
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def configure_logging_levels(verbose: bool, quiet: bool) -> None:
    """Configure logging levels based on verbosity settings."""
    if quiet:
        logging.getLogger("r2pipe").setLevel(logging.CRITICAL)
        logging.getLogger(LOGGER_NAME).setLevel(logging.ERROR)
        return

    level = logging.INFO if verbose else logging.WARNING
    logging.getLogger(LOGGER_NAME).setLevel(level)
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            handler.setLevel(level)
