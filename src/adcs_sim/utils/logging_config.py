"""
Logging Configuration for the ADCS Simulation

Provides standardized logging setup with consistent formatting across the project.
Supports both console and file output with configurable levels.

Usage:
    from adcs_sim.utils.logging_config import setup_logging

    logger = setup_logging("adcs_sim", level=logging.DEBUG)
    logger.info("Configuration loaded")
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    simple_format: bool = False,
) -> logging.Logger:
    """
    Set up standardized logging.

    Args:
        name: Logger name (typically the package name)
        level: Logging level
        log_file: Log file path (None for no file logging)
        console: Enable console output (stderr)
        simple_format: Use simplified format (timestamp only, no level/name)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    if simple_format:
        formatter = logging.Formatter(fmt="%(asctime)s, %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
