"""
Utility Helper Functions
========================

Common utility functions used across the project.
"""

import sys
from datetime import datetime
from typing import Dict, Optional

from loguru import logger

from config import LOGS_DIR, ensure_dir


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days"
):
    """
    Setup logging configuration.

    Args:
        level: Logging level
        log_file: Optional log file path
        rotation: Log rotation setting
        retention: Log retention setting
    """
    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    # Add file handler if specified
    if log_file:
        log_path = ensure_dir(LOGS_DIR) / log_file

        logger.add(
            log_path,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation=rotation,
            retention=retention,
            compression="zip"
        )

    logger.info(f"Logging configured at {level} level")


def get_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Get current timestamp string.

    Args:
        format_str: Datetime format string

    Returns:
        Formatted timestamp
    """
    return datetime.now().strftime(format_str)


def format_metrics(metrics: Dict[str, float], precision: int = 4) -> Dict[str, str]:
    """
    Format metric values for display.

    Args:
        metrics: Dictionary of metric values
        precision: Decimal precision

    Returns:
        Dictionary with formatted values
    """
    return {k: f"{v:.{precision}f}" for k, v in metrics.items()}
