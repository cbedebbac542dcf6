"""
Logging Configuration - Consistent logging setup for applications using the library.

The library never configures logging on import; call configure_logging()
from the application entry point.
"""

import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure root logger with consistent format.

    Warnings issued through the warnings module (e.g. threshold
    corrections) are routed into logging under the 'py.warnings' logger.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    logging.captureWarnings(True)
