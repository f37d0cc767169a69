"""
shared/
-------
Cross-cutting helpers: logging and configuration.

    from shared import get_logger, VisualizerConfig
"""

from shared.logger import setup_logging, get_logger
from shared.config import VisualizerConfig

__all__ = [
    "setup_logging",
    "get_logger",
    "VisualizerConfig",
]
