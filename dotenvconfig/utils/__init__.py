"""
Utilities Module
================

Contains logging helpers shared by the loaders.
"""

from .logger import setup_logging, null_logger, JsonFormatter

__all__ = [
    'setup_logging',
    'null_logger',
    'JsonFormatter',
]
