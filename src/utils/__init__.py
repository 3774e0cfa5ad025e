"""
Utilities Module

Common utilities for logging, configuration, and metrics.
"""

from .config_loader import ConfigLoader
from .logger import setupLogging
from .metrics import MetricsCollector

__all__ = [
    'ConfigLoader',
    'setupLogging',
    'MetricsCollector',
]
