"""Logging module for pixelfind."""

from .logger import PerformanceLogger, TimingStats, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "PerformanceLogger",
    "TimingStats",
]
