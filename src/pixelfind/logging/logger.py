"""Structured logging configuration for pixelfind using structlog."""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings
from ..exceptions import ConfigurationError


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = True,
    replace_handlers: bool = True,
) -> None:
    """Configure structured logging for pixelfind.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output (overridden by PIXELFIND_DISABLE_CONSOLE_LOGGING env var)
        add_timestamp: Add timestamps to logs
        colorize: Colorize console output (only for non-structured)
        replace_handlers: Replace existing root handlers. When False and the root
            logger already has handlers, those are left as they are.
    """
    if os.getenv("PIXELFIND_DISABLE_CONSOLE_LOGGING") == "1":
        console = False

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if not replace_handlers and logging.getLogger().handlers:
        return

    # stdout is reserved for command output, logs go to stderr
    handlers: list[logging.Handler] = []

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())
        level = "CRITICAL"

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=replace_handlers,
    )


# Global state for lazy initialization
_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Ensure logging is initialized (called lazily, not at import time)."""
    global _logging_initialized

    if _logging_initialized:
        return

    try:
        settings = get_settings()
        setup_logging(
            level=settings.effective_log_level,
            log_file=settings.log_file,
            structured=settings.structured_logging,
            colorize=settings.debug_mode,
            replace_handlers=False,
        )
    except (ConfigurationError, OSError):
        # Broken settings or an unwritable log path fall back to plain console logging
        setup_logging(level="INFO", structured=False, replace_handlers=False)

    _logging_initialized = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


@dataclass
class TimingStats:
    """Running aggregate of one operation's timings."""

    count: int = 0
    total: float = 0.0
    min: float = float("inf")
    max: float = 0.0

    def add(self, duration: float) -> None:
        self.count += 1
        self.total += duration
        self.min = min(self.min, duration)
        self.max = max(self.max, duration)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "mean": self.total / self.count,
            "min": self.min,
            "max": self.max,
            "total": self.total,
        }


class PerformanceLogger:
    """Logger for match timings.

    Keeps a constant-size aggregate per operation, so one instance can be
    reused across any number of scans.
    """

    def __init__(self, base_logger: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize performance logger.

        Args:
            base_logger: Base logger to use
        """
        self.logger = base_logger or get_logger(__name__)
        self.metrics: dict[str, TimingStats] = {}

    def log_timing(self, operation: str, duration: float, **kwargs) -> None:
        """Log operation timing.

        Args:
            operation: Operation name
            duration: Duration in seconds
            **kwargs: Additional context
        """
        self.metrics.setdefault(operation, TimingStats()).add(duration)

        self.logger.debug("performance_timing", operation=operation, duration=duration, **kwargs)

    def get_stats(self, operation: str | None = None) -> dict[str, Any]:
        """Get performance statistics.

        Args:
            operation: Optional specific operation

        Returns:
            Statistics dict, keyed by operation when no operation is given
        """
        if operation:
            stats = self.metrics.get(operation)
            return stats.to_dict() if stats else {}

        return {op: stats.to_dict() for op, stats in self.metrics.items()}
