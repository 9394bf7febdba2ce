"""Structured logging setup."""

from __future__ import annotations

import logging
import sys
import time
from typing import Any

import structlog


class PerformanceTimer:
    """Context manager logging how long an operation took."""

    def __init__(self, logger: Any, operation: str, **kwargs: Any) -> None:
        self.logger = logger
        self.operation = operation
        self.kwargs = kwargs
        self.start_time: float = 0.0

    def __enter__(self) -> "PerformanceTimer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        elapsed = (time.perf_counter() - self.start_time) * 1000
        if exc_type:
            self.logger.error(
                f"{self.operation} failed",
                duration_ms=round(elapsed, 2),
                error=str(exc_val),
                **self.kwargs,
            )
        else:
            self.logger.debug(
                f"{self.operation} completed",
                duration_ms=round(elapsed, 2),
                **self.kwargs,
            )
        return False


def setup_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        existing.close()
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False, pad_event=40)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=shared_processors,
        )
    )


def use_quiet_defaults() -> None:
    """Warnings and errors only, on stderr, until setup_logging is called."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    use_quiet_defaults()


def get_logger(name: str = "risk_engine") -> Any:
    return structlog.get_logger(name)


def log_performance(logger: Any, operation: str, **kwargs: Any) -> PerformanceTimer:
    return PerformanceTimer(logger, operation, **kwargs)
