"""Structured Logging & Fetch Tracing.

Provides structured JSON or console logging, fetch-id propagation,
and performance timing for the model catalog.
"""

from src.logging_config.config import LogFormat, LoggingConfig, LogLevel
from src.logging_config.context import FetchContext, generate_fetch_id
from src.logging_config.performance import PerformanceTimer, log_performance
from src.logging_config.setup import configure_logging, get_logger

__all__ = [
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "FetchContext",
    "configure_logging",
    "generate_fetch_id",
    "get_logger",
    "log_performance",
    "PerformanceTimer",
]
