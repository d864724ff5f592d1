"""Performance Logging.

Timing for provider fetches and other catalog operations. Every timed
call is reported once: failures at ERROR, calls over the slow threshold
at WARNING, everything else at DEBUG.
"""

import functools
import inspect
import logging
import reprlib
import time
from typing import Any, Callable, Optional

from src.logging_config.config import DEFAULT_LOGGING_CONFIG

logger = logging.getLogger(__name__)

_arg_repr = reprlib.Repr()
_arg_repr.maxstring = 60
_arg_repr.maxother = 60


def _report(
    target: logging.Logger,
    operation: str,
    duration_ms: float,
    threshold_ms: float,
    failed: Optional[BaseException] = None,
    extra_data: Optional[str] = None,
) -> None:
    extra: dict[str, Any] = {"duration_ms": round(duration_ms, 2)}
    if extra_data is not None:
        extra["extra_data"] = extra_data

    if failed is not None:
        target.error(
            f"{operation} failed after {duration_ms:.1f}ms: {type(failed).__name__}",
            extra=extra,
        )
    elif duration_ms >= threshold_ms:
        target.warning(f"Slow operation: {operation} took {duration_ms:.1f}ms", extra=extra)
    else:
        target.debug(f"{operation} completed in {duration_ms:.1f}ms", extra=extra)


def _summarize_args(args: tuple, kwargs: dict, limit: int = 3) -> str:
    """Short, bounded rendering of call arguments."""
    parts = [_arg_repr.repr(a) for a in args[:limit]]
    if len(args) > limit:
        parts.append(f"... +{len(args) - limit} more args")
    parts.extend(f"{k}={_arg_repr.repr(v)}" for k, v in list(kwargs.items())[:limit])
    return ", ".join(parts)


def log_performance(
    threshold_ms: Optional[float] = None,
    logger_name: Optional[str] = None,
    include_args: bool = False,
) -> Callable:
    """Decorator that times a sync or async callable.

    Args:
        threshold_ms: Slow-call threshold. Defaults to
            ``DEFAULT_LOGGING_CONFIG.slow_threshold_ms``.
        logger_name: Logger to report to. Defaults to the function's module.
        include_args: Attach a summary of the call arguments as ``extra_data``.

    Example:
        @log_performance(threshold_ms=2000)
        async def fetch_models(self):
            ...
    """
    if threshold_ms is None:
        threshold_ms = DEFAULT_LOGGING_CONFIG.slow_threshold_ms

    def decorator(func: Callable) -> Callable:
        target = logging.getLogger(logger_name or func.__module__)
        operation = func.__qualname__

        def finish(start: float, args: tuple, kwargs: dict, failed=None) -> None:
            _report(
                target,
                operation,
                (time.perf_counter() - start) * 1000,
                threshold_ms,
                failed,
                _summarize_args(args, kwargs) if include_args else None,
            )

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    finish(start, args, kwargs, exc)
                    raise
                finish(start, args, kwargs)
                return result
            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                finish(start, args, kwargs, exc)
                raise
            finish(start, args, kwargs)
            return result
        return sync_wrapper

    return decorator


class PerformanceTimer:
    """Context manager timing a block, e.g. one badge layout pass.

    Example:
        with PerformanceTimer("badge_layout", threshold_ms=50) as timer:
            result = flow_badges(labels, width)
        timer.duration_ms
    """

    def __init__(self, operation_name: str, threshold_ms: Optional[float] = None):
        self.operation_name = operation_name
        self.threshold_ms = (
            DEFAULT_LOGGING_CONFIG.slow_threshold_ms if threshold_ms is None else threshold_ms
        )
        self.duration_ms: float = 0.0
        self._start: float = 0.0

    def __enter__(self) -> "PerformanceTimer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration_ms = (time.perf_counter() - self._start) * 1000
        _report(logger, self.operation_name, self.duration_ms, self.threshold_ms, exc_val)
