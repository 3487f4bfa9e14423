"""Observability for rift-replay.

Structured logging configuration plus the ``trace_operation`` decorator that
records entry, duration and failures of long-running replay operations.
"""

import asyncio
import functools
import logging
import sys
import time
import traceback
from collections.abc import Callable
from typing import Any, TypeVar, cast

import structlog
from structlog.contextvars import (
    bind_contextvars,
    bound_contextvars,
    merge_contextvars,
    unbind_contextvars,
)

from rift_replay.config import Settings

_SHARED_PROCESSORS: list[Any] = [
    merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _renderer(force_json: bool = False) -> Any:
    if force_json or not sys.stderr.isatty():
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


# Configure structured logging
structlog.configure(
    processors=[*_SHARED_PROCESSORS, _renderer()],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)

# Get logger instance
logger = structlog.get_logger()

# Type variable for generic decorator
F = TypeVar("F", bound=Callable[..., Any])


def configure_logging(settings: Settings) -> None:
    """Route stdlib logging at the configured level (structlog rides on top).

    Production always renders JSON, whatever the terminal.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger("rift_replay").setLevel(level)
    structlog.configure(processors=[*_SHARED_PROCESSORS, _renderer(settings.is_production)])


def set_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID (e.g. one per loaded match) to every log line."""
    bind_contextvars(correlation_id=correlation_id)


def clear_correlation_id() -> None:
    unbind_contextvars("correlation_id")


def _emit(log_level: str, event: str, **kw: Any) -> None:
    getattr(logger, log_level.lower(), logger.info)(event, **kw)


def _describe_result(result: Any) -> Any:
    """Compact, log-safe description of a traced function's return value."""
    if result is None or isinstance(result, bool | int | float | str):
        return result
    if isinstance(result, list | tuple | dict | set):
        return {"type": type(result).__name__, "len": len(result)}
    return type(result).__name__


def trace_operation(
    *,
    capture_result: bool = False,
    log_level: str = "INFO",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Decorator for tracing replay operations.

    Logs function entry, execution time and exceptions (with traceback), for
    both sync and async functions. Exceptions are always re-raised.

    Args:
        capture_result: Whether to log a compact description of the return value
        log_level: Log level for successful executions
        add_metadata: Additional metadata to include in logs

    Example:
        >>> @trace_operation(capture_result=True)
        ... async def load(path: str) -> MatchTimeline:
        ...     ...
    """

    def decorator(func: F) -> F:
        function_name = f"{func.__module__}.{func.__name__}"
        metadata = add_metadata or {}

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            execution_id = f"{function_name}_{int(time.time() * 1000000)}"
            with bound_contextvars(execution_id=execution_id):
                _emit(log_level, f"Executing async function: {function_name}", **metadata)
                start_time = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        f"Error in function: {function_name}",
                        duration_ms=(time.perf_counter() - start_time) * 1000,
                        error_type=type(e).__name__,
                        error_message=str(e),
                        traceback=traceback.format_exc(),
                        **metadata,
                    )
                    raise

                _emit(
                    log_level,
                    f"Successfully executed: {function_name}",
                    execution_id=execution_id,
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                    result=_describe_result(result) if capture_result else None,
                    **metadata,
                )
                return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            execution_id = f"{function_name}_{int(time.time() * 1000000)}"
            with bound_contextvars(execution_id=execution_id):
                _emit(log_level, f"Executing function: {function_name}", **metadata)
                start_time = time.perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        f"Error in function: {function_name}",
                        duration_ms=(time.perf_counter() - start_time) * 1000,
                        error_type=type(e).__name__,
                        error_message=str(e),
                        traceback=traceback.format_exc(),
                        **metadata,
                    )
                    raise

                _emit(
                    log_level,
                    f"Successfully executed: {function_name}",
                    execution_id=execution_id,
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                    result=_describe_result(result) if capture_result else None,
                    **metadata,
                )
                return result

        if asyncio.iscoroutinefunction(func):
            return cast(F, async_wrapper)
        return cast(F, sync_wrapper)

    return decorator


def trace_performance(func: F) -> F:
    """Decorator focused on performance monitoring."""
    return trace_operation(capture_result=False, log_level="DEBUG")(func)
