"""Observability framework for lolscout.

This module provides structured logging configuration, the ``debug_wrapper``
tracing decorator and request correlation helpers.
"""

import functools
import inspect
import json
import logging
import re
import sys
import time
import traceback
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel, ConfigDict, Field
from structlog.contextvars import bind_contextvars, unbind_contextvars

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        *_SHARED_PROCESSORS,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Sensitive data redaction pattern
_SENSITIVE_KEY_RE = re.compile(
    r"(token|key|secret|password|pass|authorization|auth)", re.IGNORECASE
)


def configure_logging(level: str = "INFO", *, json_output: bool | None = None) -> None:
    """Route stdlib logging through structlog's formatter.

    Console rendering on a TTY, JSON lines otherwise.
    """
    if json_output is None:
        json_output = not sys.stderr.isatty()
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation id to every log line of the current task."""
    cid = correlation_id or uuid.uuid4().hex[:16]
    bind_contextvars(correlation_id=cid)
    return cid


def clear_correlation_id() -> None:
    unbind_contextvars("correlation_id")


def _mask_scalar(value: Any) -> Any:
    if value is None:
        return None
    s = str(value)
    if len(s) <= 8:
        return "***"
    return f"{s[:4]}…{s[-3:]}"


def _redact_obj(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: (_mask_scalar(v) if _SENSITIVE_KEY_RE.search(str(k)) else _redact_obj(v))
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_redact_obj(i) for i in obj]
    return obj


def _serialize_value(value: Any, max_length: int = 1000) -> Any:
    """Safely serialize a value for logging.

    Args:
        value: Value to serialize
        max_length: Maximum string length for truncation

    Returns:
        Serializable representation of the value
    """
    try:
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json", exclude_unset=True)

        json_str = json.dumps(value, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "..."
        return json.loads(json_str)

    except (TypeError, ValueError):
        str_repr = str(value)
        if len(str_repr) > max_length:
            return str_repr[:max_length] + "..."
        return str_repr


def _safe_serialize_kv(key: str, value: Any, max_length: int) -> Any:
    ser = _serialize_value(value, max_length)
    if _SENSITIVE_KEY_RE.search(str(key)):
        return _redact_obj(ser) if isinstance(ser, (dict, list)) else _mask_scalar(ser)
    return ser


class FunctionTrace(BaseModel):
    """Model for function execution trace data."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    function_name: str = Field(description="Fully qualified function name")
    execution_id: str = Field(description="Unique execution ID")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: float | None = Field(default=None)
    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)
    result: Any | None = Field(default=None)
    error_type: str | None = Field(default=None)
    error_message: str | None = Field(default=None)
    is_async: bool = Field(default=False)
    metadata: dict[str, Any] = Field(default_factory=dict)


def debug_wrapper(
    *,
    capture_result: bool = True,
    capture_args: bool = True,
    max_arg_length: int = 1000,
    log_level: str = "DEBUG",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Decorator for function tracing.

    Logs entry, duration, return value (redacted) and failures for both sync
    and async functions. Exceptions are always re-raised.

    Example:
        >>> @debug_wrapper(capture_result=False)
        ... async def fetch_match(match_id: str) -> dict:
        ...     return {"match_id": match_id}
    """

    def decorator(func: F) -> F:
        name = f"{func.__module__}.{func.__qualname__}"
        level = log_level.lower()

        def _start(args: tuple[Any, ...], kwargs: dict[str, Any], is_async: bool) -> FunctionTrace:
            trace = FunctionTrace(
                function_name=name,
                execution_id=f"{name}_{int(time.time() * 1000000)}",
                is_async=is_async,
                metadata=add_metadata or {},
            )
            if capture_args:
                trace.args = [_serialize_value(arg, max_arg_length) for arg in args]
                trace.kwargs = {
                    k: _safe_serialize_kv(k, v, max_arg_length) for k, v in kwargs.items()
                }
            bind_contextvars(execution_id=trace.execution_id)
            logger.log(
                logging.getLevelName(level.upper()),
                f"Executing: {name}",
                args=trace.args if capture_args else None,
                kwargs=trace.kwargs if capture_args else None,
                **trace.metadata,
            )
            return trace

        def _success(trace: FunctionTrace, result: Any, started: float) -> None:
            trace.duration_ms = (time.perf_counter() - started) * 1000
            if capture_result:
                trace.result = _redact_obj(_serialize_value(result, max_arg_length))
            logger.log(
                logging.getLevelName(level.upper()),
                f"Executed: {name}",
                duration_ms=trace.duration_ms,
                result=trace.result if capture_result else None,
            )

        def _failure(trace: FunctionTrace, exc: Exception, started: float) -> None:
            trace.duration_ms = (time.perf_counter() - started) * 1000
            trace.error_type = type(exc).__name__
            trace.error_message = str(exc)
            logger.error(
                f"Error in function: {name}",
                duration_ms=trace.duration_ms,
                error_type=trace.error_type,
                error_message=trace.error_message,
                traceback=traceback.format_exc(),
            )

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _start(args, kwargs, is_async=True)
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _failure(trace, e, started)
                raise
            finally:
                unbind_contextvars("execution_id")
            _success(trace, result, started)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _start(args, kwargs, is_async=False)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _failure(trace, e, started)
                raise
            finally:
                unbind_contextvars("execution_id")
            _success(trace, result, started)
            return result

        if inspect.iscoroutinefunction(func):
            return cast(F, async_wrapper)
        return cast(F, sync_wrapper)

    return decorator


def trace_performance(func: F) -> F:
    """Decorator focused on performance monitoring."""
    return debug_wrapper(capture_result=False, capture_args=False, log_level="INFO")(func)


def trace_adapter(func: F) -> F:
    """Decorator specifically for adapter layer functions."""
    return debug_wrapper(
        capture_result=False,
        capture_args=True,
        log_level="DEBUG",
        add_metadata={"layer": "adapter"},
    )(func)
