"""``safe`` decorator: run an operation, return a fallback instead of raising."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from gmail_client.config import LoggingConfig
from gmail_client.exceptions import NotFoundError
from gmail_client.pagination import LazySequence

logger = logging.getLogger(__name__)


def safe(fallback: Any = None, operation: str | None = None):
    """Wrap ``func`` so it never raises.

    ``NotFoundError`` returns the fallback quietly; anything else is
    logged as a warning first. If ``fallback`` is callable it is called
    with the wrapped call's arguments, which lets a method build a
    fallback of the same shape as its normal result. Methods may expose
    a ``logging_config`` attribute to control truncation and redaction.
    """

    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except NotFoundError as e:
                logger.debug(f"{name}: {e}")
            except Exception as e:
                owner = args[0] if args else None
                config = getattr(owner, "logging_config", None) or LoggingConfig()
                logger.warning(
                    f"{name} failed, returning fallback: {type(e).__name__}: {e}",
                    extra={
                        "operation": name,
                        "error_type": type(e).__name__,
                        "error_message": config.truncate(str(e)),
                        "context": _context(e, kwargs, config),
                    },
                )
            return fallback(*args, **kwargs) if callable(fallback) else fallback

        return wrapper

    return decorator


def _context(
    error: Exception, kwargs: dict[str, Any], config: LoggingConfig,
) -> str:
    context = config.redact(dict(kwargs))
    response = getattr(error, "response", None)
    if response is not None:
        context["status"] = response.status
    return config.truncate(repr(context))


def safe_stream(sequence: LazySequence, operation: str) -> LazySequence:
    """Lazy counterpart of ``safe``: a failure mid-iteration ends the stream."""

    def stream():
        try:
            yield from sequence
        except NotFoundError as e:
            logger.debug(f"{operation}: {e}")
        except Exception as e:
            logger.warning(
                f"{operation} stream stopped early: {type(e).__name__}: {e}",
                extra={
                    "operation": operation,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )

    return LazySequence(stream)
