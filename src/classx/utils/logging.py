from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable

from rich.logging import RichHandler

from classx.utils.error_formatting import format_value


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator tracing calls at DEBUG level; failures are logged and re-raised."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = logger_name or func.__module__
        logger = logging.getLogger(name)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Calling %s args=%s kwargs=%s",
                    func.__qualname__,
                    [format_value(a) for a in args],
                    {k: format_value(v) for k, v in kwargs.items()},
                )
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.debug("%s raised %s: %s", func.__qualname__, type(e).__name__, e)
                raise
            logger.debug("%s returned %s", func.__qualname__, format_value(result))
            return result

        return _wrapper

    return _decorator


def configure_logging(level: str = "WARNING") -> None:
    """Route the ``classx`` logger hierarchy through a rich handler at ``level``."""
    root = logging.getLogger("classx")
    root.setLevel(level.upper())
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(show_path=False, rich_tracebacks=False))
