"""Shared value formatting for error and log messages."""

from typing import Any, Mapping

# Longest repr kept in messages before truncation
MAX_VALUE_REPR = 80


def format_value(value: Any, limit: int = MAX_VALUE_REPR) -> str:
    """
    Format a value for inclusion in a message.

    Args:
        value: Any object, including ones with a failing ``__repr__``
        limit: Maximum length of the returned text

    Returns:
        ``repr(value)`` truncated with an ellipsis when longer than ``limit``
    """
    try:
        text = repr(value)
    except Exception:  # pragma: no cover - broken __repr__
        text = f"<{type(value).__name__} object>"
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


def format_mapping(params: Mapping[Any, Any]) -> str:
    """Format an input mapping as ``{key: value, ...}`` with each value truncated."""
    items = ", ".join(f"{key!r}: {format_value(val)}" for key, val in params.items())
    return "{" + items + "}"
