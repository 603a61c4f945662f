"""Class-body attribute declarations."""

from __future__ import annotations

from typing import Any, Dict


class AttributeDeclaration:
    """
    Marker placed in a ClassX subclass body.

    The class collects markers in definition order when it is created and
    declares each one exactly as ``has(name, **options)`` would.
    """

    def __init__(self, options: Dict[str, Any]):
        self.options = options

    def __repr__(self) -> str:
        return f"attribute({', '.join(f'{k}={v!r}' for k, v in self.options.items())})"


def attribute(**options: Any) -> AttributeDeclaration:
    """Declare an attribute inside a class body: ``port = attribute(isa=int, default=80)``."""
    return AttributeDeclaration(options)


__all__ = ["AttributeDeclaration", "attribute"]
