"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import Type

from rich.table import Table

from classx.core.objects import ClassX
from classx.utils.error_formatting import format_value


def build_schema_table(cls: Type[ClassX]) -> Table:
    """One row per declared attribute, in declaration order."""
    table = Table(title=f"{cls.__qualname__} attributes")
    table.add_column("Attribute")
    table.add_column("Required")
    table.add_column("Writable")
    table.add_column("Lazy")
    table.add_column("Default")
    table.add_column("Validator")
    table.add_column("Coercion")
    table.add_column("Description")

    for spec in cls.schema().specs():
        table.add_row(
            spec.name,
            "yes" if spec.is_required() else "no",
            "yes" if spec.writable else "no",
            "yes" if spec.lazy else "no",
            spec.describe_default(),
            spec.validator.describe(),
            spec.coercion.describe(),
            spec.description or "",
        )
    return table


def build_delegation_table(cls: Type[ClassX]) -> Table | None:
    delegations = cls.schema().delegations()
    if not delegations:
        return None
    table = Table(title="Delegated methods")
    table.add_column("Method")
    table.add_column("Delegates to")
    for method, (attr_name, target) in delegations.items():
        table.add_row(method, f"{attr_name}.{target}")
    return table


def build_instance_table(instance: ClassX) -> Table:
    table = Table(title=f"{type(instance).__qualname__} instance")
    table.add_column("Attribute")
    table.add_column("Value")
    table.add_column("Type")
    for name in instance.attribute_names():
        if not instance.is_assigned(name) and instance.schema().get(name).lazy:
            table.add_row(name, "[dim]<lazy>[/dim]", "")
            continue
        value = getattr(instance, name)
        table.add_row(name, format_value(value), type(value).__name__)
    return table


__all__ = ["build_schema_table", "build_delegation_table", "build_instance_table"]
