"""
Error taxonomy for the attribute engine.

Declaration-time errors (subclasses of AttributeConfigError) are raised while a
class declares its attributes and leave that class unusable. Construction-time
errors abort a single instantiation and never touch the registry.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from classx.utils.error_formatting import format_mapping, format_value


class ClassXError(Exception):
    """Base class for every error raised by classx."""


class AttributeConfigError(ClassXError):
    """An attribute declaration is internally inconsistent."""

    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        super().__init__(f"in :{name}: {message}")


class LazyOptionShouldHaveDefault(AttributeConfigError):
    def __init__(self, name: str):
        super().__init__(name, ":lazy option need specifying :default")


class OptionalAttrShouldBeWritable(AttributeConfigError):
    def __init__(self, name: str):
        super().__init__(name, "optional attribute should be writable")


class RequiredAttrShouldNotHaveDefault(AttributeConfigError):
    def __init__(self, name: str):
        super().__init__(name, "required attribute should not have :default option")


class DuplicateAttributeError(AttributeConfigError):
    def __init__(self, name: str, owner: str):
        self.owner = owner
        super().__init__(name, f"attribute already declared on {owner}")


class SchemaFrozenError(ClassXError):
    """Raised when declaring on a registry that has already been frozen."""

    def __init__(self, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(
            f"cannot declare :{name} on {owner}: schema is frozen after the first instantiation"
        )


class AttrRequiredError(ClassXError):
    """A required attribute was missing from the construction input."""

    def __init__(self, name: str, params: Optional[Mapping[Any, Any]] = None):
        self.name = name
        self.params = dict(params or {})
        super().__init__(f"param :{name} is required to {format_mapping(self.params)}")


class InvalidAttrArgument(ClassXError, ValueError):
    """A value failed its attribute's validation rule after coercion."""

    def __init__(self, name: str, value: Any, expectation: Optional[str] = None):
        self.name = name
        self.value = value
        self.expectation = expectation
        message = f"param :{name}'s value {format_value(value)} is invalid"
        if expectation:
            message += f": {expectation}"
        super().__init__(message)


class ArgumentShapeError(ClassXError, TypeError):
    """Construction input was not a key/value mapping."""

    def __init__(self, params: Any):
        self.params = params
        super().__init__(
            f"{format_value(params)} was wrong as arguments. please specify a mapping instance"
        )


class AttributeNotWritableError(ClassXError, AttributeError):
    """External code tried to reassign a non-writable attribute."""

    def __init__(self, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(f"attribute :{name} of {owner} is not writable")


class CyclicDefaultError(ClassXError):
    """Default functions of two or more attributes depend on each other."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"default of :{name} depends on itself")


__all__ = [
    "ClassXError",
    "AttributeConfigError",
    "LazyOptionShouldHaveDefault",
    "OptionalAttrShouldBeWritable",
    "RequiredAttrShouldNotHaveDefault",
    "DuplicateAttributeError",
    "SchemaFrozenError",
    "AttrRequiredError",
    "InvalidAttrArgument",
    "ArgumentShapeError",
    "AttributeNotWritableError",
    "CyclicDefaultError",
]
