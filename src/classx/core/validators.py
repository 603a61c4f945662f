"""
Attribute Validators

A small closed set of validator kinds selected when an attribute is declared.
Each kind answers a single question about a value and never raises on its own
behalf; the assignment path turns a ``False`` answer into InvalidAttrArgument.

Resolution order used by build_validator (first match wins):
- ``validate``: a function, a compiled pattern, a Validator, or a literal
- ``isa`` / ``kind_of``: nominal type check via isinstance
- ``respond_to``: capability check via hasattr
- otherwise every value is accepted
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel


def is_function(obj: Any) -> bool:
    """True for callables that are not classes (classes are treated as plain values)."""
    return callable(obj) and not isinstance(obj, type)


def type_label(expected: Any) -> str:
    if isinstance(expected, tuple):
        return " | ".join(type_label(item) for item in expected)
    return getattr(expected, "__name__", repr(expected))


class Validator(BaseModel, ABC):
    """Base class for all validator kinds."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @abstractmethod
    def check(self, value: Any) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        return self.__class__.__name__


class AcceptAnyValidator(Validator):
    """No rule declared: every value is valid."""

    def check(self, value: Any) -> bool:
        return True

    def describe(self) -> str:
        return "any"


class PredicateValidator(Validator):
    """User supplied ``(value) -> bool`` function."""

    predicate: Callable[[Any], Any]

    def check(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def describe(self) -> str:
        name = getattr(self.predicate, "__name__", "predicate")
        return f"satisfies {name}"


class PatternValidator(Validator):
    """Value must be a string containing a match for the pattern."""

    pattern: re.Pattern

    def check(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return self.pattern.search(value) is not None

    def describe(self) -> str:
        return f"matches /{self.pattern.pattern}/"


class LiteralValidator(Validator):
    """Value must compare equal to a fixed literal."""

    expected: Any

    def check(self, value: Any) -> bool:
        return bool(self.expected == value)

    def describe(self) -> str:
        return f"== {self.expected!r}"


class NominalTypeValidator(Validator):
    """Value must be an instance of a class (or of one of a tuple of classes)."""

    expected: Any

    def check(self, value: Any) -> bool:
        return isinstance(value, self.expected)

    def describe(self) -> str:
        return f"kind_of {type_label(self.expected)}"


class CapabilityValidator(Validator):
    """Value must expose the named attribute or method."""

    capability: str

    def check(self, value: Any) -> bool:
        return hasattr(value, self.capability)

    def describe(self) -> str:
        return f"respond_to {self.capability}"


def validator_from_rule(rule: Any) -> Validator:
    """Build the validator for an explicit ``validate`` option."""
    if isinstance(rule, Validator):
        return rule
    if isinstance(rule, re.Pattern):
        return PatternValidator(pattern=rule)
    if is_function(rule):
        return PredicateValidator(predicate=rule)
    return LiteralValidator(expected=rule)


def build_validator(options: Mapping[str, Any]) -> Validator:
    """
    Select the single validator for a declaration.

    Args:
        options: Declaration options; only ``validate``, ``isa``, ``kind_of``
            and ``respond_to`` are consulted

    Returns:
        The validator of the first option present in resolution order
    """
    rule = options.get("validate")
    if rule is not None:
        return validator_from_rule(rule)
    expected: Optional[Any] = options.get("isa")
    if expected is None:
        expected = options.get("kind_of")
    if expected is not None:
        return NominalTypeValidator(expected=expected)
    capability = options.get("respond_to")
    if capability is not None:
        return CapabilityValidator(capability=str(capability))
    return AcceptAnyValidator()


__all__ = [
    "Validator",
    "AcceptAnyValidator",
    "PredicateValidator",
    "PatternValidator",
    "LiteralValidator",
    "NominalTypeValidator",
    "CapabilityValidator",
    "build_validator",
    "validator_from_rule",
    "is_function",
]
