"""classx: declarative attributes with validation, coercion and defaults."""

from classx.core.attributes import Attribute, AttributeFactory, AttributeSpec, attribute
from classx.core.coercion import CoercionChain, CoercionRule
from classx.core.errors import (
    ArgumentShapeError,
    AttrRequiredError,
    AttributeConfigError,
    AttributeNotWritableError,
    ClassXError,
    CyclicDefaultError,
    DuplicateAttributeError,
    InvalidAttrArgument,
    LazyOptionShouldHaveDefault,
    OptionalAttrShouldBeWritable,
    RequiredAttrShouldNotHaveDefault,
    SchemaFrozenError,
)
from classx.core.objects import ClassX
from classx.core.registries import SchemaRegistry

__version__ = "0.1.0"

__all__ = [
    "ClassX",
    "attribute",
    "Attribute",
    "AttributeFactory",
    "AttributeSpec",
    "CoercionChain",
    "CoercionRule",
    "SchemaRegistry",
    "ClassXError",
    "AttributeConfigError",
    "AttrRequiredError",
    "InvalidAttrArgument",
    "LazyOptionShouldHaveDefault",
    "OptionalAttrShouldBeWritable",
    "RequiredAttrShouldNotHaveDefault",
    "DuplicateAttributeError",
    "SchemaFrozenError",
    "ArgumentShapeError",
    "AttributeNotWritableError",
    "CyclicDefaultError",
]
