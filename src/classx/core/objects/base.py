"""
ClassX base class

Subclasses declare attributes with ``has`` (or ``attribute()`` markers in the
class body) and are constructed from a key/value mapping:

    >>> class Server(ClassX):
    ...     host = attribute(isa=str)
    ...     port = attribute(isa=int, default=80, coerce={str: int})
    >>> Server({"host": "localhost", "port": "8080"}).port
    8080

All reads and writes of declared attributes go through one generic dispatch
(``__getattr__`` / ``__setattr__``) that consults the class's SchemaRegistry.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Optional

from classx.core.attributes.attribute_spec import AttributeSpec
from classx.core.attributes.declaration import AttributeDeclaration
from classx.core.errors import (
    ArgumentShapeError,
    AttributeConfigError,
    AttributeNotWritableError,
    AttrRequiredError,
    CyclicDefaultError,
    InvalidAttrArgument,
    SchemaFrozenError,
)
from classx.core.registries.schema_registry import SchemaRegistry
from classx.utils.error_formatting import format_value

from .attribute_map import AttributeMap

logger = logging.getLogger(__name__)


def _base_registries(cls: type) -> List[SchemaRegistry]:
    """Registries of the bases of ``cls``, farthest first (reverse MRO)."""
    return [klass.__dict__["_schema"] for klass in reversed(cls.__mro__[1:]) if "_schema" in klass.__dict__]


def _descendants(cls: type) -> List[type]:
    found: List[type] = []
    pending = list(cls.__subclasses__())
    while pending:
        sub = pending.pop()
        if sub not in found:
            found.append(sub)
            pending.extend(sub.__subclasses__())
    return found


class ClassX:
    """Base class for objects built from declared attributes."""

    _schema: ClassVar[SchemaRegistry] = SchemaRegistry(owner="ClassX")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._schema = SchemaRegistry.extend(cls.__qualname__, _base_registries(cls))
        declarations = [
            (name, value) for name, value in cls.__dict__.items() if isinstance(value, AttributeDeclaration)
        ]
        for name, declaration in declarations:
            delattr(cls, name)
            cls.has(name, **declaration.options)

    # -- declaration API -------------------------------------------------

    @classmethod
    def has(cls, name: Any, **options: Any) -> AttributeSpec:
        """
        Declare an attribute on this class.

        Args:
            name: Attribute name (``str`` conversion applied)
            **options: optional, default, lazy, writable, validate, isa,
                kind_of, respond_to, coerce, description/desc, handles, include,
                extend

        Returns:
            The registered descriptor

        Raises:
            AttributeConfigError: Inconsistent options, a duplicate name, or a
                name clashing with a method or private attribute
            SchemaFrozenError: The class, or one of its subclasses, was
                already instantiated
        """
        name = str(name)
        if name.startswith("_"):
            raise AttributeConfigError(name, "attribute names must not start with an underscore")
        if name not in cls._schema and hasattr(cls, name):
            raise AttributeConfigError(name, f"shadows an existing attribute of {cls.__qualname__}")
        spec = AttributeSpec.from_options(name, options)
        descendants = _descendants(cls)
        for sub in descendants:
            if sub._schema.is_frozen:
                raise SchemaFrozenError(sub.__qualname__, name)
        cls._schema.declare(spec)
        # Existing subclasses inherit the new attribute
        for sub in descendants:
            sub._schema.rebase(_base_registries(sub))
        return spec

    @classmethod
    def schema(cls) -> SchemaRegistry:
        return cls._schema

    @classmethod
    def attribute_names(cls) -> List[str]:
        return cls._schema.attribute_names()

    @classmethod
    def required_names(cls) -> FrozenSet[str]:
        return cls._schema.required_names()

    # -- construction protocol -------------------------------------------

    def __init__(self, params: Optional[Mapping[Any, Any]] = None, /, **kwargs: Any):
        object.__setattr__(self, "_values", {})
        object.__setattr__(self, "_resolving", set())
        object.__setattr__(self, "_attribute_map", None)

        schema = type(self)._schema
        schema.freeze()

        raw: Any = {} if params is None else params
        if kwargs and isinstance(raw, Mapping):
            raw = {**raw, **kwargs}
        self.before_init(raw)

        if not isinstance(raw, Mapping):
            raise ArgumentShapeError(raw)

        # String and keyword style keys are interchangeable
        normalized = {str(key): value for key, value in raw.items()}

        for spec in schema.specs():
            if spec.is_required() and spec.name not in normalized:
                raise AttrRequiredError(spec.name, raw)

        for key, value in normalized.items():
            spec = schema.find(key)
            if spec is None:
                logger.debug("Ignoring unknown key %r for %s", key, type(self).__qualname__)
                continue
            self._store(spec, value)

        for spec in schema.specs():
            if spec.name in self._values or not spec.has_default or spec.lazy:
                continue
            self._apply_default(spec)

        self.after_init()

    def before_init(self, params: Any) -> None:
        """Extension point called with the raw input before any check."""

    def after_init(self) -> None:
        """Extension point called once every attribute holds its value."""

    # -- generic dispatch ------------------------------------------------

    def _store(self, spec: AttributeSpec, value: Any) -> None:
        coerced = spec.coerce_value(value)
        if not spec.validate_value(coerced):
            raise InvalidAttrArgument(spec.name, value, spec.validator.describe())
        self._values[spec.name] = coerced

    def _apply_default(self, spec: AttributeSpec) -> None:
        if spec.name in self._resolving:
            raise CyclicDefaultError(spec.name)
        self._resolving.add(spec.name)
        try:
            value = spec.resolve_default(self)
            logger.debug("Resolved default of %s.%s", type(self).__qualname__, spec.name)
            self._store(spec, value)
        finally:
            self._resolving.discard(spec.name)

    def _read_attribute(self, spec: AttributeSpec) -> Any:
        values: Dict[str, Any] = self.__dict__["_values"]
        if spec.name not in values:
            if not spec.has_default:
                return None
            self._apply_default(spec)
        return values[spec.name]

    def _write_attribute(self, name: str, value: Any) -> None:
        """Assign a declared attribute from inside the instance, ignoring writability."""
        self._store(type(self)._schema.get(name), value)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or "_values" not in self.__dict__:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        schema = type(self)._schema
        spec = schema.find(name)
        if spec is not None:
            return self._read_attribute(spec)
        delegated = schema.delegation(name)
        if delegated is not None:
            attr_name, method = delegated
            return getattr(self._read_attribute(schema.get(attr_name)), method)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        spec = type(self)._schema.find(name)
        if spec is None:
            object.__setattr__(self, name, value)
            return
        if not spec.writable:
            raise AttributeNotWritableError(type(self).__qualname__, name)
        self._store(spec, value)

    def __delattr__(self, name: str) -> None:
        if name in type(self)._schema:
            raise AttributeNotWritableError(type(self).__qualname__, name)
        object.__delattr__(self, name)

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(type(self)._schema.attribute_names()))

    # -- introspection ---------------------------------------------------

    @property
    def attribute_of(self) -> AttributeMap:
        """Attribute objects bound to this instance, by attribute name."""
        if self._attribute_map is None:
            object.__setattr__(self, "_attribute_map", AttributeMap(self))
        return self._attribute_map

    def is_assigned(self, name: str) -> bool:
        """Whether ``name`` currently holds a value (an unread lazy attribute does not)."""
        return name in self._values

    def to_dict(self) -> Dict[str, Any]:
        """Every declared attribute's value in declaration order (lazy defaults are forced)."""
        return {name: getattr(self, name) for name in type(self)._schema.attribute_names()}

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={format_value(value)}" for name, value in self._values.items())
        return f"{type(self).__qualname__}({values})"


__all__ = ["ClassX"]
