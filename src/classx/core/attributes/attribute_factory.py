"""
Attribute objects

AttributeFactory.create builds a standalone attribute *class* from a set of
declaration options. Its instances hold one value: ``get`` resolves and
memoizes the default, ``set`` coerces and validates. The same classes, bound
to a ClassX instance, back ``instance.attribute_of[name]``; a bound attribute
object reads and writes through its parent instead of holding its own data.

This entry point is strict about writability: an attribute declared with both
``optional=True`` and ``writable=False`` is rejected with
OptionalAttrShouldBeWritable.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type

from classx.core.errors import InvalidAttrArgument
from classx.core.validators import is_function
from classx.utils.error_formatting import format_value
from classx.utils.logging import log_calls

from .attribute_spec import AttributeSpec

_UNSET = object()


class Attribute:
    """Base class of every factory-made attribute class."""

    spec: ClassVar[AttributeSpec]

    def __init__(self, parent: Any = None, *, bound: bool = False):
        self.parent = parent
        self._bound = bound
        self._data: Any = _UNSET

    @classmethod
    def config(cls) -> Dict[str, Any]:
        """The declaration options this attribute class was created from."""
        return dict(cls.spec.options)

    @property
    def name(self) -> str:
        return self.spec.name

    def desc(self) -> Optional[str]:
        return self.spec.description

    def default(self) -> Any:
        """Resolve the default; a default function receives the parent."""
        return self.spec.resolve_default(self.parent)

    def is_lazy(self) -> bool:
        return self.spec.is_lazy()

    def is_optional(self) -> bool:
        return self.spec.is_optional()

    def is_writable(self) -> bool:
        return self.spec.is_writable()

    def validate(self, value: Any) -> bool:
        return self.spec.validate_value(value)

    def get(self) -> Any:
        if self._bound:
            return getattr(self.parent, self.spec.name)
        if self._data is _UNSET:
            if not self.spec.has_default:
                return None
            self.set(self.default())
        return self._data

    def set(self, value: Any) -> Any:
        if self._bound:
            setattr(self.parent, self.spec.name, value)
            return getattr(self.parent, self.spec.name)
        coerced = self.spec.coerce_value(value)
        if not self.spec.validate_value(coerced):
            raise InvalidAttrArgument(self.spec.name, value, self.spec.validator.describe())
        self._data = coerced
        return coerced

    def __repr__(self) -> str:
        data = "" if self._bound or self._data is _UNSET else f" @data={format_value(self._data)}"
        return f"<Attribute {self.spec.name} {format_value(self.config())}:{id(self)}{data}>"


def _class_level_methods(mixins: Tuple[type, ...]) -> Dict[str, Any]:
    """Methods of the ``extend`` mixins, bound to the attribute class instead of its instances."""
    namespace: Dict[str, Any] = {}
    for mixin in mixins:
        for key, value in vars(mixin).items():
            if key.startswith("__"):
                continue
            if isinstance(value, (classmethod, staticmethod)):
                namespace[key] = value
            elif is_function(value):
                namespace[key] = classmethod(value)
    return namespace


def _class_name(attr_name: str) -> str:
    return "".join(part.capitalize() for part in attr_name.split("_")) + "Attribute"


class AttributeFactory:
    """Creates attribute classes from declaration options or existing specs."""

    @staticmethod
    @log_calls()
    def create(config: Optional[Mapping[str, Any]] = None, **options: Any) -> Type[Attribute]:
        """
        Create a standalone attribute class.

        Args:
            config: Declaration options as a mapping (merged with ``options``);
                an optional ``name`` entry names the attribute
            **options: Declaration options as keywords

        Returns:
            A new subclass of Attribute (with any ``include`` mixins first and
            the methods of any ``extend`` mixins as classmethods)

        Raises:
            AttributeConfigError: The options are inconsistent
        """
        merged = {**dict(config or {}), **options}
        name = merged.pop("name", "attribute")
        spec = AttributeSpec.from_options(name, merged, strict_writable=True)
        return AttributeFactory.for_spec(spec)

    @staticmethod
    def for_spec(spec: AttributeSpec) -> Type[Attribute]:
        """Wrap an already checked spec into an attribute class."""
        bases = tuple(spec.include) + (Attribute,)
        namespace = {**_class_level_methods(spec.extend), "spec": spec, "__module__": __name__}
        return type(_class_name(spec.name), bases, namespace)


__all__ = ["Attribute", "AttributeFactory"]
