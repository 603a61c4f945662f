from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, Mapping

from classx.core.attributes.attribute_factory import Attribute

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .base import ClassX


class AttributeMap(Mapping[str, Attribute]):
    """Read-only view ``name -> attribute object`` bound to one instance."""

    def __init__(self, instance: "ClassX"):
        self._instance = instance
        self._objects: Dict[str, Attribute] = {}

    def __getitem__(self, name: str) -> Attribute:
        schema = type(self._instance).schema()
        if name not in schema:
            raise KeyError(name)
        if name not in self._objects:
            attr_cls = schema.attribute_class(name)
            self._objects[name] = attr_cls(self._instance, bound=True)
        return self._objects[name]

    def __iter__(self) -> Iterator[str]:
        return iter(type(self._instance).schema().attribute_names())

    def __len__(self) -> int:
        return len(type(self._instance).schema())
