from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Type

from pydantic import BaseModel, Field, PrivateAttr

from classx.core.attributes.attribute_factory import Attribute, AttributeFactory
from classx.core.attributes.attribute_spec import AttributeSpec
from classx.core.errors import DuplicateAttributeError, SchemaFrozenError

logger = logging.getLogger(__name__)


class SchemaRegistry(BaseModel):
    """
    Per-class, append-only table of attribute descriptors.

    Insertion order is declaration order. A registry built with ``extend``
    starts from its bases' own declarations; a redeclared name replaces the
    inherited descriptor in place. The registry is frozen by its owner class
    on first instantiation, after which ``declare`` is rejected.
    """

    owner: str
    attributes: Dict[str, AttributeSpec] = Field(default_factory=dict)
    local_names: List[str] = Field(default_factory=list)

    _frozen: bool = PrivateAttr(default=False)
    _attribute_classes: Dict[str, Type[Attribute]] = PrivateAttr(default_factory=dict)

    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def extend(cls, owner: str, bases: Iterable["SchemaRegistry"]) -> "SchemaRegistry":
        """
        Build a registry inheriting from ``bases``.

        Args:
            owner: Name of the class owning the new registry
            bases: Base registries from farthest to nearest (reverse MRO);
                only each base's own declarations are merged so the nearest
                declaring class wins

        Returns:
            A new, unfrozen registry with no local declarations
        """
        registry = cls(owner=owner)
        registry.rebase(bases)
        return registry

    def rebase(self, bases: Iterable["SchemaRegistry"]) -> None:
        """
        Recompute the inherited part of the schema after a base declared more attributes.

        Local declarations keep overriding inherited ones by name; an inherited
        name keeps the position of its first declaration.
        """
        local = self.local_specs()
        merged: Dict[str, AttributeSpec] = {}
        for base in bases:
            for spec in base.local_specs():
                merged[spec.name] = spec
        for spec in local:
            merged[spec.name] = spec
        self.attributes.clear()
        self.attributes.update(merged)
        self._attribute_classes.clear()

    def declare(self, spec: AttributeSpec) -> None:
        if self._frozen:
            raise SchemaFrozenError(self.owner, spec.name)
        if spec.name in self.local_names:
            raise DuplicateAttributeError(spec.name, self.owner)
        overrides = spec.name in self.attributes
        self.attributes[spec.name] = spec
        self.local_names.append(spec.name)
        self._attribute_classes.pop(spec.name, None)
        logger.debug("%s %s on %s", "Overrode" if overrides else "Declared", spec, self.owner)

    def get(self, name: str) -> AttributeSpec:
        if name not in self.attributes:
            available = ", ".join(self.attributes.keys())
            raise KeyError(f"Unknown attribute: {name}. Available: {available}")
        return self.attributes[name]

    def find(self, name: str) -> Optional[AttributeSpec]:
        return self.attributes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def __len__(self) -> int:
        return len(self.attributes)

    def specs(self) -> List[AttributeSpec]:
        return list(self.attributes.values())

    def local_specs(self) -> List[AttributeSpec]:
        return [self.attributes[name] for name in self.local_names]

    def attribute_names(self) -> List[str]:
        """All declared names in declaration order, required and optional alike."""
        return list(self.attributes.keys())

    def required_names(self) -> FrozenSet[str]:
        return frozenset(spec.name for spec in self.attributes.values() if spec.is_required())

    def delegation(self, method: str) -> Optional[Tuple[str, str]]:
        """Return ``(attribute name, target method)`` for a delegated method name."""
        for spec in self.attributes.values():
            if method in spec.handles:
                return spec.name, spec.handles[method]
        return None

    def delegations(self) -> Dict[str, Tuple[str, str]]:
        result: Dict[str, Tuple[str, str]] = {}
        for spec in self.attributes.values():
            for local, target in spec.handles.items():
                result.setdefault(local, (spec.name, target))
        return result

    def attribute_class(self, name: str) -> Type[Attribute]:
        """Attribute class for ``name``, created once per registry."""
        if name not in self._attribute_classes:
            self._attribute_classes[name] = AttributeFactory.for_spec(self.get(name))
        return self._attribute_classes[name]

    def freeze(self) -> None:
        if not self._frozen:
            logger.debug("Froze schema of %s with %d attribute(s)", self.owner, len(self.attributes))
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen
