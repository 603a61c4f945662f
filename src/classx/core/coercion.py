"""
Coercion Chains

Normalize an incoming value before it is validated. A chain is an ordered list
of predicate -> transform rules; the first rule whose predicate accepts the
value has its transform applied and the chain stops there. Exactly one
transform runs at most, a chain is never a pipeline.

Accepted declaration forms for the ``coerce`` option:
- ``None``: empty chain (identity)
- a callable (a function or a class such as ``int``): a single rule that
  always applies
- a mapping ``{key: transform}``: one rule per entry, in insertion order
- a ``(key, transform)`` pair (any two-tuple whose second item is callable)
  or a CoercionRule
- a list of any of the above, concatenated in order

Mapping keys select the predicate: a function is used as is, a string is a
capability name (``hasattr``), a class or tuple of classes is a nominal type.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping

from pydantic import BaseModel, Field

from classx.core.validators import is_function, type_label


def _always(value: Any) -> bool:
    return True


class CoercionRule(BaseModel):
    """One ``predicate -> transform`` pair."""

    predicate: Callable[[Any], Any]
    transform: Callable[[Any], Any]
    label: str = "rule"

    model_config = {"frozen": True}

    def applies(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def apply(self, value: Any) -> Any:
        return self.transform(value)

    @classmethod
    def from_key(cls, key: Any, transform: Callable[[Any], Any]) -> "CoercionRule":
        """Build a rule from a mapping key (function, capability name or type)."""
        if not callable(transform):
            raise TypeError(f"coercion transform for {key!r} must be callable, got {transform!r}")
        if isinstance(key, str):
            return cls(predicate=lambda v, _cap=key: hasattr(v, _cap), transform=transform, label=f"respond_to {key}")
        if isinstance(key, type) or (isinstance(key, tuple) and all(isinstance(k, type) for k in key)):
            return cls(
                predicate=lambda v, _typ=key: isinstance(v, _typ),
                transform=transform,
                label=f"kind_of {type_label(key)}",
            )
        if is_function(key):
            return cls(predicate=key, transform=transform, label=getattr(key, "__name__", "predicate"))
        raise TypeError(f"unsupported coercion key: {key!r}")


class CoercionChain(BaseModel):
    """Ordered rules evaluated first-match-wins."""

    rules: List[CoercionRule] = Field(default_factory=list)

    model_config = {"frozen": True}

    def coerce(self, value: Any) -> Any:
        for rule in self.rules:
            if rule.applies(value):
                return rule.apply(value)
        return value

    def is_empty(self) -> bool:
        return not self.rules

    def describe(self) -> str:
        if not self.rules:
            return "-"
        return ", ".join(rule.label for rule in self.rules)


def _rules_from(spec: Any) -> Iterable[CoercionRule]:
    if isinstance(spec, CoercionRule):
        yield spec
    elif isinstance(spec, CoercionChain):
        yield from spec.rules
    elif isinstance(spec, Mapping):
        for key, transform in spec.items():
            yield CoercionRule.from_key(key, transform)
    elif isinstance(spec, tuple) and len(spec) == 2 and callable(spec[1]):
        yield CoercionRule.from_key(spec[0], spec[1])
    elif isinstance(spec, (list, tuple)):
        for item in spec:
            yield from _rules_from(item)
    elif callable(spec):
        name = getattr(spec, "__name__", "transform")
        yield CoercionRule(predicate=_always, transform=spec, label=name)
    else:
        raise TypeError(f"unsupported coerce option: {spec!r}")


def build_coercion_chain(spec: Any) -> CoercionChain:
    """Normalize any accepted ``coerce`` form into a CoercionChain."""
    if spec is None:
        return CoercionChain()
    return CoercionChain(rules=list(_rules_from(spec)))


__all__ = ["CoercionRule", "CoercionChain", "build_coercion_chain"]
