from .attribute_map import AttributeMap
from .base import ClassX

__all__ = ["AttributeMap", "ClassX"]
