from .attribute_factory import Attribute, AttributeFactory
from .attribute_spec import AttributeSpec
from .declaration import AttributeDeclaration, attribute

__all__ = [
    "Attribute",
    "AttributeDeclaration",
    "AttributeFactory",
    "AttributeSpec",
    "attribute",
]
