"""
Type System

Building blocks the UML loader produces and consumes:
- Primitive type catalog (XML Schema names and language-level names)
- Named property descriptors with string conversion
- Record types and fields
- Type registry storage
"""

from .primitives import PrimitiveType, SimpleTypeWrapper, get_native_schema_type, get_wrapper
from .properties import Property, PropertyCatalog, convert, get_property_catalog
from .structures import UNBOUNDED, Field, RecordType
from .type_registry import TypeRegistry

__all__ = [
    # Primitives
    "PrimitiveType",
    "SimpleTypeWrapper",
    "get_native_schema_type",
    "get_wrapper",
    # Properties
    "Property",
    "PropertyCatalog",
    "convert",
    "get_property_catalog",
    # Structures
    "UNBOUNDED",
    "Field",
    "RecordType",
    "TypeRegistry",
]
