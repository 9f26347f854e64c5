"""
UML/XMI Model Loading

Converts UML 1.x class diagram exports into record types:
- Tag and data type indexing
- Record shell declaration
- Attribute resolution, including referenced documents
- Generalization and association resolution
"""

from .document import XMIDocument, parse_document
from .registry import UMLRegistry
from .type_resolvers import ImportedTypeResolver, LocalTypeResolver, TypeResolver

__all__ = [
    "UMLRegistry",
    "XMIDocument",
    "parse_document",
    "TypeResolver",
    "LocalTypeResolver",
    "ImportedTypeResolver",
]
