"""UML class diagram (XMI) to record type registry."""

from .core.config import RegistryConfig
from .core.exceptions import (
    DuplicateTypeError,
    PropertyConversionError,
    ResourceResolutionError,
    UMLRegistryError,
    XMIParseError,
)
from .services.domain.xmi import UMLRegistry, XMIDocument, parse_document

__all__ = [
    "UMLRegistry",
    "RegistryConfig",
    "XMIDocument",
    "parse_document",
    "UMLRegistryError",
    "PropertyConversionError",
    "XMIParseError",
    "ResourceResolutionError",
    "DuplicateTypeError",
]
