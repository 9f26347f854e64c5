#!/usr/bin/env python3
"""Exception hierarchy for the UML registry."""


class UMLRegistryError(Exception):
    """Base error for UML model loading."""


class PropertyConversionError(UMLRegistryError):
    """Raised when a tagged value can not be converted to its property's value type.

    This is the only error that aborts a load call: silently dropping the value
    would produce wrong metadata on the generated field.
    """

    def __init__(self, property_name: str, attribute_name: str, value: str):
        self.property_name = property_name
        self.attribute_name = attribute_name
        self.value = value
        super().__init__(
            f"Could not unmarshal property: {property_name} ({attribute_name}) from value {value!r}"
        )


class XMIParseError(UMLRegistryError):
    """Raised when a document is not well-formed XML."""


class ResourceResolutionError(UMLRegistryError):
    """Raised when a referenced document can not be fetched."""


class DuplicateTypeError(UMLRegistryError):
    """Raised when a record type id is registered twice."""
