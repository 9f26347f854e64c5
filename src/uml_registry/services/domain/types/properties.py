#!/usr/bin/env python3
"""Named property descriptors and string value conversion.

Tagged values in a UML model are plain strings. A tag whose name matches a
property in the catalog is converted to that property's value type and
attached to the generated field.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no")


@dataclass(frozen=True)
class Property:
    """A typed, named piece of field metadata."""
    name: str
    value_type: type = str


# Properties with a dedicated attribute on Field
MIN_OCCURS = Property("minOccurs", int)
MAX_OCCURS = Property("maxOccurs", int)
COMMENT = Property("comment", str)
FORMAT = Property("format", str)
FOREIGN_KEY = Property("foreignKey", str)
PRIMARY_KEY = Property("primaryKey", bool)
AGGREGATE = Property("aggregate", str)
TIMEZONE = Property("timezone", str)

# Properties with a dedicated attribute on RecordType
COLLECTION_NAME = Property("collectionName", str)
HIDDEN = Property("hidden", bool)
DUPLICATE = Property("duplicate", str)

# Type name a string field refers to without a structural link
REFERENCED_TYPE = Property("referencedType", str)

_BUILT_INS = (
    MIN_OCCURS,
    MAX_OCCURS,
    COMMENT,
    FORMAT,
    FOREIGN_KEY,
    PRIMARY_KEY,
    AGGREGATE,
    TIMEZONE,
    COLLECTION_NAME,
    HIDDEN,
    DUPLICATE,
    REFERENCED_TYPE,
    Property("pattern", str),
    Property("title", str),
    Property("label", str),
    Property("minInclusive", str),
    Property("maxInclusive", str),
    Property("minExclusive", str),
    Property("maxExclusive", str),
    Property("length", int),
    Property("minLength", int),
    Property("maxLength", int),
    Property("totalDigits", int),
    Property("fractionDigits", int),
    Property("unique", bool),
    Property("generated", bool),
    Property("nillable", bool),
    Property("translatable", bool),
)


class PropertyCatalog:
    """Registry of properties addressable by name."""

    def __init__(self, properties: tuple[Property, ...] = ()):
        self._properties: dict[str, Property] = {}
        for prop in properties:
            self.register(prop)

    def register(self, prop: Property) -> None:
        if prop.name in self._properties and self._properties[prop.name] != prop:
            logger.warning(f"Replacing property definition for {prop.name}")
        self._properties[prop.name] = prop

    def get_property(self, name: Optional[str]) -> Optional[Property]:
        if not name:
            return None
        return self._properties.get(name)

    def names(self) -> list[str]:
        return sorted(self._properties)


_catalog = PropertyCatalog(_BUILT_INS)


def get_property_catalog() -> PropertyCatalog:
    """Return the default catalog with all built-in properties."""
    return _catalog


def convert(value: str, value_type: type) -> Any:
    """Convert a tagged value string to a property value type.

    Args:
        value: The raw tagged value
        value_type: Target type (str, int, float, bool or Decimal)

    Returns:
        The converted value

    Raises:
        ValueError: If the value can not be represented as the target type
    """
    if value_type is str:
        return value

    text = value.strip()
    if value_type is bool:
        lowered = text.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"Not a boolean: {value!r}")
    if value_type is int:
        return int(text)
    if value_type is float:
        return float(text)
    if value_type is Decimal:
        try:
            return Decimal(text)
        except InvalidOperation as e:
            raise ValueError(f"Not a decimal: {value!r}") from e

    raise ValueError(f"No conversion from string to {value_type.__name__}")
