#!/usr/bin/env python3
"""Primitive type catalog.

Two lookups are offered, mirroring how UML data types are named in practice:

1. ``get_native_schema_type`` - XML Schema built-in names (``string``,
   ``dateTime``, ``nonNegativeInteger``, ...), the names ArgoUML's default
   profile uses for its data types.
2. ``SimpleTypeWrapper.get_by_name`` - language-level names (``String``,
   ``Long``, ``UUID``, ``Date``, ...) that modelers type in by hand.

All temporal XML Schema types share the single ``DATE_TIME`` primitive; the
declared name is kept as a format hint on the field instead.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

logger = logging.getLogger(__name__)

XS_NS = "http://www.w3.org/2001/XMLSchema"

# Canonical temporal name; other temporal data types get a format hint
DEFAULT_TEMPORAL_NAME = "dateTime"


@dataclass(frozen=True)
class PrimitiveType:
    """A simple value type with the Python type its values take."""
    name: str
    native_kind: type
    namespace: str = XS_NS

    @property
    def is_temporal(self) -> bool:
        return self.native_kind is datetime

    def __str__(self) -> str:
        return self.name


STRING = PrimitiveType("string", str)
BOOLEAN = PrimitiveType("boolean", bool)
INTEGER = PrimitiveType("int", int)
LONG = PrimitiveType("long", int)
BIG_INTEGER = PrimitiveType("integer", int)
DOUBLE = PrimitiveType("double", float)
FLOAT = PrimitiveType("float", float)
DECIMAL = PrimitiveType("decimal", Decimal)
DATE_TIME = PrimitiveType(DEFAULT_TEMPORAL_NAME, datetime)
DURATION = PrimitiveType("duration", timedelta)
URI = PrimitiveType("anyURI", str)
BYTES = PrimitiveType("base64Binary", bytes)
UUID_TYPE = PrimitiveType("uuid", UUID)

_NATIVE_SCHEMA_TYPES: dict[str, PrimitiveType] = {
    "string": STRING,
    "normalizedString": STRING,
    "token": STRING,
    "language": STRING,
    "Name": STRING,
    "NCName": STRING,
    "QName": STRING,
    "ID": STRING,
    "IDREF": STRING,
    "boolean": BOOLEAN,
    "int": INTEGER,
    "short": INTEGER,
    "byte": INTEGER,
    "unsignedShort": INTEGER,
    "unsignedByte": INTEGER,
    "long": LONG,
    "unsignedInt": LONG,
    "integer": BIG_INTEGER,
    "nonNegativeInteger": BIG_INTEGER,
    "positiveInteger": BIG_INTEGER,
    "nonPositiveInteger": BIG_INTEGER,
    "negativeInteger": BIG_INTEGER,
    "unsignedLong": BIG_INTEGER,
    "double": DOUBLE,
    "float": FLOAT,
    "decimal": DECIMAL,
    "dateTime": DATE_TIME,
    "date": DATE_TIME,
    "time": DATE_TIME,
    "gYear": DATE_TIME,
    "gYearMonth": DATE_TIME,
    "gMonth": DATE_TIME,
    "gMonthDay": DATE_TIME,
    "gDay": DATE_TIME,
    "duration": DURATION,
    "anyURI": URI,
    "base64Binary": BYTES,
    "hexBinary": BYTES,
}


def get_native_schema_type(name: Optional[str]) -> Optional[PrimitiveType]:
    """Look up an XML Schema built-in type by its local name.

    A ``xs:`` or ``xsd:`` prefix is tolerated.
    """
    if not name:
        return None
    if ":" in name:
        name = name.split(":", 1)[1]
    return _NATIVE_SCHEMA_TYPES.get(name)


class SimpleTypeWrapper:
    """Maps Python types and their common names to primitive types."""

    def __init__(self):
        self._by_kind: dict[type, PrimitiveType] = {
            str: STRING,
            bool: BOOLEAN,
            int: LONG,
            float: DOUBLE,
            Decimal: DECIMAL,
            datetime: DATE_TIME,
            timedelta: DURATION,
            bytes: BYTES,
            UUID: UUID_TYPE,
        }
        # keys are lower case, lookups are case-insensitive
        self._by_name: dict[str, PrimitiveType] = {
            "string": STRING,
            "text": STRING,
            "char": STRING,
            "character": STRING,
            "boolean": BOOLEAN,
            "bool": BOOLEAN,
            "integer": INTEGER,
            "int": INTEGER,
            "short": INTEGER,
            "byte": INTEGER,
            "long": LONG,
            "biginteger": BIG_INTEGER,
            "double": DOUBLE,
            "float": FLOAT,
            "decimal": DECIMAL,
            "bigdecimal": DECIMAL,
            "date": DATE_TIME,
            "datetime": DATE_TIME,
            "timestamp": DATE_TIME,
            "duration": DURATION,
            "uri": URI,
            "url": URI,
            "bytes": BYTES,
            "byte[]": BYTES,
            "blob": BYTES,
            "uuid": UUID_TYPE,
        }

    def wrap(self, kind: type) -> PrimitiveType:
        """Return the primitive for a Python type.

        Raises:
            KeyError: If no primitive exists for the type
        """
        return self._by_kind[kind]

    def get_by_name(self, name: Optional[str]) -> Optional[PrimitiveType]:
        """Look up a primitive by a language-level name, case-insensitive."""
        if not name:
            return None
        # fully qualified names such as java.lang.String or java.util.UUID
        simple_name = name.rsplit(".", 1)[-1]
        return self._by_name.get(simple_name.lower())

    def register(self, name: str, primitive: PrimitiveType) -> None:
        """Make an additional name resolvable."""
        self._by_name[name.lower()] = primitive


_wrapper = SimpleTypeWrapper()


def get_wrapper() -> SimpleTypeWrapper:
    """Return the shared wrapper instance."""
    return _wrapper
