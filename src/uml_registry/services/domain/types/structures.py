#!/usr/bin/env python3
"""Record types and their fields.

A RecordType is the generated counterpart of a UML class. Its fields keep
insertion order, which is part of the record's observable shape (storage
layers derive column order from it).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

from .primitives import PrimitiveType
from . import properties as props

logger = logging.getLogger(__name__)

# Value of max_occurs for an unbounded field
UNBOUNDED = 0

# Property names stored in a dedicated Field attribute
_FIELD_ATTRIBUTES = {
    props.MIN_OCCURS.name: "min_occurs",
    props.MAX_OCCURS.name: "max_occurs",
    props.COMMENT.name: "comment",
    props.FORMAT.name: "format",
    props.FOREIGN_KEY.name: "foreign_key",
    props.PRIMARY_KEY.name: "primary_key",
    props.AGGREGATE.name: "aggregate",
    props.TIMEZONE.name: "timezone",
}


@dataclass(eq=False)
class Field:
    """A named, typed member of a record type."""
    name: str
    type: Union[PrimitiveType, "RecordType"]
    min_occurs: int = 1
    max_occurs: int = 1                       # 0 = unbounded
    primary_key: bool = False
    foreign_key: Optional[str] = None         # "<recordTypeId>:<keyField>"
    comment: Optional[str] = None
    format: Optional[str] = None
    aggregate: Optional[str] = None           # UML aggregation kind (shared, composite)
    timezone: Optional[str] = None
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def is_composite(self) -> bool:
        """True if the field nests another record type."""
        return isinstance(self.type, RecordType)

    @property
    def type_name(self) -> str:
        return self.type.id if isinstance(self.type, RecordType) else self.type.name

    def set_property(self, name: str, value: Any) -> None:
        """Set a property by name, routing known names to their attribute."""
        attribute = _FIELD_ATTRIBUTES.get(name)
        if attribute is not None:
            setattr(self, attribute, value)
        else:
            self.properties[name] = value

    def get_property(self, name: str) -> Any:
        attribute = _FIELD_ATTRIBUTES.get(name)
        if attribute is not None:
            return getattr(self, attribute)
        return self.properties.get(name)

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.type_name}, {self.min_occurs}..{self.max_occurs or '*'})"


@dataclass(eq=False)
class RecordType:
    """A generated record type, identified globally by ``id``."""
    id: str
    name: str
    namespace: str
    super_type: Optional["RecordType"] = None
    collection_name: Optional[str] = None
    hidden: bool = False
    duplicate: Optional[str] = None           # comma separated fields shared with the super type
    properties: dict[str, Any] = field(default_factory=dict)
    _fields: dict[str, Field] = field(default_factory=dict, repr=False)

    @property
    def fields(self) -> list[Field]:
        """Own fields in insertion order."""
        return list(self._fields.values())

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, name: str) -> Optional[Field]:
        return self._fields.get(name)

    def add(self, child: Field) -> None:
        """Append a field.

        Raises:
            ValueError: If a field with the same name exists, or the field is a
                second primary key
        """
        if child.name in self._fields:
            raise ValueError(f"Field {child.name} already exists in {self.id}")
        if child.primary_key and self.primary_key_field() is not None:
            raise ValueError(f"Record type {self.id} already has a primary key")
        self._fields[child.name] = child

    def remove(self, name: str) -> Optional[Field]:
        return self._fields.pop(name, None)

    def all_fields(self) -> list[Field]:
        """Inherited fields first, then own fields."""
        chain = []
        current: Optional[RecordType] = self
        # a cyclic generalization in a malformed model must not loop forever
        while current is not None and current not in chain:
            chain.append(current)
            current = current.super_type
        result = []
        for record in reversed(chain):
            result.extend(record.fields)
        return result

    def primary_key_field(self) -> Optional[Field]:
        """The primary key field, own or inherited."""
        for child in self.all_fields():
            if child.primary_key:
                return child
        return None

    def primary_key_type(self) -> Optional[PrimitiveType]:
        key = self.primary_key_field()
        if key is None or not isinstance(key.type, PrimitiveType):
            return None
        return key.type

    def __repr__(self) -> str:
        return f"RecordType({self.id!r}, fields={[f.name for f in self]})"
