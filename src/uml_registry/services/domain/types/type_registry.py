#!/usr/bin/env python3
"""In-memory storage of defined types, indexed by namespace and name."""

import logging
from collections import defaultdict
from typing import Optional

from ....core.exceptions import DuplicateTypeError
from .primitives import PrimitiveType
from .structures import Field, RecordType

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Stores complex types (record types), simple types and root elements."""

    def __init__(self):
        self._complex_types: dict[str, dict[str, RecordType]] = defaultdict(dict)
        self._simple_types: dict[str, dict[str, PrimitiveType]] = defaultdict(dict)
        self._elements: dict[str, dict[str, Field]] = defaultdict(dict)
        self._by_id: dict[str, RecordType] = {}

    def register(self, record_type: RecordType) -> None:
        """Register a record type.

        Raises:
            DuplicateTypeError: If a record type with the same id or the same
                namespace and name is already registered
        """
        if record_type.id in self._by_id:
            raise DuplicateTypeError(f"Type already registered: {record_type.id}")
        if record_type.name in self._complex_types[record_type.namespace]:
            raise DuplicateTypeError(
                f"Type {record_type.name} already registered in namespace {record_type.namespace}"
            )
        self._complex_types[record_type.namespace][record_type.name] = record_type
        self._by_id[record_type.id] = record_type
        logger.debug(f"Registered {record_type.id} in namespace {record_type.namespace}")

    def register_simple_type(self, namespace: str, simple_type: PrimitiveType) -> None:
        """Register a named simple type. The XMI loader never calls this, it only declares record types."""
        self._simple_types[namespace][simple_type.name] = simple_type

    def register_element(self, namespace: str, element: Field) -> None:
        """Register a root element. Like simple types, these stay empty unless a caller adds them."""
        self._elements[namespace][element.name] = element

    def get_by_id(self, type_id: str) -> Optional[RecordType]:
        return self._by_id.get(type_id)

    def get_complex_type(self, namespace: str, name: str) -> Optional[RecordType]:
        return self._complex_types.get(namespace, {}).get(name)

    def get_simple_type(self, namespace: str, name: str) -> Optional[PrimitiveType]:
        return self._simple_types.get(namespace, {}).get(name)

    def get_element(self, namespace: str, name: str) -> Optional[Field]:
        return self._elements.get(namespace, {}).get(name)

    def get_namespaces(self) -> set[str]:
        namespaces = set()
        for index in (self._complex_types, self._simple_types, self._elements):
            namespaces.update(ns for ns, entries in index.items() if entries)
        return namespaces

    def get_complex_types(self, namespace: str) -> list[RecordType]:
        return list(self._complex_types.get(namespace, {}).values())

    def get_simple_types(self, namespace: str) -> list[PrimitiveType]:
        return list(self._simple_types.get(namespace, {}).values())

    def get_elements(self, namespace: str) -> list[Field]:
        return list(self._elements.get(namespace, {}).values())
