#!/usr/bin/env python3

from typing import Any

from pydantic import BaseModel

# Pydantic Models


class FieldSchema(BaseModel):
    """Serializable description of a record field."""
    name: str
    type: str  # primitive name, or record type id for nested composites
    composite: bool = False
    minOccurs: int = 1
    maxOccurs: int = 1  # 0 = unbounded
    primaryKey: bool = False
    foreignKey: str | None = None  # '<recordTypeId>:<keyField>'
    comment: str | None = None
    format: str | None = None
    aggregate: str | None = None
    timezone: str | None = None
    properties: dict[str, Any] = {}


class RecordTypeSchema(BaseModel):
    """Serializable description of a record type."""
    id: str
    name: str
    namespace: str
    superType: str | None = None
    collectionName: str | None = None
    hidden: bool = False
    duplicate: str | None = None
    fields: list[FieldSchema] = []


class NamespaceSchema(BaseModel):
    namespace: str
    types: list[RecordTypeSchema] = []


class RegistrySnapshot(BaseModel):
    """Everything a registry exposes, in a comparable and dumpable form."""
    registryId: str | None = None
    namespaces: list[NamespaceSchema] = []
    summary: dict[str, int] = {}  # 'namespaces', 'types', 'fields'
