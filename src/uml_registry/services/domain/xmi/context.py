#!/usr/bin/env python3
"""State shared by the loading stages.

``ResolutionContext`` holds what the stages learn about xmi ids while loading.
It lives as long as its registry: a later load call sees everything an earlier
one declared, and a document URI that was attempted once is never fetched again.
``LoadSession`` bundles the context with the registry's settings so every stage
takes a single argument besides the models it works on.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from ....core.config import RegistryConfig
from ..types.primitives import LONG, UUID_TYPE, PrimitiveType
from ..types.properties import Property
from ..types.structures import Field, RecordType
from ..types.type_registry import TypeRegistry

if TYPE_CHECKING:
    from .references import ExternalReferenceLoader
    from .type_resolvers import TypeResolver

logger = logging.getLogger(__name__)

ResolvedType = Union[PrimitiveType, RecordType]

# Reserved tag definition names, interpreted by the loader itself
USE_EXTENSIONS_TAG = "useExtensions"
COLLECTION_NAME_TAG = "collectionName"
IGNORE_EXTENSIONS_TAG = "ignoreExtensions"
DOCUMENTATION_TAG = "documentation"


@dataclass
class ResolutionContext:
    """Per-registry resolution state, keyed by xmi id."""
    types: dict[str, ResolvedType] = field(default_factory=dict)
    datatype_names: dict[str, str] = field(default_factory=dict)
    properties: dict[str, Property] = field(default_factory=dict)
    # xmi ids of the reserved tag definitions, one per declaring document
    use_extensions_tags: set[str] = field(default_factory=set)
    collection_name_tags: set[str] = field(default_factory=set)
    ignore_extensions_tags: set[str] = field(default_factory=set)
    documentation_tags: set[str] = field(default_factory=set)
    # class xmi id -> tagged flag value
    use_extensions: dict[str, bool] = field(default_factory=dict)
    ignore_extensions: dict[str, bool] = field(default_factory=dict)
    visited_uris: set[str] = field(default_factory=set)

    def reserved_tag(self, tag_id: Optional[str]) -> Optional[str]:
        """The reserved tag name a tag definition id stands for, if any."""
        if tag_id is None:
            return None
        if tag_id in self.use_extensions_tags:
            return USE_EXTENSIONS_TAG
        if tag_id in self.collection_name_tags:
            return COLLECTION_NAME_TAG
        if tag_id in self.ignore_extensions_tags:
            return IGNORE_EXTENSIONS_TAG
        if tag_id in self.documentation_tags:
            return DOCUMENTATION_TAG
        return None


@dataclass
class LoadSession:
    """Everything a loading stage needs from its registry."""
    registry_id: Optional[str]
    config: RegistryConfig
    context: ResolutionContext
    storage: TypeRegistry
    imports: list["TypeResolver"]
    references: "ExternalReferenceLoader"

    @property
    def id_type(self) -> PrimitiveType:
        """Primitive used for primary and foreign keys."""
        return UUID_TYPE if self.config.uuids else LONG

    def key_type_of(self, record: RecordType) -> PrimitiveType:
        """The primary key type of a record, or the configured key type if it has none."""
        return record.primary_key_type() or self.id_type

    def qualify(self, *parts: Optional[str]) -> str:
        """Join the registry id and the given parts with dots, skipping missing parts."""
        return ".".join(part for part in (self.registry_id, *parts) if part)

    def add_field(self, record: RecordType, child: Field) -> bool:
        """Add a field to a record, logging instead of failing on conflicts."""
        try:
            record.add(child)
        except ValueError as e:
            logger.warning(f"Skipping field {child.name} on {record.id}: {e}")
            return False
        return True


def lower_camel(name: str) -> str:
    """``OrderLine`` -> ``orderLine``."""
    return name[:1].lower() + name[1:]
