#!/usr/bin/env python3
"""UML registry: record types generated from XMI class diagrams.

Loading runs a fixed sequence of stages over all models of the given
documents:

    tags -> data types -> record shells -> attributes -> generalizations -> associations

Each stage only reads what earlier stages built. Attribute resolution may load
a referenced document, which runs the whole sequence for that document before
the attribute continues.

A registry instance is not safe for concurrent loads. Repeated loads are
additive, but a type referenced by an earlier load is not patched when a later
load declares it.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union
from xml.etree.ElementTree import Element

from ....clients.resource_resolver import ResourceResolver, URLResourceResolver
from ....core.config import RegistryConfig
from ....models.models import FieldSchema, NamespaceSchema, RecordTypeSchema, RegistrySnapshot
from ..types.primitives import PrimitiveType, get_wrapper
from ..types.properties import PropertyCatalog, get_property_catalog
from ..types.structures import Field, RecordType
from ..types.type_registry import TypeRegistry
from .associations import resolve_associations
from .attributes import resolve_attributes
from .context import LoadSession, ResolutionContext, ResolvedType
from .document import XMIDocument, find_models, parse_document
from .generalizations import resolve_generalizations
from .references import ExternalReferenceLoader
from .shells import declare_record_shells
from .tags import index_datatypes, index_tags
from .type_resolvers import ImportedTypeResolver

logger = logging.getLogger(__name__)


class UMLRegistry:
    """Registry of record types loaded from UML class diagrams.

    Args:
        registry_id: Prefix for generated type ids and default namespaces
        config: Loader switches, defaults to RegistryConfig()
        imports: Registries consulted, in order, for types not declared locally
        resource_resolver: Fetches documents referenced by href
        property_catalog: Properties tagged values may set
    """

    def __init__(
        self,
        registry_id: Optional[str] = None,
        config: Optional[RegistryConfig] = None,
        imports: Optional[Iterable[Any]] = None,
        resource_resolver: Optional[ResourceResolver] = None,
        property_catalog: Optional[PropertyCatalog] = None,
    ):
        self._id = registry_id
        self._config = config or RegistryConfig()
        self._imports = list(imports or [])
        self._storage = TypeRegistry()
        self._context = ResolutionContext()
        self._catalog = property_catalog or get_property_catalog()
        self._references = ExternalReferenceLoader(
            resource_resolver or URLResourceResolver(),
            self._context.visited_uris,
            self._load_document,
        )

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def context(self) -> ResolutionContext:
        return self._context

    @property
    def imports(self) -> list[Any]:
        return list(self._imports)

    @property
    def resource_resolver(self) -> ResourceResolver:
        return self._references.resource_resolver

    def _session(self) -> LoadSession:
        return LoadSession(
            registry_id=self._id,
            config=self._config,
            context=self._context,
            storage=self._storage,
            imports=[ImportedTypeResolver(imported) for imported in self._imports],
            references=self._references,
        )

    # Loading ----------------------------------------------------------------

    def load(self, *documents: Union[XMIDocument, Element]) -> None:
        """Load parsed documents into the registry.

        Raises:
            PropertyConversionError: If a tagged value does not convert to its property type
        """
        parsed = [doc if isinstance(doc, XMIDocument) else XMIDocument(root=doc) for doc in documents]
        for document in parsed:
            if document.uri:
                self._references.mark_visited(document.uri)
        self._run_stages(parsed)

    def load_bytes(self, data: bytes | str, uri: Optional[str] = None) -> None:
        """Parse and load one document.

        Args:
            data: XMI content
            uri: Where the content came from; relative hrefs resolve against it

        Raises:
            XMIParseError: If the content is not well-formed XML
            PropertyConversionError: If a tagged value does not convert to its property type
        """
        self.load(parse_document(data, uri))

    def load_file(self, path: str | Path) -> None:
        """Parse and load a document from disk."""
        path = Path(path)
        self.load_bytes(path.read_bytes(), path.resolve().as_uri())

    def load_uri(self, uri: str) -> bool:
        """Load a document through the resource resolver, unless already attempted.

        Fetch and parse failures are logged, as for any referenced document.

        Returns:
            True if the document was fetched and loaded
        """
        return self._references.load(uri)

    def _load_document(self, document: XMIDocument) -> None:
        self._run_stages([document])

    def _run_stages(self, documents: list[XMIDocument]) -> None:
        models = [model for document in documents for model in find_models(document)]
        if not models:
            logger.warning("No UML models found in documents", extra={"registry_id": self._id})
            return

        logger.info(f"Loading {len(models)} models", extra={"registry_id": self._id})
        session = self._session()

        index_tags(models, session.context, self._catalog)
        index_datatypes(models, session.context, get_wrapper())
        declared = declare_record_shells(models, session)
        resolve_attributes(declared, session)
        resolve_generalizations(models, session)
        resolve_associations(models, session)

    # Lookup -----------------------------------------------------------------

    def get_type_by_id(self, type_id: str) -> Optional[ResolvedType]:
        """Look up a type by xmi id, then by record type id."""
        resolved = self._context.types.get(type_id)
        if resolved is not None:
            return resolved
        return self._storage.get_by_id(type_id)

    def get_simple_type(self, namespace: str, name: str) -> Optional[PrimitiveType]:
        return self._storage.get_simple_type(namespace, name)

    def get_complex_type(self, namespace: str, name: str) -> Optional[RecordType]:
        return self._storage.get_complex_type(namespace, name)

    def get_element(self, namespace: str, name: str) -> Optional[Field]:
        return self._storage.get_element(namespace, name)

    def get_namespaces(self) -> set[str]:
        return self._storage.get_namespaces()

    def get_simple_types(self, namespace: str) -> list[PrimitiveType]:
        """Simple types registered by the caller; loading XMI adds none."""
        return self._storage.get_simple_types(namespace)

    def get_complex_types(self, namespace: str) -> list[RecordType]:
        return self._storage.get_complex_types(namespace)

    def get_elements(self, namespace: str) -> list[Field]:
        """Root elements registered by the caller; loading XMI adds none."""
        return self._storage.get_elements(namespace)

    # Export -----------------------------------------------------------------

    def snapshot(self) -> RegistrySnapshot:
        """Describe all namespaces, record types and fields."""
        namespaces = []
        type_count = field_count = 0
        for namespace in sorted(self.get_namespaces()):
            types = [_record_schema(record) for record in self.get_complex_types(namespace)]
            type_count += len(types)
            field_count += sum(len(record.fields) for record in types)
            namespaces.append(NamespaceSchema(namespace=namespace, types=types))

        return RegistrySnapshot(
            registryId=self._id,
            namespaces=namespaces,
            summary={"namespaces": len(namespaces), "types": type_count, "fields": field_count},
        )

    def __repr__(self) -> str:
        return f"UMLRegistry({self._id!r})"


def _record_schema(record: RecordType) -> RecordTypeSchema:
    return RecordTypeSchema(
        id=record.id,
        name=record.name,
        namespace=record.namespace,
        superType=record.super_type.id if record.super_type is not None else None,
        collectionName=record.collection_name,
        hidden=record.hidden,
        duplicate=record.duplicate,
        fields=[_field_schema(child) for child in record],
    )


def _field_schema(child: Field) -> FieldSchema:
    return FieldSchema(
        name=child.name,
        type=child.type_name,
        composite=child.is_composite,
        minOccurs=child.min_occurs,
        maxOccurs=child.max_occurs,
        primaryKey=child.primary_key,
        foreignKey=child.foreign_key,
        comment=child.comment,
        format=child.format,
        aggregate=child.aggregate,
        timezone=child.timezone,
        properties=dict(child.properties),
    )
