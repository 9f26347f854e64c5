"""Test fixtures for registry tests."""

from typing import Optional
from unittest.mock import Mock

from uml_registry.clients.resource_resolver import ResourceResolver
from uml_registry.core.config import RegistryConfig
from uml_registry.core.exceptions import ResourceResolutionError
from uml_registry.services.domain.xmi import UMLRegistry


def create_mock_resource_resolver(documents: Optional[dict[str, str]] = None) -> Mock:
    """
    Create a mock resource resolver serving the given documents.

    Args:
        documents: Document URI (without fragment) to XMI content. URIs not in
                   the mapping raise ResourceResolutionError.

    Returns:
        Mock resource resolver
    """
    documents = documents or {}
    mock = Mock(spec=ResourceResolver)

    def resolve(uri):
        if uri not in documents:
            raise ResourceResolutionError(f"Not found: {uri}")
        return documents[uri].encode("utf-8")

    mock.resolve.side_effect = resolve
    return mock


def create_registry(
    registry_id: Optional[str] = "test",
    imports=None,
    resource_resolver=None,
    **options,
) -> UMLRegistry:
    """
    Create a registry with a mock resource resolver.

    Args:
        registry_id: Registry id
        imports: Imported registries
        resource_resolver: Resolver to use, defaults to an empty mock
        **options: RegistryConfig options

    Returns:
        UMLRegistry instance
    """
    return UMLRegistry(
        registry_id,
        config=RegistryConfig(**options),
        imports=imports,
        resource_resolver=resource_resolver or create_mock_resource_resolver(),
    )


def load_registry(xmi: str, registry_id: Optional[str] = "test", uri: Optional[str] = None, **kwargs) -> UMLRegistry:
    """Create a registry and load one XMI document into it."""
    registry = create_registry(registry_id, **kwargs)
    registry.load_bytes(xmi, uri)
    return registry


def field_names(record) -> list[str]:
    return [child.name for child in record]
