#!/usr/bin/env python3
"""Lookup of xmi ids across the local registry and imported registries.

Models often reference classes from other, already loaded models (a shared
"core" model for instance). Each such registry is wrapped in a resolver and
consulted in the order the imports were declared.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .context import ResolutionContext, ResolvedType

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """A resolved type and where it came from."""
    type: ResolvedType
    declared_name: Optional[str]
    # Context of the registry that declared the type; its tag flags apply to it
    origin: Optional[ResolutionContext]

    @property
    def use_extensions(self) -> dict[str, bool]:
        return self.origin.use_extensions if self.origin is not None else {}

    @property
    def ignore_extensions(self) -> dict[str, bool]:
        return self.origin.ignore_extensions if self.origin is not None else {}


class TypeResolver(ABC):
    """Resolves an xmi id to a type."""

    @abstractmethod
    def resolve(self, type_id: str) -> Optional[Resolution]:
        ...


class LocalTypeResolver(TypeResolver):
    """Resolves ids declared by documents loaded into this registry."""

    def __init__(self, context: ResolutionContext):
        self._context = context

    def resolve(self, type_id: str) -> Optional[Resolution]:
        resolved = self._context.types.get(type_id)
        if resolved is None:
            return None
        return Resolution(resolved, self._context.datatype_names.get(type_id), self._context)


class ImportedTypeResolver(TypeResolver):
    """Resolves ids through a sibling registry.

    Any object with a ``get_type_by_id`` method can be imported. When it also
    exposes a ``context`` (another UML registry), its tag flags and declared
    datatype names are used.
    """

    def __init__(self, registry: Any):
        self._registry = registry

    @property
    def registry(self) -> Any:
        return self._registry

    def resolve(self, type_id: str) -> Optional[Resolution]:
        resolved = self._registry.get_type_by_id(type_id)
        if resolved is None:
            return None
        origin = getattr(self._registry, "context", None)
        declared_name = origin.datatype_names.get(type_id) if origin is not None else None
        return Resolution(resolved, declared_name or resolved.name, origin)


def resolve_first(resolvers: Iterable[TypeResolver], type_id: Optional[str]) -> Optional[Resolution]:
    """Return the first resolution in resolver order."""
    if not type_id:
        return None
    for resolver in resolvers:
        resolution = resolver.resolve(type_id)
        if resolution is not None:
            return resolution
    return None
