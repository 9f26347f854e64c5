"""
Client Layer

This package contains low-level client wrappers for external services.
Clients handle communication with external systems but contain no business logic.

Modules:
- resource_resolver: fetch referenced documents over HTTP, from disk or from MinIO/S3
"""

from .resource_resolver import (
    CompositeResourceResolver,
    ResourceResolver,
    S3ResourceResolver,
    URLResourceResolver,
)

__all__ = [
    'ResourceResolver',
    'URLResourceResolver',
    'S3ResourceResolver',
    'CompositeResourceResolver',
]
