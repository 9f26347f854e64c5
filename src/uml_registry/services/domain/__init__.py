"""
Domain Layer

This package contains business logic organized by domain area.
Domain services implement core algorithms and workflows but should not
directly handle external I/O (use clients layer for that).

Domains:
- types: primitive types, properties, record types and their storage
- xmi: UML/XMI class diagram loading into record types
"""
