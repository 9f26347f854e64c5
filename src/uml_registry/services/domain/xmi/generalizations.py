#!/usr/bin/env python3
"""Generalization resolution.

A UML generalization becomes one of three things on the child record:

- ignore extensions: the super class is tagged ``ignoreExtensions``; the
  child's own ``id`` becomes a foreign key to the super type.
- true inheritance: extensions are on globally, or the super class is tagged
  ``useExtensions``; the child gets the super type and drops the database
  fields it now inherits.
- has-a (default): the child gets a ``<superName>Id`` foreign key field.
"""

import logging
from typing import Optional

from ..types.structures import Field, RecordType
from .context import LoadSession, lower_camel
from .document import ModelScope, get_reference, owned
from .type_resolvers import LocalTypeResolver, Resolution, resolve_first

logger = logging.getLogger(__name__)

IGNORE_EXTENSIONS = "ignore_extensions"
EXTENSION = "extension"
REFERENCE = "reference"


def resolve_generalizations(models: list[ModelScope], session: LoadSession) -> dict[str, int]:
    """Apply every generalization of the given models.

    Returns:
        Count of applied generalizations per strategy
    """
    counts = {IGNORE_EXTENSIONS: 0, EXTENSION: 0, REFERENCE: 0}
    for model in models:
        for generalization in owned(model.element, "Generalization"):
            super_id = get_reference(generalization, "uml:Generalization.parent/uml:Class")
            child_id = get_reference(generalization, "uml:Generalization.child/uml:Class")

            if session.config.inverse_parent_child_relationship:
                super_id, child_id = child_id, super_id

            if super_id is None or child_id is None:
                logger.error(f"Can not implement generalization from {super_id} to {child_id}")
                continue

            strategy = apply_generalization(super_id, child_id, session)
            if strategy is not None:
                counts[strategy] += 1

    logger.info(f"Resolved generalizations: {counts}")
    return counts


def apply_generalization(super_id: str, child_id: str, session: LoadSession) -> Optional[str]:
    """Apply one generalization edge.

    Returns:
        The strategy applied, or None if either side could not be resolved
    """
    local = LocalTypeResolver(session.context)
    super_resolution = resolve_first([local, *session.imports], super_id)
    child_resolution = local.resolve(child_id)

    super_type = super_resolution.type if super_resolution is not None else None
    child_type = child_resolution.type if child_resolution is not None else None
    if not isinstance(super_type, RecordType) or not isinstance(child_type, RecordType):
        logger.error(f"Can not resolve {super_id} or {child_id}: {super_type} / {child_type}")
        return None

    config = session.config
    # flags follow the registry that declared the super type
    if not config.use_extensions and super_resolution.ignore_extensions.get(super_id, False):
        _reference_through_id(super_type, child_type)
        return IGNORE_EXTENSIONS

    if config.use_extensions or super_resolution.use_extensions.get(super_id, False):
        _extend(super_type, child_type, session)
        return EXTENSION

    _reference(super_type, child_type, session)
    return REFERENCE


def _reference_through_id(super_type: RecordType, child_type: RecordType) -> None:
    key = child_type.get("id")
    if key is None:
        logger.warning(f"{child_type.id} has no id field to reference {super_type.id} with")
        return
    key.foreign_key = f"{super_type.id}:id"


def _extend(super_type: RecordType, child_type: RecordType, session: LoadSession) -> None:
    config = session.config
    if child_type is super_type or _inherits_from(super_type, child_type):
        logger.error(f"Ignoring cyclic generalization between {child_type.id} and {super_type.id}")
        return

    if config.add_database_fields:
        # inherited from the super type; storage layers copy them back at write time
        for name in config.duplicate_fields:
            child_type.remove(name)
        child_type.duplicate = ",".join(config.duplicate_fields)
    child_type.super_type = super_type


def _reference(super_type: RecordType, child_type: RecordType, session: LoadSession) -> None:
    child = Field(
        name=lower_camel(super_type.name) + "Id",
        type=session.key_type_of(super_type),
        foreign_key=f"{super_type.id}:id",
    )
    session.add_field(child_type, child)


def _inherits_from(record: RecordType, ancestor: RecordType) -> bool:
    seen = []
    current = record.super_type
    while current is not None and current not in seen:
        if current is ancestor:
            return True
        seen.append(current)
        current = current.super_type
    return False
