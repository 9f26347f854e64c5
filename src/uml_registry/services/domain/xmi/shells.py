#!/usr/bin/env python3
"""Record shell declaration.

Every class gets its record type declared and registered before any attribute
is read, so attributes may reference any class of the load call regardless of
document order.
"""

import logging
from dataclasses import dataclass
from xml.etree.ElementTree import Element

from ....core.exceptions import DuplicateTypeError
from ..types.primitives import DATE_TIME
from ..types.structures import Field, RecordType
from .context import COLLECTION_NAME_TAG, IGNORE_EXTENSIONS_TAG, USE_EXTENSIONS_TAG, LoadSession
from .document import XMI_ID, ModelScope, get_tagged_values, owned

logger = logging.getLogger(__name__)

UTC = "UTC"


@dataclass
class DeclaredClass:
    """A class element and the record type declared for it."""
    element: Element
    record: RecordType
    model: ModelScope


def declare_record_shells(models: list[ModelScope], session: LoadSession) -> list[DeclaredClass]:
    """Declare and register one record type per class.

    Classes whose xmi id or record id is already known (e.g. a document loaded
    twice) are skipped with a warning.

    Returns:
        The classes declared by this call, in document order
    """
    declared = []
    for model in models:
        namespace = model.namespace or session.qualify(model.name)

        for clazz in owned(model.element, "Class"):
            class_id = clazz.get(XMI_ID)
            name = clazz.get("name")
            if not class_id or not name:
                logger.warning(f"Skipping class without xmi.id or name in model {model.name}: {class_id}/{name}")
                continue

            if class_id in session.context.types:
                logger.warning(f"Class {name} ({class_id}) is already declared, skipping")
                continue

            record = RecordType(id=session.qualify(model.name, name), name=name, namespace=namespace)
            try:
                session.storage.register(record)
            except DuplicateTypeError as e:
                logger.warning(f"Skipping class {name} ({class_id}): {e}")
                continue

            session.context.types[class_id] = record
            _apply_class_tags(clazz, class_id, record, session)
            if session.config.add_database_fields:
                _add_database_fields(record, session)

            declared.append(DeclaredClass(element=clazz, record=record, model=model))

    logger.info(f"Declared {len(declared)} record types")
    return declared


def _apply_class_tags(clazz: Element, class_id: str, record: RecordType, session: LoadSession) -> None:
    context = session.context
    has_collection_name = False

    for tag_id, value in get_tagged_values(clazz):
        reserved = context.reserved_tag(tag_id)
        if reserved == USE_EXTENSIONS_TAG:
            flag = value == "true"
            context.use_extensions[class_id] = flag
            if flag:
                record.hidden = True
        elif reserved == IGNORE_EXTENSIONS_TAG:
            context.ignore_extensions[class_id] = value == "true"
        elif reserved == COLLECTION_NAME_TAG:
            record.collection_name = value
            has_collection_name = True

    if not has_collection_name and session.config.generate_collection_names and not record.hidden:
        record.collection_name = record.name + "s"


def _add_database_fields(record: RecordType, session: LoadSession) -> None:
    config = session.config
    record.add(Field(name="id", type=session.id_type, primary_key=True))
    if config.created_field is not None:
        session.add_field(record, Field(name=config.created_field, type=DATE_TIME, timezone=UTC))
    if config.modified_field is not None:
        session.add_field(record, Field(name=config.modified_field, type=DATE_TIME, timezone=UTC))
