#!/usr/bin/env python3
"""Attribute resolution.

Turns the attributes of every declared class into fields. An attribute's type
is found, in order:

1. inline, through the ``xmi.idref`` of its DataType or Class;
2. through an ``href`` into another document: imported registries first, then
   the ids already known locally, then by fetching the document (once);
3. otherwise the attribute becomes a text field.

Attributes never fail on an unresolved type. The one hard failure is a tagged
value that can not be converted to its property's type.
"""

import logging
from typing import Any, Optional
from xml.etree.ElementTree import Element

from ....core.exceptions import PropertyConversionError
from ..types.primitives import DEFAULT_TEMPORAL_NAME, STRING, PrimitiveType
from ..types.properties import COMMENT, FORMAT, MAX_OCCURS, MIN_OCCURS, convert
from ..types.structures import Field, RecordType
from .context import DOCUMENTATION_TAG, LoadSession
from .document import (
    NAMESPACES,
    fragment_of,
    get_href,
    get_idref,
    get_multiplicity_range,
    get_tagged_values,
    parse_bound,
    resolve_href,
)
from .shells import DeclaredClass
from .type_resolvers import LocalTypeResolver, Resolution, resolve_first

logger = logging.getLogger(__name__)

TYPE_PATHS = (
    "uml:StructuralFeature.type/uml:DataType",
    "uml:StructuralFeature.type/uml:Class",
)


def resolve_attributes(declared: list[DeclaredClass], session: LoadSession) -> int:
    """Add a field for every attribute of the declared classes.

    Returns:
        Number of fields added
    """
    added = 0
    for declared_class in declared:
        for attribute in declared_class.element.findall("uml:Classifier.feature/uml:Attribute", NAMESPACES):
            child = build_attribute_field(attribute, declared_class, session)
            if child is not None and session.add_field(declared_class.record, child):
                added += 1

    logger.info(f"Resolved {added} attributes")
    return added


def build_attribute_field(attribute: Element, declared_class: DeclaredClass, session: LoadSession) -> Optional[Field]:
    """Build the field for one attribute element.

    Raises:
        PropertyConversionError: If a tagged value does not convert to its property type
    """
    attribute_name = attribute.get("name")
    if not attribute_name:
        logger.warning(f"Skipping unnamed attribute on {declared_class.record.id}")
        return None

    values = _read_multiplicity(attribute)
    values.update(_read_tagged_values(attribute, attribute_name, session))

    resolution = resolve_attribute_type(attribute, declared_class.model.base_uri, session)
    resolved_type = resolution.type if resolution is not None else STRING
    declared_name = resolution.declared_name if resolution is not None else None

    if isinstance(resolved_type, RecordType):
        if session.config.generate_flat_documents:
            child = Field(name=attribute_name + "Id", type=session.key_type_of(resolved_type))
            child.foreign_key = f"{resolved_type.id}:id"
        else:
            child = Field(name=attribute_name, type=resolved_type)
    else:
        child = Field(name=attribute_name, type=resolved_type)

    for name, value in values.items():
        child.set_property(name, value)

    if child.primary_key and declared_class.record.primary_key_field() is not None:
        logger.warning(
            f"Ignoring primaryKey on {declared_class.record.id}.{attribute_name}, "
            f"the record type already has a primary key"
        )
        child.primary_key = False

    # a temporal type other than the default dateTime keeps its name as format
    if (
        isinstance(resolved_type, PrimitiveType)
        and resolved_type.is_temporal
        and declared_name is not None
        and declared_name != DEFAULT_TEMPORAL_NAME
        and child.format is None
    ):
        child.set_property(FORMAT.name, declared_name)

    return child


def resolve_attribute_type(attribute: Element, base_uri: Optional[str], session: LoadSession) -> Optional[Resolution]:
    """Resolve the type of an attribute, or None if it is unknown everywhere."""
    local = LocalTypeResolver(session.context)

    for path in TYPE_PATHS:
        type_id = get_idref(attribute, path)
        if type_id is not None:
            resolution = local.resolve(type_id)
            if resolution is not None:
                return resolution

    for path in TYPE_PATHS:
        href = get_href(attribute, path)
        if href is not None:
            return resolve_reference(href, base_uri, session)

    return None


def resolve_reference(href: str, base_uri: Optional[str], session: LoadSession) -> Optional[Resolution]:
    """Resolve an href into another document.

    Imported registries are asked first, then the local ids. If neither knows
    the fragment and its document was never attempted, the document is loaded
    and the local lookup retried.
    """
    type_id = fragment_of(href)
    if type_id is None:
        logger.warning(f"Reference without fragment can not identify a type: {href}")
        return None

    local = LocalTypeResolver(session.context)
    resolution = resolve_first([*session.imports, local], type_id)
    if resolution is not None:
        return resolution

    uri = resolve_href(href, base_uri)
    if session.references.load(uri):
        resolution = local.resolve(type_id)
        if resolution is None:
            logger.warning(f"Referenced type {type_id} not found in {uri}", extra={"uri": uri})
        return resolution

    return None


def _read_multiplicity(attribute: Element) -> dict[str, Any]:
    values: dict[str, Any] = {}
    multiplicity = get_multiplicity_range(attribute, "StructuralFeature.multiplicity")
    if multiplicity is None:
        return values

    lower = parse_bound(multiplicity.get("lower"), "lower")
    if lower is not None:
        values[MIN_OCCURS.name] = lower

    upper = parse_bound(multiplicity.get("upper"), "upper")
    if upper is not None:
        values[MAX_OCCURS.name] = 0 if upper == -1 else upper

    return values


def _read_tagged_values(attribute: Element, attribute_name: str, session: LoadSession) -> dict[str, Any]:
    context = session.context
    values: dict[str, Any] = {}

    for tag_id, value in get_tagged_values(attribute):
        if context.reserved_tag(tag_id) == DOCUMENTATION_TAG:
            if value is not None:
                values[COMMENT.name] = value
            continue

        prop = context.properties.get(tag_id) if tag_id is not None else None
        if prop is None or value is None:
            continue

        try:
            values[prop.name] = convert(value, prop.value_type)
        except (ValueError, TypeError, ArithmeticError) as e:
            raise PropertyConversionError(prop.name, attribute_name, value) from e

    return values
