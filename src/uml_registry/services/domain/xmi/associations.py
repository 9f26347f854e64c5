#!/usr/bin/env python3
"""Association resolution.

Only binary one-to-one and one-to-many associations are supported. The
reference always lives on the "many" side (or on the first end when neither
side is many), so it is singular: at most optional, never a list.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from xml.etree.ElementTree import Element

from ..types.structures import Field, RecordType
from .context import LoadSession, lower_camel
from .document import NAMESPACES, ModelScope, get_multiplicity_range, get_reference, owned, parse_bound
from .type_resolvers import LocalTypeResolver, resolve_first

logger = logging.getLogger(__name__)

NO_AGGREGATION = "none"


@dataclass
class AssociationEnd:
    """One side of a binary association."""
    participant: Optional[RecordType]
    participant_id: Optional[str]
    min_occurs: Optional[int]
    max_occurs: Optional[int]               # 0 = unbounded
    aggregate: Optional[str]

    @property
    def is_many(self) -> bool:
        return self.max_occurs is not None and self.max_occurs != 1


def resolve_associations(models: list[ModelScope], session: LoadSession) -> int:
    """Add a field for every supported association of the given models.

    Returns:
        Number of fields added
    """
    added = 0
    for model in models:
        for association in owned(model.element, "Association"):
            if apply_association(association, session):
                added += 1

    logger.info(f"Resolved {added} associations")
    return added


def apply_association(association: Element, session: LoadSession) -> bool:
    """Turn one association into a field.

    Returns:
        True if a field was added
    """
    name = association.get("name")
    if name is not None and not name.strip():
        name = None

    end_elements = association.findall("uml:Association.connection/uml:AssociationEnd", NAMESPACES)
    if len(end_elements) != 2:
        logger.error(f"Can not process association with {len(end_elements)} elements, expecting 2")
        return False

    source, target = (read_end(end, session) for end in end_elements)

    if source.is_many and target.is_many:
        logger.error(f"Can not yet model many to many relations: {source.max_occurs} - {target.max_occurs}")
        return False

    if source.participant is None or target.participant is None:
        logger.error(
            f"Could not process association because either from or to could not be found: "
            f"{source.participant_id} / {target.participant_id}"
        )
        return False

    config = session.config
    if config.generate_flat_documents or (config.force_one_to_many_in_non_flat and target.is_many):
        if target.is_many:
            # one to many: the many side references the one side
            holder, referenced = target, source
        else:
            holder, referenced = source, target
        child = _foreign_key_field(name, referenced, session)
    else:
        holder = source
        child = _composite_field(name, target)

    return session.add_field(holder.participant, child)


def read_end(end: Element, session: LoadSession) -> AssociationEnd:
    """Read participant, multiplicity and aggregation of an association end."""
    multiplicity = get_multiplicity_range(end, "AssociationEnd.multiplicity")
    min_occurs = max_occurs = None
    if multiplicity is not None:
        min_occurs = parse_bound(multiplicity.get("lower"), "lower")
        if min_occurs == -1:
            min_occurs = None
        max_occurs = parse_bound(multiplicity.get("upper"), "upper")
        if max_occurs == -1:
            max_occurs = 0

    aggregate = end.get("aggregation")
    if aggregate is not None and (not aggregate.strip() or aggregate.lower() == NO_AGGREGATION):
        aggregate = None

    participant_id = get_reference(end, "uml:AssociationEnd.participant/uml:Class")
    resolution = resolve_first([LocalTypeResolver(session.context), *session.imports], participant_id)
    participant = resolution.type if resolution is not None else None
    if participant is not None and not isinstance(participant, RecordType):
        logger.warning(f"Association participant {participant_id} is not a class")
        participant = None

    return AssociationEnd(
        participant=participant,
        participant_id=participant_id,
        min_occurs=min_occurs,
        max_occurs=max_occurs,
        aggregate=aggregate,
    )


def _foreign_key_field(name: Optional[str], referenced: AssociationEnd, session: LoadSession) -> Field:
    target = referenced.participant
    child = Field(
        name=(name or lower_camel(target.name)) + "Id",
        type=session.key_type_of(target),
        foreign_key=f"{target.id}:id",
        aggregate=referenced.aggregate,
    )
    if referenced.min_occurs is not None and referenced.min_occurs != 1:
        child.min_occurs = referenced.min_occurs
    return child


def _composite_field(name: Optional[str], referenced: AssociationEnd) -> Field:
    target = referenced.participant
    child = Field(
        name=name + "Id" if name else lower_camel(target.name),
        type=target,
        aggregate=referenced.aggregate,
    )
    if referenced.min_occurs is not None and referenced.min_occurs != 1:
        child.min_occurs = referenced.min_occurs
    if referenced.max_occurs is not None and referenced.max_occurs != 1:
        child.max_occurs = referenced.max_occurs
    return child
