#!/usr/bin/env python3
"""Tag definition and data type indexing.

Both indexes are built over every model of a load call before any class is
looked at, because classes may use tags and data types declared by any model.
"""

import logging

from ..types.primitives import SimpleTypeWrapper, get_native_schema_type
from ..types.properties import PropertyCatalog
from .context import (
    COLLECTION_NAME_TAG,
    DOCUMENTATION_TAG,
    IGNORE_EXTENSIONS_TAG,
    USE_EXTENSIONS_TAG,
    ResolutionContext,
)
from .document import XMI_ID, ModelScope, owned

logger = logging.getLogger(__name__)


def index_tags(models: list[ModelScope], context: ResolutionContext, catalog: PropertyCatalog) -> int:
    """Record reserved tag ids and bind all other tags to catalog properties.

    Args:
        models: Models and packages of the load call
        context: Resolution context to fill
        catalog: Property catalog used to look up non-reserved tag names

    Returns:
        Number of tag definitions bound to a property
    """
    bound = 0
    for model in models:
        for tag in owned(model.element, "TagDefinition"):
            tag_id = tag.get(XMI_ID)
            name = tag.get("name")
            if not tag_id:
                logger.warning(f"Tag definition {name} has no xmi.id, skipping")
                continue

            if name == USE_EXTENSIONS_TAG:
                context.use_extensions_tags.add(tag_id)
            elif name == COLLECTION_NAME_TAG:
                context.collection_name_tags.add(tag_id)
            elif name == IGNORE_EXTENSIONS_TAG:
                context.ignore_extensions_tags.add(tag_id)
            elif name == DOCUMENTATION_TAG:
                context.documentation_tags.add(tag_id)
            else:
                prop = catalog.get_property(name)
                if prop is not None:
                    context.properties[tag_id] = prop
                    bound += 1
                else:
                    logger.warning(f"Unknown tag: {name}")

    logger.debug(f"Bound {bound} tag definitions to properties")
    return bound


def index_datatypes(models: list[ModelScope], context: ResolutionContext, wrapper: SimpleTypeWrapper) -> int:
    """Map DataType ids to primitive types.

    The XML Schema name is tried first, then the wrapper's language-level names.
    Unknown data types are left out; attributes using them become text fields.

    Returns:
        Number of data types resolved
    """
    resolved = 0
    for model in models:
        for data_type in owned(model.element, "DataType"):
            type_id = data_type.get(XMI_ID)
            name = data_type.get("name")
            primitive = get_native_schema_type(name) or wrapper.get_by_name(name)
            if primitive is None:
                logger.warning(f"Unknown simple type: {name}")
                continue
            if not type_id:
                logger.warning(f"Data type {name} has no xmi.id, skipping")
                continue
            context.types[type_id] = primitive
            context.datatype_names[type_id] = name
            resolved += 1

    logger.debug(f"Resolved {resolved} data types")
    return resolved
