#!/usr/bin/env python3
"""XMI 1.x document access.

UML 1.x exports (ArgoUML and compatible tools) put all model elements in the
``org.omg.xmi.namespace.UML`` namespace while identifiers live in the plain
``xmi.id`` / ``xmi.idref`` attributes. References to elements of another
document use an ``href`` whose fragment is the target's ``xmi.id``, e.g.
``http://argouml.org/profiles/uml14/default-uml14.xmi#-84-17--56-5-43645a83:11466542d86:-8000:000000000000087C``.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urldefrag, urljoin
from xml.etree.ElementTree import Element, ParseError

# Use defusedxml for secure XML parsing (prevents XXE attacks)
import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from ....core.exceptions import XMIParseError

logger = logging.getLogger(__name__)

UML_NS = "org.omg.xmi.namespace.UML"
UML = f"{{{UML_NS}}}"

NAMESPACES = {
    'uml': UML_NS
}

XMI_ID = "xmi.id"
XMI_IDREF = "xmi.idref"

MULTIPLICITY_RANGE = "uml:Multiplicity/uml:Multiplicity.range/uml:MultiplicityRange"


@dataclass
class XMIDocument:
    """A parsed XMI document and the URI it was read from, if any."""
    root: Element
    uri: Optional[str] = None


@dataclass
class ModelScope:
    """A Model or Package element whose owned elements are loaded together."""
    element: Element
    name: Optional[str]
    namespace: Optional[str]
    base_uri: Optional[str]


def parse_document(data: bytes | str, uri: Optional[str] = None) -> XMIDocument:
    """Parse XMI content.

    Args:
        data: Raw document content
        uri: Location the content was read from, used to resolve relative hrefs

    Returns:
        Parsed document

    Raises:
        XMIParseError: If the content is not well-formed or uses forbidden
            XML constructs (external entities, DTD tricks)
    """
    try:
        root = ET.fromstring(data)
    except (ParseError, DefusedXmlException) as e:
        raise XMIParseError(f"Invalid XMI{f' at {uri}' if uri else ''}: {e}") from e
    return XMIDocument(root=root, uri=uri)


def find_models(document: XMIDocument) -> list[ModelScope]:
    """Collect all Model elements and their (nested) Packages.

    Models are returned first in document order, followed by packages, so that
    a caller walking the list sees containers before their contents.
    """
    root = document.root
    models = list(root.iter(f"{UML}Model"))

    packages: list[Element] = []
    pending = list(models)
    while pending:
        container = pending.pop(0)
        for package in owned(container, "Package"):
            packages.append(package)
            pending.append(package)

    return [
        ModelScope(
            element=element,
            name=element.get("name"),
            namespace=element.get("namespace"),
            base_uri=document.uri,
        )
        for element in models + packages
    ]


def owned(container: Element, tag: str) -> list[Element]:
    """Direct owned elements of a Model or Package with the given UML tag."""
    return container.findall(f"uml:Namespace.ownedElement/uml:{tag}", NAMESPACES)


def fragment_of(href: Optional[str]) -> Optional[str]:
    """The fragment of an href (the referenced xmi.id), or None."""
    if not href or not href.strip():
        return None
    _, fragment = urldefrag(href.strip())
    return fragment or None


def resolve_href(href: str, base_uri: Optional[str]) -> str:
    """Make an href absolute against the URI of the document containing it."""
    href = href.strip()
    if base_uri:
        return urljoin(base_uri, href)
    return href


def get_idref(element: Element, path: str) -> Optional[str]:
    """The ``xmi.idref`` of the element at path, or None."""
    target = element.find(path, NAMESPACES)
    if target is None:
        return None
    idref = target.get(XMI_IDREF)
    return idref if idref and idref.strip() else None


def get_href(element: Element, path: str) -> Optional[str]:
    """The ``href`` of the element at path, or None."""
    target = element.find(path, NAMESPACES)
    if target is None:
        return None
    href = target.get("href")
    return href if href and href.strip() else None


def get_reference(element: Element, path: str) -> Optional[str]:
    """The id referenced by the element at path, either local or via href fragment."""
    return get_idref(element, path) or fragment_of(get_href(element, path))


def get_tagged_values(element: Element) -> list[tuple[Optional[str], Optional[str]]]:
    """(tag definition id, value) pairs of the element's tagged values."""
    tagged_values = []
    for tagged in element.findall("uml:ModelElement.taggedValue/uml:TaggedValue", NAMESPACES):
        value_element = tagged.find("uml:TaggedValue.dataValue", NAMESPACES)
        value = value_element.text if value_element is not None else None
        tag_id = get_reference(tagged, "uml:TaggedValue.type/uml:TagDefinition")
        tagged_values.append((tag_id, value))
    return tagged_values


def get_multiplicity_range(element: Element, feature: str) -> Optional[Element]:
    """The MultiplicityRange element of a StructuralFeature or AssociationEnd.

    Args:
        element: The Attribute or AssociationEnd element
        feature: Multiplicity holder tag, e.g. "StructuralFeature.multiplicity"
    """
    return element.find(f"uml:{feature}/{MULTIPLICITY_RANGE}", NAMESPACES)


def parse_bound(value: Optional[str], label: str) -> Optional[int]:
    """Parse a multiplicity bound, returning None (and logging) for malformed values."""
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.warning(f"Ignoring malformed multiplicity {label}: {value!r}")
        return None
