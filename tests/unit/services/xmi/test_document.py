#!/usr/bin/env python3
"""Unit tests for XMI document access helpers."""

import pytest

from tests.fixtures.xmi_fixtures import (
    attribute,
    model,
    package,
    tagged_value,
    uml_class,
    xmi_document,
)
from uml_registry.core.exceptions import XMIParseError
from uml_registry.services.domain.xmi.document import (
    find_models,
    fragment_of,
    get_href,
    get_idref,
    get_multiplicity_range,
    get_reference,
    get_tagged_values,
    owned,
    parse_bound,
    parse_document,
    resolve_href,
)


@pytest.mark.unit
class TestParseDocument:
    """Test suite for parse_document."""

    def test_parses_bytes_and_keeps_uri(self):
        document = parse_document(xmi_document(model("shop")).encode("utf-8"), "file:///models/shop.xmi")

        assert document.root.tag == "XMI"
        assert document.uri == "file:///models/shop.xmi"

    def test_malformed_content(self):
        with pytest.raises(XMIParseError, match="at file:///broken.xmi"):
            parse_document(b"<XMI><unclosed></XMI>", "file:///broken.xmi")

    def test_rejects_entity_declarations(self):
        content = (
            b'<?xml version="1.0"?>'
            b'<!DOCTYPE XMI [<!ENTITY boom "boom">]>'
            b"<XMI>&boom;</XMI>"
        )

        with pytest.raises(XMIParseError):
            parse_document(content)


@pytest.mark.unit
class TestFindModels:
    """Test suite for find_models."""

    def test_models_then_nested_packages(self):
        content = xmi_document(
            model(
                "shop",
                uml_class("c-1", "Customer"),
                package("billing", package("tax", xmi_id="p-2"), xmi_id="p-1"),
                namespace="http://example.com/shop",
            )
        )

        models = find_models(parse_document(content, "file:///shop.xmi"))

        assert [scope.name for scope in models] == ["shop", "billing", "tax"]
        assert models[0].namespace == "http://example.com/shop"
        assert models[1].namespace is None
        assert all(scope.base_uri == "file:///shop.xmi" for scope in models)

    def test_document_without_models(self):
        assert find_models(parse_document("<XMI/>")) == []

    def test_owned_only_returns_direct_children(self):
        content = xmi_document(model("shop", uml_class("c-1", "Customer"), package("inner", uml_class("c-2", "Nested"), xmi_id="p-1")))
        scope = find_models(parse_document(content))[0]

        assert [clazz.get("name") for clazz in owned(scope.element, "Class")] == ["Customer"]


@pytest.mark.unit
class TestReferences:
    """Test suite for id and href helpers."""

    def test_fragment_of(self):
        assert fragment_of("http://argouml.org/profiles/uml14/default-uml14.xmi#-84-17") == "-84-17"
        assert fragment_of("other.xmi") is None
        assert fragment_of("  ") is None
        assert fragment_of(None) is None

    def test_resolve_href_against_base(self):
        assert resolve_href("core.xmi#c-1", "file:///models/shop.xmi") == "file:///models/core.xmi#c-1"
        assert resolve_href("http://example.com/a.xmi#x", "file:///models/shop.xmi") == "http://example.com/a.xmi#x"
        assert resolve_href(" core.xmi#c-1 ", None) == "core.xmi#c-1"

    def test_idref_and_href(self):
        content = xmi_document(model(
            "shop",
            uml_class("c-1", "Customer", attributes=(
                attribute("name", type_id="dt-string"),
                attribute("address", type_href="core.xmi#c-address", type_kind="Class"),
            )),
        ))
        clazz = owned(find_models(parse_document(content))[0].element, "Class")[0]
        name_attr, address_attr = clazz.findall(
            "{org.omg.xmi.namespace.UML}Classifier.feature/{org.omg.xmi.namespace.UML}Attribute"
        )

        assert get_idref(name_attr, "uml:StructuralFeature.type/uml:DataType") == "dt-string"
        assert get_href(name_attr, "uml:StructuralFeature.type/uml:DataType") is None
        assert get_href(address_attr, "uml:StructuralFeature.type/uml:Class") == "core.xmi#c-address"
        assert get_reference(address_attr, "uml:StructuralFeature.type/uml:Class") == "c-address"
        assert get_reference(address_attr, "uml:StructuralFeature.type/uml:DataType") is None

    def test_tagged_values(self):
        content = xmi_document(model(
            "shop",
            uml_class("c-1", "Customer", tagged_values=(
                tagged_value("tag-collection", "customers"),
                tagged_value("tag-remote", "x", href="profile.xmi"),
                tagged_value("tag-empty", None),
            )),
        ))
        clazz = owned(find_models(parse_document(content))[0].element, "Class")[0]

        assert get_tagged_values(clazz) == [
            ("tag-collection", "customers"),
            ("tag-remote", "x"),
            ("tag-empty", None),
        ]


@pytest.mark.unit
class TestMultiplicity:
    """Test suite for multiplicity helpers."""

    def test_multiplicity_range(self):
        content = xmi_document(model("shop", uml_class("c-1", "Customer", attributes=(
            attribute("tags", type_id="dt-string", lower="0", upper="-1"),
            attribute("name", type_id="dt-string"),
        ))))
        clazz = owned(find_models(parse_document(content))[0].element, "Class")[0]
        tags_attr, name_attr = clazz.findall(
            "{org.omg.xmi.namespace.UML}Classifier.feature/{org.omg.xmi.namespace.UML}Attribute"
        )

        multiplicity = get_multiplicity_range(tags_attr, "StructuralFeature.multiplicity")

        assert multiplicity.get("lower") == "0"
        assert multiplicity.get("upper") == "-1"
        assert get_multiplicity_range(name_attr, "StructuralFeature.multiplicity") is None

    def test_parse_bound(self, caplog):
        assert parse_bound("3", "upper") == 3
        assert parse_bound(" -1 ", "upper") == -1
        assert parse_bound(None, "lower") is None
        assert parse_bound("", "lower") is None
        assert parse_bound("many", "upper") is None
        assert "Ignoring malformed multiplicity upper" in caplog.text
