"""Builders for UML 1.x XMI test documents (ArgoUML layout)."""

from typing import Optional

UML_NS = "org.omg.xmi.namespace.UML"


def xmi_document(*models: str) -> str:
    """Wrap model elements in an XMI envelope."""
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<XMI xmi.version="1.2" xmlns:UML="{UML_NS}">
  <XMI.header><XMI.documentation><XMI.exporter>ArgoUML (using Netbeans XMI Writer version 1.0)</XMI.exporter></XMI.documentation></XMI.header>
  <XMI.content>
{"".join(models)}
  </XMI.content>
</XMI>'''


def model(name: Optional[str], *elements: str, xmi_id: str = "model-1", namespace: Optional[str] = None) -> str:
    attrs = f'xmi.id="{xmi_id}"'
    if name is not None:
        attrs += f' name="{name}"'
    if namespace is not None:
        attrs += f' namespace="{namespace}"'
    return f'''
    <UML:Model {attrs}>
      <UML:Namespace.ownedElement>{"".join(elements)}
      </UML:Namespace.ownedElement>
    </UML:Model>'''


def package(name: str, *elements: str, xmi_id: str) -> str:
    return f'''
        <UML:Package xmi.id="{xmi_id}" name="{name}">
          <UML:Namespace.ownedElement>{"".join(elements)}
          </UML:Namespace.ownedElement>
        </UML:Package>'''


def tag_definition(xmi_id: str, name: str) -> str:
    return f'''
        <UML:TagDefinition xmi.id="{xmi_id}" name="{name}" isSpecification="false">
          <UML:TagDefinition.multiplicity>
            <UML:Multiplicity><UML:Multiplicity.range><UML:MultiplicityRange lower="0" upper="1"/></UML:Multiplicity.range></UML:Multiplicity>
          </UML:TagDefinition.multiplicity>
        </UML:TagDefinition>'''


def data_type(xmi_id: str, name: str) -> str:
    return f'''
        <UML:DataType xmi.id="{xmi_id}" name="{name}" isSpecification="false"/>'''


def tagged_value(tag_id: str, value: Optional[str], href: Optional[str] = None) -> str:
    if href is not None:
        definition = f'<UML:TagDefinition href="{href}#{tag_id}"/>'
    else:
        definition = f'<UML:TagDefinition xmi.idref="{tag_id}"/>'
    data = f"<UML:TaggedValue.dataValue>{value}</UML:TaggedValue.dataValue>" if value is not None else ""
    return f'''
            <UML:TaggedValue xmi.id="tv-{tag_id}-{value}" isSpecification="false">
              {data}
              <UML:TaggedValue.type>{definition}</UML:TaggedValue.type>
            </UML:TaggedValue>'''


def _multiplicity(holder: str, lower: Optional[str], upper: Optional[str]) -> str:
    if lower is None and upper is None:
        return ""
    bounds = ""
    if lower is not None:
        bounds += f' lower="{lower}"'
    if upper is not None:
        bounds += f' upper="{upper}"'
    return f'''
              <UML:{holder}>
                <UML:Multiplicity><UML:Multiplicity.range><UML:MultiplicityRange{bounds}/></UML:Multiplicity.range></UML:Multiplicity>
              </UML:{holder}>'''


def attribute(
    name: Optional[str],
    type_id: Optional[str] = None,
    type_href: Optional[str] = None,
    type_kind: str = "DataType",
    lower: Optional[str] = None,
    upper: Optional[str] = None,
    tagged_values: tuple[str, ...] = (),
) -> str:
    name_attr = f' name="{name}"' if name is not None else ""
    if type_id is not None:
        type_ref = f'<UML:{type_kind} xmi.idref="{type_id}"/>'
    elif type_href is not None:
        type_ref = f'<UML:{type_kind} href="{type_href}"/>'
    else:
        type_ref = ""
    tags = f'''
              <UML:ModelElement.taggedValue>{"".join(tagged_values)}
              </UML:ModelElement.taggedValue>''' if tagged_values else ""
    type_element = f"\n              <UML:StructuralFeature.type>{type_ref}</UML:StructuralFeature.type>" if type_ref else ""
    return f'''
            <UML:Attribute xmi.id="attr-{name}"{name_attr} visibility="public">{_multiplicity("StructuralFeature.multiplicity", lower, upper)}{tags}{type_element}
            </UML:Attribute>'''


def uml_class(xmi_id: str, name: Optional[str], attributes: tuple[str, ...] = (), tagged_values: tuple[str, ...] = ()) -> str:
    name_attr = f' name="{name}"' if name is not None else ""
    tags = f'''
          <UML:ModelElement.taggedValue>{"".join(tagged_values)}
          </UML:ModelElement.taggedValue>''' if tagged_values else ""
    features = f'''
          <UML:Classifier.feature>{"".join(attributes)}
          </UML:Classifier.feature>''' if attributes else ""
    return f'''
        <UML:Class xmi.id="{xmi_id}"{name_attr} visibility="public" isAbstract="false">{tags}{features}
        </UML:Class>'''


def _class_ref(xmi_id: Optional[str], href: Optional[str]) -> str:
    if href is not None:
        return f'<UML:Class href="{href}"/>'
    if xmi_id is not None:
        return f'<UML:Class xmi.idref="{xmi_id}"/>'
    return ""


def generalization(
    parent: Optional[str],
    child: Optional[str],
    parent_href: Optional[str] = None,
    xmi_id: Optional[str] = None,
) -> str:
    xmi_id = xmi_id or f"gen-{parent}-{child}"
    return f'''
        <UML:Generalization xmi.id="{xmi_id}" isSpecification="false">
          <UML:Generalization.child>{_class_ref(child, None)}</UML:Generalization.child>
          <UML:Generalization.parent>{_class_ref(parent, parent_href)}</UML:Generalization.parent>
        </UML:Generalization>'''


def association_end(
    participant: Optional[str],
    lower: Optional[str] = "1",
    upper: Optional[str] = "1",
    aggregation: str = "none",
    href: Optional[str] = None,
) -> str:
    return f'''
            <UML:AssociationEnd xmi.id="end-{participant}-{lower}-{upper}" aggregation="{aggregation}" isNavigable="true">{_multiplicity("AssociationEnd.multiplicity", lower, upper)}
              <UML:AssociationEnd.participant>{_class_ref(participant, href)}</UML:AssociationEnd.participant>
            </UML:AssociationEnd>'''


def association(*ends: str, name: Optional[str] = None, xmi_id: str = "assoc-1") -> str:
    name_attr = f' name="{name}"' if name is not None else ""
    return f'''
        <UML:Association xmi.id="{xmi_id}"{name_attr} isSpecification="false">
          <UML:Association.connection>{"".join(ends)}
          </UML:Association.connection>
        </UML:Association>'''


def customer_order_document() -> str:
    """Customer (1) -> Order (*), the canonical one-to-many example."""
    return xmi_document(
        model(
            "shop",
            data_type("dt-string", "string"),
            uml_class("c-customer", "Customer"),
            uml_class("c-order", "Order"),
            association(
                association_end("c-customer", "1", "1"),
                association_end("c-order", "0", "-1"),
            ),
        )
    )
