"""Akoma-Ntoso serialization."""

from lawtext_akn.akn.components import Component, schedule_component, split_components
from lawtext_akn.akn.serializer import AKN_NAMESPACE, AknSerializer, to_xml_string

__all__ = [
    "AKN_NAMESPACE",
    "AknSerializer",
    "Component",
    "schedule_component",
    "split_components",
    "to_xml_string",
]
