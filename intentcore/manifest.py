from __future__ import annotations

from typing import List, Optional, Tuple
import xml.etree.ElementTree as ET

from androguard.core.axml import AXMLPrinter

from intentcore.component import ComponentDescription
from intentcore.data_spec import DATA_ATTRIBUTES, DataSpec
from intentcore.ir import ComponentKind, FilterRule

ANDROID_NS = "{http://schemas.android.com/apk/res/android}"

COMPONENT_TAGS = [
    ("activity", ComponentKind.ACTIVITY),
    ("activity-alias", ComponentKind.ACTIVITY),
    ("service", ComponentKind.SERVICE),
    ("receiver", ComponentKind.BROADCAST_RECEIVER),
    ("provider", ComponentKind.CONTENT_PROVIDER),
]


def _attr(elem: ET.Element, name: str) -> Optional[str]:
    return elem.get(f"{ANDROID_NS}{name}")


def parse_filter_rule(elem: ET.Element) -> Optional[FilterRule]:
    actions = [_attr(a, "name") for a in _find_children(elem, "action")]
    categories = [_attr(c, "name") for c in _find_children(elem, "category")]
    data_entries = []
    for data in _find_children(elem, "data"):
        entry = {key: _attr(data, key) for key in DATA_ATTRIBUTES if _attr(data, key)}
        if entry:
            data_entries.append(entry)
    rule = FilterRule.of(
        actions=[a for a in actions if a],
        categories=[c for c in categories if c],
        data=DataSpec.from_attributes(data_entries) if data_entries else None,
    )
    # an intent-filter without action, category or data constrains nothing
    if rule.is_empty():
        return None
    return rule


def parse_manifest_element(root: ET.Element) -> Tuple[Optional[str], List[ComponentDescription]]:
    package = root.get("package")
    app = _find_first(root, "application")
    if app is None:
        return package, []

    components: List[ComponentDescription] = []
    for tag, kind in COMPONENT_TAGS:
        for elem in _find_children(app, tag):
            name = _attr(elem, "name") or ""
            if not name:
                continue
            component = ComponentDescription(name, kind)
            for filter_elem in _find_children(elem, "intent-filter"):
                rule = parse_filter_rule(filter_elem)
                if rule is not None:
                    component.add_filter_rule(rule)
            components.append(component)
    return package, components


def parse_manifest_xml(xml_text: str) -> Tuple[Optional[str], List[ComponentDescription]]:
    root = ET.fromstring(xml_text)
    return parse_manifest_element(root)


def get_components(apk: object) -> List[ComponentDescription]:
    xml = apk.get_android_manifest_xml()
    if _looks_like_element(xml):
        return parse_manifest_element(xml)[1]
    if hasattr(xml, "getroot") and _looks_like_element(xml.getroot()):
        return parse_manifest_element(xml.getroot())[1]
    if isinstance(xml, bytes):
        xml_text = _decode_manifest_bytes(xml)
    elif hasattr(xml, "decode"):
        xml_text = xml.decode("utf-8", errors="ignore")
    else:
        xml_text = str(xml or "")
    try:
        return parse_manifest_xml(xml_text)[1]
    except ET.ParseError:
        return []


def _decode_manifest_bytes(data: bytes) -> str:
    if data.lstrip().startswith(b"<"):
        return data.decode("utf-8", errors="ignore")
    try:
        return AXMLPrinter(data).get_xml().decode("utf-8", errors="ignore")
    except Exception:
        return ""


def _looks_like_element(obj: object) -> bool:
    if obj is None or not hasattr(obj, "tag") or not hasattr(obj, "iter"):
        return False
    return isinstance(getattr(obj, "tag"), str)


def _local_name(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _find_first(root: ET.Element, name: str) -> Optional[ET.Element]:
    for elem in root.iter():
        if isinstance(elem.tag, str) and _local_name(elem.tag) == name:
            return elem
    return None


def _find_children(parent: ET.Element, name: str) -> List[ET.Element]:
    return [child for child in list(parent) if isinstance(child.tag, str) and _local_name(child.tag) == name]
