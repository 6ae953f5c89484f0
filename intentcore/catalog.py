from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import yaml

from intentcore.component import ComponentDescription
from intentcore.data_spec import DATA_ATTRIBUTES, DataSpec
from intentcore.errors import SchemaError
from intentcore.ir import ComponentKind, FilterRule


def _expect(value, kind, what: str):
    if not isinstance(value, kind):
        raise SchemaError(f"Invalid {what}")
    return value


def _string_list(entry: dict, key: str, what: str) -> List[str]:
    values = entry.get(key) or []
    if isinstance(values, str):
        values = [values]
    _expect(values, list, f"{key} of {what}")
    return [str(v) for v in values]


def _parse_data(value, what: str) -> Optional[DataSpec]:
    if not value:
        return None
    entries = value if isinstance(value, list) else [value]
    for entry in entries:
        _expect(entry, dict, f"data of {what}")
        unknown = set(entry) - set(DATA_ATTRIBUTES)
        if unknown:
            raise SchemaError(f"Unknown data attributes {sorted(unknown)} in {what}")
    return DataSpec.from_attributes(entries)


def parse_filter_rules(entries, what: str) -> List[FilterRule]:
    rules = []
    for entry in _expect(entries or [], list, f"intent_filters of {what}"):
        _expect(entry, dict, f"intent filter of {what}")
        rule = FilterRule.of(
            actions=_string_list(entry, "actions", what),
            categories=_string_list(entry, "categories", what),
            data=_parse_data(entry.get("data"), what),
        )
        if not rule.is_empty():
            rules.append(rule)
    return rules


def parse_component(entry: dict) -> ComponentDescription:
    _expect(entry, dict, "component entry")
    name = entry.get("name")
    if not name or not isinstance(name, str):
        raise SchemaError("Component entry without name")
    component = ComponentDescription(name, ComponentKind.from_tag(str(entry.get("type", ""))))
    component.add_filter_rules(parse_filter_rules(entry.get("intent_filters"), name))
    extras = _expect(entry.get("extras") or {}, dict, f"extras of {name}")
    # tags are checked when a payload is synthesized
    component.add_extras({str(k): str(v) for k, v in extras.items()})
    component.add_string_constants(_string_list(entry, "string_constants", name))
    return component


def parse_catalog(data: Dict) -> Tuple[Optional[str], List[ComponentDescription]]:
    _expect(data, dict, "catalog")
    if "components" not in data:
        raise SchemaError("Missing components")
    entries = _expect(data["components"], list, "components")
    package = data.get("package")
    return (str(package) if package else None), [parse_component(e) for e in entries]


def load_catalog(path: str) -> Tuple[Optional[str], List[ComponentDescription]]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise SchemaError(f"Invalid catalog file {path}: {exc}") from exc
    return parse_catalog(data)


def merge_components(
    base: List[ComponentDescription],
    extra: List[ComponentDescription],
    package_name: str,
) -> List[ComponentDescription]:
    """Fold ``extra`` into ``base`` by fully qualified name; unknown ones are appended."""
    by_name = {c.fully_qualified_name(package_name): c for c in base}
    merged = list(base)
    for component in extra:
        target = by_name.get(component.fully_qualified_name(package_name))
        if target is None:
            merged.append(component)
            by_name[component.fully_qualified_name(package_name)] = component
            continue
        target.add_filter_rules(component.filter_rules)
        target.add_extras(component.extras)
        target.add_string_constants(component.string_constants)
    return merged
