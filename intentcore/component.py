from __future__ import annotations

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Sequence, Set, Union

from intentcore.errors import NotFound
from intentcore.ir import ComponentKind, ExtraType, FilterRule

ExtraTag = Union[ExtraType, str]


class ComponentDescription:
    def __init__(self, name: str, kind: Union[ComponentKind, str]) -> None:
        self._name = name
        self._kind = kind if isinstance(kind, ComponentKind) else ComponentKind.from_tag(kind)
        self._filter_rules: Set[FilterRule] = set()
        self._string_constants: Set[str] = set()
        self._extras: Dict[str, ExtraTag] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> ComponentKind:
        return self._kind

    @property
    def filter_rules(self) -> FrozenSet[FilterRule]:
        return frozenset(self._filter_rules)

    @property
    def string_constants(self) -> FrozenSet[str]:
        return frozenset(self._string_constants)

    @property
    def extras(self) -> Mapping[str, ExtraTag]:
        return MappingProxyType(self._extras)

    def add_filter_rule(self, rule: FilterRule) -> None:
        self._filter_rules.add(rule)

    def add_filter_rules(self, rules: Iterable[FilterRule]) -> None:
        self._filter_rules.update(rules)

    def remove_filter_rules(self, rules: Iterable[FilterRule]) -> None:
        self._filter_rules.difference_update(rules)

    def add_extras(self, extras: Mapping[str, ExtraTag]) -> None:
        self._extras.update(extras)

    def add_string_constants(self, constants: Iterable[str]) -> None:
        self._string_constants.update(c for c in constants if c is not None)

    def is_kind(self, kind: ComponentKind) -> bool:
        return self._kind == kind

    def is_activity(self) -> bool:
        return self.is_kind(ComponentKind.ACTIVITY)

    def is_service(self) -> bool:
        return self.is_kind(ComponentKind.SERVICE)

    def is_broadcast_receiver(self) -> bool:
        return self.is_kind(ComponentKind.BROADCAST_RECEIVER)

    def is_content_provider(self) -> bool:
        return self.is_kind(ComponentKind.CONTENT_PROVIDER)

    def has_filter_rules(self) -> bool:
        return bool(self._filter_rules)

    def has_extras(self) -> bool:
        return bool(self._extras)

    def fully_qualified_name(self, package_prefix: str) -> str:
        if self._name.startswith("."):
            return f"{package_prefix}{self._name}"
        return self._name

    def describe(self) -> str:
        lines = [f"Component: {self._name}", f"Type: {self._kind.value}", "Intent Filters:"]
        lines.append("-" * 43)
        for rule in sorted(self._filter_rules, key=FilterRule.sort_key):
            lines.append(str(rule))
        lines.append("-" * 43)
        lines.append(f"Strings: {sorted(self._string_constants)}")
        lines.append("Extras: " + ", ".join(f"{k}={_tag_text(v)}" for k, v in sorted(self._extras.items())))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ComponentDescription(name={self._name!r}, kind={self._kind.value}, "
            f"filters={len(self._filter_rules)}, extras={len(self._extras)}, "
            f"strings={len(self._string_constants)})"
        )


def _tag_text(tag: ExtraTag) -> str:
    return tag.value if isinstance(tag, ExtraType) else str(tag)


def lookup_by_name(
    components: Sequence[ComponentDescription],
    name: str,
    package_prefix: str = "",
) -> ComponentDescription:
    for component in components:
        if component.fully_qualified_name(package_prefix) == name:
            return component
    raise NotFound(name)
