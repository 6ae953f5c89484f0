from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, Optional

from intentcore.data_spec import DataSpec
from intentcore.errors import SchemaError, UnsupportedType


class ComponentKind(str, Enum):
    ACTIVITY = "activity"
    SERVICE = "service"
    BROADCAST_RECEIVER = "receiver"
    CONTENT_PROVIDER = "provider"

    @classmethod
    def from_tag(cls, tag: str) -> "ComponentKind":
        key = (tag or "").strip().lower()
        kind = _KIND_ALIASES.get(key)
        if kind is None:
            raise SchemaError(f"Unknown component type {tag!r}")
        return kind


_KIND_ALIASES = {
    "activity": ComponentKind.ACTIVITY,
    "activity-alias": ComponentKind.ACTIVITY,
    "service": ComponentKind.SERVICE,
    "receiver": ComponentKind.BROADCAST_RECEIVER,
    "broadcast_receiver": ComponentKind.BROADCAST_RECEIVER,
    "provider": ComponentKind.CONTENT_PROVIDER,
    "content_provider": ComponentKind.CONTENT_PROVIDER,
}


class Shape(str, Enum):
    SCALAR = "scalar"
    ARRAY = "array"
    LIST = "list"


class ExtraType(str, Enum):
    INT = "Int"
    INT_ARRAY = "Int[]"
    INTEGER_LIST = "Integer<>"
    STRING = "String"
    CHAR_SEQUENCE = "CharSequence"
    STRING_ARRAY = "String[]"
    CHAR_SEQUENCE_ARRAY = "CharSequence[]"
    STRING_LIST = "String<>"
    CHAR_SEQUENCE_LIST = "CharSequence<>"
    FLOAT = "Float"
    FLOAT_ARRAY = "Float[]"
    DOUBLE = "Double"
    DOUBLE_ARRAY = "Double[]"
    LONG = "Long"
    LONG_ARRAY = "Long[]"
    SHORT = "Short"
    SHORT_ARRAY = "Short[]"
    BYTE = "Byte"
    BYTE_ARRAY = "Byte[]"
    BOOLEAN = "Boolean"
    BOOLEAN_ARRAY = "Boolean[]"
    CHAR = "Char"
    CHAR_ARRAY = "Char[]"
    SERIALIZABLE = "Serializable"
    PARCELABLE = "Parcelable"
    PARCELABLE_ARRAY = "Parcelable[]"
    PARCELABLE_LIST = "Parcelable<>"

    @property
    def shape(self) -> Shape:
        if self.value.endswith("[]"):
            return Shape.ARRAY
        if self.value.endswith("<>"):
            return Shape.LIST
        return Shape.SCALAR

    @classmethod
    def parse(cls, tag: object) -> "ExtraType":
        if isinstance(tag, ExtraType):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedType(tag) from None


@dataclass(frozen=True)
class FilterRule:
    actions: FrozenSet[str] = frozenset()
    categories: FrozenSet[str] = frozenset()
    data: Optional[DataSpec] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", frozenset(self.actions or ()))
        object.__setattr__(self, "categories", frozenset(self.categories or ()))

    @classmethod
    def of(
        cls,
        actions: Iterable[str] = (),
        categories: Iterable[str] = (),
        data: Optional[DataSpec] = None,
    ) -> "FilterRule":
        if data is not None and data.is_empty():
            data = None
        return cls(actions=frozenset(actions), categories=frozenset(categories), data=data)

    def has_action(self) -> bool:
        return bool(self.actions)

    def has_category(self) -> bool:
        return bool(self.categories)

    def has_data(self) -> bool:
        return self.data is not None

    def is_empty(self) -> bool:
        return not (self.actions or self.categories or self.data)

    def sort_key(self) -> tuple:
        return (
            sorted(self.actions),
            sorted(self.categories),
            self.data.sort_key() if self.data else (),
        )

    def __str__(self) -> str:
        parts = [f"action:{a}" for a in sorted(self.actions)]
        parts += [f"category:{c}" for c in sorted(self.categories)]
        if self.data:
            parts.append(f"data:{self.data}")
        return " | ".join(parts) or "<empty>"


@dataclass(frozen=True)
class IntentQuery:
    action: Optional[str] = None
    categories: FrozenSet[str] = frozenset()
    data: Optional[str] = None
    mime_type: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.categories, frozenset):
            object.__setattr__(self, "categories", frozenset(self.categories or ()))

    def __str__(self) -> str:
        fields = []
        if self.action:
            fields.append(f"action={self.action}")
        if self.categories:
            fields.append("categories=" + ",".join(sorted(self.categories)))
        if self.data:
            fields.append(f"data={self.data}")
        if self.mime_type:
            fields.append(f"type={self.mime_type}")
        return "Intent(" + " ".join(fields) + ")"


@dataclass
class BundleEntry:
    type: ExtraType
    value: object


class Bundle:
    """Typed key/value payload of an intent, also used as the minimal parcelable value."""

    def __init__(self) -> None:
        self._entries: Dict[str, BundleEntry] = {}

    def put(self, name: str, extra_type: ExtraType, value: object) -> None:
        self._entries[name] = BundleEntry(type=extra_type, value=value)

    def entry(self, name: str) -> BundleEntry:
        return self._entries[name]

    def __getitem__(self, name: str) -> object:
        return self._entries[name].value

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bundle):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Bundle({self.to_dict()!r})"

    def to_dict(self) -> Dict[str, dict]:
        return {
            name: {"type": entry.type.value, "value": _render_value(entry.value)}
            for name, entry in self._entries.items()
        }


def _render_value(value: object) -> object:
    if isinstance(value, Bundle):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_render_value(v) for v in value]
    return value


@dataclass
class IntentPlan:
    planner: str
    component: str
    kind: ComponentKind
    action: Optional[str] = None
    categories: FrozenSet[str] = frozenset()
    data: Optional[str] = None
    filter_rule: Optional[FilterRule] = None
    extras: Optional[Bundle] = None
    notes: Dict[str, object] = field(default_factory=dict)
