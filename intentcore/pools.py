from __future__ import annotations

import random
import string
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import yaml

from intentcore.errors import SchemaError

INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1
LONG_MIN, LONG_MAX = -(2 ** 63), 2 ** 63 - 1
SHORT_MIN, SHORT_MAX = -(2 ** 15), 2 ** 15 - 1
BYTE_MIN, BYTE_MAX = -(2 ** 7), 2 ** 7 - 1

_STRINGS = ["", " ", "a", "test", "null", "0", "-1", "%s%n", "../../", "<script>", "https://example.com", "äöü"]

DEFAULT_POOLS: Dict[str, list] = {
    "int": [0, 1, -1, 2, 10, 100, INT_MIN, INT_MAX],
    "long": [0, 1, -1, 1000, LONG_MIN, LONG_MAX],
    "short": [0, 1, -1, 255, SHORT_MIN, SHORT_MAX],
    "byte": [0, 1, -1, 16, BYTE_MIN, BYTE_MAX],
    "float": [0.0, 1.0, -1.0, 0.5, 1.4e-45, 3.4028235e38, -3.4028235e38],
    "double": [0.0, 1.0, -1.0, 0.5, 4.9e-324, 1.7976931348623157e308, -1.7976931348623157e308],
    "boolean": [True, False],
    "char": ["a", "Z", "0", " ", "\n", "%", "ä"],
    "string": list(_STRINGS),
    "string_with_null": list(_STRINGS) + [None],
    "string_array": ["a", "b", "c", "d", "e"],
}

_PRINTABLE = string.ascii_letters + string.digits + string.punctuation + " "


class ValuePool:
    def __init__(self, seed: Optional[int] = None, overrides: Optional[Mapping[str, Sequence]] = None) -> None:
        self.seed = seed
        self.rng = random.Random(seed)
        self._pools: Dict[str, list] = {name: list(values) for name, values in DEFAULT_POOLS.items()}
        if overrides:
            for name, values in overrides.items():
                _validate_pool(name, values)
                self._pools[name] = list(values)

    @classmethod
    def from_config(cls, path: Optional[str], seed: Optional[int] = None) -> "ValuePool":
        overrides = load_pools(path) if path else None
        return cls(seed=seed, overrides=overrides)

    def pool(self, name: str) -> List:
        return list(self._pools[name])

    def pick(self, name: str):
        return self.rng.choice(self._pools[name])

    def choice(self, values: Iterable):
        return self.rng.choice(_stable(values))

    def sample(self, values: Iterable, count: int) -> List:
        return self.rng.sample(_stable(values), count)

    def int_array(self, count: int, bound: int) -> Tuple[int, ...]:
        return tuple(self.rng.randrange(bound) for _ in range(count))

    def int_list(self, count: int, bound: int) -> List[int]:
        return list(self.int_array(count, bound))

    def long_array(self, count: int, bound: int) -> Tuple[int, ...]:
        return tuple(self.rng.randrange(-bound + 1, bound) for _ in range(count))

    def short_array(self, count: int, bound: int) -> Tuple[int, ...]:
        limit = min(bound, SHORT_MAX + 1)
        return tuple(self.rng.randrange(-limit + 1, limit) for _ in range(count))

    def byte_array(self, count: int, bound: int) -> Tuple[int, ...]:
        limit = min(bound, BYTE_MAX + 1)
        return tuple(self.rng.randrange(-limit + 1, limit) for _ in range(count))

    def float_array(self, count: int, bound: int) -> Tuple[float, ...]:
        return tuple(self.rng.uniform(-bound, bound) for _ in range(count))

    def double_array(self, count: int, bound: int) -> Tuple[float, ...]:
        return self.float_array(count, bound)

    def boolean_array(self, count: int) -> Tuple[bool, ...]:
        return tuple(self.rng.random() < 0.5 for _ in range(count))

    def char_array(self, count: int) -> Tuple[str, ...]:
        return tuple(self.rng.choice(_PRINTABLE) for _ in range(count))

    def default_string_array(self) -> Tuple[str, ...]:
        return tuple(self._pools["string_array"])

    def default_string_list(self) -> List[str]:
        return list(self._pools["string"])


def _stable(values: Iterable) -> list:
    # sets iterate in hash order; sort so a seeded run repeats
    if isinstance(values, (set, frozenset)):
        return sorted(values, key=lambda v: (v is None, str(v)))
    return list(values)


def _validate_pool(name: str, values: object) -> None:
    if name not in DEFAULT_POOLS:
        raise SchemaError(f"Unknown value pool {name!r}")
    if not isinstance(values, list) or not values:
        raise SchemaError(f"Invalid {name} pool")


def load_pools(path: str) -> Dict[str, list]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise SchemaError(f"Invalid value pool file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaError(f"Invalid value pool file {path}")
    pools = data.get("pools", data)
    if not isinstance(pools, dict):
        raise SchemaError("Invalid pools section")
    for name, values in pools.items():
        _validate_pool(name, values)
    return {name: list(values) for name, values in pools.items()}
