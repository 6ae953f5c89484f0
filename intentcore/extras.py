from __future__ import annotations

from typing import Callable, Dict, FrozenSet, List, Tuple

from intentcore.component import ComponentDescription
from intentcore.ir import Bundle, ExtraType
from intentcore.pools import ValuePool

# elements per generated array/list and the magnitude bound of their values
DEFAULT_COUNT = 5
DEFAULT_BOUND = 100


class _Request:
    def __init__(self, pool: ValuePool, constants: FrozenSet[str], count: int, bound: int) -> None:
        self.pool = pool
        self.constants = constants
        self.count = count
        self.bound = bound


Generator = Callable[[_Request], object]


def _scalar(pool_name: str) -> Generator:
    return lambda req: req.pool.pick(pool_name)


def _string(req: _Request):
    if req.constants:
        return req.pool.choice(req.constants)
    return req.pool.pick("string_with_null")


def _string_array(req: _Request) -> Tuple[str, ...]:
    if len(req.constants) >= req.count:
        return tuple(req.pool.sample(req.constants, req.count))
    return req.pool.default_string_array()


def _string_list(req: _Request) -> List[str]:
    if len(req.constants) >= req.count:
        return req.pool.sample(req.constants, req.count)
    return req.pool.default_string_list()


_GENERATORS: Dict[ExtraType, Generator] = {
    ExtraType.INT: _scalar("int"),
    ExtraType.INT_ARRAY: lambda req: req.pool.int_array(req.count, req.bound),
    ExtraType.INTEGER_LIST: lambda req: req.pool.int_list(req.count, req.bound),
    ExtraType.STRING: _string,
    ExtraType.CHAR_SEQUENCE: _string,
    ExtraType.STRING_ARRAY: _string_array,
    ExtraType.CHAR_SEQUENCE_ARRAY: _string_array,
    ExtraType.STRING_LIST: _string_list,
    ExtraType.CHAR_SEQUENCE_LIST: _string_list,
    ExtraType.FLOAT: _scalar("float"),
    ExtraType.FLOAT_ARRAY: lambda req: req.pool.float_array(req.count, req.bound),
    ExtraType.DOUBLE: _scalar("double"),
    ExtraType.DOUBLE_ARRAY: lambda req: req.pool.double_array(req.count, req.bound),
    ExtraType.LONG: _scalar("long"),
    ExtraType.LONG_ARRAY: lambda req: req.pool.long_array(req.count, req.bound),
    ExtraType.SHORT: _scalar("short"),
    ExtraType.SHORT_ARRAY: lambda req: req.pool.short_array(req.count, req.bound),
    ExtraType.BYTE: _scalar("byte"),
    ExtraType.BYTE_ARRAY: lambda req: req.pool.byte_array(req.count, req.bound),
    ExtraType.BOOLEAN: _scalar("boolean"),
    ExtraType.BOOLEAN_ARRAY: lambda req: req.pool.boolean_array(req.count),
    ExtraType.CHAR: _scalar("char"),
    ExtraType.CHAR_ARRAY: lambda req: req.pool.char_array(req.count),
    # a string is a valid Serializable
    ExtraType.SERIALIZABLE: _string,
    # an empty bundle is the smallest Parcelable
    ExtraType.PARCELABLE: lambda req: Bundle(),
    ExtraType.PARCELABLE_ARRAY: lambda req: (Bundle(),),
    ExtraType.PARCELABLE_LIST: lambda req: [Bundle()],
}


def supported_types() -> FrozenSet[ExtraType]:
    return frozenset(_GENERATORS)


def synthesize_extras(
    component: ComponentDescription,
    pool: ValuePool,
    count: int = DEFAULT_COUNT,
    bound: int = DEFAULT_BOUND,
) -> Bundle:
    """Raises UnsupportedType before any value is drawn."""
    schema = [(name, ExtraType.parse(tag)) for name, tag in component.extras.items()]
    req = _Request(pool, component.string_constants, count, bound)
    bundle = Bundle()
    for name, extra_type in schema:
        bundle.put(name, extra_type, _GENERATORS[extra_type](req))
    return bundle
