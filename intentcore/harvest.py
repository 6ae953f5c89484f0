from __future__ import annotations

from typing import Dict, Iterable, Optional, Set, Tuple

from intentcore.bc_extract import get_const_strings, get_invoke_refs, last_const_string, methods_for_class
from intentcore.component import ComponentDescription
from intentcore.ir import ExtraType
from intentcore.logging import Logger

INTENT_CLASS = "Landroid/content/Intent;"
BUNDLE_CLASS = "Landroid/os/Bundle;"

# Intent getter -> extra type tag; Bundle getters drop the "Extra" suffix
EXTRA_GETTERS: Dict[str, ExtraType] = {
    "getIntExtra": ExtraType.INT,
    "getIntArrayExtra": ExtraType.INT_ARRAY,
    "getIntegerArrayListExtra": ExtraType.INTEGER_LIST,
    "getStringExtra": ExtraType.STRING,
    "getCharSequenceExtra": ExtraType.CHAR_SEQUENCE,
    "getStringArrayExtra": ExtraType.STRING_ARRAY,
    "getCharSequenceArrayExtra": ExtraType.CHAR_SEQUENCE_ARRAY,
    "getStringArrayListExtra": ExtraType.STRING_LIST,
    "getCharSequenceArrayListExtra": ExtraType.CHAR_SEQUENCE_LIST,
    "getFloatExtra": ExtraType.FLOAT,
    "getFloatArrayExtra": ExtraType.FLOAT_ARRAY,
    "getDoubleExtra": ExtraType.DOUBLE,
    "getDoubleArrayExtra": ExtraType.DOUBLE_ARRAY,
    "getLongExtra": ExtraType.LONG,
    "getLongArrayExtra": ExtraType.LONG_ARRAY,
    "getShortExtra": ExtraType.SHORT,
    "getShortArrayExtra": ExtraType.SHORT_ARRAY,
    "getByteExtra": ExtraType.BYTE,
    "getByteArrayExtra": ExtraType.BYTE_ARRAY,
    "getBooleanExtra": ExtraType.BOOLEAN,
    "getBooleanArrayExtra": ExtraType.BOOLEAN_ARRAY,
    "getCharExtra": ExtraType.CHAR,
    "getCharArrayExtra": ExtraType.CHAR_ARRAY,
    "getSerializableExtra": ExtraType.SERIALIZABLE,
    "getParcelableExtra": ExtraType.PARCELABLE,
    "getParcelableArrayExtra": ExtraType.PARCELABLE_ARRAY,
    "getParcelableArrayListExtra": ExtraType.PARCELABLE_LIST,
}

BUNDLE_GETTERS: Dict[str, ExtraType] = {
    name[: -len("Extra")]: tag for name, tag in EXTRA_GETTERS.items()
}


def _getter_type(target_class: str, target_name: str) -> Optional[ExtraType]:
    if target_class == INTENT_CLASS:
        return EXTRA_GETTERS.get(target_name)
    if target_class == BUNDLE_CLASS:
        return BUNDLE_GETTERS.get(target_name)
    return None


def harvest_method(method) -> Tuple[Set[str], Dict[str, ExtraType]]:
    strings = get_const_strings(method)
    extras: Dict[str, ExtraType] = {}
    for inv in get_invoke_refs(method):
        extra_type = _getter_type(inv.target_class, inv.target_name)
        if extra_type is None or len(inv.arg_regs) < 2:
            continue
        # arg 0 is the receiver, arg 1 the key
        key = last_const_string(strings, inv.arg_regs[1], inv.offset)
        if key:
            extras[key] = extra_type
    literals = {ref.value for ref in strings}
    return literals, extras


def harvest_component(
    analysis,
    component: ComponentDescription,
    package_name: str,
    logger: Optional[Logger] = None,
) -> int:
    # returns the number of methods inspected
    fqn = component.fully_qualified_name(package_name)
    methods = methods_for_class(analysis, fqn)
    literals: Set[str] = set()
    extras: Dict[str, ExtraType] = {}
    for method in methods:
        method_literals, method_extras = harvest_method(method)
        literals |= method_literals
        extras.update(method_extras)
    # keys of extras are not interesting as values
    component.add_string_constants(literals - set(extras))
    component.add_extras(extras)
    if logger:
        logger.debug(
            f"harvest component={fqn} methods={len(methods)} "
            f"strings={len(literals)} extras={len(extras)}"
        )
    return len(methods)


def harvest_all(
    analysis,
    components: Iterable[ComponentDescription],
    package_name: str,
    logger: Optional[Logger] = None,
) -> int:
    total = 0
    for component in components:
        total += harvest_component(analysis, component, package_name, logger)
    return total
