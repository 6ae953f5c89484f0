from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from intentcore.util.strings import fqcn_to_desc


@dataclass
class InvokeRef:
    offset: int
    target_class: str
    target_name: str
    arg_regs: List[int]


@dataclass
class ConstStringRef:
    offset: int
    dest_reg: int
    value: str


_REG_RE = re.compile(r"\b([vp])(\d+)\b")
_RANGE_RE = re.compile(r"([vp])(\d+)\s*\.\.\s*([vp])(\d+)")


def _reg_to_int(kind: str, idx: str) -> int:
    # parameter registers live in negative space so they never collide with locals
    value = int(idx)
    if kind == "p":
        return -(value + 1)
    return value


def _parse_regs(text: str) -> List[int]:
    match = _RANGE_RE.search(text)
    if match:
        start = _reg_to_int(match.group(1), match.group(2))
        end = _reg_to_int(match.group(3), match.group(4))
        step = 1 if end >= start else -1
        return list(range(start, end + step, step))
    return [_reg_to_int(kind, idx) for kind, idx in _REG_RE.findall(text)]


def _parse_invoke_output(output: str) -> Tuple[str, str, List[int]]:
    # "v0, v1, Landroid/content/Intent;->getStringExtra(Ljava/lang/String;)Ljava/lang/String;"
    if "->" not in output:
        return "", "", []
    left, right = output.split("->", 1)
    if "," in left:
        reg_text, cls = left.rsplit(",", 1)
    else:
        reg_text, cls = "", left
    cls = cls.strip()
    if " " in cls:
        reg_text, cls = reg_text + " " + cls.rsplit(" ", 1)[0], cls.rsplit(" ", 1)[1]
    name = right.split("(", 1)[0]
    return fqcn_to_desc(cls) or "", name.strip(), _parse_regs(reg_text)


def _instructions(method) -> list:
    if not hasattr(method, "get_code"):
        return []
    code = method.get_code()
    if not code:
        return []
    return list(code.get_bc().get_instructions())


def _output(ins) -> str:
    try:
        return str(ins.get_output())
    except Exception:
        return ""


def get_invoke_refs(method) -> List[InvokeRef]:
    invokes: List[InvokeRef] = []
    for offset, ins in enumerate(_instructions(method)):
        if not ins.get_name().startswith("invoke-"):
            continue
        cls, name, regs = _parse_invoke_output(_output(ins))
        if cls and name:
            invokes.append(
                InvokeRef(
                    offset=offset,
                    target_class=cls,
                    target_name=name,
                    arg_regs=regs,
                )
            )
    return invokes


def get_const_strings(method) -> List[ConstStringRef]:
    strings: List[ConstStringRef] = []
    for offset, ins in enumerate(_instructions(method)):
        if ins.get_name() not in ("const-string", "const-string/jumbo"):
            continue
        regs = _parse_regs(_output(ins).split(",", 1)[0])
        try:
            value = ins.get_string()
        except Exception:
            value = None
        if regs and value is not None:
            strings.append(ConstStringRef(offset=offset, dest_reg=regs[0], value=value))
    return strings


def last_const_string(strings: List[ConstStringRef], reg: int, before: int) -> Optional[str]:
    """Value of the latest const-string written to ``reg`` ahead of offset ``before``."""
    found: Optional[str] = None
    for ref in strings:
        if ref.offset >= before:
            break
        if ref.dest_reg == reg:
            found = ref.value
    return found


def methods_for_class(analysis, class_name: str) -> list:
    """Encoded methods declared by ``class_name`` (dotted or descriptor form)."""
    target = fqcn_to_desc(class_name)
    methods = []
    for m in analysis.get_methods():
        try:
            method = m.get_method()
            if method.get_class_name() == target:
                methods.append(method)
        except Exception:
            continue
    return methods
