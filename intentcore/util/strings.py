from __future__ import annotations


def fqcn_to_desc(value: str | None) -> str | None:
    """com.app.Main -> Lcom/app/Main; (descriptors pass through unchanged)."""
    if not value:
        return None
    name = value
    array_dims = 0
    while name.endswith("[]"):
        array_dims += 1
        name = name[:-2]
    if name.startswith("L") and name.endswith(";"):
        return value
    desc = "L" + name.replace(".", "/") + ";"
    return "[" * array_dims + desc
