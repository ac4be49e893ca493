"""
Reference collection for a single definition.

Only the definition's own schema tree is scanned, so the walk is bounded by
the nesting depth of that tree.
"""

from __future__ import annotations

from typing import Any

from .names import DEFAULT_REF_PREFIX, trim_ref_prefix


def _collect(data: dict[str, Any], ref_prefix: str) -> list[str]:
    refs: list[str] = []
    for key, value in data.items():
        if key == "$ref" and isinstance(value, str):
            refs.append(trim_ref_prefix(value, ref_prefix))
        elif isinstance(value, dict):
            refs.extend(_collect(value, ref_prefix))
        # Lists and scalars never carry nested references in this dialect
    return refs


def collect_refs(name: str, node: Any, ref_prefix: str = DEFAULT_REF_PREFIX) -> list[str]:
    """
    Collect the definitions referenced by ``node``.

    Args:
        name: The dotted name of the definition owning ``node``
        node: The raw schema node of the definition
        ref_prefix: Pointer prefix stripped from ``$ref`` values

    Returns:
        Distinct referenced definition names in order of first discovery,
        never including ``name`` itself. Callers must not rely on the order.
    """
    if not isinstance(node, dict):
        return []
    seen: dict[str, None] = {}
    for ref in _collect(node, ref_prefix):
        if ref != name:
            seen.setdefault(ref)
    return list(seen)
