"""
Rewriting of definition schemas into registry documents.

The registry resolves definitions by flat key, so every ``$ref`` pointer is
rewritten to ``<definition name>#`` and documentation fields are dropped.
"""

from __future__ import annotations

import copy
from typing import Any

from .names import DEFAULT_REF_PREFIX, registry_key
from .schema_ast.parser import VENDOR_EXTENSION_PREFIX, apply_definition_defaults

INT_OR_STRING_DEFINITION = "io.k8s.apimachinery.pkg.util.intstr.IntOrString"

# The declared shape of IntOrString (a plain string) does not accept integers
INT_OR_STRING_SCHEMA: dict[str, Any] = {
    "oneOf": [
        {"type": "string"},
        {"type": "integer", "format": "int32"},
    ]
}


def _is_stripped_key(key: str) -> bool:
    return key == "description" or key.startswith(VENDOR_EXTENSION_PREFIX)


def _strip(value: Any) -> Any:
    # Inside lists only documentation is removed; references there are left as-is,
    # matching what the reference collector registers.
    if isinstance(value, dict):
        return {k: _strip(v) for k, v in value.items() if not _is_stripped_key(k)}
    if isinstance(value, list):
        return [_strip(item) for item in value]
    return value


def _rewrite(node: dict[str, Any], ref_prefix: str) -> dict[str, Any]:
    output: dict[str, Any] = {}
    for key, value in node.items():
        if _is_stripped_key(key):
            continue
        if key == "$ref" and isinstance(value, str):
            value = registry_key(value, ref_prefix)
        elif isinstance(value, dict):
            value = _rewrite(value, ref_prefix)
        else:
            value = _strip(value)
        output[key] = value
    return output


def rewrite_schema(name: str, node: Any, ref_prefix: str = DEFAULT_REF_PREFIX) -> dict[str, Any]:
    """
    Build the registry schema document of a definition.

    Args:
        name: Dotted definition name
        node: Raw schema of the definition (not modified); anything but a
            mapping gives the unconstrained document ``{}``
        ref_prefix: Pointer prefix stripped from ``$ref`` values

    Returns:
        A JSON-serializable schema document without ``description`` or
        ``x-kubernetes-*`` keys at any depth
    """
    if name == INT_OR_STRING_DEFINITION:
        return copy.deepcopy(INT_OR_STRING_SCHEMA)
    if not isinstance(node, dict):
        return {}
    return _rewrite(apply_definition_defaults(node), ref_prefix)
