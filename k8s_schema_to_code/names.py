"""
Name derivation for definitions.

Every identifier and path used by the generated code is a pure function of
the dotted definition name (e.g. ``io.k8s.api.core.v1.Pod``).
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass

from .utils import camel_case, trim_prefix, upper_first

DEFAULT_DEFINITION_PREFIX = "io.k8s."
DEFAULT_REF_PREFIX = "#/definitions/"

# Appended to a trimmed $ref so registry keys are flat, self-contained URIs
REGISTRY_KEY_SUFFIX = "#"

INTERFACE_PREFIX = "I"
SCHEMA_SUFFIX = "Schema"
ADD_SCHEMA_SUFFIX = "AddSchema"


def class_name(name: str) -> str:
    """``io.k8s.api.core.v1.Pod`` -> ``IoK8sApiCoreV1Pod``"""
    return upper_first(camel_case(name, ".-"))


def interface_name(name: str) -> str:
    return INTERFACE_PREFIX + class_name(name)


def schema_name(name: str) -> str:
    return class_name(name) + SCHEMA_SUFFIX


def add_schema_name(name: str) -> str:
    return class_name(name) + ADD_SCHEMA_SUFFIX


def short_class_name(name: str) -> str:
    return name.split(".")[-1]


def short_interface_name(name: str) -> str:
    return INTERFACE_PREFIX + short_class_name(name)


def trim_definition_prefix(name: str, prefix: str = DEFAULT_DEFINITION_PREFIX) -> str:
    return trim_prefix(name, prefix)


def trim_ref_prefix(ref: str, prefix: str = DEFAULT_REF_PREFIX) -> str:
    """``#/definitions/io.k8s.api.core.v1.PodSpec`` -> ``io.k8s.api.core.v1.PodSpec``"""
    return trim_prefix(ref, prefix)


def registry_key(ref: str, prefix: str = DEFAULT_REF_PREFIX) -> str:
    """Rewrite a document pointer into the flat key the registry resolves."""
    return trim_ref_prefix(ref, prefix) + REGISTRY_KEY_SUFFIX


def python_identifier(segment: str) -> str:
    """Make a path segment importable as a Python module or package name."""
    identifier = segment.replace("-", "_")
    if identifier[:1].isdigit():
        identifier = "_" + identifier
    if keyword.iskeyword(identifier):
        identifier += "_"
    return identifier


def module_parts(name: str, prefix: str = DEFAULT_DEFINITION_PREFIX, language: str = "python") -> tuple[str, ...]:
    """Output path segments of a definition, relative to the output root.

    ``io.k8s.api.core.v1.Pod`` -> ``("api", "core", "v1", "Pod")``. Python
    segments are sanitized so every directory is an importable package.
    """
    trimmed = trim_definition_prefix(name, prefix)
    parts = tuple(part for part in trimmed.split(".") if part)
    if language == "python":
        return tuple(python_identifier(part) for part in parts)
    return parts


@dataclass(frozen=True)
class NameSet:
    """All identifiers derived from one dotted definition name."""

    name: str
    class_name: str
    interface_name: str
    schema_name: str
    add_schema_name: str
    short_class_name: str
    short_interface_name: str
    module_parts: tuple[str, ...]

    @classmethod
    def of(cls, name: str, prefix: str = DEFAULT_DEFINITION_PREFIX, language: str = "python") -> NameSet:
        return cls(
            name=name,
            class_name=class_name(name),
            interface_name=interface_name(name),
            schema_name=schema_name(name),
            add_schema_name=add_schema_name(name),
            short_class_name=short_class_name(name),
            short_interface_name=short_interface_name(name),
            module_parts=module_parts(name, prefix, language),
        )
