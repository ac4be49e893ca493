"""
AST node definitions for definition schemas.

The set of variants is closed: every raw schema mapping parses into exactly
one of them, with ``UnknownNode`` catching shapes no other variant handles.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Free-text documentation, rendered as comments
    description: str | None = None


@dataclass
class RefNode(SchemaNode):
    """A ``$ref`` to another definition."""

    ref_path: str = ""  # e.g. "#/definitions/io.k8s.api.core.v1.PodSpec"


@dataclass
class PropertyDef:
    """A property of an object, in source declaration order."""

    name: str = ""
    type_node: SchemaNode | None = None
    is_required: bool = False


@dataclass
class ObjectNode(SchemaNode):
    """An object with declared properties and an optional index signature."""

    properties: list[PropertyDef] = field(default_factory=list)
    required: list[str] = field(default_factory=list)

    # Node for additionalProperties; None when absent or false
    additional: SchemaNode | None = None


@dataclass
class StringNode(SchemaNode):
    format: str | None = None


@dataclass
class NumberNode(SchemaNode):
    """``number`` or ``integer``; both synthesize to the same type."""


@dataclass
class BooleanNode(SchemaNode):
    pass


@dataclass
class ArrayNode(SchemaNode):
    items: SchemaNode | None = None


@dataclass
class NullNode(SchemaNode):
    pass


@dataclass
class UnknownNode(SchemaNode):
    """Any shape not covered above, including nodes without ``type``."""


@dataclass
class DefinitionNode:
    """A named definition from the input document."""

    name: str = ""
    body: SchemaNode | None = None

    # First x-kubernetes-group-version-kind entry, if any
    group_version_kind: dict[str, str] | None = None
