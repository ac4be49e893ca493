"""
Structural type synthesis.

Maps a schema AST node to a language-neutral ``TypeExpr`` that the backends
render. The mapping is total: unrecognized shapes become ``TypeKind.ANY``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .names import DEFAULT_REF_PREFIX, trim_ref_prefix
from .schema_ast import (
    ArrayNode,
    BooleanNode,
    NullNode,
    NumberNode,
    ObjectNode,
    RefNode,
    SchemaNode,
    StringNode,
)

INT_OR_STRING_FORMAT = "int-or-string"


class TypeKind(Enum):
    """Kind of synthesized type."""

    OBJECT = "object"  # record of fields plus optional index signature
    PRIMITIVE = "primitive"  # string, number, boolean, null
    UNION = "union"  # A | B
    ARRAY = "array"  # homogeneous sequence
    REFERENCE = "reference"  # another definition, by dotted name
    ANY = "any"  # unconstrained


@dataclass
class FieldDef:
    """A field of an object type."""

    name: str = ""
    type_expr: TypeExpr | None = None
    is_required: bool = False
    comment: str | None = None


@dataclass
class TypeExpr:
    """A synthesized structural type."""

    kind: TypeKind = TypeKind.ANY

    # Primitive name ("string", "number", "boolean", "null") or referenced definition name
    name: str = ""

    # Union members
    members: list[TypeExpr] = field(default_factory=list)

    # Array element type
    item: TypeExpr | None = None

    # Object fields, in source declaration order
    fields: list[FieldDef] = field(default_factory=list)

    # Object index signature from additionalProperties
    index_type: TypeExpr | None = None

    def references(self) -> list[str]:
        """Definition names referenced anywhere in this expression."""
        if self.kind == TypeKind.REFERENCE:
            return [self.name]
        found: list[str] = []
        for member in self.members:
            found.extend(member.references())
        if self.item is not None:
            found.extend(self.item.references())
        for field_def in self.fields:
            if field_def.type_expr is not None:
                found.extend(field_def.type_expr.references())
        if self.index_type is not None:
            found.extend(self.index_type.references())
        return found


def primitive(name: str) -> TypeExpr:
    return TypeExpr(kind=TypeKind.PRIMITIVE, name=name)


ANY = TypeExpr(kind=TypeKind.ANY)


def synthesize_type(node: SchemaNode | None, ref_prefix: str = DEFAULT_REF_PREFIX) -> TypeExpr:
    """
    Synthesize the structural type of a schema node.

    Args:
        node: Parsed schema node (None is treated as unknown)
        ref_prefix: Pointer prefix stripped from ``$ref`` values

    Returns:
        The TypeExpr for the node; never fails
    """
    if isinstance(node, RefNode):
        return TypeExpr(kind=TypeKind.REFERENCE, name=trim_ref_prefix(node.ref_path, ref_prefix))

    if isinstance(node, ObjectNode):
        fields = [
            FieldDef(
                name=prop.name,
                type_expr=synthesize_type(prop.type_node, ref_prefix),
                is_required=prop.is_required,
                comment=prop.type_node.description if prop.type_node is not None else None,
            )
            for prop in node.properties
        ]
        index_type = synthesize_type(node.additional, ref_prefix) if node.additional is not None else None
        return TypeExpr(kind=TypeKind.OBJECT, fields=fields, index_type=index_type)

    if isinstance(node, StringNode):
        if node.format == INT_OR_STRING_FORMAT:
            return TypeExpr(kind=TypeKind.UNION, members=[primitive("string"), primitive("number")])
        return primitive("string")

    if isinstance(node, NumberNode):
        return primitive("number")

    if isinstance(node, BooleanNode):
        return primitive("boolean")

    if isinstance(node, ArrayNode):
        return TypeExpr(kind=TypeKind.ARRAY, item=synthesize_type(node.items, ref_prefix))

    if isinstance(node, NullNode):
        return primitive("null")

    return TypeExpr(kind=TypeKind.ANY)
