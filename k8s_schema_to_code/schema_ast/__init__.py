"""
Schema AST module.

Contains the node variants and the parser for definition schemas.
"""

from __future__ import annotations

from .nodes import (
    ArrayNode,
    BooleanNode,
    DefinitionNode,
    NullNode,
    NumberNode,
    ObjectNode,
    PropertyDef,
    RefNode,
    SchemaNode,
    StringNode,
    UnknownNode,
)
from .parser import SchemaParser, apply_definition_defaults

__all__ = [
    "SchemaNode",
    "RefNode",
    "ObjectNode",
    "PropertyDef",
    "StringNode",
    "NumberNode",
    "BooleanNode",
    "ArrayNode",
    "NullNode",
    "UnknownNode",
    "DefinitionNode",
    "SchemaParser",
    "apply_definition_defaults",
]
