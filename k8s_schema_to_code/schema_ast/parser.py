"""
Parser turning raw definition mappings into schema AST nodes.
"""

from __future__ import annotations

from typing import Any

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

VENDOR_EXTENSION_PREFIX = "x-kubernetes-"
GROUP_VERSION_KIND_KEY = "x-kubernetes-group-version-kind"


def apply_definition_defaults(schema: dict[str, Any]) -> dict[str, Any]:
    """Return the definition root with ``type: object`` added when it has neither type nor ref.

    Only definition roots are defaulted; nested untyped nodes stay untyped.
    The input mapping is not modified.
    """
    if not schema.get("type") and not schema.get("$ref"):
        return {**schema, "type": "object"}
    return schema


class SchemaParser:
    """Parses raw definition schemas into the closed set of AST nodes."""

    def parse_definition(self, name: str, schema: Any) -> DefinitionNode:
        """
        Parse a top-level definition.

        Args:
            name: Dotted definition name
            schema: Raw schema of the definition; anything but a mapping
                parses into an UnknownNode body

        Returns:
            DefinitionNode with its parsed body
        """
        if not isinstance(schema, dict):
            return DefinitionNode(name=name, body=UnknownNode())
        schema = apply_definition_defaults(schema)
        return DefinitionNode(
            name=name,
            body=self.parse(schema),
            group_version_kind=self._extract_group_version_kind(schema),
        )

    def parse(self, schema: Any) -> SchemaNode:
        """Parse any value found where a schema node is expected. Never fails."""
        if not isinstance(schema, dict):
            return UnknownNode()

        description = schema.get("description")
        if not isinstance(description, str):
            description = None

        ref = schema.get("$ref")
        if isinstance(ref, str):
            return RefNode(description=description, ref_path=ref)

        type_name = schema.get("type")
        fmt = schema.get("format") if isinstance(schema.get("format"), str) else None

        if type_name == "object":
            return self._parse_object(schema, description)
        if type_name == "string":
            return StringNode(description=description, format=fmt)
        if type_name in ("number", "integer"):
            return NumberNode(description=description)
        if type_name == "boolean":
            return BooleanNode(description=description)
        if type_name == "array":
            items = self.parse(schema["items"]) if "items" in schema else None
            return ArrayNode(description=description, items=items)
        if type_name == "null":
            return NullNode(description=description)

        return UnknownNode(description=description)

    def _parse_object(self, schema: dict[str, Any], description: str | None) -> ObjectNode:
        required = schema.get("required")
        if not isinstance(required, list):
            required = []

        properties = schema.get("properties")
        if not isinstance(properties, dict):
            properties = {}

        node = ObjectNode(description=description, required=list(required))
        for prop_name, prop_schema in properties.items():
            node.properties.append(
                PropertyDef(
                    name=prop_name,
                    type_node=self.parse(prop_schema),
                    is_required=prop_name in required,
                )
            )

        additional = schema.get("additionalProperties")
        if additional is not None and additional is not False:
            node.additional = self.parse(additional)

        return node

    def _extract_group_version_kind(self, schema: dict[str, Any]) -> dict[str, str] | None:
        entries = schema.get(GROUP_VERSION_KIND_KEY)
        if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
            return None
        entry = entries[0]
        return {
            "group": entry.get("group") or "",
            "version": entry.get("version") or "",
            "kind": entry.get("kind") or "",
        }
