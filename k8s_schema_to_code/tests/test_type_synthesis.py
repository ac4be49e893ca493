import pytest

from k8s_schema_to_code.schema_ast import ObjectNode, SchemaParser, UnknownNode, apply_definition_defaults
from k8s_schema_to_code.type_synthesis import TypeKind, synthesize_type


def synthesize(schema):
    return synthesize_type(SchemaParser().parse(schema))


class TestParser:
    """Parsing raw schemas into AST nodes"""

    def test_untyped_root_becomes_object(self):
        definition = SchemaParser().parse_definition("pkg.Time", {"description": "A time."})
        assert isinstance(definition.body, ObjectNode)
        assert definition.body.description == "A time."

    def test_defaults_do_not_mutate_input(self):
        schema = {"description": "A time."}
        assert apply_definition_defaults(schema)["type"] == "object"
        assert "type" not in schema

    def test_ref_root_is_not_defaulted(self):
        schema = {"$ref": "#/definitions/pkg.B"}
        assert apply_definition_defaults(schema) is schema

    def test_parse_never_fails(self):
        assert isinstance(SchemaParser().parse("not a schema"), UnknownNode)
        assert isinstance(SchemaParser().parse({"type": ["string", "null"]}), UnknownNode)

    def test_group_version_kind(self):
        schema = {
            "type": "object",
            "x-kubernetes-group-version-kind": [
                {"group": "", "kind": "Pod", "version": "v1"},
                {"group": "", "kind": "Ignored", "version": "v2"},
            ],
        }
        definition = SchemaParser().parse_definition("io.k8s.api.core.v1.Pod", schema)
        assert definition.group_version_kind == {"group": "", "version": "v1", "kind": "Pod"}

    def test_non_mapping_definition_is_unconstrained(self):
        definition = SchemaParser().parse_definition("pkg.Any", True)
        assert isinstance(definition.body, UnknownNode)
        assert definition.group_version_kind is None
        assert synthesize_type(definition.body).kind == TypeKind.ANY


class TestSynthesizeType:
    """Structural type synthesis rules"""

    def test_reference(self):
        type_expr = synthesize({"$ref": "#/definitions/io.k8s.api.core.v1.PodSpec"})
        assert type_expr.kind == TypeKind.REFERENCE
        assert type_expr.name == "io.k8s.api.core.v1.PodSpec"

    def test_reference_wins_over_type(self):
        type_expr = synthesize({"$ref": "#/definitions/pkg.B", "type": "string"})
        assert type_expr.kind == TypeKind.REFERENCE

    @pytest.mark.parametrize(
        "schema,expected",
        [
            ({"type": "string"}, "string"),
            ({"type": "string", "format": "date-time"}, "string"),
            ({"type": "integer", "format": "int64"}, "number"),
            ({"type": "number", "format": "double"}, "number"),
            ({"type": "boolean"}, "boolean"),
            ({"type": "null"}, "null"),
        ],
    )
    def test_primitives(self, schema, expected):
        type_expr = synthesize(schema)
        assert type_expr.kind == TypeKind.PRIMITIVE
        assert type_expr.name == expected

    def test_int_or_string(self):
        type_expr = synthesize({"type": "string", "format": "int-or-string"})
        assert type_expr.kind == TypeKind.UNION
        assert [member.name for member in type_expr.members] == ["string", "number"]

    def test_array(self):
        type_expr = synthesize({"type": "array", "items": {"type": "string"}})
        assert type_expr.kind == TypeKind.ARRAY
        assert type_expr.item.name == "string"

    def test_array_without_items(self):
        type_expr = synthesize({"type": "array"})
        assert type_expr.kind == TypeKind.ARRAY
        assert type_expr.item.kind == TypeKind.ANY

    def test_object_fields_keep_declaration_order(self):
        type_expr = synthesize(
            {
                "type": "object",
                "properties": {
                    "zeta": {"type": "string", "description": "Last letter"},
                    "alpha": {"type": "boolean"},
                },
                "required": ["alpha"],
            }
        )
        assert type_expr.kind == TypeKind.OBJECT
        assert [(f.name, f.is_required) for f in type_expr.fields] == [("zeta", False), ("alpha", True)]
        assert type_expr.fields[0].comment == "Last letter"
        assert type_expr.index_type is None

    def test_object_index_signature(self):
        type_expr = synthesize({"type": "object", "additionalProperties": {"type": "string"}})
        assert type_expr.fields == []
        assert type_expr.index_type.name == "string"

    def test_additional_properties_true(self):
        type_expr = synthesize({"type": "object", "additionalProperties": True})
        assert type_expr.index_type.kind == TypeKind.ANY

    def test_additional_properties_false(self):
        type_expr = synthesize({"type": "object", "additionalProperties": False})
        assert type_expr.index_type is None

    @pytest.mark.parametrize("schema", [{}, {"type": "file"}, {"format": "int-or-string"}, {"type": ["string"]}])
    def test_unknown_shapes_are_any(self, schema):
        assert synthesize(schema).kind == TypeKind.ANY

    def test_none_is_any(self):
        assert synthesize_type(None).kind == TypeKind.ANY

    def test_references_are_collected_from_expression(self):
        type_expr = synthesize(
            {
                "type": "object",
                "properties": {
                    "items": {"type": "array", "items": {"$ref": "#/definitions/pkg.Item"}},
                    "labels": {"type": "object", "additionalProperties": {"$ref": "#/definitions/pkg.Label"}},
                },
            }
        )
        assert type_expr.references() == ["pkg.Item", "pkg.Label"]
