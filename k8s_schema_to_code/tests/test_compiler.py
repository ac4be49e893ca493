"""
Tests for single-definition compilation in both target languages.

Test cases live in test_data/definition_tests.json; every case lists
snippets expected (and not expected) in the module of each language.
"""

from __future__ import annotations

import ast
import json
from pathlib import Path

import pytest

from k8s_schema_to_code.backends.python_backend import format_docstring, format_literal, relative_module
from k8s_schema_to_code.backends.ts_backend import commentize, relative_import_path
from k8s_schema_to_code.compiler import DefinitionCompiler
from k8s_schema_to_code.config import CodeGeneratorConfig
from k8s_schema_to_code.schema_rewriter import rewrite_schema

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_test_cases():
    with open(TEST_DATA_DIR / "definition_tests.json", encoding="utf-8") as f:
        return json.load(f)


def compile_definition(name, schema, language="python"):
    compiler = DefinitionCompiler(CodeGeneratorConfig(language=language))
    return compiler.compile(name, schema)


def module_constant(source, name):
    """Evaluate the literal assigned to ``name`` in generated Python source."""
    for node in ast.parse(source).body:
        if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name) and node.target.id == name:
            return ast.literal_eval(node.value)
    raise AssertionError(f"{name} not found in generated module")


@pytest.mark.parametrize("language", ["python", "ts"])
@pytest.mark.parametrize("test_case", load_test_cases(), ids=lambda tc: tc["name"])
def test_definition_generation(test_case, language):
    """Test generated modules against expected snippets"""
    result = compile_definition(test_case["definition_name"], test_case["schema"], language)

    for expected in test_case["expected_contains"][language]:
        assert expected in result.content, f"Expected '{expected}' not found in generated code:\n{result.content}"

    for not_expected in test_case["expected_not_contains"][language]:
        assert not_expected not in result.content, f"Unwanted '{not_expected}' found in generated code"


@pytest.mark.parametrize("test_case", load_test_cases(), ids=lambda tc: tc["name"])
def test_python_modules_parse(test_case):
    result = compile_definition(test_case["definition_name"], test_case["schema"])
    ast.parse(result.content)


@pytest.mark.parametrize("test_case", load_test_cases(), ids=lambda tc: tc["name"])
def test_schema_constant_is_rewritten_schema(test_case):
    name = test_case["definition_name"]
    result = compile_definition(name, test_case["schema"])
    schema_constant = module_constant(result.content, DefinitionCompiler().analyze(name, test_case["schema"]).names.schema_name)
    assert schema_constant == rewrite_schema(name, test_case["schema"])


class TestDefinitionCompiler:
    """Compiled definition results"""

    def test_compiled_definition(self):
        schema = {
            "type": "object",
            "properties": {"spec": {"$ref": "#/definitions/io.k8s.api.core.v1.PodSpec"}},
        }
        result = compile_definition("io.k8s.api.core.v1.Pod", schema)
        assert result.name == "io.k8s.api.core.v1.Pod"
        assert result.module_parts == ("api", "core", "v1", "Pod")
        assert result.refs == ["io.k8s.api.core.v1.PodSpec"]

    def test_leaf_add_function_calls_no_dependencies(self):
        result = compile_definition("pkg.Foo", {"type": "object", "properties": {"bar": {"type": "string"}}})
        body = result.content.split("def PkgFooAddSchema", 1)[1].split("\n\n\n", 1)[0]
        assert "AddSchema(registry)" not in body
        assert 'add_schema("pkg.Foo", PkgFooSchema, registry)' in body

    def test_dependencies_are_registered_before_self(self):
        schema = {
            "type": "object",
            "properties": {
                "a": {"$ref": "#/definitions/pkg.A"},
                "b": {"$ref": "#/definitions/other.B"},
            },
        }
        content = compile_definition("pkg.Root", schema).content
        own = content.index('add_schema("pkg.Root"')
        assert content.index("PkgAAddSchema(registry)") < own
        assert content.index("OtherBAddSchema(registry)") < own
        assert "from ..other.B import OtherBAddSchema" in content

    def test_cross_module_imports_are_lazy(self):
        schema = {"type": "object", "properties": {"a": {"$ref": "#/definitions/pkg.A"}}}
        content = compile_definition("pkg.Root", schema).content
        tree = ast.parse(content)
        top_level_modules = {node.module for node in tree.body if isinstance(node, ast.ImportFrom)}
        assert "A" not in top_level_modules
        assert "if TYPE_CHECKING:" in content

    def test_self_reference_has_no_dependency(self):
        schema = {
            "type": "object",
            "properties": {"children": {"type": "array", "items": {"$ref": "#/definitions/pkg.Node"}}},
        }
        content = compile_definition("pkg.Node", schema).content
        assert '"children": NotRequired["list[IPkgNode]"],' in content
        assert "PkgNodeAddSchema(registry)" not in content
        assert "TYPE_CHECKING" not in content

    def test_nested_objects_are_hoisted(self):
        schema = {
            "type": "object",
            "properties": {
                "securityContext": {
                    "type": "object",
                    "properties": {"runAsUser": {"type": "integer"}},
                }
            },
        }
        content = compile_definition("pkg.Spec", schema).content
        assert '_IPkgSpecSecurityContext = TypedDict(\n    "_IPkgSpecSecurityContext",' in content
        assert '"securityContext": NotRequired[_IPkgSpecSecurityContext],' in content
        assert content.index("_IPkgSpecSecurityContext = TypedDict") < content.index("IPkgSpec = TypedDict")
        ast.parse(content)

    def test_hoisted_names_are_unique(self):
        schema = {
            "type": "object",
            "properties": {
                "foo_bar": {"type": "object", "properties": {"a": {"type": "string"}}},
                "fooBar": {"type": "object", "properties": {"b": {"type": "integer"}}},
            },
        }
        content = compile_definition("pkg.Foo", schema).content
        assert content.count("_IPkgFooFooBar = TypedDict(") == 1
        assert content.count("_IPkgFooFooBar2 = TypedDict(") == 1
        assert '"foo_bar": NotRequired[_IPkgFooFooBar],' in content
        assert '"fooBar": NotRequired[_IPkgFooFooBar2],' in content
        ast.parse(content)

    def test_value_property_and_index_signature_do_not_collide(self):
        schema = {
            "type": "object",
            "properties": {"value": {"type": "object", "properties": {"x": {"type": "string"}}}},
            "additionalProperties": {"type": "object", "properties": {"y": {"type": "string"}}},
        }
        content = compile_definition("pkg.Bar", schema).content
        assert content.count("_IPkgBarValue = TypedDict(") == 1
        assert '"value": NotRequired[_IPkgBarValue],' in content
        assert "# Additional properties: _IPkgBarValue2" in content
        assert '"_IPkgBarValue2",\n    {\n        "y": NotRequired[str],' in content

    @pytest.mark.parametrize("language", ["python", "ts"])
    def test_non_ascii_property_names(self, language):
        schema = {"type": "object", "properties": {"caf\u00e9": {"type": "string"}, "\U0001F600": {"type": "string"}}}
        content = compile_definition("pkg.Menu", schema, language).content
        assert '"caf\u00e9"' in content
        assert '"\U0001F600"' in content
        assert "\\ud83d" not in content

    def test_ts_nested_objects_are_inline(self):
        schema = {
            "type": "object",
            "properties": {"securityContext": {"type": "object", "properties": {"runAsUser": {"type": "integer"}}}},
        }
        content = compile_definition("pkg.Spec", schema, "ts").content
        assert '"securityContext"?: {\n"runAsUser"?: number;\n};' in content

    def test_ts_registration_guard(self):
        schema = {"type": "object", "properties": {"a": {"$ref": "#/definitions/pkg.A"}}}
        content = compile_definition("pkg.Root", schema, "ts").content
        assert 'if (!registry.begin("pkg.Root")) return;' in content
        assert 'registry.end("pkg.Root");' in content
        assert 'import { addSchema, defaultRegistry, SchemaRegistry } from "../ajv";' in content

    def test_generation_comment(self):
        compiler = DefinitionCompiler()
        result = compiler.compile("pkg.Foo", {"type": "object"}, "# Generated by k8s_schema_to_code")
        assert result.content.startswith("# Generated by k8s_schema_to_code\nfrom __future__ import annotations\n")

    def test_description_with_quotes(self):
        schema = {"type": "object", "description": 'Says """hello""" and ends with "'}
        content = compile_definition("pkg.Foo", schema).content
        ast.parse(content)


class TestBackendHelpers:
    """Path and literal helpers of the backends"""

    def test_relative_module(self):
        assert relative_module(("api", "core", "v1"), ("api", "core", "v1", "PodSpec")) == ".PodSpec"
        assert relative_module(("api", "core", "v1"), ("_registry",)) == "...._registry"
        assert relative_module(("api", "apps", "v1"), ("api", "core", "v1", "Pod")) == "...core.v1.Pod"
        assert relative_module((), ("_base",)) == "._base"

    def test_relative_import_path(self):
        assert relative_import_path(("api", "core", "v1", "Pod"), ("api", "core", "v1", "PodSpec")) == "./PodSpec"
        assert relative_import_path(("api", "core", "v1", "Pod"), ("ajv",)) == "../../../ajv"
        assert relative_import_path(("Root",), ("ajv",)) == "./ajv"
        assert relative_import_path(("api", "apps", "v1", "Deployment"), ("api", "core", "v1", "Pod")) == "../../core/v1/Pod"

    def test_format_literal(self):
        value = {"type": "object", "required": ["a"], "x": {"minimum": 0, "nullable": True, "default": None}}
        assert ast.literal_eval(format_literal(value)) == value
        assert format_literal({}) == "{}"
        assert format_literal([]) == "[]"

    def test_format_docstring(self):
        assert format_docstring("One line.") == '"""One line."""'
        assert format_docstring("First.\nSecond.") == '"""First.\n    Second.\n    """'

    def test_commentize(self):
        assert commentize("a */ b") == "/**\n * a \\*\\/ b\n */\n"
