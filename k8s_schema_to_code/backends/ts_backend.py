"""
TypeScript code generation backend.

Each definition becomes a module exporting an interface (or type alias), a
class extending ``BaseModel``, the registry schema constant, an add-schema
function and short-name aliases.
"""

from __future__ import annotations

import json
import posixpath
from typing import TYPE_CHECKING

from ..names import interface_name
from ..type_synthesis import TypeExpr, TypeKind
from ..utils import camel_case, trim_suffix
from .base import CodeBackend

if TYPE_CHECKING:
    from ..compiler import DefinitionUnit
    from ..module_graph import IndexModule

REGISTRY_MODULE = "ajv"
BASE_MODULE = "base"


def relative_import_path(module_parts: tuple[str, ...], target: tuple[str, ...]) -> str:
    """
    Relative import specifier of ``target`` from the module at ``module_parts``.

    Examples:
        ("api", "core", "v1", "Pod"), ("api", "core", "v1", "PodSpec") -> "./PodSpec"
        ("api", "core", "v1", "Pod"), ("ajv",) -> "../../../ajv"
    """
    start = posixpath.join(*module_parts[:-1]) if len(module_parts) > 1 else "."
    path = posixpath.relpath(posixpath.join(*target), start)
    if not path.startswith("."):
        path = "./" + path
    return path


def commentize(text: str) -> str:
    """Format free text as a ``/** */`` block, escaping nested terminators."""
    output = "/**\n"
    for line in text.split("\n"):
        output += " * " + line.replace("*/", "\\*\\/") + "\n"
    output += " */\n"
    return output


class TypeScriptBackend(CodeBackend):
    """TypeScript code generation backend."""

    TEMPLATE_LANG = "ts"
    FILE_EXTENSION = "ts"
    INDEX_MODULE = "index.ts"
    COMMENT_PREFIX = "//"

    TYPE_MAP = {
        "string": "string",
        "number": "number",
        "boolean": "boolean",
        "null": "null",
    }

    def render_definition(self, unit: DefinitionUnit, generation_comment: str = "") -> str:
        """Render the module of one definition."""
        names = unit.names
        content = self.translate_type(unit.type_expr)

        class_content = ""
        if unit.is_object:
            class_content = self.jinja_env.get_template("class_body.ts.jinja2").render(
                members=trim_suffix(content.strip(), "}").rstrip("\n"),
                names=names,
                name_literal=json.dumps(unit.name, ensure_ascii=False),
                group_version_kind=unit.group_version_kind,
                api_version_literal=json.dumps(unit.api_version or "", ensure_ascii=False),
                kind_literal=json.dumps((unit.group_version_kind or {}).get("kind", ""), ensure_ascii=False),
            )

        dependencies = [
            {
                "interface_name": dependency.names.interface_name,
                "add_schema_name": dependency.add_schema_name,
                "import_path": relative_import_path(names.module_parts, dependency.names.module_parts),
            }
            for dependency in unit.registration.dependencies
        ]

        return self.module_template.render(
            generation_comment=generation_comment,
            registry_path=relative_import_path(names.module_parts, (REGISTRY_MODULE,)),
            base_path=relative_import_path(names.module_parts, (BASE_MODULE,)),
            dependencies=dependencies,
            names=names,
            name_literal=json.dumps(unit.name, ensure_ascii=False),
            comment=commentize(unit.description) if unit.description else "",
            is_object=unit.is_object,
            content=content,
            class_content=class_content.rstrip("\n"),
            schema_json=json.dumps(unit.schema_document, indent=2, ensure_ascii=False),
        )

    def render_index(self, index: IndexModule, generation_comment: str = "") -> str:
        """Render an ``index.ts`` re-exporting modules and sub-directories."""
        packages = [{"name": package, "alias": camel_case(package, "-")} for package in index.packages]
        return self.index_template.render(
            generation_comment=generation_comment,
            modules=index.modules,
            packages=packages,
        )

    def translate_type(self, type_expr: TypeExpr | None, hint: str = "") -> str:
        """Translate a synthesized type to a TypeScript type string."""
        if type_expr is None:
            return "any"

        if type_expr.kind == TypeKind.REFERENCE:
            return interface_name(type_expr.name)

        if type_expr.kind == TypeKind.PRIMITIVE:
            return self.TYPE_MAP.get(type_expr.name, "any")

        if type_expr.kind == TypeKind.UNION:
            return " | ".join(self.translate_type(member) for member in type_expr.members)

        if type_expr.kind == TypeKind.ARRAY:
            return f"Array<{self.translate_type(type_expr.item)}>"

        if type_expr.kind == TypeKind.OBJECT:
            output = "{\n"
            for field_def in type_expr.fields:
                if field_def.comment:
                    output += commentize(field_def.comment)
                output += json.dumps(field_def.name, ensure_ascii=False)
                if not field_def.is_required:
                    output += "?"
                output += ": " + self.translate_type(field_def.type_expr) + ";\n"
            if type_expr.index_type is not None:
                output += f"[key: string]: {self.translate_type(type_expr.index_type)};\n"
            output += "}"
            return output

        return "any"
