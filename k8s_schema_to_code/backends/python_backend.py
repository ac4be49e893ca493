"""
Python code generation backend.

Each definition becomes a module with a ``TypedDict`` (or type alias), a
registry schema constant, an add-schema function and, for object
definitions, a ``BaseModel`` subclass.
"""

from __future__ import annotations

import collections
import json
from typing import TYPE_CHECKING, Any

from ..names import interface_name, python_identifier
from ..type_synthesis import TypeExpr, TypeKind
from ..utils import snake_to_pascal_case
from .base import CodeBackend

if TYPE_CHECKING:
    from ..compiler import DefinitionUnit
    from ..module_graph import IndexModule

REGISTRY_MODULE = "_registry"
BASE_MODULE = "_base"

INDENT = "    "


def relative_module(package: tuple[str, ...], target: tuple[str, ...]) -> str:
    """
    Relative import path of ``target`` as seen from modules of ``package``.

    Examples:
        ("api", "core", "v1"), ("api", "core", "v1", "PodSpec") -> ".PodSpec"
        ("api", "core", "v1"), ("_registry",) -> "...._registry"
    """
    common = 0
    for ours, theirs in zip(package, target):
        if ours != theirs:
            break
        common += 1
    return "." * (len(package) - common + 1) + ".".join(target[common:])


def string_literal(value: str) -> str:
    """Double-quoted Python string literal; non-ASCII characters are kept as-is."""
    return json.dumps(value, ensure_ascii=False)


def format_literal(value: Any, level: int = 0) -> str:
    """Format a JSON-compatible value as a Python literal, one entry per line."""
    indent = INDENT * (level + 1)
    closing = INDENT * level
    if isinstance(value, dict):
        if not value:
            return "{}"
        entries = [f"{indent}{string_literal(str(k))}: {format_literal(v, level + 1)}," for k, v in value.items()]
        return "{\n" + "\n".join(entries) + "\n" + closing + "}"
    if isinstance(value, list):
        if not value:
            return "[]"
        entries = [f"{indent}{format_literal(item, level + 1)}," for item in value]
        return "[\n" + "\n".join(entries) + "\n" + closing + "]"
    if isinstance(value, bool) or value is None:
        return repr(value)
    if isinstance(value, str):
        return string_literal(value)
    return repr(value)


def format_docstring(text: str, indent: str = INDENT) -> str:
    """Format free text as a triple-quoted docstring at the given indentation."""
    escaped = text.strip().replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if escaped.endswith('"'):
        escaped += " "
    lines = escaped.splitlines() or [""]
    if len(lines) == 1:
        return f'"""{lines[0]}"""'
    body = "\n".join((indent + line).rstrip() for line in lines[1:])
    return f'"""{lines[0]}\n{body}\n{indent}"""'


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"
    INDEX_MODULE = "__init__.py"
    COMMENT_PREFIX = "#"

    TYPE_MAP = {
        "string": "str",
        "number": "float",
        "boolean": "bool",
        "null": "None",
    }

    def __init__(self, config):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()
        self.hoisted: list[str] = []
        self.hoisted_names: set[str] = set()

    def render_definition(self, unit: DefinitionUnit, generation_comment: str = "") -> str:
        """Render the module of one definition."""
        self.python_imports = {("typing", "Any")}
        self.hoisted = []
        self.hoisted_names = set()

        names = unit.names
        package = names.module_parts[:-1]

        type_declaration = self._render_type_declaration(unit)

        runtime_imports = [
            f"from {relative_module(package, (REGISTRY_MODULE,))} import SchemaRegistry, add_schema, get_registry",
        ]
        if unit.is_object:
            runtime_imports.insert(0, f"from {relative_module(package, (BASE_MODULE,))} import BaseModel")

        dependency_imports = []
        type_checking_imports = []
        for dependency in unit.registration.dependencies:
            module = relative_module(package, dependency.names.module_parts)
            dependency_imports.append(f"from {module} import {dependency.add_schema_name}")
            type_checking_imports.append(f"from {module} import {dependency.names.interface_name}")
        if type_checking_imports:
            self.python_imports.add(("typing", "TYPE_CHECKING"))

        aliases = []
        short_interface = python_identifier(names.short_interface_name)
        short_class = python_identifier(names.short_class_name)
        if short_interface != names.interface_name:
            aliases.append((short_interface, names.interface_name))
        if short_class != names.class_name:
            aliases.append((short_class, names.class_name))

        exports = [names.interface_name, names.class_name, names.schema_name, names.add_schema_name]
        exports.extend(alias for alias, _ in aliases)

        description = unit.description.strip() if unit.description else ""
        return self.module_template.render(
            generation_comment=generation_comment,
            imports=self._assemble_imports() + [""] + runtime_imports,
            type_checking_imports=type_checking_imports,
            declarations=self.hoisted + [type_declaration],
            names=names,
            name_literal=string_literal(unit.name),
            schema_literal=format_literal(unit.schema_document),
            plan=unit.registration,
            dependency_imports=dependency_imports,
            is_object=unit.is_object,
            docstring=format_docstring(description) if description else "",
            group_version_kind=unit.group_version_kind,
            api_version_literal=string_literal(unit.api_version or ""),
            kind_literal=string_literal((unit.group_version_kind or {}).get("kind", "")),
            aliases=aliases,
            exports=list(dict.fromkeys(exports)),
        )

    def render_index(self, index: IndexModule, generation_comment: str = "") -> str:
        """Render an ``__init__.py`` re-exporting modules and sub-packages."""
        return self.index_template.render(
            generation_comment=generation_comment,
            modules=index.modules,
            packages=index.packages,
        )

    def _render_type_declaration(self, unit: DefinitionUnit) -> str:
        names = unit.names
        comment = self.comment_lines(unit.description) if unit.description else []

        # Objects without properties are maps: an empty TypedDict would admit no keys
        if unit.is_object and unit.type_expr.fields:
            self.hoisted_names.add(names.interface_name)
            declaration = self._typed_dict(names.interface_name, unit.type_expr)
        else:
            self.python_imports.add(("typing", "TypeAlias"))
            annotation = self.translate_type(unit.type_expr, "_" + names.interface_name)
            annotation = self._runtime_annotation(annotation, unit.type_expr)
            declaration = f"{names.interface_name}: TypeAlias = {annotation}"
        return "\n".join(comment + [declaration])

    def _typed_dict(self, name: str, type_expr: TypeExpr) -> str:
        """Render an object type as a functional ``TypedDict`` declaration.

        The functional form accepts any property name, including ``$ref`` or
        names that are Python keywords.
        """
        self.python_imports.add(("typing", "TypedDict"))
        lines = [f"{name} = TypedDict(", f"{INDENT}{string_literal(name)},", f"{INDENT}{{"]
        for field_def in type_expr.fields:
            if field_def.comment:
                lines.extend(INDENT * 2 + line for line in self.comment_lines(field_def.comment))
            annotation = self.translate_type(field_def.type_expr, self._nested_name(name, field_def.name))
            annotation = self._runtime_annotation(annotation, field_def.type_expr)
            if not field_def.is_required:
                self.python_imports.add(("typing", "NotRequired"))
                annotation = f"NotRequired[{annotation}]"
            lines.append(f"{INDENT * 2}{string_literal(field_def.name)}: {annotation},")
        if type_expr.index_type is not None:
            index_annotation = self.translate_type(type_expr.index_type, self._nested_name(name, "value"))
            lines.append(f"{INDENT * 2}# Additional properties: {index_annotation}")
        lines.extend([f"{INDENT}}},", ")"])
        return "\n".join(lines)

    def _nested_name(self, parent: str, field_name: str) -> str:
        """Name of a declaration hoisted out of ``parent`` for ``field_name``.

        Hoisted names start with an underscore so they never collide with
        the interface names of other definitions.
        """
        suffix = snake_to_pascal_case(field_name) if field_name else ""
        return "_" + parent.lstrip("_") + (suffix or "Value")

    def _reserve_name(self, hint: str) -> str:
        """Make a hoisted declaration name unique within the module.

        Name hints are lossy (``foo_bar`` and ``fooBar`` give the same hint),
        so later declarations get a numeric suffix.
        """
        name = hint
        counter = 2
        while name in self.hoisted_names:
            name = f"{hint}{counter}"
            counter += 1
        self.hoisted_names.add(name)
        return name

    def _runtime_annotation(self, annotation: str, type_expr: TypeExpr | None) -> str:
        """Quote annotations evaluated at import time that name other definitions."""
        if type_expr is not None and type_expr.references():
            return string_literal(annotation)
        return annotation

    def translate_type(self, type_expr: TypeExpr | None, hint: str = "") -> str:
        """Translate a synthesized type to a Python type string."""
        if type_expr is None:
            return "Any"

        if type_expr.kind == TypeKind.REFERENCE:
            return interface_name(type_expr.name)

        if type_expr.kind == TypeKind.PRIMITIVE:
            return self.TYPE_MAP.get(type_expr.name, "Any")

        if type_expr.kind == TypeKind.UNION:
            return " | ".join(self.translate_type(member, hint) for member in type_expr.members)

        if type_expr.kind == TypeKind.ARRAY:
            return f"list[{self.translate_type(type_expr.item, hint + 'Item')}]"

        if type_expr.kind == TypeKind.OBJECT:
            if type_expr.fields:
                name = self._reserve_name(hint)
                self.hoisted.append(self._typed_dict(name, type_expr))
                return name
            if type_expr.index_type is not None:
                return f"dict[str, {self.translate_type(type_expr.index_type, hint + 'Value')}]"
            return "dict[str, Any]"

        return "Any"

    def _assemble_imports(self) -> list[str]:
        """Assemble standard library import statements."""
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        assembled = []
        for module in sorted(import_groups.keys()):
            names = sorted(import_groups[module], key=lambda n: (not n.isupper(), n))
            assembled.append(f"from {module} import {', '.join(names)}")
        return assembled
