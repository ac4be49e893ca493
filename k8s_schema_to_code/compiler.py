"""
Compilation of a single definition into a generated module.

Compiling one definition depends only on its own schema and the naming
rules, so definitions can be compiled in any order or in parallel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .backends import get_backend
from .backends.base import CodeBackend
from .config import CodeGeneratorConfig
from .names import NameSet
from .references import collect_refs
from .registration import RegistrationPlan, plan_registration
from .schema_ast import ObjectNode, SchemaParser
from .schema_rewriter import rewrite_schema
from .type_synthesis import TypeExpr, synthesize_type

logger = logging.getLogger(__name__)


@dataclass
class DefinitionUnit:
    """Everything derived from one definition, ready to be rendered."""

    names: NameSet
    type_expr: TypeExpr
    schema_document: dict[str, Any]
    registration: RegistrationPlan
    is_object: bool = False
    description: str | None = None
    group_version_kind: dict[str, str] | None = None

    @property
    def name(self) -> str:
        return self.names.name

    @property
    def api_version(self) -> str | None:
        """``group/version`` (or bare ``version`` for the core group) from the kind annotation."""
        if not self.group_version_kind:
            return None
        group = self.group_version_kind["group"]
        version = self.group_version_kind["version"]
        return f"{group}/{version}" if group else version


@dataclass
class CompiledDefinition:
    """Result of compiling one definition."""

    name: str
    module_parts: tuple[str, ...]
    content: str
    refs: list[str] = field(default_factory=list)


class DefinitionCompiler:
    """Compiles definitions one at a time with a language backend."""

    def __init__(self, config: CodeGeneratorConfig | None = None, backend: CodeBackend | None = None):
        self.config = config or CodeGeneratorConfig()
        self.backend = backend or get_backend(self.config)
        self.parser = SchemaParser()

    def analyze(self, name: str, schema: Any) -> DefinitionUnit:
        """
        Derive names, type, registry document and registration plan of a definition.

        Args:
            name: Dotted definition name
            schema: Raw schema of the definition; a non-mapping schema
                compiles to an unconstrained type and registry document

        Returns:
            DefinitionUnit for the backend
        """
        config = self.config
        definition = self.parser.parse_definition(name, schema)
        refs = collect_refs(name, schema, config.ref_prefix)

        return DefinitionUnit(
            names=NameSet.of(name, config.definition_prefix, config.language),
            type_expr=synthesize_type(definition.body, config.ref_prefix),
            schema_document=rewrite_schema(name, schema, config.ref_prefix),
            registration=plan_registration(name, refs, config.definition_prefix, config.language),
            is_object=isinstance(definition.body, ObjectNode),
            description=definition.body.description if definition.body is not None else None,
            group_version_kind=definition.group_version_kind,
        )

    def compile(self, name: str, schema: Any, generation_comment: str = "") -> CompiledDefinition:
        """
        Compile a definition into module source code.

        Args:
            name: Dotted definition name
            schema: Raw schema of the definition
            generation_comment: Header comment, empty to omit

        Returns:
            CompiledDefinition with the rendered module
        """
        unit = self.analyze(name, schema)
        logger.debug("Compiling %s (%d references)", name, len(unit.registration.dependencies))
        content = self.backend.render_definition(unit, generation_comment)
        return CompiledDefinition(
            name=name,
            module_parts=unit.names.module_parts,
            content=content,
            refs=[dependency.name for dependency in unit.registration.dependencies],
        )
