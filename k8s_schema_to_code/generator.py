"""
Generation of a complete output tree from an API specification document.

Compiling definitions is independent per definition; the module tree and
index modules are built only once every definition has been compiled.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import __version__
from .atomic_writer import AtomicWriter
from .cli_utils import reconstruct_command_line
from .compiler import CompiledDefinition, DefinitionCompiler
from .config import CodeGeneratorConfig, OutputMode
from .errors import MissingDefinitionsError
from .formatters import BlackFormatter
from .module_graph import build_tree, iter_index_modules

logger = logging.getLogger(__name__)


@dataclass
class GeneratedFile:
    """One file of the output tree, with a path relative to the output root."""

    path: Path
    content: str
    kind: str = "definition"  # "definition", "index" or "runtime"


def get_definitions(document: Any) -> dict[str, Any]:
    """
    Extract the definitions mapping of an input document.

    Raises:
        MissingDefinitionsError: If the document has no ``definitions`` mapping
    """
    definitions = document.get("definitions") if isinstance(document, dict) else None
    if not isinstance(definitions, dict):
        raise MissingDefinitionsError("Input document has no 'definitions' mapping")
    return definitions


class SchemaGenerator:
    """Generates one module per definition plus index and runtime modules."""

    def __init__(self, document: dict[str, Any], config: CodeGeneratorConfig | None = None):
        self.config = config or CodeGeneratorConfig()
        self.definitions = get_definitions(document)
        self.compiler = DefinitionCompiler(self.config)
        self.backend = self.compiler.backend
        self.formatter = BlackFormatter()

    def generation_comment(self) -> str:
        """Generate the command line comment put at the top of generated files."""
        if not self.config.add_generation_comment:
            return ""

        try:
            from .k8s_schema_to_code import k8s_schema_to_code as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "k8s_schema_to_code"

        return f"{self.backend.COMMENT_PREFIX} Generated by k8s_schema_to_code v{__version__} : {command_line}"

    def compile_definitions(self) -> list[CompiledDefinition]:
        """Compile every definition of the document, in document order."""
        comment = self.generation_comment()
        compiled = []
        for name, schema in self.definitions.items():
            if name in self.config.ignore_definitions:
                logger.debug("Ignoring definition %s", name)
                continue
            if not isinstance(schema, dict):
                logger.warning("Definition %s is not a mapping, compiling it as unconstrained", name)
            compiled.append(self.compiler.compile(name, schema, comment))
        return compiled

    def generate(self) -> list[GeneratedFile]:
        """
        Generate every file of the output tree.

        Returns:
            Definition modules, then index modules, then runtime modules

        Raises:
            DefinitionTreeError: If two definitions map to conflicting paths
        """
        compiled = self.compile_definitions()
        comment = self.generation_comment()

        files = [
            GeneratedFile(self.backend.module_path(definition.module_parts), self._format(definition.content))
            for definition in compiled
        ]

        tree = build_tree(compiled)
        for index in iter_index_modules(tree):
            content = self.backend.render_index(index, comment)
            files.append(GeneratedFile(self.backend.index_path(index.parts), self._format(content), kind="index"))

        for path, content in self.backend.runtime_files():
            files.append(GeneratedFile(path, content, kind="runtime"))

        logger.debug("Generated %d files for %d definitions", len(files), len(compiled))
        return files

    def write(self, output_dir: Path, report: Callable[[Path], None] | None = None) -> list[Path]:
        """
        Generate and write the output tree under ``output_dir``.

        Args:
            output_dir: Output root directory
            report: Called with each path just before it is written

        Returns:
            Written paths, in write order

        Raises:
            FileExistsError: In ERROR_IF_EXISTS mode, if any target exists
            InvalidGeneratedCodeError: If a Python module does not parse
        """
        output_config = self.config.output
        files = self.generate()
        targets = [(Path(output_dir) / generated.path, generated) for generated in files]

        writer = AtomicWriter()
        write = writer.write
        if output_config.mode == OutputMode.ERROR_IF_EXISTS:
            # Refuse before anything is written; each write re-checks its own target
            existing = [target for target, _ in targets if target.exists()]
            if existing:
                raise FileExistsError(f"Output file already exists: {existing[0]}. Use --force to overwrite.")
            write = writer.write_if_not_exists

        written = []
        for target, generated in targets:
            if report is not None:
                report(target)
            write(
                target,
                generated.content,
                validate=output_config.validate_before_write,
                atomic=output_config.atomic_write,
            )
            written.append(target)
        return written

    def _format(self, content: str) -> str:
        if self.config.language != "python" or not self.config.formatter.enabled:
            return content
        return self.formatter.format(content, self.config.formatter)
