"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

import jinja2

from ..config import CodeGeneratorConfig
from ..type_synthesis import TypeExpr
from ..utils import snake_to_pascal_case

if TYPE_CHECKING:
    from ..compiler import DefinitionUnit
    from ..module_graph import IndexModule

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension of generated modules
    FILE_EXTENSION: str = ""

    # File name of per-directory index modules
    INDEX_MODULE: str = ""

    COMMENT_PREFIX: str = "#"

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        self.template_dir = TEMPLATES_DIR / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.jinja_env.filters["snake_to_pascal"] = snake_to_pascal_case

        self.module_template = self.jinja_env.get_template(f"module.{self.FILE_EXTENSION}.jinja2")
        self.index_template = self.jinja_env.get_template(f"index.{self.FILE_EXTENSION}.jinja2")

    def module_path(self, parts: tuple[str, ...]) -> Path:
        """Output path of a definition module, relative to the output root."""
        return Path(*parts[:-1], f"{parts[-1]}.{self.FILE_EXTENSION}")

    def index_path(self, parts: tuple[str, ...]) -> Path:
        """Output path of the index module of a directory, relative to the output root."""
        return Path(*parts, self.INDEX_MODULE)

    def runtime_files(self) -> list[tuple[Path, str]]:
        """Static support modules copied verbatim into the output root."""
        runtime_dir = self.template_dir / "runtime"
        files = []
        for path in sorted(runtime_dir.iterdir()):
            if path.is_file():
                files.append((Path(path.name), path.read_text(encoding="utf-8")))
        return files

    def comment_lines(self, text: str) -> list[str]:
        """Turn free text into line comments of the target language."""
        return [f"{self.COMMENT_PREFIX} {line}".rstrip() for line in text.splitlines()]

    @abstractmethod
    def render_definition(self, unit: DefinitionUnit, generation_comment: str = "") -> str:
        """
        Render the module of one compiled definition.

        Args:
            unit: The compiled definition
            generation_comment: Header comment, empty to omit

        Returns:
            Module source code
        """

    @abstractmethod
    def render_index(self, index: IndexModule, generation_comment: str = "") -> str:
        """
        Render the re-export module of one directory level.

        Args:
            index: Modules and sub-directories of the directory
            generation_comment: Header comment, empty to omit

        Returns:
            Module source code
        """

    @abstractmethod
    def translate_type(self, type_expr: TypeExpr, hint: str = "") -> str:
        """
        Translate a synthesized type to a language-specific type string.

        Args:
            type_expr: The synthesized type
            hint: Name to use for declarations hoisted out of the expression

        Returns:
            Language-specific type string
        """
