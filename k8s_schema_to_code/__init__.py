"""Kubernetes Schema to Code Generator

Compiles the definitions of an OpenAPI/Kubernetes specification into one
module per definition: a structural type, a value class, a registry schema
document and a dependencies-first registration function. Supports Python
and TypeScript output.
"""

__version__ = "1.0.0"

from .compiler import CompiledDefinition, DefinitionCompiler
from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode
from .errors import CodeGenerationError, DefinitionTreeError, InvalidGeneratedCodeError, MissingDefinitionsError
from .generator import GeneratedFile, SchemaGenerator

__all__ = [
    "SchemaGenerator",
    "GeneratedFile",
    "DefinitionCompiler",
    "CompiledDefinition",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "CodeGenerationError",
    "MissingDefinitionsError",
    "DefinitionTreeError",
    "InvalidGeneratedCodeError",
]
