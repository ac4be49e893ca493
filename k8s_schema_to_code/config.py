"""
Configuration for the definition code generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .names import DEFAULT_DEFINITION_PREFIX, DEFAULT_REF_PREFIX

LANGUAGES = ("python", "ts")


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    FORCE = "force"  # Default: overwrite generated files
    ERROR_IF_EXISTS = "error"  # Raise an error if any file exists


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for post-processing generated Python code."""

    # Whether formatting is enabled
    enabled: bool = False

    # Line length for the formatter
    line_length: int = 120

    # Python version target (e.g., "py312")
    target_version: str = "py312"


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Target language ("python" or "ts")
    language: str = "python"

    # Common prefix stripped from definition names to build output paths
    definition_prefix: str = DEFAULT_DEFINITION_PREFIX

    # Pointer prefix of $ref values in the input document
    ref_prefix: str = DEFAULT_REF_PREFIX

    # Definitions to skip entirely
    ignore_definitions: list[str] = field(default_factory=list)

    # Add generation comment at top of every file
    add_generation_comment: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        if self.language not in LANGUAGES:
            raise ValueError(f"Language not supported: {self.language}")

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        config.__post_init__()
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "language": self.language,
            "definition_prefix": self.definition_prefix,
            "ref_prefix": self.ref_prefix,
            "ignore_definitions": self.ignore_definitions,
            "add_generation_comment": self.add_generation_comment,
            "formatter": {
                "enabled": self.formatter.enabled,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
