"""
Code generation backends.

Each backend renders compiled definitions and index modules for one
target language.
"""

from __future__ import annotations

from ..config import CodeGeneratorConfig
from .base import CodeBackend
from .python_backend import PythonBackend
from .ts_backend import TypeScriptBackend

BACKENDS: dict[str, type[CodeBackend]] = {
    "python": PythonBackend,
    "ts": TypeScriptBackend,
}


def get_backend(config: CodeGeneratorConfig) -> CodeBackend:
    """Instantiate the backend for ``config.language``."""
    if config.language not in BACKENDS:
        raise ValueError(f"Language not supported: {config.language}")
    return BACKENDS[config.language](config)


__all__ = [
    "BACKENDS",
    "CodeBackend",
    "PythonBackend",
    "TypeScriptBackend",
    "get_backend",
]
