"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent half-written modules
from interrupted operations.
"""

from __future__ import annotations

import ast
import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import InvalidGeneratedCodeError


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_python: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_python: Optional validation function for Python code
        """
        self._validate_python = validate_python or self._default_validate_python

    def write(self, path: Path, content: str, validate: bool = True, atomic: bool = True) -> None:
        """Write content to file.

        Python files (by suffix) are parsed before being committed.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing
            atomic: Whether to go through a temporary file

        Raises:
            InvalidGeneratedCodeError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        if validate and path.suffix == ".py":
            self._validate_python(content)

        if not atomic:
            path.write_text(content, encoding="utf-8")
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True, atomic: bool = True) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            InvalidGeneratedCodeError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")
        self.write(path, content, validate, atomic)

    def _default_validate_python(self, content: str) -> None:
        """Default Python validation.

        Raises:
            InvalidGeneratedCodeError: If the code does not parse
        """
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise InvalidGeneratedCodeError(f"Generated Python code is not valid: {e}") from e
