"""
Exceptions raised by the generator.
"""


class CodeGenerationError(Exception):
    """Base class for errors that abort a generation run."""

    pass


class MissingDefinitionsError(CodeGenerationError):
    """Raised when the input document has no ``definitions`` mapping."""

    pass


class DefinitionTreeError(CodeGenerationError):
    """Raised when a definition's module path collides with a package path.

    This happens when one definition name is a dotted prefix of another,
    e.g. ``pkg.Foo`` and ``pkg.Foo.Bar``.
    """

    pass


class InvalidGeneratedCodeError(CodeGenerationError):
    """Raised when generated code fails validation before being written."""

    pass
