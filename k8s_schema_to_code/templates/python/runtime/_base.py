"""
Base class of the generated value classes.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from ._registry import SchemaRegistry, get_registry


class BaseModel(dict):
    """A plain mapping tagged with the definition it was generated from."""

    # Definition name the instance validates against
    _schema_id: ClassVar[str] = ""

    # Add-schema function of that definition
    _add_schema: ClassVar[Callable[[SchemaRegistry | None], None] | None] = None

    def __init__(self, data: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        super().__init__(data or {}, **kwargs)

    def validate(self, registry: SchemaRegistry | None = None) -> None:
        """Register the definition's schemas if needed, then validate this instance.

        Raises:
            jsonschema.ValidationError: If the instance does not match
        """
        registry = get_registry(registry)
        if self._add_schema is not None:
            self._add_schema(registry)
        registry.validate(self._schema_id, self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return dict(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"
