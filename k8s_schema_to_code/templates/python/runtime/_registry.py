"""
Schema registry used by the generated add-schema functions.

Schemas are stored under their flat definition name; ``$ref`` values inside
them use the ``<name>#`` form and are resolved against this registry.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from jsonschema import Draft7Validator
from referencing import Registry
from referencing.jsonschema import DRAFT7


class SchemaRegistry:
    """A name-keyed store of schema documents with insert-if-absent semantics."""

    def __init__(self) -> None:
        self._schemas: dict[str, dict[str, Any]] = {}
        self._in_progress: set[str] = set()

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def names(self) -> list[str]:
        """Registered names, in registration order."""
        return list(self._schemas)

    def get(self, name: str) -> dict[str, Any] | None:
        return self._schemas.get(name)

    def add_if_absent(self, name: str, schema: dict[str, Any]) -> bool:
        """Store ``schema`` under ``name`` unless the name is already taken.

        Returns:
            True if the schema was stored
        """
        if name in self._schemas:
            return False
        self._schemas[name] = schema
        return True

    @contextmanager
    def registering(self, name: str) -> Iterator[bool]:
        """Claim ``name`` for the duration of its registration.

        Yields False when the name is already registered or its registration
        is already running further up the call chain, so mutually
        referencing definitions terminate.
        """
        if name in self._schemas or name in self._in_progress:
            yield False
            return
        self._in_progress.add(name)
        try:
            yield True
        finally:
            self._in_progress.discard(name)

    def _build_registry(self) -> Registry:
        return Registry().with_resources((name, DRAFT7.create_resource(schema)) for name, schema in self._schemas.items())

    def validator(self, name: str) -> Draft7Validator:
        """Build a validator for the registered definition ``name``."""
        if name not in self._schemas:
            raise KeyError(f"Schema not registered: {name}")
        return Draft7Validator({"$ref": f"{name}#"}, registry=self._build_registry())

    def validate(self, name: str, instance: Any) -> None:
        """Validate ``instance`` against ``name``.

        Raises:
            jsonschema.ValidationError: If the instance does not match
        """
        self.validator(name).validate(instance)

    def is_valid(self, name: str, instance: Any) -> bool:
        return self.validator(name).is_valid(instance)


default_registry = SchemaRegistry()


def get_registry(registry: SchemaRegistry | None = None) -> SchemaRegistry:
    """Return ``registry``, or the shared default registry when None."""
    return default_registry if registry is None else registry


def add_schema(name: str, schema: dict[str, Any], registry: SchemaRegistry | None = None) -> bool:
    """Register ``schema`` under ``name``; registering a name twice is a no-op."""
    return get_registry(registry).add_if_absent(name, schema)
