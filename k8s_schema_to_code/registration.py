"""
Registration plans.

A plan describes the add-schema function of one definition: the add-schema
functions of every referenced definition are called first, then the
definition's own schema document is inserted into the registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .names import DEFAULT_DEFINITION_PREFIX, NameSet


@dataclass
class Dependency:
    """A referenced definition whose schema must be registered first."""

    names: NameSet

    @property
    def name(self) -> str:
        return self.names.name

    @property
    def add_schema_name(self) -> str:
        return self.names.add_schema_name


@dataclass
class RegistrationPlan:
    """Everything a backend needs to render an add-schema function."""

    names: NameSet
    dependencies: list[Dependency] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.names.name

    @property
    def is_leaf(self) -> bool:
        """True when the function only registers its own schema."""
        return not self.dependencies


def plan_registration(
    name: str,
    refs: list[str],
    prefix: str = DEFAULT_DEFINITION_PREFIX,
    language: str = "python",
) -> RegistrationPlan:
    """
    Build the registration plan of a definition.

    Args:
        name: Dotted definition name
        refs: Reference set of the definition (any order)
        prefix: Common definition prefix stripped from output paths
        language: Target language, used for path derivation

    Returns:
        RegistrationPlan with one dependency per distinct reference
    """
    dependencies = [Dependency(NameSet.of(ref, prefix, language)) for ref in dict.fromkeys(refs) if ref != name]
    return RegistrationPlan(names=NameSet.of(name, prefix, language), dependencies=dependencies)
