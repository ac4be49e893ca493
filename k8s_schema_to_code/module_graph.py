"""
Module tree of the generated output.

The tree is built from the complete list of compiled definitions, after the
compile pass, and flattened into one index module per directory level.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Union

from .compiler import CompiledDefinition
from .errors import DefinitionTreeError

# Directory name -> sub-tree, or module name -> dotted definition name
DefinitionTree = dict[str, Union[str, "DefinitionTree"]]


@dataclass
class IndexModule:
    """Contents of one directory level of the output."""

    parts: tuple[str, ...] = ()
    modules: list[str] = field(default_factory=list)
    packages: list[str] = field(default_factory=list)


def _insert(tree: DefinitionTree, parts: tuple[str, ...], name: str) -> None:
    if not parts:
        raise DefinitionTreeError(f"Definition {name!r} has an empty output path")

    node = tree
    for depth, part in enumerate(parts[:-1]):
        child = node.setdefault(part, {})
        if isinstance(child, str):
            path = "/".join(parts[: depth + 1])
            raise DefinitionTreeError(f"Definition {name!r} needs directory {path!r}, which is the module of {child!r}")
        node = child

    leaf = parts[-1]
    existing = node.get(leaf)
    if isinstance(existing, dict):
        raise DefinitionTreeError(f"Module of definition {name!r} collides with directory {'/'.join(parts)!r}")
    if existing is not None and existing != name:
        raise DefinitionTreeError(f"Definitions {existing!r} and {name!r} map to the same module {'/'.join(parts)!r}")
    node[leaf] = name


def build_tree(compiled: Iterable[CompiledDefinition]) -> DefinitionTree:
    """
    Build the nested module tree of a set of compiled definitions.

    Args:
        compiled: Every compiled definition of the run

    Returns:
        A new tree keyed by output path segments

    Raises:
        DefinitionTreeError: If two definitions need the same path, or one's
            module path is another's directory
    """
    tree: DefinitionTree = {}
    for definition in compiled:
        _insert(tree, definition.module_parts, definition.name)
    return tree


def iter_index_modules(tree: DefinitionTree, parts: tuple[str, ...] = ()) -> Iterator[IndexModule]:
    """Yield one IndexModule per directory, sub-directories before their parent."""
    modules = [key for key, value in tree.items() if isinstance(value, str)]
    packages = [key for key, value in tree.items() if isinstance(value, dict)]
    for package in packages:
        yield from iter_index_modules(tree[package], parts + (package,))
    yield IndexModule(parts=parts, modules=modules, packages=packages)
