"""Versioning file (versions.yaml) loading.

Format:
- module-sets: map set name -> { version, modules: [module path, ...] }
- excluded-modules (optional): module paths that exist on disk but are never released
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from multimod_tooling.errors import NotFoundError, ParseError
from multimod_tooling.helpers import load_yaml


@dataclass(frozen=True)
class ModuleSet:
    name: str
    version: str
    modules: tuple[str, ...]


@dataclass(frozen=True)
class Manifest:
    """Parsed versioning file. module_sets keeps the file's order."""

    path: Path
    module_sets: dict[str, ModuleSet] = field(default_factory=dict)
    excluded_modules: tuple[str, ...] = ()


def _parse_module_set(name: Any, data: Any, path: Path) -> ModuleSet:
    if not isinstance(name, str) or not name:
        msg = f"module set name must be a non-empty string, got {name!r}"
        raise ParseError(msg, path)
    if not isinstance(data, dict):
        msg = f"module set {name} must be a mapping with version and modules"
        raise ParseError(msg, path)
    version = data.get("version")
    if not isinstance(version, str) or not version:
        msg = f"module set {name} has no version string"
        raise ParseError(msg, path)
    modules = data.get("modules")
    if modules is None:
        modules = []
    if not isinstance(modules, list) or not all(isinstance(m, str) and m for m in modules):
        msg = f"module set {name} modules must be a list of module paths"
        raise ParseError(msg, path)
    return ModuleSet(name=name, version=version, modules=tuple(modules))


def load_manifest(versioning_file: Path) -> Manifest:
    """Load and validate a versioning file. Raises ParseError if missing or malformed."""
    path = Path(versioning_file)
    try:
        data = load_yaml(path)
    except OSError as e:
        msg = f"could not read versioning file: {e.strerror or e}"
        raise ParseError(msg, path) from e
    except yaml.YAMLError as e:
        msg = f"invalid YAML: {e}"
        raise ParseError(msg, path) from e

    if not isinstance(data, dict):
        msg = "versioning file must be a mapping with a module-sets key"
        raise ParseError(msg, path)
    raw_sets = data.get("module-sets")
    if not isinstance(raw_sets, dict):
        msg = "module-sets must be a mapping of set name to module set"
        raise ParseError(msg, path)

    module_sets = {name: _parse_module_set(name, body, path) for name, body in raw_sets.items()}

    excluded = data.get("excluded-modules") or []
    if not isinstance(excluded, list) or not all(isinstance(m, str) and m for m in excluded):
        msg = "excluded-modules must be a list of module paths"
        raise ParseError(msg, path)
    for mod_set in module_sets.values():
        both = sorted(set(mod_set.modules) & set(excluded))
        if both:
            msg = f"module set {mod_set.name} lists excluded modules: {', '.join(both)}"
            raise ParseError(msg, path)

    return Manifest(path=path, module_sets=module_sets, excluded_modules=tuple(excluded))


def get_module_set(module_set_name: str, versioning_file: Path) -> ModuleSet:
    """Return one module set from the versioning file. Raises NotFoundError if absent."""
    manifest = load_manifest(versioning_file)
    try:
        return manifest.module_sets[module_set_name]
    except KeyError:
        msg = f"module set {module_set_name} not found in {versioning_file}"
        raise NotFoundError(msg, module_set_name) from None


def get_all_module_set_names(versioning_file: Path) -> list[str]:
    """Sorted names of every module set in the versioning file."""
    return sorted(load_manifest(versioning_file).module_sets)
