"""Module versioning index: which set owns each module path and at what version."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from multimod_tooling.config import resolve_layout
from multimod_tooling.errors import DuplicateModuleError, NotFoundError
from multimod_tooling.versioning.gomod import build_module_path_map
from multimod_tooling.versioning.manifest import ModuleSet, load_manifest


@dataclass(frozen=True)
class ModuleInfo:
    module_set_name: str
    version: str


def build_module_info_map(
    mod_set_map: Mapping[str, ModuleSet],
    mod_path_map: Mapping[str, Path],
) -> dict[str, ModuleInfo]:
    """Invert set name -> modules into module path -> ModuleInfo.

    Raises DuplicateModuleError when a module path is listed twice and NotFoundError
    when a listed module has no module file in mod_path_map.
    """
    info: dict[str, ModuleInfo] = {}
    for set_name, mod_set in mod_set_map.items():
        for mod_path in mod_set.modules:
            if mod_path in info:
                raise DuplicateModuleError(mod_path, info[mod_path].module_set_name, set_name)
            if mod_path not in mod_path_map:
                msg = f"could not find module {mod_path} (module set {set_name}) in repo"
                raise NotFoundError(msg, mod_path)
            info[mod_path] = ModuleInfo(module_set_name=set_name, version=mod_set.version)
    return info


class ModuleVersioning:
    """Versioning file + module files of one repository, cross-checked.

    Read-only after construction: mod_set_map (set name -> ModuleSet), mod_path_map
    (module path -> go.mod path) and mod_info_map (module path -> ModuleInfo).
    """

    def __init__(
        self,
        versioning_file: Path,
        repo_root: Path,
        layout: dict[str, str] | None = None,
    ) -> None:
        self._layout = resolve_layout(layout)
        self.versioning_file = Path(versioning_file)
        self.repo_root = Path(repo_root)
        manifest = load_manifest(self.versioning_file)
        self.mod_set_map: dict[str, ModuleSet] = manifest.module_sets
        self.excluded_modules: tuple[str, ...] = manifest.excluded_modules
        self.mod_path_map: dict[str, Path] = build_module_path_map(
            self.repo_root,
            excluded_modules=self.excluded_modules,
            mod_file=self._layout["mod_file"],
        )
        self.mod_info_map: dict[str, ModuleInfo] = build_module_info_map(
            self.mod_set_map, self.mod_path_map
        )

    def module_set(self, name: str) -> ModuleSet:
        """Return the named module set. Raises NotFoundError."""
        try:
            return self.mod_set_map[name]
        except KeyError:
            msg = f"module set {name} not found in {self.versioning_file}"
            raise NotFoundError(msg, name) from None

    def mod_files(self) -> list[Path]:
        """Module files of every non-excluded module, sorted."""
        return sorted(self.mod_path_map.values())
