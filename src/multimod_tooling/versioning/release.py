"""Tag names for a module set release.

A module's tag name is the directory of its go.mod relative to the repo root, with
forward slashes. The module at the repo root gets REPO_ROOT_TAG, and its full tag is
just the version (v1.2.3); every other module's full tag is <dir>/<version>.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path, PurePath

from multimod_tooling import git
from multimod_tooling.errors import NotFoundError, TagExistsError
from multimod_tooling.versioning.index import ModuleVersioning
from multimod_tooling.versioning.manifest import ModuleSet

REPO_ROOT_TAG = "REPOROOTTAG"


def module_path_to_tag_name(
    module_path: str,
    mod_path_map: Mapping[str, Path],
    repo_root: Path,
) -> str:
    """Tag name for one module. Raises NotFoundError if module_path is not in mod_path_map."""
    try:
        mod_file = Path(mod_path_map[module_path])
    except KeyError:
        msg = f"module {module_path} not found in module path map"
        raise NotFoundError(msg, module_path) from None
    rel = os.path.relpath(Path(mod_file).parent, Path(repo_root))
    if rel in (".", ""):
        return REPO_ROOT_TAG
    return PurePath(rel).as_posix()


def module_paths_to_tag_names(
    module_paths: Iterable[str],
    mod_path_map: Mapping[str, Path],
    repo_root: Path,
) -> list[str]:
    return [module_path_to_tag_name(p, mod_path_map, repo_root) for p in module_paths]


def full_tag_name(tag_name: str, version: str) -> str:
    if tag_name == REPO_ROOT_TAG:
        return version
    return f"{tag_name}/{version}"


class ModuleSetRelease:
    """One module set of a ModuleVersioning, with the tag names of its modules in declared order."""

    def __init__(self, module_versioning: ModuleVersioning, module_set_name: str) -> None:
        self.module_versioning = module_versioning
        self.mod_set_name = module_set_name
        self.mod_set: ModuleSet = module_versioning.module_set(module_set_name)
        self.tag_names: list[str] = module_paths_to_tag_names(
            self.mod_set.modules,
            module_versioning.mod_path_map,
            module_versioning.repo_root,
        )

    @classmethod
    def load(
        cls,
        versioning_file: Path,
        module_set_name: str,
        repo_root: Path,
        layout: dict[str, str] | None = None,
    ) -> ModuleSetRelease:
        return cls(ModuleVersioning(versioning_file, repo_root, layout=layout), module_set_name)

    @property
    def repo_root(self) -> Path:
        return self.module_versioning.repo_root

    def mod_set_version(self) -> str:
        return self.mod_set.version

    def mod_set_paths(self) -> list[str]:
        return list(self.mod_set.modules)

    def module_full_tag_names(self) -> list[str]:
        return [full_tag_name(t, self.mod_set.version) for t in self.tag_names]

    def existing_tags(self) -> list[str]:
        """Full tag names of this release that already exist in the repository."""
        return [t for t in self.module_full_tag_names() if git.tag_exists(self.repo_root, t)]

    def verify_git_tags_do_not_already_exist(self) -> None:
        """Raise TagExistsError naming every full tag name that already exists."""
        existing = self.existing_tags()
        if existing:
            raise TagExistsError(existing)
