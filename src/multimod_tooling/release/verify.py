"""Verify a versioning file against the repository without changing anything."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from multimod_tooling.config import VerifyOptions
from multimod_tooling.errors import InvalidVersionError, ModuleNotInSetError, MultimodError
from multimod_tooling.helpers import (
    find_repo_root,
    is_valid_semver,
    module_path_major,
    semver_major,
)
from multimod_tooling.versioning import ModuleVersioning

log = logging.getLogger(__name__)


def modules_not_in_set(versioning: ModuleVersioning) -> list[str]:
    """Non-excluded modules on disk that no module set lists."""
    return sorted(p for p in versioning.mod_path_map if p not in versioning.mod_info_map)


def verify_all_modules_in_set(versioning: ModuleVersioning) -> None:
    missing = modules_not_in_set(versioning)
    if missing:
        raise ModuleNotInSetError(missing)


def verify_versions(versioning: ModuleVersioning) -> None:
    """Every set version is semver; /vN modules (N >= 2) need major N, others major 0 or 1."""
    for name, mod_set in versioning.mod_set_map.items():
        if not is_valid_semver(mod_set.version):
            msg = f"module set {name} has invalid version {mod_set.version!r}"
            raise InvalidVersionError(msg, name)
        major = semver_major(mod_set.version)
        for mod_path in mod_set.modules:
            suffix = module_path_major(mod_path)
            if suffix is not None and suffix >= 2:
                if major != suffix:
                    msg = (
                        f"module set {name} version {mod_set.version} does not match "
                        f"major version v{suffix} of module {mod_path}"
                    )
                    raise InvalidVersionError(msg, name)
            elif major >= 2:
                msg = (
                    f"module set {name} version {mod_set.version} needs a /v{major} "
                    f"suffix on module {mod_path}"
                )
                raise InvalidVersionError(msg, name)


def verify(versioning_file: Path, repo_root: Path) -> ModuleVersioning:
    """Build the versioning index and run every check. Returns the index."""
    versioning = ModuleVersioning(versioning_file, repo_root)
    verify_all_modules_in_set(versioning)
    verify_versions(versioning)
    return versioning


def run(options: VerifyOptions, repo_root: Path | None = None) -> int:
    """CLI entry point for verify. Returns 0 when the versioning file is consistent, else 1."""
    try:
        root = repo_root if repo_root is not None else find_repo_root()
        versioning = verify(options.versioning_file, root)
    except (MultimodError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    log.debug("Excluded modules: %s", ", ".join(versioning.excluded_modules) or "none")
    print(
        f"{options.versioning_file}: {len(versioning.mod_set_map)} module set(s), "
        f"{len(versioning.mod_info_map)} module(s) verified"
    )
    return 0
