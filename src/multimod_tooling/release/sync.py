"""Sync this repository's go.mod requirements to module set versions of another repository.

For each foreign module set, every local go.mod that requires one of its modules is
rewritten to the foreign version. Sets that change nothing are skipped; otherwise the
change is committed to a new branch sync_<set>_<version>. The working tree must be
clean before the first set is processed.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from multimod_tooling import git
from multimod_tooling.config import SyncOptions, resolve_layout
from multimod_tooling.errors import CommandError, MultimodError
from multimod_tooling.helpers import find_repo_root
from multimod_tooling.release.tooling import run_go_mod_tidy
from multimod_tooling.versioning import (
    ModuleSet,
    ModuleVersioning,
    get_all_module_set_names,
    get_module_set,
    update_all_mod_files,
)

log = logging.getLogger(__name__)


def sync_branch_name(module_set: ModuleSet, layout: dict[str, str] | None = None) -> str:
    prefix = resolve_layout(layout)["sync_branch_prefix"]
    return "_".join([prefix, module_set.name, module_set.version])


def sync_commit_message(module_set: ModuleSet) -> str:
    return f"Sync repo to use {module_set.name} with version {module_set.version}"


def _other_versioning_file(options: SyncOptions) -> Path:
    p = Path(options.other_versioning_file)
    if options.other_repo_root is not None and not p.is_absolute():
        return Path(options.other_repo_root) / p
    return p


def other_module_set_names(options: SyncOptions) -> list[str]:
    """Module set names to sync: all sets of the other versioning file, or the ones given."""
    other_file = _other_versioning_file(options)
    if not options.all_module_sets:
        return list(options.other_module_set_names)
    if options.other_repo_root is not None:
        other = ModuleVersioning(other_file, Path(options.other_repo_root))
        return sorted(other.mod_set_map)
    return get_all_module_set_names(other_file)


def sync_module_set(
    versioning: ModuleVersioning,
    other_set: ModuleSet,
    skip_go_mod_tidy: bool = False,
) -> str | None:
    """Rewrite requirements on other_set and commit them. Returns the new branch, or None if already in sync."""
    repo_root = versioning.repo_root
    updated = update_all_mod_files(versioning.mod_files(), other_set.modules, other_set.version)
    for p in updated:
        log.debug("Updated %s", p)

    if git.is_clean(repo_root):
        log.info("Module set already up to date. Skipping...")
        return None
    log.info("Updating versions for module set...")

    if skip_go_mod_tidy:
        log.info("Skipping go mod tidy...")
    else:
        try:
            run_go_mod_tidy(versioning.mod_files())
        except CommandError as e:
            log.warning("WARNING: failed to run 'go mod tidy': %s", e)

    branch = sync_branch_name(other_set)
    git.commit_changes_to_new_branch(repo_root, branch, sync_commit_message(other_set))
    return branch


def _run_impl(options: SyncOptions, repo_root: Path) -> list[str]:
    log.info("Using repo with root at %s", repo_root)
    names = other_module_set_names(options)
    if not names:
        msg = "no module sets to sync; pass module set names or --all-module-sets"
        raise MultimodError(msg)

    git.verify_working_tree_clean(repo_root)

    other_file = _other_versioning_file(options)
    branches: list[str] = []
    for name in names:
        other_set = get_module_set(name, other_file)
        versioning = ModuleVersioning(options.versioning_file, repo_root)
        log.info("===== Module Set: %s =====", name)
        branch = sync_module_set(versioning, other_set, skip_go_mod_tidy=options.skip_go_mod_tidy)
        if branch is not None:
            branches.append(branch)
    return branches


def run(options: SyncOptions, repo_root: Path | None = None) -> int:
    """Sync one or more foreign module sets. Returns 0 on success, 1 on failure."""
    try:
        root = repo_root if repo_root is not None else find_repo_root()
        branches = _run_impl(options, root)
    except (MultimodError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not branches:
        print("All module sets already up to date; nothing committed.")
        return 0
    print("Sync finished. Created branch(es):")
    for b in branches:
        print(f"  {b}")
    print("Verify the changes with 'git diff main', then push and open a pull request.")
    return 0
