"""Prepare module sets for release: branch, bump go.mod requirements, lint/test, commit.

For each module set:
- checks that git tags do not already exist for the new module set version;
- checks that the working tree is clean (once, before the first set);
- switches to a new branch pre_release_<module set name>_<new version>;
- requires the new version in every go.mod that depends on a module of the set;
- runs 'make lint' and 'make ci' (unless skipped); a failure stops before committing;
- adds and commits the changes (unless no_commit).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from multimod_tooling import git
from multimod_tooling.config import PrereleaseOptions, resolve_layout
from multimod_tooling.errors import MultimodError
from multimod_tooling.helpers import find_repo_root
from multimod_tooling.release.tooling import run_make
from multimod_tooling.versioning import ModuleSetRelease, ModuleVersioning, update_all_mod_files

log = logging.getLogger(__name__)


def prerelease_branch_name(release: ModuleSetRelease, layout: dict[str, str] | None = None) -> str:
    prefix = resolve_layout(layout)["prerelease_branch_prefix"]
    return "_".join([prefix, release.mod_set_name, release.mod_set_version()])


def prerelease_commit_message(release: ModuleSetRelease) -> str:
    return f"Prepare {release.mod_set_name} for version {release.mod_set_version()}"


def update_mod_files_for_release(release: ModuleSetRelease) -> list[Path]:
    """Require the set's version of its modules in every module file. Returns changed files."""
    versioning = release.module_versioning
    return update_all_mod_files(
        versioning.mod_files(), release.mod_set_paths(), release.mod_set_version()
    )


def prerelease_module_set(release: ModuleSetRelease, options: PrereleaseOptions) -> str:
    """Branch, rewrite, check and (optionally) commit one module set. Returns the branch name."""
    repo_root = release.repo_root
    branch = prerelease_branch_name(release)
    log.info("===== Module Set: %s (%s) =====", release.mod_set_name, release.mod_set_version())

    git.checkout_new_branch(repo_root, branch)
    log.info("Switched to branch %s", branch)

    updated = update_mod_files_for_release(release)
    for p in updated:
        log.info("Updated %s", p.relative_to(repo_root))

    if options.skip_make:
        log.info("Skipping 'make %s'...", "' and 'make ".join(options.make_targets))
    else:
        run_make(repo_root, options.make_targets)

    if options.no_commit:
        log.info("Skipping commit; changes are left unstaged on %s", branch)
        return branch
    if git.is_clean(repo_root):
        log.info("No files changed for %s; nothing to commit", release.mod_set_name)
        return branch
    git.commit_all(repo_root, prerelease_commit_message(release))
    return branch


def module_set_names(options: PrereleaseOptions, versioning: ModuleVersioning) -> list[str]:
    if options.all_module_sets:
        return sorted(versioning.mod_set_map)
    return list(options.module_set_names)


def _run_impl(options: PrereleaseOptions, repo_root: Path) -> list[str]:
    versioning = ModuleVersioning(options.versioning_file, repo_root)
    names = module_set_names(options, versioning)
    if not names:
        msg = "no module sets to prepare; pass module set names or --all-module-sets"
        raise MultimodError(msg)

    releases = [ModuleSetRelease(versioning, name) for name in names]
    for release in releases:
        release.verify_git_tags_do_not_already_exist()
    git.verify_working_tree_clean(repo_root)

    return [prerelease_module_set(release, options) for release in releases]


def run(options: PrereleaseOptions, repo_root: Path | None = None) -> int:
    """Prepare one or more module sets for release. Returns 0 on success, 1 on failure."""
    try:
        root = repo_root if repo_root is not None else find_repo_root()
        branches = _run_impl(options, root)
    except (MultimodError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Prerelease finished successfully. Created branch(es):")
    for b in branches:
        print(f"  {b}")
    print("Verify the changes with 'git diff main', then push and open a pull request.")
    return 0
