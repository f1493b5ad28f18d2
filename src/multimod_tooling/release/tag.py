"""Tag every module of a module set on one commit, or delete those tags again.

Tagging creates one annotated tag per module in declared order. If any creation fails,
the tags created so far in this run are deleted before the error is raised, so a failed
run leaves no partial set behind. Deleting first checks that every existing tag of the
set points at the given commit; otherwise nothing is deleted.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from multimod_tooling import git
from multimod_tooling.config import TagOptions
from multimod_tooling.errors import GitError, MultimodError, TagCreateError, TagsNotOnCommitError
from multimod_tooling.helpers import find_repo_root
from multimod_tooling.versioning import ModuleSetRelease

log = logging.getLogger(__name__)


def tag_message(module_set_name: str, version: str) -> str:
    return f"Module set {module_set_name}, Version {version}"


def verify_tags_on_commit(repo_root: Path, full_tag_names: Iterable[str], commit_hash: str) -> None:
    """Raise TagsNotOnCommitError listing every existing tag that is not on commit_hash.

    Tags that do not exist are ignored.
    """
    not_on_commit: list[str] = []
    for tag_name in full_tag_names:
        if not git.tag_exists(repo_root, tag_name):
            continue
        if git.tag_commit(repo_root, tag_name) != commit_hash:
            not_on_commit.append(tag_name)
    if not_on_commit:
        raise TagsNotOnCommitError(commit_hash, not_on_commit)


def delete_tags(repo_root: Path, tag_names: Iterable[str]) -> None:
    """Delete tags in order; the first failure raises GitError and stops."""
    for tag_name in tag_names:
        log.info("Deleting tag %s", tag_name)
        git.delete_tag(repo_root, tag_name)


def _rollback(repo_root: Path, created: list[str]) -> tuple[list[str], dict[str, Exception]]:
    """Best-effort delete of created tags. Returns (deleted, {tag: error})."""
    deleted: list[str] = []
    failures: dict[str, Exception] = {}
    for tag_name in reversed(created):
        try:
            git.delete_tag(repo_root, tag_name)
            deleted.append(tag_name)
        except GitError as e:
            log.error("Could not remove tag %s: %s", tag_name, e)
            failures[tag_name] = e
    return deleted, failures


def tag_all_modules(release: ModuleSetRelease, commit_hash: str) -> list[str]:
    """Create every full tag of release on commit_hash. Returns the created tags.

    Raises TagCreateError after rolling back the tags created earlier in this call.
    """
    message = tag_message(release.mod_set_name, release.mod_set_version())
    created: list[str] = []

    log.info("Tagging commit %s:", commit_hash)
    for tag_name in release.module_full_tag_names():
        log.info("%s", tag_name)
        try:
            git.create_tag(release.repo_root, tag_name, commit_hash, message)
        except GitError as e:
            log.error("error creating a tag, removing all newly created tags...")
            deleted, failures = _rollback(release.repo_root, created)
            raise TagCreateError(
                tag_name, e, rolled_back=deleted, rollback_failures=failures
            ) from e
        created.append(tag_name)
    return created


def delete_module_set_tags(release: ModuleSetRelease) -> list[str]:
    """Delete the existing full tags of release. Returns the deleted tags.

    Tags of the set that do not exist are skipped rather than treated as errors.
    """
    existing = release.existing_tags()
    delete_tags(release.repo_root, existing)
    return existing


def prepare(options: TagOptions, repo_root: Path) -> tuple[ModuleSetRelease, str]:
    """Load the release, resolve the commit and run the create- or delete-path checks."""
    release = ModuleSetRelease.load(options.versioning_file, options.module_set_name, repo_root)
    commit_hash = git.resolve_revision(repo_root, options.commit_hash)
    if options.delete_module_set_tags:
        verify_tags_on_commit(repo_root, release.module_full_tag_names(), commit_hash)
    else:
        release.verify_git_tags_do_not_already_exist()
    return release, commit_hash


def _run_impl(options: TagOptions, repo_root: Path) -> None:
    release, commit_hash = prepare(options, repo_root)
    if options.delete_module_set_tags:
        deleted = delete_module_set_tags(release)
        print(f"Successfully deleted {len(deleted)} module tag(s)")
        return
    created = tag_all_modules(release, commit_hash)
    print(
        f"Tagged {len(created)} module(s) of {release.mod_set_name} "
        f"{release.mod_set_version()} on {commit_hash}"
    )
    for t in created:
        print(f"  {t}")


def run(options: TagOptions, repo_root: Path | None = None) -> int:
    """Tag (or delete tags of) one module set. Returns 0 on success, 1 on failure."""
    try:
        root = repo_root if repo_root is not None else find_repo_root()
        _run_impl(options, root)
        return 0
    except (MultimodError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
