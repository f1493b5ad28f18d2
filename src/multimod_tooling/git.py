"""Git porcelain used by the release commands (tags, status, branches, commits).

Every call goes through _run so tests can patch a single seam. Failures raise GitError.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from multimod_tooling.errors import CleanTreeError, GitError


def _run(
    args: Sequence[str],
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
    )


def _check(args: Sequence[str], cwd: Path) -> str:
    r = _run(args, cwd=cwd)
    if r.returncode != 0:
        raise GitError(["git", *args], r.returncode, r.stderr or "")
    return r.stdout or ""


def resolve_revision(repo_root: Path, revision: str) -> str:
    """Full commit hash for a revision (branch, tag, full or abbreviated hash)."""
    return _check(["rev-parse", "--verify", f"{revision}^{{commit}}"], repo_root).strip()


def tag_exists(repo_root: Path, tag_name: str) -> bool:
    r = _run(["rev-parse", "--verify", "--quiet", f"refs/tags/{tag_name}"], cwd=repo_root)
    return r.returncode == 0


def tag_commit(repo_root: Path, tag_name: str) -> str:
    """Full hash of the commit a tag (annotated or lightweight) points at."""
    return _check(["rev-parse", "--verify", f"refs/tags/{tag_name}^{{commit}}"], repo_root).strip()


def create_tag(repo_root: Path, tag_name: str, commit_hash: str, message: str) -> None:
    """Create an annotated tag on commit_hash."""
    _check(["tag", "-a", tag_name, "-m", message, commit_hash], repo_root)


def delete_tag(repo_root: Path, tag_name: str) -> None:
    _check(["tag", "-d", tag_name], repo_root)


def list_tags(repo_root: Path) -> list[str]:
    return [t for t in _check(["tag", "--list"], repo_root).splitlines() if t]


def changed_paths(repo_root: Path) -> list[str]:
    """Paths with staged, unstaged or untracked changes (git status --porcelain)."""
    out = _check(["status", "--porcelain", "--untracked-files=all"], repo_root)
    return [line[3:] for line in out.splitlines() if len(line) > 3]


def is_clean(repo_root: Path) -> bool:
    return not changed_paths(repo_root)


def verify_working_tree_clean(repo_root: Path) -> None:
    """Raise CleanTreeError listing changed paths if the working tree is dirty."""
    paths = changed_paths(repo_root)
    if paths:
        raise CleanTreeError(paths)


def checkout_new_branch(repo_root: Path, branch_name: str) -> None:
    _check(["checkout", "-b", branch_name], repo_root)


def commit_all(repo_root: Path, message: str) -> str:
    """Stage every change and commit. Returns the new commit hash."""
    _check(["add", "-A"], repo_root)
    _check(["commit", "-m", message], repo_root)
    return resolve_revision(repo_root, "HEAD")


def commit_changes_to_new_branch(repo_root: Path, branch_name: str, message: str) -> str:
    """Check out a new branch from HEAD (carrying the working tree) and commit everything on it."""
    checkout_new_branch(repo_root, branch_name)
    return commit_all(repo_root, message)
