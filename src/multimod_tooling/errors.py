"""Exception hierarchy for multimod tooling.

Every error raised by the versioning engine and the release commands derives from
MultimodError so the CLI can report it and exit 1. Each error keeps the offending
module paths, tag names or file paths as attributes for callers and tests.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path


class MultimodError(Exception):
    """Base class for all multimod tooling errors."""


class ParseError(MultimodError):
    """Versioning file is missing, unreadable or malformed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class NotFoundError(MultimodError):
    """Module set or module referenced by the manifest does not exist."""

    def __init__(self, message: str, name: str) -> None:
        self.name = name
        super().__init__(message)


class DuplicateModuleError(MultimodError):
    """Module path listed in more than one module set (or declared by two go.mod files)."""

    def __init__(self, module_path: str, first: str, second: str) -> None:
        self.module_path = module_path
        self.first = first
        self.second = second
        super().__init__(
            f"module {module_path} exists more than once (exists in {first} and {second})"
        )


class ModuleNotInSetError(MultimodError):
    """On-disk modules that are neither in a module set nor excluded."""

    def __init__(self, module_paths: Sequence[str]) -> None:
        self.module_paths = list(module_paths)
        super().__init__(
            "modules not listed in any module set or excluded-modules: "
            + ", ".join(self.module_paths)
        )


class InvalidVersionError(MultimodError):
    """Module set version is not a valid semantic version for its modules."""

    def __init__(self, message: str, module_set_name: str) -> None:
        self.module_set_name = module_set_name
        super().__init__(message)


class TagExistsError(MultimodError):
    """Tags that would be created already exist."""

    def __init__(self, tag_names: Sequence[str]) -> None:
        self.tag_names = list(tag_names)
        super().__init__("git tags already exist: " + ", ".join(self.tag_names))


class TagsNotOnCommitError(MultimodError):
    """Existing tags that do not point at the commit they are about to be deleted for."""

    def __init__(self, commit_hash: str, tag_names: Sequence[str]) -> None:
        self.commit_hash = commit_hash
        self.tag_names = list(tag_names)
        super().__init__(
            f"some git tags are not on commit {commit_hash}: " + ", ".join(self.tag_names)
        )


class TagCreateError(MultimodError):
    """Creating a tag failed.

    cause is the original failure. rolled_back lists tags created earlier in the run
    that were deleted again; rollback_failures maps tags that could not be deleted to
    the error raised while deleting them.
    """

    def __init__(
        self,
        tag_name: str,
        cause: Exception,
        rolled_back: Sequence[str] = (),
        rollback_failures: Mapping[str, Exception] | None = None,
    ) -> None:
        self.tag_name = tag_name
        self.cause = cause
        self.rolled_back = list(rolled_back)
        self.rollback_failures = dict(rollback_failures or {})
        message = f"git tag failed for {tag_name}: {cause}"
        if self.rollback_failures:
            message += "; could not remove newly created tags: " + ", ".join(
                self.rollback_failures
            )
        super().__init__(message)


class CleanTreeError(MultimodError):
    """Working tree has uncommitted changes."""

    def __init__(self, paths: Sequence[str]) -> None:
        self.paths = list(paths)
        super().__init__(
            "working tree is not clean; commit or stash changes first: " + ", ".join(self.paths)
        )


class GitError(MultimodError):
    """A git command exited non-zero."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"{' '.join(self.command)} failed with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class CommandError(MultimodError):
    """An external tool (go, make) exited non-zero."""

    def __init__(self, command: Sequence[str], returncode: int, output: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output.strip()
        message = f"{' '.join(self.command)} failed with exit code {returncode}"
        if self.output:
            message += f": {self.output}"
        super().__init__(message)
