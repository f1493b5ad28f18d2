"""Default repository layout and per-command options."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Go multi-module default; override for other consumers.
DEFAULT_LAYOUT: dict[str, str] = {
    "versioning_file": "versions.yaml",
    "mod_file": "go.mod",
    "prerelease_branch_prefix": "pre_release",
    "sync_branch_prefix": "sync",
}

# Directory names never descended into when looking for module files.
SKIP_PARTS = frozenset(
    {
        ".git",
        "vendor",
        "testdata",
        "node_modules",
        ".venv",
        "venv",
        "__pycache__",
    }
)


def resolve_layout(layout: dict[str, Any] | None) -> dict[str, str]:
    """Return layout dict with defaults filled."""
    if layout is None:
        return dict(DEFAULT_LAYOUT)
    out = dict(DEFAULT_LAYOUT)
    out.update({k: str(v) for k, v in layout.items() if k in out})
    return out


@dataclass(frozen=True)
class TagOptions:
    versioning_file: Path
    module_set_name: str
    commit_hash: str
    delete_module_set_tags: bool = False


@dataclass(frozen=True)
class SyncOptions:
    """Sync local go.mod requirements to module sets of another repository.

    other_module_set_names is ignored when all_module_sets is set; the names are
    then read from other_versioning_file.
    """

    versioning_file: Path
    other_versioning_file: Path
    other_repo_root: Path | None = None
    other_module_set_names: tuple[str, ...] = ()
    all_module_sets: bool = False
    skip_go_mod_tidy: bool = False


@dataclass(frozen=True)
class PrereleaseOptions:
    versioning_file: Path
    module_set_names: tuple[str, ...] = ()
    all_module_sets: bool = False
    no_commit: bool = False
    skip_make: bool = False
    make_targets: tuple[str, ...] = field(default=("lint", "ci"))


@dataclass(frozen=True)
class VerifyOptions:
    versioning_file: Path
