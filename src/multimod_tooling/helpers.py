"""Shared helpers for multimod_tooling (YAML load, module file discovery, semver).

Used by versioning, release and cli modules.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from multimod_tooling.config import SKIP_PARTS

# --- File ---


def load_yaml(p: Path) -> Any:
    """Load a YAML document from path."""
    with p.open() as f:
        return yaml.safe_load(f)


# --- Path ---


def find_mod_files(
    root: Path,
    mod_file: str = "go.mod",
    *,
    exclude: frozenset[str] | set[str] | None = None,
) -> list[Path]:
    """All mod_file under root, excluding path segments in exclude (default: SKIP_PARTS).

    Directories starting with "_" or "." are skipped too, as the go tool ignores them.
    """
    if exclude is None:
        exclude = SKIP_PARTS
    out: list[Path] = []
    for p in root.rglob(mod_file):
        try:
            rel = p.relative_to(root)
        except ValueError:
            continue
        if any(part in exclude or part.startswith(("_", ".")) for part in rel.parts[:-1]):
            continue
        if p.is_file():
            out.append(p)
    return sorted(out)


def find_repo_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) to the first directory holding .git. Raises FileNotFoundError."""
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    msg = f"no git repository found at or above {current}"
    raise FileNotFoundError(msg)


# --- Version ---

SEMVER_RE = re.compile(
    r"^v(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)(?:\.(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*))*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

_MAJOR_SUFFIX_RE = re.compile(r"/v(\d+)$")


def is_valid_semver(version: str) -> bool:
    """True for Go-style semantic versions: vMAJOR.MINOR.PATCH[-prerelease][+build]."""
    return SEMVER_RE.match(version) is not None


def semver_major(version: str) -> int:
    """Major component of a valid semantic version. Raises ValueError on invalid format."""
    m = SEMVER_RE.match(version)
    if not m:
        msg = "Invalid version format: " + str(version)
        raise ValueError(msg)
    return int(m.group(1))


def module_path_major(module_path: str) -> int | None:
    """Major version suffix of a module path (example.com/mod/v2 -> 2), None when absent."""
    m = _MAJOR_SUFFIX_RE.search(module_path)
    return int(m.group(1)) if m else None
