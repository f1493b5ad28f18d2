"""Pytest fixtures for multimod tooling tests."""

import shutil
import subprocess
from pathlib import Path

import pytest

VERSIONS_VALID = """\
module-sets:
  mod-set-1:
    version: v1.2.3-RC1+meta
    modules:
      - go.opentelemetry.io/test/test1
  mod-set-2:
    version: v0.1.0
    modules:
      - go.opentelemetry.io/test3
  mod-set-3:
    version: v2.2.2
    modules:
      - go.opentelemetry.io/testroot/v2
excluded-modules:
  - go.opentelemetry.io/test/testexcluded
"""

MOD_FILES = {
    "test/test1/go.mod": 'module "go.opentelemetry.io/test/test1"\n\ngo 1.16\n\n'
    'require (\n\t"go.opentelemetry.io/testroot/v2" v2.0.0\n)\n',
    "test/go.mod": "module go.opentelemetry.io/test3\n\ngo 1.16\n",
    "go.mod": "module go.opentelemetry.io/testroot/v2\n\ngo 1.16\n",
    "test/test2/go.mod": 'module "go.opentelemetry.io/test/testexcluded"\n\ngo 1.16\n',
}


def write_files(root: Path, files: dict[str, str]) -> None:
    """Write {relative path: text} under root, creating directories."""
    for rel, text in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text)


def git(repo: Path, *args: str) -> str:
    """Run git in repo and return stripped stdout; fails the test on error."""
    r = subprocess.run(["git", *args], cwd=repo, capture_output=True, text=True, check=True)
    return r.stdout.strip()


@pytest.fixture
def mod_tree(tmp_path: Path) -> tuple[Path, Path]:
    """Module tree with four go.mod files and a versioning file. Returns (repo_root, versions.yaml)."""
    root = tmp_path / "repo"
    write_files(root, MOD_FILES)
    versions = root / "versions.yaml"
    versions.write_text(VERSIONS_VALID)
    return root, versions


@pytest.fixture
def git_repo(mod_tree: tuple[Path, Path]) -> tuple[Path, Path]:
    """mod_tree initialised as a git repository with one commit on main."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    root, versions = mod_tree
    git(root, "init", "-q", "-b", "main")
    git(root, "config", "user.name", "Test")
    git(root, "config", "user.email", "test@example.com")
    git(root, "config", "commit.gpgsign", "false")
    git(root, "config", "tag.gpgsign", "false")
    git(root, "add", "-A")
    git(root, "commit", "-q", "-m", "initial")
    return root, versions
