"""Shared CLI argument handling for common flags (--versioning-file, --verbose)."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from multimod_tooling.config import DEFAULT_LAYOUT
from multimod_tooling.helpers import find_repo_root


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --versioning-file, --other-repo-root)."""
    return Path(s).resolve()


def name_list(s: str) -> tuple[str, ...]:
    """Comma-separated names -> tuple, empty items dropped (e.g. --module-set-names a,b)."""
    return tuple(x.strip() for x in s.split(",") if x.strip())


def add_common_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument(
        "-v",
        "--versioning-file",
        type=path_resolver,
        default=None,
        help=f"Versioning file (default: {DEFAULT_LAYOUT['versioning_file']} at the repo root)",
    )
    ap.add_argument(
        "--repo-root",
        type=path_resolver,
        default=None,
        help="Repository root (default: first directory with .git at or above cwd)",
    )
    ap.add_argument("--verbose", action="store_true", help="Debug logging")


def resolve_repo_and_versioning_file(args: argparse.Namespace) -> tuple[Path, Path]:
    """Repo root and versioning file from parsed common args. Exits 1 when no repo is found."""
    try:
        repo_root = args.repo_root or find_repo_root()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    versioning_file = args.versioning_file or default_versioning_file(repo_root)
    return repo_root, versioning_file


def configure_logging(verbose: bool = False) -> None:
    """Plain log lines on stderr, no timestamps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )


def default_versioning_file(repo_root: Path) -> Path:
    return repo_root / DEFAULT_LAYOUT["versioning_file"]
