"""`multimod tag`: tag all modules of a module set, or delete those tags."""

import argparse
import sys

from multimod_tooling.cli.parse_common import (
    add_common_args,
    configure_logging,
    resolve_repo_and_versioning_file,
)
from multimod_tooling.config import TagOptions
from multimod_tooling.release.tag import run as run_tag


def run_tag_argv(argv: list[str] | None = None) -> None:
    """Parse argv and tag (or delete tags of) one module set."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'multimod tag'
    ap = argparse.ArgumentParser(
        prog="multimod tag",
        description="Tag every module of a module set on one commit. "
        "Tag names are <module dir>/<version>, or <version> for the repo root module.",
    )
    add_common_args(ap)
    ap.add_argument(
        "-m",
        "--module-set-name",
        required=True,
        help="Name of the module set whose modules are tagged",
    )
    ap.add_argument(
        "-c",
        "--commit-hash",
        required=True,
        help="Commit to tag (full or abbreviated hash, or any revision)",
    )
    ap.add_argument(
        "-d",
        "--delete-module-set-tags",
        action="store_true",
        help="Delete the module set's tags instead; every existing tag must be on --commit-hash",
    )
    args = ap.parse_args(argv)
    configure_logging(args.verbose)

    repo_root, versioning_file = resolve_repo_and_versioning_file(args)
    rc = run_tag(
        TagOptions(
            versioning_file=versioning_file,
            module_set_name=args.module_set_name,
            commit_hash=args.commit_hash,
            delete_module_set_tags=args.delete_module_set_tags,
        ),
        repo_root=repo_root,
    )
    sys.exit(rc)
