"""`multimod prerelease`: branch, bump go.mod requirements and commit for release."""

import argparse
import sys

from multimod_tooling.cli.parse_common import (
    add_common_args,
    configure_logging,
    name_list,
    resolve_repo_and_versioning_file,
)
from multimod_tooling.config import PrereleaseOptions
from multimod_tooling.release.prerelease import run as run_prerelease


def run_prerelease_argv(argv: list[str] | None = None) -> None:
    """Parse argv and prepare the given (or all) module sets for release."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'multimod prerelease'
    ap = argparse.ArgumentParser(
        prog="multimod prerelease",
        description="Prepare module sets for a new version: check tags and working tree, "
        "switch to pre_release_<set>_<version>, update go.mod files, run 'make lint' and "
        "'make ci', commit.",
    )
    add_common_args(ap)
    ap.add_argument(
        "-m",
        "--module-set-names",
        type=name_list,
        default=(),
        help="Comma-separated module set names to prepare",
    )
    ap.add_argument(
        "-a",
        "--all-module-sets",
        action="store_true",
        help="Prepare every module set listed in the versioning file",
    )
    ap.add_argument(
        "-n",
        "--no-commit",
        action="store_true",
        help="Leave changes uncommitted and unstaged at the end",
    )
    ap.add_argument(
        "-s",
        "--skip-make",
        action="store_true",
        help="Skip 'make lint' and 'make ci'. For debugging only; do not skip for an actual release.",
    )
    args = ap.parse_args(argv)
    configure_logging(args.verbose)

    if not args.all_module_sets and not args.module_set_names:
        ap.error("one of --module-set-names or --all-module-sets is required")

    repo_root, versioning_file = resolve_repo_and_versioning_file(args)
    rc = run_prerelease(
        PrereleaseOptions(
            versioning_file=versioning_file,
            module_set_names=args.module_set_names,
            all_module_sets=args.all_module_sets,
            no_commit=args.no_commit,
            skip_make=args.skip_make,
        ),
        repo_root=repo_root,
    )
    sys.exit(rc)
