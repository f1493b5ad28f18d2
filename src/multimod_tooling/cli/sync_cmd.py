"""`multimod sync`: require another repository's module set versions in this one."""

import argparse
import sys

from multimod_tooling.cli.parse_common import (
    add_common_args,
    configure_logging,
    name_list,
    path_resolver,
    resolve_repo_and_versioning_file,
)
from multimod_tooling.config import SyncOptions
from multimod_tooling.release.sync import run as run_sync


def run_sync_argv(argv: list[str] | None = None) -> None:
    """Parse argv and sync the given (or all) module sets of the other repository."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'multimod sync'
    ap = argparse.ArgumentParser(
        prog="multimod sync",
        description="Update go.mod requirements on another repository's module sets and "
        "commit each changed set to a new branch sync_<set>_<version>.",
    )
    add_common_args(ap)
    ap.add_argument(
        "-o",
        "--other-versioning-file",
        type=path_resolver,
        required=True,
        help="Versioning file of the other repository",
    )
    ap.add_argument(
        "--other-repo-root",
        type=path_resolver,
        default=None,
        help="Root of the other repository; validates its versioning file with --all-module-sets",
    )
    ap.add_argument(
        "-m",
        "--other-module-set-names",
        type=name_list,
        default=(),
        help="Comma-separated module set names of the other repository to sync",
    )
    ap.add_argument(
        "-a",
        "--all-module-sets",
        action="store_true",
        help="Sync every module set listed in the other versioning file",
    )
    ap.add_argument(
        "--skip-go-mod-tidy",
        action="store_true",
        help="Do not run 'go mod tidy' after rewriting requirements",
    )
    args = ap.parse_args(argv)
    configure_logging(args.verbose)

    if not args.all_module_sets and not args.other_module_set_names:
        ap.error("one of --other-module-set-names or --all-module-sets is required")

    repo_root, versioning_file = resolve_repo_and_versioning_file(args)
    rc = run_sync(
        SyncOptions(
            versioning_file=versioning_file,
            other_versioning_file=args.other_versioning_file,
            other_repo_root=args.other_repo_root,
            other_module_set_names=args.other_module_set_names,
            all_module_sets=args.all_module_sets,
            skip_go_mod_tidy=args.skip_go_mod_tidy,
        ),
        repo_root=repo_root,
    )
    sys.exit(rc)
