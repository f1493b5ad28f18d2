"""`multimod verify`: check the versioning file against the repository."""

import argparse
import sys

from multimod_tooling.cli.parse_common import (
    add_common_args,
    configure_logging,
    resolve_repo_and_versioning_file,
)
from multimod_tooling.config import VerifyOptions
from multimod_tooling.release.verify import run as run_verify


def run_verify_argv(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'multimod verify'
    ap = argparse.ArgumentParser(
        prog="multimod verify",
        description="Check that every module is in exactly one module set and that "
        "module set versions are valid for their modules.",
    )
    add_common_args(ap)
    args = ap.parse_args(argv)
    configure_logging(args.verbose)

    repo_root, versioning_file = resolve_repo_and_versioning_file(args)
    sys.exit(run_verify(VerifyOptions(versioning_file=versioning_file), repo_root=repo_root))
