"""Main CLI entry point for multimod tooling."""

import sys

from multimod_tooling.cli import prerelease_cmd, sync_cmd, tag_cmd, verify_cmd

COMMANDS = {
    "prerelease": prerelease_cmd.run_prerelease_argv,
    "sync": sync_cmd.run_sync_argv,
    "tag": tag_cmd.run_tag_argv,
    "verify": verify_cmd.run_verify_argv,
}


def _usage() -> None:
    print("Usage: multimod <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  prerelease  - Branch, update go.mod versions of module sets, lint/test, commit",
        file=sys.stderr,
    )
    print(
        "  sync        - Require another repo's module set versions; commit to sync_<set>_<version>",
        file=sys.stderr,
    )
    print(
        "  tag         - Tag every module of a module set on a commit (or delete those tags)",
        file=sys.stderr,
    )
    print(
        "  verify      - Check the versioning file against the modules in the repo",
        file=sys.stderr,
    )


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        _usage()
        sys.exit(1)

    command = sys.argv[1]
    run = COMMANDS.get(command)
    if run is None:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        _usage()
        sys.exit(1)
    run(sys.argv[2:])


if __name__ == "__main__":
    main()
