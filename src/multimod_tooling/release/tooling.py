"""External tool shell-outs for release commands: go mod tidy, make targets."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

from multimod_tooling.errors import CommandError

log = logging.getLogger(__name__)


def _run(
    cmd: Sequence[str],
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=True,
        text=True,
    )


def run_go_mod_tidy(mod_files: Iterable[Path]) -> None:
    """Run go mod tidy in the directory of each module file. Raises CommandError on first failure."""
    for mod_file in sorted(mod_files):
        mod_dir = mod_file.parent
        log.info("Running 'go mod tidy' in %s", mod_dir)
        cmd = ["go", "mod", "tidy"]
        try:
            r = _run(cmd, cwd=mod_dir)
        except FileNotFoundError as e:
            raise CommandError(cmd, 127, "go not in PATH") from e
        if r.returncode != 0:
            raise CommandError(cmd, r.returncode, (r.stderr or "") + (r.stdout or ""))


def run_make(repo_root: Path, targets: Sequence[str]) -> None:
    """Run make <target> at repo_root for each target in order. Raises CommandError on failure."""
    for target in targets:
        cmd = ["make", target]
        log.info("Running 'make %s'", target)
        try:
            r = _run(cmd, cwd=repo_root)
        except FileNotFoundError as e:
            raise CommandError(cmd, 127, "make not in PATH") from e
        if r.returncode != 0:
            raise CommandError(cmd, r.returncode, (r.stderr or "") + (r.stdout or ""))
