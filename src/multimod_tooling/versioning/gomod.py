"""go.mod reading and require rewriting; module path -> go.mod location map.

Only the `module` directive and `require` entries (single-line and block form) are
understood. Other directives (go, replace, exclude, retract) are left untouched.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from multimod_tooling.config import SKIP_PARTS
from multimod_tooling.errors import DuplicateModuleError, ParseError
from multimod_tooling.helpers import find_mod_files

log = logging.getLogger(__name__)

_MODULE_RE = re.compile(r'^\s*module\s+"?([^\s"]+)"?\s*(?://.*)?$', re.MULTILINE)
_REQUIRE_BLOCK_START = re.compile(r"^\s*require\s*\(\s*(?://.*)?$")
_BLOCK_END = re.compile(r"^\s*\)\s*(?://.*)?$")
# Single-line require or block entry: [require ]<path> <version>[ // comment]
_REQUIRE_ENTRY = re.compile(r'^(\s*(?:require\s+)?"?)([^\s"()]+)("?\s+)(\S+)(.*)$')
_SINGLE_REQUIRE = re.compile(r"^\s*require\s+[^\s(]")


def read_module_path(mod_file: Path) -> str:
    """Return the module path declared by a go.mod file. Raises ParseError if there is none."""
    try:
        text = mod_file.read_text()
    except OSError as e:
        msg = f"could not read module file: {e.strerror or e}"
        raise ParseError(msg, mod_file) from e
    m = _MODULE_RE.search(text)
    if not m:
        msg = "no module directive"
        raise ParseError(msg, mod_file)
    return m.group(1)


def build_module_path_map(
    repo_root: Path,
    excluded_modules: Iterable[str] = (),
    mod_file: str = "go.mod",
) -> dict[str, Path]:
    """Walk repo_root for module files; map declared module path -> file path.

    Modules in excluded_modules are left out. Two files declaring the same module
    path raise DuplicateModuleError.
    """
    excluded = set(excluded_modules)
    out: dict[str, Path] = {}
    for p in find_mod_files(repo_root, mod_file, exclude=SKIP_PARTS):
        module_path = read_module_path(p)
        if module_path in excluded:
            log.debug("Skipping excluded module %s (%s)", module_path, p)
            continue
        if module_path in out:
            raise DuplicateModuleError(module_path, str(out[module_path]), str(p))
        out[module_path] = p
    return out


def _rewrite_requires(text: str, versions: dict[str, str]) -> str:
    lines = text.splitlines(keepends=True)
    out: list[str] = []
    in_block = False
    for line in lines:
        body = line.rstrip("\r\n")
        ending = line[len(body) :]
        if in_block:
            if _BLOCK_END.match(body):
                in_block = False
                out.append(line)
                continue
        elif _REQUIRE_BLOCK_START.match(body):
            in_block = True
            out.append(line)
            continue
        elif not _SINGLE_REQUIRE.match(body):
            out.append(line)
            continue

        m = _REQUIRE_ENTRY.match(body)
        if m and m.group(2) in versions and m.group(4) != versions[m.group(2)]:
            body = m.group(1) + m.group(2) + m.group(3) + versions[m.group(2)] + m.group(5)
        out.append(body + ending)
    return "".join(out)


def update_requires(mod_file: Path, module_paths: Iterable[str], version: str) -> bool:
    """Require version for every module in module_paths that mod_file depends on. Returns True if changed."""
    versions = dict.fromkeys(module_paths, version)
    text = mod_file.read_text()
    new_text = _rewrite_requires(text, versions)
    if new_text == text:
        return False
    mod_file.write_text(new_text)
    return True


def update_all_mod_files(
    mod_files: Iterable[Path], module_paths: Iterable[str], version: str
) -> list[Path]:
    """Run update_requires on each file. Returns files that changed."""
    paths = list(module_paths)
    updated: list[Path] = []
    for p in mod_files:
        try:
            if update_requires(p, paths, version):
                updated.append(p)
        except OSError as e:
            msg = f"could not update module file: {e.strerror or e}"
            raise ParseError(msg, p) from e
    return updated
