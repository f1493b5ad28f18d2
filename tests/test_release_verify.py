"""Tests for multimod_tooling.release.verify (multimod verify)."""

from pathlib import Path

import pytest
from conftest import write_files

from multimod_tooling.config import VerifyOptions
from multimod_tooling.errors import InvalidVersionError, ModuleNotInSetError
from multimod_tooling.release.verify import modules_not_in_set, run, verify
from multimod_tooling.versioning import ModuleVersioning


def _set_version(versions: Path, old: str, new: str) -> None:
    versions.write_text(versions.read_text().replace(old, new))


class TestVerify:
    def test_valid_tree(self, mod_tree: tuple[Path, Path]) -> None:
        root, versions = mod_tree
        versioning = verify(versions, root)
        assert modules_not_in_set(versioning) == []

    def test_orphan_module(self, mod_tree: tuple[Path, Path]) -> None:
        root, versions = mod_tree
        write_files(root, {"extra/go.mod": "module go.opentelemetry.io/extra\n"})
        assert modules_not_in_set(ModuleVersioning(versions, root)) == ["go.opentelemetry.io/extra"]
        with pytest.raises(ModuleNotInSetError) as exc_info:
            verify(versions, root)
        assert exc_info.value.module_paths == ["go.opentelemetry.io/extra"]

    @pytest.mark.parametrize("bad", ["0.1.0", "v0.1", "v01.1.0", "v0.1.0-"])
    def test_invalid_semver(self, mod_tree: tuple[Path, Path], bad: str) -> None:
        root, versions = mod_tree
        _set_version(versions, "version: v0.1.0", f"version: {bad}")
        with pytest.raises(InvalidVersionError) as exc_info:
            verify(versions, root)
        assert exc_info.value.module_set_name == "mod-set-2"

    def test_major_suffix_mismatch(self, mod_tree: tuple[Path, Path]) -> None:
        root, versions = mod_tree
        _set_version(versions, "v2.2.2", "v3.0.0")
        with pytest.raises(InvalidVersionError, match="major version v2"):
            verify(versions, root)

    def test_major_two_without_suffix(self, mod_tree: tuple[Path, Path]) -> None:
        root, versions = mod_tree
        _set_version(versions, "v0.1.0", "v2.0.0")
        with pytest.raises(InvalidVersionError, match="needs a /v2 suffix"):
            verify(versions, root)

    def test_prerelease_and_build_metadata_accepted(self, mod_tree: tuple[Path, Path]) -> None:
        root, versions = mod_tree
        _set_version(versions, "v0.1.0", "v1.0.0-alpha.1+build.5")
        verify(versions, root)


class TestRun:
    def test_success_output(self, mod_tree: tuple[Path, Path], capsys) -> None:
        root, versions = mod_tree
        assert run(VerifyOptions(versions), repo_root=root) == 0
        out, _ = capsys.readouterr()
        assert "3 module set(s), 3 module(s) verified" in out

    def test_failure_output(self, mod_tree: tuple[Path, Path], capsys) -> None:
        root, versions = mod_tree
        write_files(root, {"extra/go.mod": "module go.opentelemetry.io/extra\n"})
        assert run(VerifyOptions(versions), repo_root=root) == 1
        _, err = capsys.readouterr()
        assert err.startswith("Error: ")
        assert "go.opentelemetry.io/extra" in err
