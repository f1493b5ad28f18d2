"""Tests for multimod_tooling.release.sync (multimod sync)."""

from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import git

from multimod_tooling.config import SyncOptions
from multimod_tooling.errors import CleanTreeError, CommandError, MultimodError
from multimod_tooling.release.sync import (
    _run_impl,
    other_module_set_names,
    run,
    sync_branch_name,
    sync_commit_message,
)
from multimod_tooling.versioning import ModuleSet

OTHER_VERSIONS = """\
module-sets:
  other-root:
    version: v2.2.2
    modules:
      - go.opentelemetry.io/testroot/v2
  other-misc:
    version: v0.9.0
    modules:
      - go.opentelemetry.io/unused
"""


@pytest.fixture
def other_versions(tmp_path: Path) -> Path:
    p = tmp_path / "other" / "versions.yaml"
    p.parent.mkdir()
    p.write_text(OTHER_VERSIONS)
    return p


@pytest.fixture(autouse=True)
def no_go_mod_tidy():
    with patch("multimod_tooling.release.sync.run_go_mod_tidy") as m:
        yield m


class TestNaming:
    def test_branch_name(self) -> None:
        mod_set = ModuleSet("other-root", "v2.2.2", ("go.opentelemetry.io/testroot/v2",))
        assert sync_branch_name(mod_set) == "sync_other-root_v2.2.2"
        assert sync_branch_name(mod_set, {"sync_branch_prefix": "bump"}) == "bump_other-root_v2.2.2"

    def test_commit_message(self) -> None:
        mod_set = ModuleSet("other-root", "v2.2.2", ())
        assert sync_commit_message(mod_set) == "Sync repo to use other-root with version v2.2.2"


class TestOtherModuleSetNames:
    def test_explicit_names(self, other_versions: Path) -> None:
        options = SyncOptions(Path("versions.yaml"), other_versions, other_module_set_names=("b", "a"))
        assert other_module_set_names(options) == ["b", "a"]

    def test_all_sets_from_file(self, other_versions: Path) -> None:
        options = SyncOptions(Path("versions.yaml"), other_versions, all_module_sets=True)
        assert other_module_set_names(options) == ["other-misc", "other-root"]


class TestSyncWithGit:
    def test_syncs_once_then_skips(
        self, git_repo: tuple[Path, Path], other_versions: Path, no_go_mod_tidy
    ) -> None:
        root, versions = git_repo
        options = SyncOptions(versions, other_versions, other_module_set_names=("other-root",))

        assert _run_impl(options, root) == ["sync_other-root_v2.2.2"]
        assert git(root, "rev-parse", "--abbrev-ref", "HEAD") == "sync_other-root_v2.2.2"
        assert git(root, "log", "-1", "--format=%s") == (
            "Sync repo to use other-root with version v2.2.2"
        )
        text = (root / "test" / "test1" / "go.mod").read_text()
        assert '"go.opentelemetry.io/testroot/v2" v2.2.2' in text
        assert git(root, "status", "--porcelain") == ""
        no_go_mod_tidy.assert_called_once()

        head = git(root, "rev-parse", "HEAD")
        assert _run_impl(options, root) == []
        assert git(root, "rev-parse", "HEAD") == head
        assert git(root, "rev-parse", "--abbrev-ref", "HEAD") == "sync_other-root_v2.2.2"

    def test_set_without_local_dependents_is_skipped(
        self, git_repo: tuple[Path, Path], other_versions: Path
    ) -> None:
        root, versions = git_repo
        options = SyncOptions(versions, other_versions, other_module_set_names=("other-misc",))
        assert _run_impl(options, root) == []
        assert git(root, "rev-parse", "--abbrev-ref", "HEAD") == "main"

    def test_skip_go_mod_tidy(
        self, git_repo: tuple[Path, Path], other_versions: Path, no_go_mod_tidy
    ) -> None:
        root, versions = git_repo
        options = SyncOptions(
            versions,
            other_versions,
            other_module_set_names=("other-root",),
            skip_go_mod_tidy=True,
        )
        assert _run_impl(options, root) == ["sync_other-root_v2.2.2"]
        no_go_mod_tidy.assert_not_called()

    def test_tidy_failure_is_only_a_warning(
        self, git_repo: tuple[Path, Path], other_versions: Path, no_go_mod_tidy
    ) -> None:
        root, versions = git_repo
        no_go_mod_tidy.side_effect = CommandError(["go", "mod", "tidy"], 1, "no network")
        options = SyncOptions(versions, other_versions, other_module_set_names=("other-root",))
        assert _run_impl(options, root) == ["sync_other-root_v2.2.2"]

    def test_dirty_tree_is_rejected(self, git_repo: tuple[Path, Path], other_versions: Path) -> None:
        root, versions = git_repo
        (root / "scratch.txt").write_text("wip\n")
        options = SyncOptions(versions, other_versions, other_module_set_names=("other-root",))
        with pytest.raises(CleanTreeError) as exc_info:
            _run_impl(options, root)
        assert exc_info.value.paths == ["scratch.txt"]
        assert "v2.0.0" in (root / "test" / "test1" / "go.mod").read_text()

    def test_no_names_is_an_error(self, git_repo: tuple[Path, Path], other_versions: Path) -> None:
        root, versions = git_repo
        with pytest.raises(MultimodError, match="no module sets"):
            _run_impl(SyncOptions(versions, other_versions), root)

    def test_unknown_other_set(self, git_repo: tuple[Path, Path], other_versions: Path) -> None:
        root, versions = git_repo
        options = SyncOptions(versions, other_versions, other_module_set_names=("nope",))
        assert run(options, repo_root=root) == 1

    def test_run_reports_branches(
        self, git_repo: tuple[Path, Path], other_versions: Path, capsys
    ) -> None:
        root, versions = git_repo
        options = SyncOptions(versions, other_versions, all_module_sets=True)
        assert run(options, repo_root=root) == 0
        out, _ = capsys.readouterr()
        assert "sync_other-root_v2.2.2" in out
        assert "sync_other-misc" not in out

        assert run(options, repo_root=root) == 0
        out, _ = capsys.readouterr()
        assert "nothing committed" in out
