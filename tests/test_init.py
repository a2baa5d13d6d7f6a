"""Tests for gitflow.init against real repositories."""

import shutil

import pytest
from conftest import PREFIXES, commit_file, git

from gitflow.config.store import is_initialized
from gitflow.errors import FlowError
from gitflow.git.runner import Git
from gitflow.init import run_init

CONFIG = {
    "branches": {"master": "master", "develop": "develop"},
    "prefixes": {**PREFIXES, "versiontag": ""},
    "origin": "origin",
}


@pytest.fixture
def workdir(tmp_path, git_env, monkeypatch):
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def main_repo(workdir):
    """A repository with a single 'main' branch."""
    git(workdir, "init", "-q")
    git(workdir, "symbolic-ref", "HEAD", "refs/heads/main")
    git(workdir, "config", "commit.gpgsign", "false")
    commit_file(workdir, "README", "hello\n", "Initial commit")
    return workdir


def answers(monkeypatch, *replies):
    it = iter(replies)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


class TestDefaults:
    def test_creates_repository(self, workdir):
        assert run_init(Git(), CONFIG, use_defaults=True) == 0

        assert (workdir / ".git").is_dir()
        assert git(workdir, "config", "gitflow.branch.master") == "master"
        assert git(workdir, "config", "gitflow.branch.develop") == "develop"
        assert git(workdir, "config", "gitflow.prefix.feature") == "feature/"
        assert git(workdir, "config", "gitflow.origin") == "origin"
        assert git(workdir, "branch", "--show-current") == "develop"
        assert git(workdir, "rev-parse", "master") == git(workdir, "rev-parse", "develop")
        assert is_initialized(Git())

    def test_picks_existing_production_branch(self, main_repo):
        run_init(Git(), CONFIG, use_defaults=True)
        assert git(main_repo, "config", "gitflow.branch.master") == "main"
        assert git(main_repo, "config", "gitflow.branch.develop") == "develop"
        assert git(main_repo, "rev-parse", "develop") == git(main_repo, "rev-parse", "main")

    def test_empty_versiontag_counts_as_set(self, main_repo):
        run_init(Git(), CONFIG, use_defaults=True)
        assert git(main_repo, "config", "gitflow.prefix.versiontag") == ""
        assert is_initialized(Git())


class TestAlreadyInitialized:
    def test_warns_and_keeps_config(self, flow_repo, capsys):
        assert run_init(Git(), CONFIG, use_defaults=True) == 0
        assert "Already initialized for gitflow." in capsys.readouterr().err
        assert git(flow_repo, "config", "gitflow.prefix.versiontag") == "v"

    def test_force_rewrites_prefixes(self, flow_repo, monkeypatch):
        answers(monkeypatch, "", "", "feat/", "", "", "", "")
        run_init(Git(), CONFIG, force=True)
        assert git(flow_repo, "config", "gitflow.prefix.feature") == "feat/"
        # the old value is the suggestion under -f
        assert git(flow_repo, "config", "gitflow.prefix.versiontag") == "v"

    def test_dirty_tree_refused(self, flow_repo):
        (flow_repo / "README").write_text("dirty\n")
        with pytest.raises(FlowError, match="unstaged changes"):
            run_init(Git(), CONFIG, force=True, use_defaults=True)


class TestInteractive:
    def test_answers_are_stored(self, main_repo, monkeypatch):
        git(main_repo, "branch", "dev")
        answers(monkeypatch, "", "dev", "feat/", "", "", "", "v")

        run_init(Git(), CONFIG)

        assert git(main_repo, "config", "gitflow.branch.master") == "main"
        assert git(main_repo, "config", "gitflow.branch.develop") == "dev"
        assert git(main_repo, "config", "gitflow.prefix.feature") == "feat/"
        assert git(main_repo, "config", "gitflow.prefix.release") == "release/"
        assert git(main_repo, "config", "gitflow.prefix.versiontag") == "v"

    def test_unknown_branch_rejected(self, main_repo, monkeypatch):
        answers(monkeypatch, "nope")
        with pytest.raises(FlowError, match="Local branch 'nope' does not exist."):
            run_init(Git(), CONFIG)

    def test_same_branches_rejected(self, main_repo, monkeypatch):
        git(main_repo, "branch", "dev")
        answers(monkeypatch, "", "main")
        with pytest.raises(FlowError, match="should differ"):
            run_init(Git(), CONFIG)

    def test_eof_aborts(self, main_repo, monkeypatch):
        def eof(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", eof)
        with pytest.raises(FlowError, match="Aborted."):
            run_init(Git(), CONFIG)
