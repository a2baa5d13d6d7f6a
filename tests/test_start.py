"""Tests for gitflow.flows.start against real repositories."""

import pytest
from conftest import commit_file, git

from gitflow.errors import FlowError
from gitflow.flows.start import run_start
from gitflow.models.kinds import BranchKind, get_spec
from gitflow.models.state import StartOptions

FEATURE = get_spec(BranchKind.FEATURE)
HOTFIX = get_spec(BranchKind.HOTFIX)
RELEASE = get_spec(BranchKind.RELEASE)
SUPPORT = get_spec(BranchKind.SUPPORT)


class TestStartFeature:
    def test_creates_branch_from_develop(self, flow_repo, repo_ctx, capsys):
        develop = git(flow_repo, "rev-parse", "develop")
        assert run_start(repo_ctx, FEATURE, StartOptions(name="login")) == 0
        assert git(flow_repo, "branch", "--show-current") == "feature/login"
        assert git(flow_repo, "rev-parse", "feature/login") == develop
        out = capsys.readouterr().out
        assert "A new branch 'feature/login' was created, based on 'develop'" in out
        assert "git flow feature finish login" in out

    def test_missing_name(self, repo_ctx):
        with pytest.raises(FlowError, match="Missing argument <name>"):
            run_start(repo_ctx, FEATURE, StartOptions(name=None))

    def test_branch_exists(self, flow_repo, repo_ctx):
        git(flow_repo, "branch", "feature/login")
        with pytest.raises(FlowError, match="Branch 'feature/login' already exists"):
            run_start(repo_ctx, FEATURE, StartOptions(name="login"))

    def test_explicit_base(self, flow_repo, repo_ctx):
        base = git(flow_repo, "rev-parse", "master")
        commit_file(flow_repo, "dev.txt", "x\n", "develop work")
        run_start(repo_ctx, FEATURE, StartOptions(name="old", base="master"))
        assert git(flow_repo, "rev-parse", "feature/old") == base

    def test_stale_develop_refused(self, flow_repo, origin_remote, repo_ctx):
        commit_file(flow_repo, "dev.txt", "x\n", "develop work")
        git(flow_repo, "push", "-q", "origin", "develop")
        git(flow_repo, "reset", "-q", "--hard", "HEAD~1")
        with pytest.raises(FlowError, match="And branch 'develop' may be fast-forwarded."):
            run_start(repo_ctx, FEATURE, StartOptions(name="login"))
        assert "feature/login" not in git(flow_repo, "branch")


class TestStartHotfix:
    def test_branches_off_master(self, flow_repo, repo_ctx):
        commit_file(flow_repo, "dev.txt", "x\n", "develop work")
        run_start(repo_ctx, HOTFIX, StartOptions(name="1.0.1"))
        assert git(flow_repo, "rev-parse", "hotfix/1.0.1") == git(flow_repo, "rev-parse", "master")

    def test_single_instance(self, flow_repo, repo_ctx):
        git(flow_repo, "branch", "hotfix/1.0.1", "master")
        with pytest.raises(FlowError) as exc:
            run_start(repo_ctx, HOTFIX, StartOptions(name="1.0.2"))
        assert exc.value.message == "There is an existing hotfix branch (1.0.1). Finish that one first."

    def test_tag_exists(self, flow_repo, repo_ctx):
        git(flow_repo, "tag", "v1.0.1", "master")
        with pytest.raises(FlowError, match="Tag 'v1.0.1' already exists"):
            run_start(repo_ctx, HOTFIX, StartOptions(name="1.0.1"))

    def test_dirty_tree(self, flow_repo, repo_ctx):
        (flow_repo / "README").write_text("changed\n")
        with pytest.raises(FlowError, match="unstaged changes"):
            run_start(repo_ctx, HOTFIX, StartOptions(name="1.0.1"))

    def test_base_not_on_master(self, flow_repo, repo_ctx):
        commit_file(flow_repo, "dev.txt", "x\n", "develop work")
        with pytest.raises(FlowError, match="Given base 'develop' is not a valid commit on 'master'."):
            run_start(repo_ctx, HOTFIX, StartOptions(name="1.0.1", base="develop"))


class TestStartOthers:
    def test_release_from_develop(self, flow_repo, repo_ctx, capsys):
        run_start(repo_ctx, RELEASE, StartOptions(name="1.1"))
        assert git(flow_repo, "branch", "--show-current") == "release/1.1"
        assert "git flow release finish '1.1'" in capsys.readouterr().out

    def test_support_from_master(self, flow_repo, repo_ctx):
        run_start(repo_ctx, SUPPORT, StartOptions(name="1.x"))
        assert git(flow_repo, "rev-parse", "support/1.x") == git(flow_repo, "rev-parse", "master")

    def test_fetch_failure_fatal(self, flow_repo, repo_ctx):
        with pytest.raises(FlowError, match="Could not fetch 'develop' from 'origin'."):
            run_start(repo_ctx, FEATURE, StartOptions(name="x", fetch=True))
