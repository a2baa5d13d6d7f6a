"""Shared test fixtures."""

import shutil
import subprocess
from pathlib import Path

import pytest

from gitflow.git.runner import Git
from gitflow.models.state import FlowContext, FlowSettings

PREFIXES = {"feature": "feature/", "release": "release/", "hotfix": "hotfix/", "support": "support/"}


def ok(stdout: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess([], 0, stdout=stdout, stderr="")


def fail(stderr: str = "", returncode: int = 1) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess([], returncode, stdout="", stderr=stderr)


@pytest.fixture
def reset_config_cache():
    import gitflow.config.settings as settings

    settings._config = None
    settings._loaded_sources = []
    yield
    settings._config = None
    settings._loaded_sources = []


@pytest.fixture
def mock_subprocess(mocker):
    """Mock subprocess.run returning success by default."""
    mock = mocker.patch("gitflow.git.runner.subprocess.run")
    mock.return_value = ok()
    return mock


@pytest.fixture
def flow_settings(tmp_path):
    return FlowSettings(
        master="master",
        develop="develop",
        origin="origin",
        prefixes=dict(PREFIXES),
        versiontag_prefix="v",
        git_dir=str(tmp_path / ".git"),
    )


@pytest.fixture
def flow_ctx(flow_settings):
    return FlowContext(git=Git(), settings=flow_settings, config={})


# --- Real repositories ---


def git(repo: Path, *args: str) -> str:
    """Run git in ``repo`` and return stripped stdout, failing the test on error."""
    result = subprocess.run(["git", *args], cwd=repo, capture_output=True, text=True)
    assert result.returncode == 0, f"git {' '.join(args)} failed: {result.stderr}"
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    (repo / name).write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    """Isolate git from the user's global configuration."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    return home


@pytest.fixture
def flow_repo(tmp_path, git_env, monkeypatch):
    """An initialized gitflow repository with master and develop, cwd set to it."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/master")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    commit_file(repo, "README", "base\n", "Initial commit")
    git(repo, "branch", "develop")
    git(repo, "checkout", "-q", "develop")
    git(repo, "config", "gitflow.branch.master", "master")
    git(repo, "config", "gitflow.branch.develop", "develop")
    git(repo, "config", "gitflow.origin", "origin")
    for kind, prefix in PREFIXES.items():
        git(repo, "config", f"gitflow.prefix.{kind}", prefix)
    git(repo, "config", "gitflow.prefix.versiontag", "v")
    monkeypatch.chdir(repo)
    return repo


@pytest.fixture
def origin_remote(tmp_path, flow_repo):
    """A bare origin holding master and develop, fetched into flow_repo."""
    bare = tmp_path / "origin.git"
    subprocess.run(["git", "init", "-q", "--bare", str(bare)], check=True)
    git(flow_repo, "remote", "add", "origin", str(bare))
    git(flow_repo, "push", "-q", "origin", "master", "develop")
    git(flow_repo, "fetch", "-q", "origin")
    return bare


@pytest.fixture
def repo_ctx(flow_repo):
    """FlowContext loaded from the real repository."""
    from gitflow.config.store import load_settings

    g = Git(cwd=str(flow_repo))
    return FlowContext(git=g, settings=load_settings(g), config={})
