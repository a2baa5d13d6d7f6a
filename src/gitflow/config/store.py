"""Per-repository gitflow configuration kept in git config."""

from typing import Optional

from gitflow.errors import FlowError
from gitflow.git.queries import git_dir, local_branch_exists
from gitflow.git.runner import Git
from gitflow.models.kinds import BranchKind
from gitflow.models.state import FlowSettings

MASTER_KEY = "gitflow.branch.master"
DEVELOP_KEY = "gitflow.branch.develop"
ORIGIN_KEY = "gitflow.origin"
PREFIX_KEY = "gitflow.prefix.{}"
VERSIONTAG = "versiontag"

NOT_INITIALIZED = "Not a gitflow-enabled repo yet. Please run 'git flow init' first."


def get_item(git: Git, key: str) -> Optional[str]:
    """Read a config value; None when unset. An empty string is a set value."""
    result = git.run("config", "--get", key)
    return result.output if result.success else None


def set_item(git: Git, key: str, value: str) -> bool:
    return git.succeeds("config", key, value)


def prefix_key(kind: str) -> str:
    return PREFIX_KEY.format(kind)


def has_master_configured(git: Git) -> bool:
    master = get_item(git, MASTER_KEY)
    return bool(master) and local_branch_exists(git, master)


def has_develop_configured(git: Git) -> bool:
    develop = get_item(git, DEVELOP_KEY)
    return bool(develop) and local_branch_exists(git, develop)


def has_prefixes_configured(git: Git) -> bool:
    """All prefixes set. An empty prefix counts as set."""
    keys = [kind.value for kind in BranchKind] + [VERSIONTAG]
    return all(get_item(git, prefix_key(k)) is not None for k in keys)


def is_initialized(git: Git) -> bool:
    """Branches named, both existing locally, distinct, and all prefixes present."""
    if not (has_master_configured(git) and has_develop_configured(git)):
        return False
    if get_item(git, MASTER_KEY) == get_item(git, DEVELOP_KEY):
        return False
    return has_prefixes_configured(git)


def load_settings(git: Git) -> FlowSettings:
    """Read repository settings; raise if the repository was never initialized."""
    if not is_initialized(git):
        raise FlowError(NOT_INITIALIZED)

    directory = git_dir(git)
    if directory is None:
        raise FlowError("Not a git repository.")

    prefixes = {kind.value: get_item(git, prefix_key(kind.value)) or "" for kind in BranchKind}
    return FlowSettings(
        master=get_item(git, MASTER_KEY) or "master",
        develop=get_item(git, DEVELOP_KEY) or "develop",
        origin=get_item(git, ORIGIN_KEY) or "origin",
        prefixes=prefixes,
        versiontag_prefix=get_item(git, prefix_key(VERSIONTAG)) or "",
        git_dir=directory,
    )
