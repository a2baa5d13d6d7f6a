"""git flow init — interactive repository setup."""

from typing import Optional

from gitflow.config.settings import default_prefix
from gitflow.config.store import (
    DEVELOP_KEY,
    MASTER_KEY,
    ORIGIN_KEY,
    VERSIONTAG,
    get_item,
    has_develop_configured,
    has_master_configured,
    is_initialized,
    prefix_key,
    set_item,
)
from gitflow.errors import FlowError
from gitflow.git.queries import is_git_repo, is_headless, local_branch_exists, local_branches
from gitflow.git.runner import Git
from gitflow.models.kinds import BranchKind
from gitflow.preconditions import require_clean_working_tree
from gitflow.ui.output import GREEN, NC, log, success, warn

PRODUCTION_GUESSES = ["production", "main", "master"]
INTEGRATION_GUESSES = ["develop", "int", "integration", "master"]


def _ask(prompt: str, suggestion: str, use_defaults: bool) -> str:
    """Prompt with a suggestion in brackets; empty input takes the suggestion."""
    if use_defaults:
        print(f"{prompt} [{suggestion}]")
        return suggestion
    try:
        answer = input(f"{prompt} [{suggestion}] ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        raise FlowError("Aborted.")
    return answer or suggestion


def _store(git: Git, key: str, value: str) -> None:
    if not set_item(git, key, value):
        raise FlowError(f"Could not set '{key}' in git config.")


def _first_existing(git: Git, guesses: list[Optional[str]], exclude: Optional[str] = None) -> str:
    for guess in guesses:
        if guess and guess != exclude and local_branch_exists(git, guess):
            return guess
    return ""


def _choose_master(git: Git, config: dict, use_defaults: bool) -> str:
    configured = get_item(git, MASTER_KEY)
    branches = local_branches(git)

    if not branches:
        print("No branches exist yet. Base branches must be created now.")
        suggestion = configured or config.get("branches", {}).get("master", "master")
    else:
        print()
        print("Which branch should be used for bringing forth production releases?")
        for branch in branches:
            print(f"   - {branch}")
        suggestion = _first_existing(git, [configured, *PRODUCTION_GUESSES])

    if use_defaults:
        warn("Using default branch names.")
    master = _ask("Branch name for production releases:", suggestion, use_defaults)
    if not master:
        raise FlowError("A production branch name is required.")
    if branches and not local_branch_exists(git, master):
        raise FlowError(f"Local branch '{master}' does not exist.")
    _store(git, MASTER_KEY, master)
    return master


def _choose_develop(git: Git, config: dict, master: str, use_defaults: bool) -> str:
    configured = get_item(git, DEVELOP_KEY)
    branches = [b for b in local_branches(git) if b != master]

    if not branches:
        suggestion = configured or config.get("branches", {}).get("develop", "develop")
    else:
        print()
        print('Which branch should be used for integration of the "next release"?')
        for branch in branches:
            print(f"   - {branch}")
        suggestion = _first_existing(git, [configured, *INTEGRATION_GUESSES], exclude=master)

    develop = _ask('Branch name for "next release" development:', suggestion, use_defaults)
    if not develop:
        raise FlowError('A "next release" branch name is required.')
    if develop == master:
        raise FlowError("Production and integration branches should differ.")
    if branches and not local_branch_exists(git, develop):
        raise FlowError(f"Local branch '{develop}' does not exist.")
    _store(git, DEVELOP_KEY, develop)
    return develop


def _choose_prefixes(git: Git, config: dict, force: bool, use_defaults: bool) -> None:
    kinds = [kind.value for kind in BranchKind] + [VERSIONTAG]
    missing = [k for k in kinds if get_item(git, prefix_key(k)) is None]
    if not (force or missing):
        return

    print()
    print("How to name your supporting branch prefixes?")
    for kind in kinds:
        current = get_item(git, prefix_key(kind))
        if current is not None and not force:
            continue
        suggestion = current if current is not None else default_prefix(config, kind)
        prompt = "Version tag prefix?" if kind == VERSIONTAG else f"{kind.capitalize()} branches?"
        _store(git, prefix_key(kind), _ask(prompt, suggestion, use_defaults))


def run_init(git: Git, config: dict, force: bool = False, use_defaults: bool = False) -> int:
    """Configure the production/integration branches and the kind prefixes."""
    print(f"\n{GREEN}git flow init{NC}\n")

    if not is_git_repo(git):
        if not git.succeeds("init"):
            raise FlowError("Could not create a git repository here.")
        log("Initialized empty git repository")
    elif not is_headless(git):
        require_clean_working_tree(git)

    if is_initialized(git) and not force:
        warn("Already initialized for gitflow.")
        warn("To force reinitialization, use: git flow init -f")
        return 0

    if has_master_configured(git) and not force:
        master = get_item(git, MASTER_KEY)
    else:
        master = _choose_master(git, config, use_defaults)

    if has_develop_configured(git) and not force:
        develop = get_item(git, DEVELOP_KEY)
    else:
        develop = _choose_develop(git, config, master, use_defaults)

    # A fresh repository needs a first commit before any branch can exist
    created = False
    if is_headless(git):
        git.run("symbolic-ref", "HEAD", f"refs/heads/{master}")
        if not git.succeeds("commit", "--allow-empty", "--quiet", "-m", "Initial commit"):
            raise FlowError("Could not create the initial commit.")
        created = True

    if not local_branch_exists(git, develop):
        if not git.succeeds("branch", "--no-track", develop, master):
            raise FlowError(f"Could not create branch '{develop}'.")
        created = True

    if created:
        git.run("checkout", "-q", develop)

    if get_item(git, ORIGIN_KEY) is None:
        _store(git, ORIGIN_KEY, str(config.get("origin") or "origin"))

    _choose_prefixes(git, config, force, use_defaults)

    if not is_initialized(git):
        raise FlowError("Initialization did not complete.")
    success("Repository initialized for gitflow.")
    return 0
