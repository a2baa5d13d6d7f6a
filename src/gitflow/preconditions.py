"""Named assertions about repository state.

Every guard either returns quietly or raises FlowError. None of them change
the repository.
"""

from typing import Optional

from gitflow.config.store import NOT_INITIALIZED, is_initialized
from gitflow.errors import FlowError
from gitflow.git.compare import BranchRelation, compare_branches
from gitflow.git.queries import (
    TreeState,
    branch_exists,
    is_git_repo,
    is_merged_into,
    local_branch_exists,
    local_branches,
    remote_branch_exists,
    tag_exists,
    working_tree_state,
)
from gitflow.git.resolve import MatchKind, resolve_nameprefix
from gitflow.git.runner import Git
from gitflow.ui.output import warn


def require_git_repo(git: Git) -> None:
    if not is_git_repo(git):
        raise FlowError("Not a git repository")


def require_initialized(git: Git) -> None:
    if not is_initialized(git):
        raise FlowError(NOT_INITIALIZED)


def require_argument(value: Optional[str], label: str) -> str:
    if not value:
        raise FlowError(f"Missing argument <{label}>")
    return value


def require_clean_working_tree(git: Git) -> None:
    state = working_tree_state(git)
    if state is TreeState.UNSTAGED:
        raise FlowError("Working tree contains unstaged changes. Aborting.")
    if state is TreeState.STAGED:
        raise FlowError("Index contains uncommitted changes. Aborting.")


def require_local_branch(git: Git, branch: str) -> None:
    if not local_branch_exists(git, branch):
        raise FlowError(f"Local branch '{branch}' does not exist and is required.")


def require_remote_branch(git: Git, branch: str) -> None:
    if not remote_branch_exists(git, branch):
        raise FlowError(f"Remote branch '{branch}' does not exist and is required.")


def require_branch(git: Git, branch: str) -> None:
    if not branch_exists(git, branch):
        raise FlowError(f"Branch '{branch}' does not exist and is required.")


def require_branch_absent(git: Git, branch: str) -> None:
    if branch_exists(git, branch):
        raise FlowError(f"Branch '{branch}' already exists. Pick another name.")


def require_tag_absent(git: Git, tag: str) -> None:
    if tag_exists(git, tag):
        raise FlowError(f"Tag '{tag}' already exists. Pick another name.")


def require_branches_equal(git: Git, local: str, remote: str) -> None:
    """Local branch must match its remote counterpart.

    A local branch that is merely ahead is allowed with a warning; every other
    divergence aborts.
    """
    require_local_branch(git, local)
    require_remote_branch(git, remote)

    relation = compare_branches(git, local, remote)
    if relation is BranchRelation.EQUAL:
        return

    warn(f"Branches '{local}' and '{remote}' have diverged.")
    if relation is BranchRelation.FIRST_NEEDS_FF:
        raise FlowError(f"And branch '{local}' may be fast-forwarded.")
    if relation is BranchRelation.SECOND_NEEDS_FF:
        warn(f"And local branch '{local}' is ahead of '{remote}'.")
        return
    raise FlowError("Branches need merging first.")


def require_base_reachable(git: Git, base: str, line: str) -> None:
    if not is_merged_into(git, base, line):
        raise FlowError(f"Given base '{base}' is not a valid commit on '{line}'.")


def require_no_existing_instance(git: Git, prefix: str, label: str) -> None:
    """At most one local branch with ``prefix`` may exist."""
    existing = [b for b in local_branches(git) if b.startswith(prefix)]
    if existing:
        short = existing[0][len(prefix) :]
        raise FlowError(f"There is an existing {label} branch ({short}). Finish that one first.")


def require_unique_branch(git: Git, name: str, prefix: str) -> str:
    """Resolve ``name`` under ``prefix`` to exactly one full branch name."""
    resolution = resolve_nameprefix(git, name, prefix)
    if resolution.kind is MatchKind.NO_MATCH:
        raise FlowError(f"No branch matches prefix '{name}'")
    if resolution.kind is MatchKind.AMBIGUOUS:
        lines = [f"Multiple branches match prefix '{name}':"]
        lines.extend(f"- {candidate}" for candidate in resolution.candidates)
        raise FlowError("\n".join(lines))
    return resolution.branch
