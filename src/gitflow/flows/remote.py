"""Share supporting branches through the origin remote."""

from typing import Optional

from gitflow.errors import FlowError
from gitflow.flows.common import branch_name, current_kind_branch, resolve_branch
from gitflow.git.queries import current_branch, local_branch_exists, remote_branch_exists
from gitflow.git.runner import Git
from gitflow.models.kinds import BranchKind, KindSpec
from gitflow.models.state import FlowContext
from gitflow.preconditions import (
    require_argument,
    require_clean_working_tree,
    require_local_branch,
    require_remote_branch,
)
from gitflow.ui.output import print_summary, success, warn


def _fetch_origin(ctx: FlowContext) -> None:
    if not ctx.git.succeeds("fetch", "-q", ctx.settings.origin):
        raise FlowError(f"Could not fetch from '{ctx.settings.origin}'.")


def run_publish(ctx: FlowContext, spec: KindSpec, name: Optional[str]) -> int:
    """Push a local branch to origin and make it track the new remote branch."""
    git = ctx.git
    origin = ctx.settings.origin
    allow_current = spec.kind is BranchKind.FEATURE
    branch, _ = resolve_branch(ctx, spec, name, allow_current=allow_current)

    require_clean_working_tree(git)
    require_local_branch(git, branch)
    _fetch_origin(ctx)
    remote = ctx.settings.remote(branch)
    if remote_branch_exists(git, remote):
        raise FlowError(f"Branch '{remote}' already exists. Pick another name.")

    if not git.succeeds("push", origin, f"{branch}:refs/heads/{branch}"):
        raise FlowError(f"Could not push '{branch}' to '{origin}'.")
    _fetch_origin(ctx)

    git.run("config", f"branch.{branch}.remote", origin)
    git.run("config", f"branch.{branch}.merge", f"refs/heads/{branch}")
    if not git.succeeds("checkout", branch):
        raise FlowError(f"Could not check out '{branch}'.")

    print_summary(
        [
            f"A new remote branch '{branch}' was created",
            f"The local branch '{branch}' was configured to track the remote branch",
            f"You are now on branch '{branch}'",
        ]
    )
    return 0


def run_track(ctx: FlowContext, spec: KindSpec, name: Optional[str]) -> int:
    """Create a local branch tracking an existing origin branch."""
    git = ctx.git
    name = require_argument(name, spec.arg_label)
    branch = branch_name(ctx, spec, name)

    require_clean_working_tree(git)
    if local_branch_exists(git, branch):
        raise FlowError(f"Branch '{branch}' already exists. Pick another name.")
    _fetch_origin(ctx)
    remote = ctx.settings.remote(branch)
    require_remote_branch(git, remote)

    if not git.succeeds("checkout", "-b", branch, remote):
        raise FlowError(f"Could not create {spec.label} branch '{branch}'")

    print_summary(
        [
            f"A new remote tracking branch '{branch}' was created",
            f"You are now on branch '{branch}'",
        ]
    )
    return 0


def _refuse_cross_branch(git: Git, branch: str) -> None:
    on = current_branch(git)
    if on != branch:
        warn(f"Trying to pull from '{branch}' while currently on branch '{on}'.")
        raise FlowError("To avoid unintended merges, git-flow aborted.")


def run_pull(ctx: FlowContext, spec: KindSpec, remote: Optional[str], name: Optional[str]) -> int:
    """Pull a feature from any remote, creating the local branch if needed."""
    git = ctx.git
    if not remote:
        raise FlowError("Name a remote explicitly.")

    if name:
        branch = branch_name(ctx, spec, name)
    else:
        branch = current_kind_branch(ctx, spec)
        if branch is None:
            raise FlowError(
                f"The current HEAD is no {spec.label} branch.\n"
                f"Please specify a <{spec.arg_label}> argument."
            )

    # On some feature branch already: only that one may be pulled into
    if current_kind_branch(ctx, spec) is not None:
        _refuse_cross_branch(git, branch)

    require_clean_working_tree(git)

    if local_branch_exists(git, branch):
        _refuse_cross_branch(git, branch)
        if not git.succeeds("pull", "-q", remote, branch):
            raise FlowError(f"Failed to pull from remote '{remote}'.")
        success(f"Pulled {remote}'s changes into {branch}.")
        return 0

    if not git.succeeds("fetch", "-q", remote, branch):
        raise FlowError("Fetch failed.")
    if not git.succeeds("branch", "--no-track", branch, "FETCH_HEAD"):
        raise FlowError("Branch failed.")
    if not git.succeeds("checkout", "-q", branch):
        raise FlowError("Checking out new local branch failed.")
    success(f"Created local branch {branch} based on {remote}'s {branch}.")
    return 0
