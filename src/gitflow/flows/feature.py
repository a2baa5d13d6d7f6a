"""Feature-only actions: diff, rebase, checkout."""

from typing import Optional

from gitflow.errors import FlowError
from gitflow.flows.common import current_kind_branch, resolve_branch
from gitflow.models.kinds import KindSpec
from gitflow.models.state import FlowContext
from gitflow.preconditions import require_branch, require_clean_working_tree
from gitflow.ui.output import log, warn


def run_diff(ctx: FlowContext, spec: KindSpec, name: Optional[str] = None) -> int:
    """Show what a feature changed since it left the integration line."""
    git = ctx.git
    develop = ctx.settings.develop

    if not name:
        if current_kind_branch(ctx, spec) is None:
            raise FlowError("Not on a feature branch. Name one explicitly.")
        base = git.output("merge-base", develop, "HEAD")
        result = git.run("diff", base)
    else:
        branch, _ = resolve_branch(ctx, spec, name)
        base = git.output("merge-base", develop, branch)
        result = git.run("diff", f"{base}..{branch}")

    if not result.success:
        raise FlowError(result.stderr or "git diff failed.")
    if result.output:
        print(result.output)
    return 0


def run_checkout(ctx: FlowContext, spec: KindSpec, name: Optional[str] = None) -> int:
    if not name:
        raise FlowError("Name a feature branch explicitly.")
    branch, _ = resolve_branch(ctx, spec, name)
    result = ctx.git.run("checkout", branch)
    if not result.success:
        raise FlowError(result.stderr or f"Could not check out '{branch}'.")
    log(f"Switched to branch '{branch}'")
    return 0


def rebase_branch(
    ctx: FlowContext, spec: KindSpec, name: Optional[str] = None, interactive: bool = False
) -> bool:
    """Rebase a feature branch onto develop. Returns False if git gave up.

    An interactive rebase needs the user's terminal, so only the command to
    run is printed.
    """
    git = ctx.git
    develop = ctx.settings.develop
    branch, short = resolve_branch(ctx, spec, name, allow_current=True)

    warn(f"Will try to rebase '{short}'...")
    require_clean_working_tree(git)
    require_branch(git, branch)

    if not git.succeeds("checkout", "-q", branch):
        raise FlowError(f"Could not check out '{branch}'.")
    if interactive:
        print("Interactive rebase not available yet.")
        print(f"You are currently on branch '{branch}'")
        print()
        print("To rebase, please run")
        print(f"    git rebase -i {develop}")
        return True
    return git.succeeds("rebase", develop)


def run_rebase(
    ctx: FlowContext, spec: KindSpec, name: Optional[str] = None, interactive: bool = False
) -> int:
    if not rebase_branch(ctx, spec, name, interactive):
        warn("Rebase stopped on conflicts. Resolve them, then run:")
        print("    git rebase --continue")
        return 1
    return 0
