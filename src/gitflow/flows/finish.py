"""Finish state machine: merge a supporting branch back into its target lines.

A finish runs IDLE -> PREPARE -> MERGE_PRIMARY -> TAG -> MERGE_SECONDARY ->
CLEANUP -> DONE, skipping the states a kind does not use. A merge conflict
records the target in the MERGE_BASE marker and stops in CONFLICT_WAIT; the
next run picks up after the merge the user completed by hand.
"""

from typing import Callable

from gitflow.errors import FlowError
from gitflow.flows.common import fetch_or_fail, print_conflict_help, resolve_branch
from gitflow.flows.feature import rebase_branch
from gitflow.git.queries import (
    commits_ahead,
    current_branch,
    is_clean_working_tree,
    is_merged_into,
    remote_branch_exists,
    tag_exists,
)
from gitflow.models.kinds import BranchKind, KindSpec
from gitflow.models.state import FinishContext, FinishOptions, FinishState, FlowContext
from gitflow.preconditions import require_branch, require_branches_equal, require_clean_working_tree
from gitflow.state.marker import MergeMarker
from gitflow.ui.output import log, print_summary, success, warn


def next_after_merge(fc: FinishContext, target: str) -> FinishState:
    """State that follows a completed merge into ``target``."""
    if target == fc.primary:
        if fc.spec.taggable:
            return FinishState.TAG
        if fc.secondary:
            return FinishState.MERGE_SECONDARY
    return FinishState.CLEANUP


def handle_idle(fc: FinishContext) -> FinishState:
    """Resume a paused finish if the marker says one is pending."""
    target = fc.marker.read()
    if target is None:
        return FinishState.PREPARE

    if not is_clean_working_tree(fc.git):
        print_conflict_help(fc.spec, fc.name, unresolved=True)
        return FinishState.CONFLICT_WAIT

    fc.marker.clear()
    if target in fc.targets and is_merged_into(fc.git, fc.branch, target):
        log(f"Merge of '{fc.branch}' into '{target}' was completed, continuing.")
        return next_after_merge(fc, target)

    warn(f"'{fc.branch}' was not merged into '{target}', restarting finish.")
    return FinishState.PREPARE


def handle_prepare(fc: FinishContext) -> FinishState:
    """Sanity checks, optional fetch and rebase before anything is merged."""
    git = fc.git
    settings = fc.ctx.settings

    require_branch(git, fc.branch)
    require_clean_working_tree(git)

    if fc.options.fetch:
        if remote_branch_exists(git, settings.remote(fc.branch)):
            fetch_or_fail(fc.ctx, fc.branch)
        for target in fc.targets:
            fetch_or_fail(fc.ctx, target)

    for branch in [fc.branch, *fc.targets]:
        remote = settings.remote(branch)
        if remote_branch_exists(git, remote):
            require_branches_equal(git, branch, remote)

    if fc.options.rebase:
        if not rebase_branch(fc.ctx, fc.spec, fc.name):
            raise FlowError(
                "Finish was aborted due to conflicts during rebase.\n"
                "Please finish the rebase manually now.\n"
                "When finished, re-run:\n"
                f"    git flow {fc.spec.label} finish '{fc.name}'"
            )

    return FinishState.MERGE_PRIMARY


def merge_into(fc: FinishContext, target: str) -> bool:
    """Merge the branch into ``target``. False means the merge stopped."""
    git = fc.git
    if is_merged_into(git, fc.branch, target):
        log(f"'{fc.branch}' is already merged into '{target}', skipping.")
        fc.skipped.append(target)
        return True

    if not git.succeeds("checkout", target):
        raise FlowError(f"Could not check out '{target}'.")

    # A single commit is replayed as-is instead of wrapped in a merge commit
    if fc.spec.fast_forward and commits_ahead(git, target, fc.branch) == 1:
        result = git.run("merge", "--ff", "--no-edit", fc.branch)
    else:
        result = git.run("merge", "--no-ff", "--no-edit", fc.branch)

    if not result.success:
        fc.marker.write(target)
        print_conflict_help(fc.spec, fc.name, unresolved=False)
        return False

    return True


def handle_merge_primary(fc: FinishContext) -> FinishState:
    if not merge_into(fc, fc.primary):
        return FinishState.CONFLICT_WAIT
    return next_after_merge(fc, fc.primary)


def handle_tag(fc: FinishContext) -> FinishState:
    """Tag the primary target, once."""
    following = FinishState.MERGE_SECONDARY if fc.secondary else FinishState.CLEANUP
    if not fc.options.tag:
        return following
    if tag_exists(fc.git, fc.tag_name):
        log(f"Tag '{fc.tag_name}' already exists, not tagging again.")
        return following

    if fc.options.signingkey:
        args = ["tag", "-u", fc.options.signingkey]
    elif fc.options.sign:
        args = ["tag", "-s"]
    else:
        args = ["tag", "-a"]
    message = fc.options.message or f"Tag {fc.tag_name}"
    args += ["-m", message, fc.tag_name, fc.primary]

    if not fc.git.succeeds(*args):
        raise FlowError("Tagging failed. Please run finish again to retry.")
    return following


def handle_merge_secondary(fc: FinishContext) -> FinishState:
    if not merge_into(fc, fc.secondary):
        return FinishState.CONFLICT_WAIT
    return FinishState.CLEANUP


def handle_cleanup(fc: FinishContext) -> FinishState:
    """Delete the finished branch, push if asked, report."""
    git = fc.git
    settings = fc.ctx.settings
    origin = settings.origin

    require_branch(git, fc.branch)
    require_clean_working_tree(git)

    if fc.options.delete_remote and remote_branch_exists(git, settings.remote(fc.branch)):
        if not git.succeeds("push", origin, f":refs/heads/{fc.branch}"):
            raise FlowError(f"Could not delete the remote '{settings.remote(fc.branch)}'.")
        fc.remote_deleted = True

    if not fc.options.keep:
        if current_branch(git) == fc.branch:
            if not git.succeeds("checkout", fc.targets[-1]):
                raise FlowError(f"Could not check out '{fc.targets[-1]}'.")
        # branch -d compares against the upstream, which may lag behind a published branch
        merged = all(is_merged_into(git, fc.branch, target) for target in fc.targets)
        if not git.succeeds("branch", "-D" if merged else "-d", fc.branch):
            raise FlowError(f"Could not delete branch '{fc.branch}'.")
        fc.deleted = True

    if fc.options.push:
        for target in fc.targets:
            if not git.succeeds("push", origin, target):
                raise FlowError(f"Could not push '{target}' to '{origin}'.")
        if fc.spec.taggable and fc.options.tag:
            if not git.succeeds("push", "--tags", origin):
                raise FlowError(f"Could not push tags to '{origin}'.")
        fc.pushed = True

    fc.marker.clear()
    print_summary(finish_actions(fc))
    success(f"Finished {fc.spec.label} '{fc.name}'")
    return FinishState.DONE


def finish_actions(fc: FinishContext) -> list[str]:
    settings = fc.ctx.settings
    label = fc.spec.label.capitalize()
    actions = []
    if fc.options.fetch:
        actions.append(f"The latest objects have been fetched from '{settings.origin}'")
    if fc.options.rebase:
        actions.append(f"{label} branch '{fc.branch}' was rebased onto '{settings.develop}'")
    for target in fc.targets:
        if target in fc.skipped:
            actions.append(f"{label} branch '{fc.branch}' was already merged into '{target}'")
        else:
            actions.append(f"{label} branch '{fc.branch}' has been merged into '{target}'")
    if fc.spec.taggable and fc.options.tag and tag_exists(fc.git, fc.tag_name):
        actions.append(f"The {fc.spec.label} was tagged '{fc.tag_name}'")
    if fc.remote_deleted:
        actions.append(f"{label} branch '{settings.remote(fc.branch)}' has been removed")
    if fc.deleted:
        actions.append(f"{label} branch '{fc.branch}' has been removed")
    else:
        actions.append(f"{label} branch '{fc.branch}' is still available")
    if fc.pushed:
        pushed = ", ".join(f"'{t}'" for t in fc.targets)
        actions.append(f"{pushed} have been pushed to '{settings.origin}'")
    branch = current_branch(fc.git)
    if branch:
        actions.append(f"You are now on branch '{branch}'")
    return actions


STATE_HANDLERS: dict[FinishState, Callable[[FinishContext], FinishState]] = {
    FinishState.IDLE: handle_idle,
    FinishState.PREPARE: handle_prepare,
    FinishState.MERGE_PRIMARY: handle_merge_primary,
    FinishState.TAG: handle_tag,
    FinishState.MERGE_SECONDARY: handle_merge_secondary,
    FinishState.CLEANUP: handle_cleanup,
}


def run_state_machine(fc: FinishContext) -> FinishState:
    """Drive handlers until DONE or CONFLICT_WAIT."""
    state = FinishState.IDLE
    while state not in (FinishState.DONE, FinishState.CONFLICT_WAIT):
        handler = STATE_HANDLERS.get(state)
        if handler is None:
            raise FlowError(f"Unknown finish state: {state}")
        state = handler(fc)
    return state


def run_finish(ctx: FlowContext, spec: KindSpec, options: FinishOptions) -> int:
    """Finish a supporting branch. Returns 0 when done, 1 while conflicts wait."""
    if not spec.finishable:
        raise FlowError(f"{spec.label.capitalize()} branches cannot be finished.")

    allow_current = spec.kind is BranchKind.FEATURE
    branch, name = resolve_branch(ctx, spec, options.name, allow_current=allow_current)
    fc = FinishContext(
        ctx=ctx,
        spec=spec,
        options=options,
        name=name,
        branch=branch,
        marker=MergeMarker(ctx.settings.git_dir),
    )
    state = run_state_machine(fc)
    return 0 if state is FinishState.DONE else 1
