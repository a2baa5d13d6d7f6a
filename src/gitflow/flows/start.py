"""Create a new supporting branch."""

from gitflow.errors import FlowError
from gitflow.flows.common import branch_name, fetch_or_fail
from gitflow.git.queries import remote_branch_exists
from gitflow.models.kinds import BranchKind, KindSpec
from gitflow.models.state import FlowContext, StartOptions
from gitflow.preconditions import (
    require_argument,
    require_base_reachable,
    require_branch_absent,
    require_branches_equal,
    require_clean_working_tree,
    require_no_existing_instance,
    require_tag_absent,
)
from gitflow.ui.output import print_summary

START_HINTS: dict[BranchKind, list[str]] = {
    BranchKind.FEATURE: [
        "Now, start committing on your feature. When done, use:",
        "",
        "     git flow feature finish {name}",
    ],
    BranchKind.RELEASE: [
        "Follow-up actions:",
        "- Start committing last-minute fixes in preparing your release",
        "- When done, run:",
        "",
        "     git flow release finish '{name}'",
    ],
    BranchKind.HOTFIX: [
        "Follow-up actions:",
        "- Start committing your hot fixes",
        "- When done, run:",
        "",
        "     git flow hotfix finish '{name}'",
    ],
}


def run_start(ctx: FlowContext, spec: KindSpec, options: StartOptions) -> int:
    """Guard, optionally fetch, then branch ``prefix + name`` off the base."""
    git = ctx.git
    settings = ctx.settings

    name = require_argument(options.name, spec.arg_label)
    branch = branch_name(ctx, spec, name)
    source = settings.line(spec.source)
    base = options.base or source

    if spec.base_line is not None:
        require_base_reachable(git, base, settings.line(spec.base_line))
    if spec.single_instance:
        require_no_existing_instance(git, settings.prefix_for(spec.kind), spec.label)
    if spec.taggable:
        require_tag_absent(git, f"{settings.versiontag_prefix}{name}")
        require_clean_working_tree(git)
    require_branch_absent(git, branch)

    if options.fetch:
        fetch_or_fail(ctx, source)
    remote_source = settings.remote(source)
    if remote_branch_exists(git, remote_source):
        require_branches_equal(git, source, remote_source)

    if not git.succeeds("checkout", "-b", branch, base):
        raise FlowError(f"Could not create {spec.label} branch '{branch}'")

    actions = []
    if options.fetch:
        actions.append(f"The latest objects have been fetched from '{settings.origin}'")
    actions.append(f"A new branch '{branch}' was created, based on '{base}'")
    actions.append(f"You are now on branch '{branch}'")
    hints = [line.format(name=name) for line in START_HINTS.get(spec.kind, [])]
    print_summary(actions, hints)
    return 0
