"""List the branches of one kind."""

from gitflow.git.queries import current_branch, describe_base, local_branches, merge_base, rev_parse
from gitflow.git.resolve import short_name
from gitflow.models.kinds import KindSpec, Line
from gitflow.models.state import FlowContext
from gitflow.ui.output import warn


def annotate(ctx: FlowContext, spec: KindSpec, branch: str) -> str:
    """Describe where ``branch`` stands relative to the line it came from."""
    git = ctx.git
    line = ctx.settings.line(spec.source)
    branch_sha = rev_parse(git, branch)
    line_sha = rev_parse(git, line)
    base = merge_base(git, branch, line)

    if branch_sha == line_sha:
        return "(no commits yet)"
    if spec.source is Line.MASTER:
        return f"(based on {describe_base(git, base or branch)})"
    if base == branch_sha:
        return f"(is behind {line}, may ff)"
    if base == line_sha:
        return f"(based on latest {line})"
    return "(may be rebased)"


def run_list(ctx: FlowContext, spec: KindSpec, verbose: bool = False) -> int:
    prefix = ctx.settings.prefix_for(spec.kind)
    branches = [b for b in local_branches(ctx.git) if b.startswith(prefix)]
    if not branches:
        warn(f"No {spec.label} branches exist.")
        warn("")
        warn(f"You can start a new {spec.label} branch:")
        warn("")
        warn(f"    git flow {spec.label} start <{spec.arg_label}> [<base>]")
        return 0

    current = current_branch(ctx.git)
    names = [short_name(b, prefix) for b in branches]
    width = max(len(n) for n in names) + 3

    for branch, name in zip(branches, names):
        marker = "* " if branch == current else "  "
        if verbose:
            print(f"{marker}{name:<{width}}{annotate(ctx, spec, branch)}")
        else:
            print(f"{marker}{name}")
    return 0
