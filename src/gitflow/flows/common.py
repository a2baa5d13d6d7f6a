"""Helpers shared by the lifecycle drivers."""

import sys
from typing import Optional

from gitflow.errors import FlowError
from gitflow.git.queries import current_branch
from gitflow.git.resolve import short_name
from gitflow.models.kinds import KindSpec
from gitflow.models.state import FlowContext
from gitflow.preconditions import require_argument, require_unique_branch
from gitflow.ui.output import warn


def branch_name(ctx: FlowContext, spec: KindSpec, name: str) -> str:
    """Full branch name for a short name, no lookup."""
    return f"{ctx.settings.prefix_for(spec.kind)}{name}"


def resolve_branch(
    ctx: FlowContext, spec: KindSpec, name: Optional[str], allow_current: bool = False
) -> tuple[str, str]:
    """Return ``(full branch, short name)`` for an abbreviated name.

    With ``allow_current`` and no name, the checked-out branch is used when it
    belongs to the kind.
    """
    prefix = ctx.settings.prefix_for(spec.kind)
    if not name and allow_current:
        branch = current_kind_branch(ctx, spec)
        if branch is None:
            raise FlowError(
                f"The current HEAD is no {spec.label} branch.\n"
                f"Please specify a <{spec.arg_label}> argument."
            )
        return branch, short_name(branch, prefix)

    name = require_argument(name, spec.arg_label)
    branch = require_unique_branch(ctx.git, name, prefix)
    return branch, short_name(branch, prefix)


def current_kind_branch(ctx: FlowContext, spec: KindSpec) -> Optional[str]:
    """Checked-out branch if it carries the kind's prefix."""
    prefix = ctx.settings.prefix_for(spec.kind)
    branch = current_branch(ctx.git)
    if branch and branch.startswith(prefix):
        return branch
    return None


def fetch_or_fail(ctx: FlowContext, *refs: str) -> None:
    """Fetch from origin; any failure aborts."""
    origin = ctx.settings.origin
    result = ctx.git.run("fetch", "-q", origin, *refs)
    if not result.success:
        what = f"'{refs[0]}'" if len(refs) == 1 else "latest objects"
        raise FlowError(f"Could not fetch {what} from '{origin}'.")


def print_conflict_help(spec: KindSpec, name: str, unresolved: bool) -> None:
    """Tell the user how to finish a merge by hand and resume."""
    if unresolved:
        warn("Merge conflicts not resolved yet, use:")
    else:
        warn("There were merge conflicts. To resolve the merge conflict manually, use:")
    lines = [
        "    git mergetool",
        "    git commit",
        "",
        "You can then complete the finish by running it again:",
        f"    git flow {spec.label} finish {name}",
    ]
    for line in lines:
        print(line, file=sys.stderr)
