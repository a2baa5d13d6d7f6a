"""Branch divergence classification."""

from enum import IntEnum

from gitflow.errors import FlowError
from gitflow.git.queries import merge_base, rev_parse
from gitflow.git.runner import Git


class BranchRelation(IntEnum):
    """How two branch heads relate to each other."""

    EQUAL = 0  # same commit
    FIRST_NEEDS_FF = 1  # first is strictly behind second
    SECOND_NEEDS_FF = 2  # second is strictly behind first
    NEEDS_MERGE = 3  # both have unique commits
    NO_MERGE_BASE = 4  # no common history


def compare_branches(git: Git, first: str, second: str) -> BranchRelation:
    """Classify ``first`` against ``second``.

    The result is directional: if A is behind B, compare(A, B) is FIRST_NEEDS_FF
    and compare(B, A) is SECOND_NEEDS_FF.
    """
    commit1 = rev_parse(git, first)
    if commit1 is None:
        raise FlowError(f"Cannot resolve '{first}' to a commit.")
    commit2 = rev_parse(git, second)
    if commit2 is None:
        raise FlowError(f"Cannot resolve '{second}' to a commit.")

    if commit1 == commit2:
        return BranchRelation.EQUAL

    base = merge_base(git, commit1, commit2)
    if base is None:
        return BranchRelation.NO_MERGE_BASE
    if base == commit1:
        return BranchRelation.FIRST_NEEDS_FF
    if base == commit2:
        return BranchRelation.SECOND_NEEDS_FF
    return BranchRelation.NEEDS_MERGE
