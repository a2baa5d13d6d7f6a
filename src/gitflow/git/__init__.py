"""Git adapter, repository queries, branch comparison and name resolution."""

from gitflow.git.compare import BranchRelation, compare_branches
from gitflow.git.queries import (
    TreeState,
    all_branches,
    all_tags,
    branch_exists,
    current_branch,
    git_dir,
    is_clean_working_tree,
    is_merged_into,
    local_branch_exists,
    local_branches,
    remote_branch_exists,
    remote_branches,
    tag_exists,
    working_tree_state,
)
from gitflow.git.resolve import MatchKind, NameResolution, resolve_nameprefix, short_name
from gitflow.git.runner import DEBUG, QUIET, SHOW, Git, GitResult

__all__ = [
    # Adapter
    "Git",
    "GitResult",
    "QUIET",
    "SHOW",
    "DEBUG",
    # Queries
    "TreeState",
    "local_branches",
    "remote_branches",
    "all_branches",
    "all_tags",
    "current_branch",
    "local_branch_exists",
    "remote_branch_exists",
    "branch_exists",
    "tag_exists",
    "working_tree_state",
    "is_clean_working_tree",
    "is_merged_into",
    "git_dir",
    # Compare
    "BranchRelation",
    "compare_branches",
    # Resolve
    "MatchKind",
    "NameResolution",
    "resolve_nameprefix",
    "short_name",
]
