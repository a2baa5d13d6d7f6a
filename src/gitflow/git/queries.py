"""Read-only repository state queries."""

from enum import Enum
from typing import Optional

from gitflow.git.runner import Git

HEADS = "refs/heads/"
REMOTES = "refs/remotes/"


class TreeState(Enum):
    """Working tree cleanliness, unstaged changes take precedence over staged ones."""

    CLEAN = 0
    UNSTAGED = 1
    STAGED = 2


def _refs(git: Git, namespace: str) -> list[str]:
    result = git.run("for-each-ref", "--format=%(refname)", namespace)
    if not result.success:
        return []
    names = []
    for ref in result.lines():
        ref = ref.strip()
        if not ref.startswith(namespace):
            continue
        name = ref[len(namespace) :]
        # Symbolic origin/HEAD is not a branch
        if name == "HEAD" or name.endswith("/HEAD"):
            continue
        names.append(name)
    return names


def local_branches(git: Git) -> list[str]:
    """Local branch names in ref order (e.g. ['develop', 'feature/x', 'master'])."""
    return _refs(git, HEADS)


def remote_branches(git: Git) -> list[str]:
    """Remote-tracking branch names (e.g. ['origin/develop'])."""
    return _refs(git, REMOTES)


def all_branches(git: Git) -> list[str]:
    return local_branches(git) + remote_branches(git)


def all_tags(git: Git) -> list[str]:
    result = git.run("tag")
    return [t.strip() for t in result.lines()] if result.success else []


def current_branch(git: Git) -> Optional[str]:
    """Checked-out branch name, or None when HEAD is detached."""
    result = git.run("branch", "--show-current")
    if not result.success or not result.output:
        return None
    return result.output


def local_branch_exists(git: Git, branch: str) -> bool:
    return branch in local_branches(git)


def remote_branch_exists(git: Git, branch: str) -> bool:
    return branch in remote_branches(git)


def branch_exists(git: Git, branch: str) -> bool:
    return branch in all_branches(git)


def tag_exists(git: Git, tag: str) -> bool:
    return tag in all_tags(git)


def working_tree_state(git: Git) -> TreeState:
    if not git.succeeds("diff", "--no-ext-diff", "--ignore-submodules", "--quiet", "--exit-code"):
        return TreeState.UNSTAGED
    if not git.succeeds("diff-index", "--cached", "--quiet", "--ignore-submodules", "HEAD", "--"):
        return TreeState.STAGED
    return TreeState.CLEAN


def is_clean_working_tree(git: Git) -> bool:
    return working_tree_state(git) is TreeState.CLEAN


def is_git_repo(git: Git) -> bool:
    return git.succeeds("rev-parse", "--git-dir")


def is_headless(git: Git) -> bool:
    """True for a repository without any commit yet."""
    return not git.succeeds("rev-parse", "--quiet", "--verify", "HEAD")


def git_dir(git: Git) -> Optional[str]:
    """Absolute path of the repository's private metadata directory."""
    result = git.run("rev-parse", "--absolute-git-dir")
    return result.output if result.success and result.output else None


def rev_parse(git: Git, rev: str) -> Optional[str]:
    result = git.run("rev-parse", "--verify", "--quiet", rev)
    return result.output if result.success and result.output else None


def merge_base(git: Git, first: str, second: str) -> Optional[str]:
    result = git.run("merge-base", first, second)
    return result.output if result.success and result.output else None


def is_merged_into(git: Git, subject: str, base: str) -> bool:
    """True if every commit of ``subject`` is reachable from ``base``."""
    return git.succeeds("merge-base", "--is-ancestor", subject, base)


def commits_ahead(git: Git, target: str, branch: str, limit: int = 2) -> int:
    """Count commits on ``branch`` missing from ``target``, capped at ``limit``."""
    result = git.run("rev-list", f"-n{limit}", f"{target}..{branch}")
    return len(result.lines()) if result.success else 0


def describe_base(git: Git, rev: str) -> str:
    """Nearest tag name for ``rev``, falling back to its short sha."""
    tag = git.run("name-rev", "--tags", "--no-undefined", "--name-only", rev)
    if tag.success and tag.output:
        return tag.output
    return git.output("rev-parse", "--short", rev)
