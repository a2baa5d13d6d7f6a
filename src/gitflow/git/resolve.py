"""Resolve a short branch name fragment to one existing branch."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gitflow.git.queries import local_branches
from gitflow.git.runner import Git


class MatchKind(Enum):
    UNIQUE = "unique"
    NO_MATCH = "no_match"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class NameResolution:
    """Outcome of resolving ``prefix + name`` against the local branches."""

    kind: MatchKind
    branch: Optional[str] = None  # full branch name when UNIQUE
    candidates: tuple[str, ...] = ()

    @property
    def is_unique(self) -> bool:
        return self.kind is MatchKind.UNIQUE


def resolve_nameprefix(git: Git, name: str, prefix: str) -> NameResolution:
    """Find the single local branch that ``prefix + name`` abbreviates.

    An exact branch named ``prefix + name`` wins over longer matches. Otherwise
    branches are matched by literal string prefix; two or more matches are
    ambiguous and never guessed between.
    """
    wanted = f"{prefix}{name}"
    branches = local_branches(git)
    if wanted in branches:
        return NameResolution(MatchKind.UNIQUE, branch=wanted)

    matches = tuple(b for b in branches if b.startswith(wanted))
    if not matches:
        return NameResolution(MatchKind.NO_MATCH)
    if len(matches) == 1:
        return NameResolution(MatchKind.UNIQUE, branch=matches[0])
    return NameResolution(MatchKind.AMBIGUOUS, candidates=matches)


def short_name(branch: str, prefix: str) -> str:
    """Strip the kind prefix from a full branch name."""
    return branch[len(prefix) :] if prefix and branch.startswith(prefix) else branch
