"""Run context and finish state machine models."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from gitflow.git.runner import Git
from gitflow.models.kinds import BranchKind, KindSpec, Line
from gitflow.state.marker import MergeMarker


class FinishState(Enum):
    """States in the finish state machine."""

    IDLE = auto()  # Check for a paused finish
    PREPARE = auto()  # Guards, fetch, remote sync checks, optional rebase
    MERGE_PRIMARY = auto()  # Merge into first target line
    TAG = auto()  # Tag the release/hotfix
    MERGE_SECONDARY = auto()  # Back-merge into second target line
    CLEANUP = auto()  # Delete branch, push
    DONE = auto()  # Terminal: finished
    CONFLICT_WAIT = auto()  # Terminal: waiting for manual conflict resolution


@dataclass
class FlowSettings:
    """Repository configuration resolved for one invocation."""

    master: str
    develop: str
    origin: str
    prefixes: dict[str, str]
    versiontag_prefix: str
    git_dir: str

    def prefix_for(self, kind: BranchKind) -> str:
        return self.prefixes.get(kind.value, f"{kind.value}/")

    def line(self, line: Line) -> str:
        return self.master if line is Line.MASTER else self.develop

    def remote(self, branch: str) -> str:
        return f"{self.origin}/{branch}"


@dataclass
class FlowContext:
    """Everything a lifecycle command needs, passed explicitly to each step."""

    git: Git
    settings: FlowSettings
    config: dict = field(default_factory=dict)  # YAML tool defaults


@dataclass
class StartOptions:
    name: Optional[str]
    base: Optional[str] = None
    fetch: bool = False


@dataclass
class FinishOptions:
    name: Optional[str]
    fetch: bool = False
    rebase: bool = False
    keep: bool = False
    push: bool = False
    sign: bool = False
    signingkey: Optional[str] = None
    message: Optional[str] = None
    tag: bool = True
    delete_remote: bool = False


@dataclass
class FinishContext:
    """State tracked across the finish state machine."""

    ctx: FlowContext
    spec: KindSpec
    options: FinishOptions
    name: str  # short name / version
    branch: str  # full branch name
    marker: MergeMarker

    # Progress
    skipped: list[str] = field(default_factory=list)
    remote_deleted: bool = False
    deleted: bool = False
    pushed: bool = False

    @property
    def git(self) -> Git:
        return self.ctx.git

    @property
    def targets(self) -> list[str]:
        return [self.ctx.settings.line(line) for line in self.spec.targets]

    @property
    def primary(self) -> str:
        return self.targets[0]

    @property
    def secondary(self) -> Optional[str]:
        return self.targets[1] if len(self.targets) > 1 else None

    @property
    def tag_name(self) -> str:
        return f"{self.ctx.settings.versiontag_prefix}{self.name}"
