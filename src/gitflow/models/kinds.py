"""Supporting-branch kinds and what each one does on start and finish."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BranchKind(Enum):
    FEATURE = "feature"
    RELEASE = "release"
    HOTFIX = "hotfix"
    SUPPORT = "support"


class Line(Enum):
    """The two permanent branches."""

    MASTER = "master"  # production
    DEVELOP = "develop"  # integration


@dataclass(frozen=True)
class KindSpec:
    kind: BranchKind
    source: Line  # default base for start
    targets: tuple[Line, ...]  # finish merge order, primary first
    taggable: bool = False
    single_instance: bool = False
    base_line: Optional[Line] = None  # start base must be reachable from this line
    fast_forward: bool = False  # ff when the branch is a single commit ahead
    arg_label: str = "name"

    @property
    def label(self) -> str:
        return self.kind.value

    @property
    def finishable(self) -> bool:
        return bool(self.targets)

    @property
    def dual_merge(self) -> bool:
        return len(self.targets) > 1


KIND_SPECS: dict[BranchKind, KindSpec] = {
    BranchKind.FEATURE: KindSpec(
        kind=BranchKind.FEATURE,
        source=Line.DEVELOP,
        targets=(Line.DEVELOP,),
        fast_forward=True,
    ),
    BranchKind.RELEASE: KindSpec(
        kind=BranchKind.RELEASE,
        source=Line.DEVELOP,
        targets=(Line.MASTER, Line.DEVELOP),
        taggable=True,
        base_line=Line.DEVELOP,
        arg_label="version",
    ),
    BranchKind.HOTFIX: KindSpec(
        kind=BranchKind.HOTFIX,
        source=Line.MASTER,
        targets=(Line.MASTER, Line.DEVELOP),
        taggable=True,
        single_instance=True,
        base_line=Line.MASTER,
        arg_label="version",
    ),
    BranchKind.SUPPORT: KindSpec(
        kind=BranchKind.SUPPORT,
        source=Line.MASTER,
        targets=(),
        base_line=Line.MASTER,
        arg_label="version",
    ),
}


def get_spec(kind: BranchKind) -> KindSpec:
    return KIND_SPECS[kind]
