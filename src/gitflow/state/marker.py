"""Paused-finish bookkeeping.

When a finish stops on a merge conflict, the name of the target branch whose
merge failed is written to ``<git-dir>/.gitflow/MERGE_BASE``. Re-running finish
reads it back to know where to resume.
"""

from pathlib import Path
from typing import Optional

MARKER_DIR = ".gitflow"
MARKER_FILE = "MERGE_BASE"


class MergeMarker:
    """The MERGE_BASE marker file of one repository."""

    def __init__(self, git_dir: str | Path):
        self.path = Path(git_dir) / MARKER_DIR / MARKER_FILE

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Optional[str]:
        """Return the recorded target branch, or None when no finish is paused."""
        if not self.path.is_file():
            return None
        target = self.path.read_text().strip()
        return target or None

    def write(self, target: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f"{target}\n")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
