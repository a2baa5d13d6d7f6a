"""On-disk state for paused operations."""

from gitflow.state.marker import MergeMarker

__all__ = ["MergeMarker"]
