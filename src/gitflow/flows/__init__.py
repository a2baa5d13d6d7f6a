"""Lifecycle drivers for supporting branches."""

from gitflow.flows.feature import rebase_branch, run_checkout, run_diff, run_rebase
from gitflow.flows.finish import run_finish
from gitflow.flows.listing import run_list
from gitflow.flows.remote import run_publish, run_pull, run_track
from gitflow.flows.start import run_start

__all__ = [
    "run_start",
    "run_finish",
    "run_list",
    "run_publish",
    "run_track",
    "run_pull",
    "run_diff",
    "run_rebase",
    "run_checkout",
    "rebase_branch",
]
