"""Utilities package for gitocd."""

from .git import (
    run_git,
    parse_porcelain,
    get_upstream_branch,
    count_unpushed_commits,
    get_repo_status,
)
from .progress import ProgressTracker
from .report import print_report

__all__ = [
    'run_git',
    'parse_porcelain',
    'get_upstream_branch',
    'count_unpushed_commits',
    'get_repo_status',
    'ProgressTracker',
    'print_report',
]
