"""Core types shared by the discovery and status engines."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class RepositoryRef:
    """A discovered repository root."""
    path: str


@dataclass(frozen=True)
class ScanConfig:
    """Settings for one discovery scan.

    Shared read-only by every discovery worker.
    """
    root: str
    max_depth: Optional[int] = None
    ignore_patterns: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth}")

    def depth_exceeded(self, depth: int) -> bool:
        """Check if a directory at ``depth`` is beyond the configured limit."""
        return self.max_depth is not None and depth >= self.max_depth

    def is_ignored(self, path: str) -> bool:
        """Check if the final segment of ``path`` is an ignore pattern."""
        return os.path.basename(os.path.normpath(path)) in self.ignore_patterns


@dataclass(frozen=True)
class RepoStatus:
    """Working-tree and upstream state of one repository."""
    untracked_files: Tuple[str, ...] = ()
    modified_files: Tuple[str, ...] = ()
    unpushed_commits: int = 0

    @property
    def is_clean(self) -> bool:
        """Check if there is no pending work in the repository."""
        return (
            not self.untracked_files
            and not self.modified_files
            and self.unpushed_commits == 0
        )


class StatusState(Enum):
    """Classification of a repository after its status lookup."""
    CLEAN = "clean"
    DIRTY = "dirty"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StatusResult:
    """Outcome of the status lookup for a single repository.

    ``status`` is None when the lookup failed, in which case ``error``
    says why.
    """
    repo: RepositoryRef
    status: Optional[RepoStatus] = None
    error: Optional[str] = None

    @property
    def state(self) -> StatusState:
        if self.status is None:
            return StatusState.UNKNOWN
        if self.status.is_clean:
            return StatusState.CLEAN
        return StatusState.DIRTY

    @property
    def clean(self) -> bool:
        return self.state == StatusState.CLEAN

    @property
    def dirty(self) -> bool:
        return self.state == StatusState.DIRTY

    @property
    def unknown(self) -> bool:
        return self.state == StatusState.UNKNOWN


@dataclass
class ScanResult:
    """All status results for one invocation."""
    results: List[StatusResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def clean_count(self) -> int:
        return sum(1 for r in self.results if r.clean)

    @property
    def dirty_count(self) -> int:
        return sum(1 for r in self.results if r.dirty)

    @property
    def unknown_count(self) -> int:
        return sum(1 for r in self.results if r.unknown)

    @property
    def is_empty(self) -> bool:
        """Check if no repositories were found."""
        return not self.results

    @property
    def has_pending_work(self) -> bool:
        """Check if any repository is dirty or could not be checked."""
        return any(not r.clean for r in self.results)

    def sorted_results(self) -> List[StatusResult]:
        """Get results ordered by repository path for display."""
        return sorted(self.results, key=lambda r: r.repo.path)
