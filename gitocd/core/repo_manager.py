"""Repository manager for checking repository status in parallel."""

import logging
from typing import List, Optional

from rich.console import Console

from .collector import Collector
from .errors import GitCommandError
from .pool import WaitGroup, WorkerPool
from .types import RepositoryRef, StatusResult
from ..utils.git import get_repo_status
from ..utils.progress import ProgressTracker

logger = logging.getLogger('gitocd')


class RepoManager:
    """Manager for running status checks across repositories."""

    def __init__(
        self,
        pool: Optional[WorkerPool] = None,
        max_workers: Optional[int] = None,
        sequential: bool = False,
        show_progress: bool = True,
        console: Optional[Console] = None
    ):
        """Initialize repository manager.

        Args:
            pool: Worker pool to share (a private one is created per call if omitted)
            max_workers: Size of the private pool (None = CPU count)
            sequential: Force sequential processing
            show_progress: Show a progress bar on large scans
            console: Console for the progress bar (default: stderr)
        """
        self.pool = pool
        self.max_workers = max_workers
        self.sequential = sequential
        self.show_progress = show_progress
        self.console = console

    def check_repos(self, repos: List[RepositoryRef]) -> List[StatusResult]:
        """Check the status of every repository.

        A failed lookup never aborts the others; it yields an unknown
        result for that repository instead.

        Args:
            repos: Repositories to check

        Returns:
            One StatusResult per repository, in no particular order
        """
        logger.info(f"Checking status of {len(repos)} repositories")

        results: Collector[StatusResult] = Collector()
        progress_tracker = ProgressTracker(
            len(repos), "status", enabled=self.show_progress, console=self.console
        )

        try:
            if self.sequential:
                logger.info("Using sequential processing")
                for repo in repos:
                    self._process_repo(repo, results, progress_tracker)
            elif self.pool is not None:
                self._execute_parallel(self.pool, repos, results, progress_tracker)
            else:
                with WorkerPool(self.max_workers) as pool:
                    self._execute_parallel(pool, repos, results, progress_tracker)
        finally:
            progress_tracker.finish()
        return results.items()

    def _execute_parallel(
        self,
        pool: WorkerPool,
        repos: List[RepositoryRef],
        results: Collector[StatusResult],
        progress_tracker: ProgressTracker
    ) -> None:
        logger.info(f"Using parallel processing with {pool.max_workers} workers")
        wg = WaitGroup()
        for repo in repos:
            pool.spawn(wg, self._process_repo, repo, results, progress_tracker)
        pool.wait(wg)

    def _process_repo(
        self,
        repo: RepositoryRef,
        results: Collector[StatusResult],
        progress_tracker: ProgressTracker
    ) -> None:
        """Check a single repository and record its result.

        Args:
            repo: Repository to check
            results: Shared results collector
            progress_tracker: Shared completed counter
        """
        try:
            result = StatusResult(repo=repo, status=get_repo_status(repo.path))
        except GitCommandError as e:
            logger.error(f"✗ {repo.path}: {e}")
            result = StatusResult(repo=repo, error=str(e))
        except Exception as e:
            logger.error(f"Unexpected error checking {repo.path}: {e}")
            result = StatusResult(repo=repo, error=f"Unexpected error: {e}")

        results.add(result)
        progress_tracker.update(result)
        self._log_result(result)

    def _log_result(self, result: StatusResult) -> None:
        """Log a status result.

        Args:
            result: Status result
        """
        if result.clean:
            logger.debug(f"✓ {result.repo.path}: clean")
        elif result.dirty:
            status = result.status
            logger.debug(
                f"⚠ {result.repo.path}: {len(status.untracked_files)} untracked, "
                f"{len(status.modified_files)} modified, "
                f"{status.unpushed_commits} unpushed"
            )
