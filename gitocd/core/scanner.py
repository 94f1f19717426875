"""Parallel discovery of git repositories beneath a root directory."""

import os
import logging
from typing import List, Optional

from .collector import Collector
from .errors import ScanError
from .pool import WaitGroup, WorkerPool
from .types import RepositoryRef, ScanConfig

logger = logging.getLogger('gitocd')

GIT_MARKER = '.git'


class RepoScanner:
    """Walk a directory tree and collect repository roots.

    Each directory is one unit of work on the pool. A directory holding a
    ``.git`` entry is reported and never descended into, so no reported
    repository lies inside another.
    """

    def __init__(self, config: ScanConfig, pool: WorkerPool):
        """Initialize scanner.

        Args:
            config: Scan settings shared by all workers
            pool: Worker pool to fan directory visits out on
        """
        self.config = config
        self.pool = pool
        self._collector: Collector[RepositoryRef] = Collector()
        self._wg = WaitGroup()

    def scan(self) -> List[RepositoryRef]:
        """Run the scan to completion.

        Returns:
            Discovered repositories, in no particular order

        Raises:
            ScanError: If a directory could not be enumerated for a reason
                other than missing permissions
        """
        logger.info(f"Scanning {self.config.root} for git repositories")
        if self.config.max_depth is not None:
            logger.info(f"  Max depth: {self.config.max_depth}")

        self.pool.spawn(self._wg, self._scan_directory, self.config.root, 0)
        self.pool.wait(self._wg)

        repos = self._collector.items()
        logger.info(f"Found {len(repos)} repositories under {self.config.root}")
        return repos

    def _scan_directory(self, dir_path: str, depth: int) -> None:
        # Another worker already failed the scan
        if self._wg.failed:
            return

        if self.config.depth_exceeded(depth):
            return

        if self.config.is_ignored(dir_path):
            logger.debug(f"Ignoring {dir_path}")
            return

        try:
            with os.scandir(dir_path) as it:
                entries = list(it)

            if any(entry.name == GIT_MARKER for entry in entries):
                self._collector.add(RepositoryRef(path=dir_path))
                return

            subdirs = [
                entry.name for entry in entries
                if not entry.name.startswith('.')
                and entry.is_dir(follow_symlinks=False)
            ]
        except PermissionError:
            logger.debug(f"Permission denied, skipping {dir_path}")
            return
        except OSError as e:
            raise ScanError(dir_path, e) from e

        for name in subdirs:
            self.pool.spawn(
                self._wg, self._scan_directory, os.path.join(dir_path, name), depth + 1
            )


def scan_for_repos(
    config: ScanConfig,
    pool: Optional[WorkerPool] = None
) -> List[RepositoryRef]:
    """Find every repository reachable from ``config.root``.

    Args:
        config: Scan settings
        pool: Worker pool to use (a private one is created if omitted)

    Returns:
        Discovered repositories, in no particular order
    """
    if pool is not None:
        return RepoScanner(config, pool).scan()

    with WorkerPool() as own_pool:
        return RepoScanner(config, own_pool).scan()
