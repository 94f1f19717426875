"""Core package for gitocd."""

from .types import (
    RepositoryRef,
    ScanConfig,
    RepoStatus,
    StatusState,
    StatusResult,
    ScanResult,
)

from .errors import GitocdError, ScanError, GitCommandError
from .pool import WaitGroup, WorkerPool
from .collector import Collector
from .scanner import RepoScanner, scan_for_repos
from .logger import setup_logging

__all__ = [
    # Types
    'RepositoryRef',
    'ScanConfig',
    'RepoStatus',
    'StatusState',
    'StatusResult',
    'ScanResult',
    # Errors
    'GitocdError',
    'ScanError',
    'GitCommandError',
    # Concurrency
    'WaitGroup',
    'WorkerPool',
    'Collector',
    # Discovery
    'RepoScanner',
    'scan_for_repos',
    'setup_logging',
]
