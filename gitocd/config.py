"""Configuration management for gitocd."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .core.types import ScanConfig

# Build and dependency directories that never hold repositories worth reporting
DEFAULT_IGNORE_PATTERNS = (
    'node_modules',
    'target',
    '.cache',
    'zig-cache',
    'zig-out',
    '__pycache__',
)


def parse_ignore_patterns(value: Optional[str]) -> List[str]:
    """Split a comma-separated pattern list, dropping blank items.

    Args:
        value: String such as ``"dist, build"``

    Returns:
        List of trimmed patterns
    """
    if not value:
        return []
    patterns = (p.strip(' \t') for p in value.split(','))
    return [p for p in patterns if p]


def _int_from_env(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Config:
    """Configuration for gitocd.

    Merges environment variables with CLI arguments.
    CLI arguments take precedence over environment variables.
    """

    root: str = '.'
    max_depth: Optional[int] = None
    ignore_patterns: List[str] = field(default_factory=list)
    show_all: bool = False
    max_workers: Optional[int] = None
    sequential: bool = False
    use_color: bool = True
    log_dir: Optional[str] = None

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"Depth must be a positive integer, got {self.max_depth}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"Workers must be a positive integer, got {self.max_workers}")

    @classmethod
    def from_env_and_args(
        cls,
        path: Optional[str] = None,
        depth: Optional[int] = None,
        ignore: Optional[str] = None,
        show_all: bool = False,
        max_workers: Optional[int] = None,
        sequential: bool = False,
        use_color: bool = True,
        log_dir: Optional[str] = None
    ) -> 'Config':
        """Create config from environment variables and CLI arguments.

        CLI arguments override environment variables.

        Args:
            path: Directory to scan (overrides GITOCD_PATH)
            depth: Maximum recursion depth (overrides GITOCD_DEPTH)
            ignore: Comma-separated extra ignore patterns (overrides GITOCD_IGNORE)
            show_all: Also report clean repositories
            max_workers: Parallel workers (overrides GITOCD_WORKERS)
            sequential: Force sequential status checks
            use_color: Colour the report when writing to a terminal
            log_dir: Directory for log files (overrides GITOCD_LOG_DIR)

        Returns:
            Config instance

        Raises:
            ValueError: If a setting is invalid
        """
        final_path = path or os.getenv('GITOCD_PATH') or '.'
        final_depth = depth if depth is not None else _int_from_env('GITOCD_DEPTH')
        final_ignore = ignore if ignore is not None else os.getenv('GITOCD_IGNORE')
        final_workers = (
            max_workers if max_workers is not None else _int_from_env('GITOCD_WORKERS')
        )
        final_log_dir = log_dir or os.getenv('GITOCD_LOG_DIR') or None

        return cls(
            root=final_path,
            max_depth=final_depth,
            ignore_patterns=parse_ignore_patterns(final_ignore),
            show_all=show_all,
            max_workers=1 if sequential else final_workers,
            sequential=sequential,
            use_color=use_color,
            log_dir=final_log_dir
        )

    def scan_config(self) -> ScanConfig:
        """Build the immutable discovery settings.

        Returns:
            ScanConfig with the default ignore patterns merged in
        """
        return ScanConfig(
            root=self.root,
            max_depth=self.max_depth,
            ignore_patterns=frozenset(DEFAULT_IGNORE_PATTERNS) | frozenset(self.ignore_patterns)
        )
