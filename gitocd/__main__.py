"""Main entry point for the gitocd CLI."""

from dotenv import load_dotenv
load_dotenv()

import sys
import argparse
from typing import List, Optional

from . import __version__
from .config import Config, DEFAULT_IGNORE_PATTERNS
from .core.errors import ScanError
from .core.logger import setup_logging
from .core.pool import WorkerPool
from .core.repo_manager import RepoManager
from .core.scanner import scan_for_repos
from .core.types import ScanResult
from .utils.report import create_console, print_report

EXIT_CLEAN = 0
EXIT_PENDING = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130


def positive_int(value: str) -> int:
    """Argparse type for strictly positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid value: {value}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='gitocd',
        description='Find git repositories with uncommitted or unpushed work',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  gitocd                       # Scan current directory
  gitocd --all                 # Show all repos including clean
  gitocd --path ~/projects     # Scan specific directory
  gitocd --depth 3             # Limit recursion depth
  gitocd --ignore "vendor,dist" # Ignore additional directory names

Always ignored: {', '.join(DEFAULT_IGNORE_PATTERNS)}

Exit codes:
  0    All repositories are clean (or none were found)
  1    One or more repositories have pending work or unknown status
  2    Configuration or scan error
        """
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'gitocd {__version__}'
    )

    scan_group = parser.add_argument_group('scanning')
    scan_group.add_argument(
        '-p', '--path',
        metavar='PATH',
        help='Directory to scan (default: current directory)'
    )
    scan_group.add_argument(
        '-d', '--depth',
        type=positive_int,
        metavar='N',
        help='Maximum recursion depth'
    )
    scan_group.add_argument(
        '-i', '--ignore',
        metavar='PATTERNS',
        help='Comma-separated directory names to skip'
    )

    output_group = parser.add_argument_group('output')
    output_group.add_argument(
        '-a', '--all',
        action='store_true',
        dest='show_all',
        help='Show all repositories (including clean ones)'
    )
    output_group.add_argument(
        '--no-color',
        action='store_true',
        help='Disable coloured output'
    )
    output_group.add_argument(
        '--debug',
        action='store_true',
        help='Log debug information to stderr'
    )
    output_group.add_argument(
        '--log-dir',
        metavar='DIR',
        help='Write a log file to DIR (overrides GITOCD_LOG_DIR)'
    )

    exec_group = parser.add_argument_group('execution control')
    exec_group.add_argument(
        '--workers',
        type=positive_int,
        metavar='N',
        help='Number of parallel workers (default: CPU count)'
    )
    exec_group.add_argument(
        '--sequential',
        action='store_true',
        help='Force sequential processing (no parallelization)'
    )

    return parser


def run_scan(config: Config) -> ScanResult:
    """Discover repositories and check each one.

    Args:
        config: Configuration object

    Returns:
        ScanResult for every discovered repository

    Raises:
        ScanError: If discovery could not complete
    """
    with WorkerPool(config.max_workers) as pool:
        repos = scan_for_repos(config.scan_config(), pool)
        if not repos:
            return ScanResult()

        err_console = create_console(config.use_color, stderr=True)
        err_console.print(f"\nFound [bold]{len(repos)}[/] git repositories, checking status...")

        repo_manager = RepoManager(
            pool=pool,
            sequential=config.sequential,
            console=err_console
        )
        return ScanResult(results=repo_manager.check_repos(repos))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env_and_args(
            path=args.path,
            depth=args.depth,
            ignore=args.ignore,
            show_all=args.show_all,
            max_workers=args.workers,
            sequential=args.sequential,
            use_color=not args.no_color,
            log_dir=args.log_dir
        )
    except ValueError as e:
        sys.stderr.write(f"Configuration error: {e}\n")
        return EXIT_ERROR

    try:
        logger = setup_logging(operation="scan", log_dir=config.log_dir, debug=args.debug)
    except OSError as e:
        sys.stderr.write(f"Configuration error: cannot write log file: {e}\n")
        return EXIT_ERROR

    try:
        logger.info("Configuration loaded")
        logger.info(f"  Path: {config.root}")
        logger.info(f"  Depth: {config.max_depth or 'unlimited'}")
        logger.info(f"  Extra ignore patterns: {config.ignore_patterns}")

        scan_result = run_scan(config)
        print_report(
            scan_result,
            show_all=config.show_all,
            console=create_console(config.use_color)
        )

        return EXIT_PENDING if scan_result.has_pending_work else EXIT_CLEAN

    except ScanError as e:
        logger.error(f"Scan error: {e}")
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
