"""Git operations and utilities."""

import os
import subprocess
import logging
from typing import List, Optional, Sequence, Tuple

from ..core.errors import GitCommandError
from ..core.types import RepoStatus

logger = logging.getLogger('gitocd')

STATUS_OUTPUT_LIMIT = 10 * 1024 * 1024
QUERY_OUTPUT_LIMIT = 1024 * 1024
GIT_TIMEOUT = 30

UNTRACKED_CODE = '??'


def run_git(
    repo_path: str,
    args: Sequence[str],
    max_output: int = QUERY_OUTPUT_LIMIT,
    timeout: int = GIT_TIMEOUT
) -> str:
    """Run a git command inside a repository and return its stdout.

    Args:
        repo_path: Path to the repository (used as working directory)
        args: Arguments after ``git``
        max_output: Largest stdout accepted, in bytes
        timeout: Timeout in seconds

    Returns:
        Decoded stdout, or an empty string if git exited non-zero

    Raises:
        GitCommandError: If git could not be started, timed out, or
            produced more than ``max_output`` bytes
    """
    command = ['git', *args]

    # Status must not take index.lock away from the user's own git commands
    env = os.environ.copy()
    env['GIT_OPTIONAL_LOCKS'] = '0'

    try:
        result = subprocess.run(
            command,
            cwd=repo_path,
            capture_output=True,
            check=True,
            timeout=timeout,
            env=env
        )
    except subprocess.CalledProcessError as e:
        logger.debug(f"{' '.join(command)} exited {e.returncode} in {repo_path}")
        return ""
    except subprocess.TimeoutExpired:
        raise GitCommandError(command, repo_path, f"timed out after {timeout}s")
    except OSError as e:
        raise GitCommandError(command, repo_path, str(e)) from e

    if len(result.stdout) > max_output:
        raise GitCommandError(
            command, repo_path, f"output exceeds {max_output} bytes"
        )

    return os.fsdecode(result.stdout)


def parse_porcelain(output: str) -> Tuple[List[str], List[str]]:
    """Split ``git status --porcelain`` output into untracked and modified paths.

    Any status code other than ``??`` with a non-blank character counts as
    modified, whether the change is staged, unstaged, an addition, a
    deletion, a rename or a copy.

    Args:
        output: Raw porcelain output

    Returns:
        Tuple of (untracked paths, modified paths) in output order
    """
    untracked = []
    modified = []

    for line in output.split('\n'):
        if len(line) < 4:
            continue

        code = line[:2]
        path = line[3:].strip(' \t')
        if not path:
            continue

        if code == UNTRACKED_CODE:
            untracked.append(path)
        elif code[0] != ' ' or code[1] != ' ':
            modified.append(path)

    return untracked, modified


def get_upstream_branch(repo_path: str) -> Optional[str]:
    """Get the upstream of the current branch.

    Args:
        repo_path: Path to the repository

    Returns:
        Upstream name (e.g., 'origin/main') or None if none is configured
    """
    output = run_git(
        repo_path,
        ['rev-parse', '--abbrev-ref', '--symbolic-full-name', '@{u}']
    ).strip()

    if not output or 'no upstream' in output:
        return None
    return output


def count_unpushed_commits(repo_path: str) -> int:
    """Count commits on the current branch that are not on its upstream.

    Args:
        repo_path: Path to the repository

    Returns:
        Number of unpushed commits, 0 when there is no upstream
    """
    if get_upstream_branch(repo_path) is None:
        return 0

    output = run_git(repo_path, ['rev-list', '--count', '@{u}..HEAD']).strip()
    try:
        return int(output)
    except ValueError:
        logger.warning(f"Unexpected ahead count {output!r} in {repo_path}")
        return 0


def get_repo_status(repo_path: str) -> RepoStatus:
    """Get the pending-work status of a repository.

    Args:
        repo_path: Path to the repository

    Returns:
        RepoStatus for the repository

    Raises:
        GitCommandError: If any git query could not be run
    """
    output = run_git(repo_path, ['status', '--porcelain'], max_output=STATUS_OUTPUT_LIMIT)
    untracked, modified = parse_porcelain(output)

    return RepoStatus(
        untracked_files=tuple(untracked),
        modified_files=tuple(modified),
        unpushed_commits=count_unpushed_commits(repo_path)
    )
