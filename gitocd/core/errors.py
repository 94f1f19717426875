"""Exceptions raised by gitocd."""


class GitocdError(Exception):
    """Base class for gitocd errors."""


class ScanError(GitocdError):
    """Signal that directory discovery could not complete."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Cannot scan {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class GitCommandError(GitocdError):
    """Signal that a git command could not be run at all."""

    def __init__(self, command, cwd: str, reason: str):
        super().__init__(f"{' '.join(command)} failed in {cwd}: {reason}")
        self.command = list(command)
        self.cwd = cwd
        self.reason = reason
