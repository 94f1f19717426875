"""Find git repositories with uncommitted or unpushed work."""

__version__ = '0.1.0'
