"""Worktree data models."""

import os
from dataclasses import dataclass


@dataclass
class WorktreeInfo:
    """Information about a git worktree."""

    path: str
    branch_name: str
    commit_sha: str
    is_main: bool  # First entry of `git worktree list`
    is_orphaned: bool  # Directory missing?

    @property
    def directory_name(self) -> str:
        """Base name of the worktree directory."""
        return os.path.basename(os.path.normpath(self.path))

    def is_secondary(self, prefix: str) -> bool:
        """Secondary worktrees are the ones whose directory carries the reserved prefix."""
        return self.directory_name.startswith(prefix)

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "orphaned" if self.is_orphaned else "active"
        main_marker = " (main)" if self.is_main else ""
        return f"{self.branch_name or 'detached'} @ {self.path}{main_marker} [{status}]"
