"""Git-related services for git-shortcuts."""

from .operations import GitOperations
from .worktrees import WorktreeService
from .github import GitHubService
from .branch_queries import BranchQueries, ListedBranch

__all__ = [
    "GitOperations",
    "WorktreeService",
    "GitHubService",
    "BranchQueries",
    "ListedBranch",
]
