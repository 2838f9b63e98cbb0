"""Custom exceptions for git-shortcuts"""

from typing import List, Optional, Sequence


class GitShortcutsError(Exception):
    """Base exception for all git-shortcuts errors."""
    pass


class PreconditionError(GitShortcutsError):
    """Exception raised when an operation is refused before anything is mutated."""

    def __init__(self, message: str, **details):
        self.message = message
        self.details = details

        error_msg = message
        if details:
            error_msg += " (" + ", ".join(f"{k}={v}" for k, v in details.items()) + ")"

        super().__init__(error_msg)


class AmbiguousBranchError(GitShortcutsError):
    """Exception raised when a pattern does not match exactly one branch."""

    def __init__(self, pattern: str, candidates: Sequence[str], kind: str = "local"):
        self.pattern = pattern
        self.candidates: List[str] = list(candidates)
        self.kind = kind

        if self.candidates:
            error_msg = f"Pattern '{pattern}' matches {len(self.candidates)} {kind} branches: {', '.join(self.candidates)}"
        else:
            error_msg = f"Pattern '{pattern}' matches no {kind} branch"

        super().__init__(error_msg)


class GitOperationError(GitShortcutsError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitHubAPIError(GitShortcutsError):
    """Exception raised for errors in GitHub API operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"GitHub API operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class AbortedError(GitShortcutsError):
    """Exception raised when the user declines a confirmation."""

    def __init__(self, question: Optional[str] = None):
        self.question = question
        super().__init__("aborted")
