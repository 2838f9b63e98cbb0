"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass


class BranchRole(Enum):
    """Role of a branch name relative to the current working directory."""
    MAIN = "main"
    REPO = "repo"
    DEV = "repo"  # Alias of REPO: plain checkout goes to the repo branch
    FEATURE = "feature"
    EPHEMERAL = "ephemeral"
    DETACHED = "detached"
    OTHER = "other"


class BranchKind(Enum):
    """Which branch listing a lookup runs against."""
    LOCAL = "local"
    REMOTE = "remote"


class ReviewState(Enum):
    """State of the pull request linked to a branch."""
    OPEN = "OPEN"
    MERGED = "MERGED"
    CLOSED = "CLOSED"
    NONE = "NONE"  # No pull request could be found


@dataclass(frozen=True)
class Branch:
    """A branch name with its role derived at query time."""
    name: str
    role: BranchRole
    is_current: bool = False

    def __str__(self) -> str:
        marker = "* " if self.is_current else "  "
        return f"{marker}{self.name} [{self.role.value}]"


class BaseLinkage(Enum):
    """Where an open pull request's base points."""
    NORMAL = "normal"  # base is main
    REBASING = "rebasing"  # base is the branch's ephemeral remote ref
