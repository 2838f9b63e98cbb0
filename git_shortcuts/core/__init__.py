"""Context and workflows for git-shortcuts.

This package provides the per-invocation repository context and the
rebase orchestration built on top of it.
"""

from .context import RepoContext
from .rebase import RebaseOrchestrator

__all__ = ["RepoContext", "RebaseOrchestrator"]
