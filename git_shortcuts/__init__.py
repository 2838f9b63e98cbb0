"""
git-shortcuts - Short aliases for a branch-per-feature git workflow
"""

from .__version__ import __version__
from .core import RebaseOrchestrator, RepoContext
from .cli.main import main

__all__ = ["RebaseOrchestrator", "RepoContext", "main", "__version__"]
