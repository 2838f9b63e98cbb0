"""Utility functions for git-shortcuts.

This package provides utility modules:
- prompt: yes/no confirmation gate for destructive operations
"""

from .prompt import confirm

__all__ = ["confirm"]
