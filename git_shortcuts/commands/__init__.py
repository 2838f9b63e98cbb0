"""Alias handlers for git-shortcuts."""

from .registry import OPERATIONS, Operation, get_operation
from .session import Session

__all__ = ["OPERATIONS", "Operation", "Session", "get_operation"]
