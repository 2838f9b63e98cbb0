"""Configuration handling for git-shortcuts"""

import getpass
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from git_shortcuts.constants import (
    DEFAULT_REMOTE,
    DEFAULT_REVERT_COMMAND,
    TMP_SUFFIX,
    WORKTREE_PREFIX,
)


def _default_username() -> str:
    return getpass.getuser()


@dataclass
class Config:
    """Configuration for git-shortcuts with validation."""

    # Naming conventions
    remote_name: str = DEFAULT_REMOTE
    username: str = field(default_factory=_default_username)
    main_branch: Optional[str] = None  # None = ask the remote, then main/master
    tmp_suffix: str = TMP_SUFFIX
    worktree_prefix: str = WORKTREE_PREFIX

    # External tools
    difftool: Optional[str] = None
    revert_command: List[str] = field(default_factory=lambda: list(DEFAULT_REVERT_COMMAND))

    # GitHub integration
    github_token: Optional[str] = None

    # Execution modes
    assume_yes: bool = False
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_name()
        self._validate_username()
        self._validate_main_branch()
        self._validate_tmp_suffix()
        self._validate_worktree_prefix()

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_username(self):
        """Validate username is usable as a branch prefix."""
        if not self.username or not self.username.strip():
            raise ValueError("username cannot be empty")
        if "/" in self.username:
            raise ValueError(f"username cannot contain '/', got '{self.username}'")
        self.username = self.username.strip()

    def _validate_main_branch(self):
        """Normalize an empty main_branch override to None."""
        if self.main_branch is not None:
            self.main_branch = self.main_branch.strip() or None

    def _validate_tmp_suffix(self):
        """Validate tmp_suffix is not empty."""
        if not self.tmp_suffix:
            raise ValueError("tmp_suffix cannot be empty")

    def _validate_worktree_prefix(self):
        """Validate worktree_prefix is a plain directory name prefix."""
        if not self.worktree_prefix or "/" in self.worktree_prefix:
            raise ValueError(f"worktree_prefix must be a non-empty name without '/', got '{self.worktree_prefix}'")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "remote_name": self.remote_name,
            "username": self.username,
            "main_branch": self.main_branch,
            "tmp_suffix": self.tmp_suffix,
            "worktree_prefix": self.worktree_prefix,
            "difftool": self.difftool,
            "revert_command": self.revert_command,
            "github_token": self.github_token,
            "assume_yes": self.assume_yes,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "remote_name",
            "username",
            "main_branch",
            "tmp_suffix",
            "worktree_prefix",
            "difftool",
            "revert_command",
            "github_token",
            "assume_yes",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Config":
        """Create Config from environment variables, then apply explicit overrides.

        Recognized variables: GIT_SHORTCUTS_USER, GIT_SHORTCUTS_MAIN_BRANCH,
        GIT_SHORTCUTS_REMOTE, GIT_SHORTCUTS_DIFFTOOL and GITHUB_TOKEN.
        """
        env = os.environ if environ is None else environ
        values = {}
        if env.get("GIT_SHORTCUTS_USER"):
            values["username"] = env["GIT_SHORTCUTS_USER"]
        if env.get("GIT_SHORTCUTS_MAIN_BRANCH"):
            values["main_branch"] = env["GIT_SHORTCUTS_MAIN_BRANCH"]
        if env.get("GIT_SHORTCUTS_REMOTE"):
            values["remote_name"] = env["GIT_SHORTCUTS_REMOTE"]
        if env.get("GIT_SHORTCUTS_DIFFTOOL"):
            values["difftool"] = env["GIT_SHORTCUTS_DIFFTOOL"]
        if env.get("GITHUB_TOKEN"):
            values["github_token"] = env["GITHUB_TOKEN"]
        values.update(overrides)
        return cls.from_dict(values)
