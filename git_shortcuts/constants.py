"""Shared constants for git-shortcuts."""

import re

DEFAULT_REMOTE = "origin"

# Branch name suffix marking disposable rebase anchors and PR bases
TMP_SUFFIX = "__TMP"

# Directory/branch prefix of secondary worktrees
WORKTREE_PREFIX = "wt-"

# Candidate names for the main branch when the remote has no default
MAIN_BRANCH_NAMES = ("main", "master")

# Markers in `git branch` output for branches checked out somewhere
CURRENT_BRANCH_MARKERS = ("*", "+")

COMMIT_RE = re.compile(r"^[0-9a-f]{6}[0-9a-f]*$")

# Squash-merged PR titles end with "(#123)"
PR_IN_TITLE_RE = re.compile(r"\(#[0-9]+\)$")

DEFAULT_REVERT_COMMAND = ["emacsclient", "-e", "(my-revert-unmodified)"]

DEFAULT_LOG_COUNT = 3
LOG_FORMAT = "--format=%h    %s%n%cd    %an%n"

STATUS_SEPARATOR = "================"

CONFIRM_SUFFIX = " ([y]/n)?: "

PROGRAM_NAME = "git-shortcuts"
