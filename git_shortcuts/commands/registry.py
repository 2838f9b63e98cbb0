"""Alias table: every short command, its arguments and its handler."""

import glob
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from git_shortcuts.commands import branch, commit, diff, github, show, sync, worktree
from git_shortcuts.commands.session import Session
from git_shortcuts.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_LINK_PREFIX = "g"


@dataclass(frozen=True)
class Argument:
    """One argparse argument: the flags and the add_argument keywords."""

    flags: Tuple[str, ...]
    options: Dict[str, Any] = field(default_factory=dict)


def arg(*flags: str, **options: Any) -> Argument:
    return Argument(flags, options)


@dataclass(frozen=True)
class Operation:
    alias: str
    description: str
    handler: Callable[[Session, Any], None]
    arguments: Tuple[Argument, ...] = ()


BRANCH_RE = arg("branch_re", nargs="?", help="regex matching one local branch")
REVERT = arg("-r", "--revert", action="store_true", help="revert unmodified editor buffers afterwards")
FILES = arg("files", nargs="+", help="files")
MESSAGES = arg("messages", nargs="+", metavar="message", help="commit message paragraph")
COMMITS_OR_COMMIT = arg(
    "commits_or_commit", nargs="?", help="number of commits (1-9) or the oldest commit to include"
)
PATHS = arg("paths", nargs="*", help="paths to compare")
CACHED = arg("-c", "--cached", action="store_true", help="compare the index instead of the working tree")


def create_links(session: Session, args) -> None:
    """Recreate `<prefix>.<alias>` symlinks beside the executable."""
    program = os.path.abspath(session.program or sys.argv[0])
    bin_dir, bin_name = os.path.split(program)

    for path in glob.glob(os.path.join(bin_dir, f"{args.prefix}.*")):
        if os.path.islink(path):
            logger.info(f"Removing link {path}")
            os.remove(path)
    if args.clean:
        return

    for operation in OPERATIONS:
        link = os.path.join(bin_dir, f"{args.prefix}.{operation.alias}")
        session.step(f"create {link}")
        os.symlink(bin_name, link)


def show_help(session: Session, args) -> None:
    """List every alias with its description."""
    width = max(len(op.alias) for op in OPERATIONS)
    for operation in sorted(OPERATIONS, key=lambda op: op.alias):
        session.out(f"{operation.alias.ljust(width)} => {operation.description}")


OPERATIONS: Tuple[Operation, ...] = (
    # branches
    Operation("bo", "checkout local branch (default: repo branch)", branch.checkout_local_branch, (BRANCH_RE, REVERT)),
    Operation("bc", "checkout commit (detached) or tag", branch.checkout_commit, (arg("commit_or_tag"),)),
    Operation(
        "bt",
        "checkout and track remote branch",
        branch.checkout_remote_branch,
        (arg("remote_branch_re", help="regex matching one remote branch"),),
    ),
    Operation(
        "bn",
        "new branch <user>/<name> from main, HEAD (.) or a branch",
        branch.new_branch,
        (
            arg("branch_name", help="branch name without the user prefix"),
            arg("base_branch_re", nargs="?", help="base branch regex, or . for HEAD (default: main after pull)"),
        ),
    ),
    Operation("br", "track the remote branch of the current branch", branch.track_remote_branch),
    Operation(
        "bd",
        "delete local and remote branches (. for the current branch)",
        branch.delete_branches,
        (
            arg("branch_re", help="regex of branches to delete, or ."),
            arg("-l", "--local-only", action="store_true", help="leave remote branches alone"),
        ),
    ),
    # cherry-pick
    Operation("ca", "cherry-pick --abort", commit.cherry_pick_abort),
    Operation("cc", "cherry-pick --continue", commit.cherry_pick_continue),
    Operation("cp", "cherry-pick a commit or branch tip", commit.cherry_pick, (arg("ref", help="commit or branch regex"),)),
    # pull/push
    Operation("pm", "pull main and rebase the repo branch on it", sync.pull_main),
    Operation("pl", "pull --rebase", sync.pull),
    Operation(
        "ps",
        "push HEAD to the same-named remote branch",
        sync.push,
        (arg("-f", "--force", action="store_true", help="force push (never to main)"),),
    ),
    Operation("po", "submodule update --init", sync.update_submodules),
    # working tree and commits
    Operation("mw", "wip commit", commit.commit_wip),
    Operation("mr", "discard modified files", commit.discard_modified, (FILES,)),
    Operation("mx", "clean untracked files", commit.clean_untracked),
    Operation(
        "mc",
        "commit with message",
        commit.commit,
        (MESSAGES, arg("-f", "--force", action="store_true", help="allow committing to main or repo branch")),
    ),
    Operation("ma", "add files", commit.add_files, (FILES,)),
    Operation("mm", "amend", commit.amend, (arg("messages", nargs="*", metavar="message", help="new message"),)),
    Operation("mh", "stash", commit.stash),
    Operation("ms", "stash pop", commit.stash_pop),
    Operation("mu", "unstage files", commit.unstage, (FILES,)),
    # diff
    Operation("df", "diff", diff.diff, (PATHS, CACHED)),
    Operation("dg", "GUI difftool", diff.difftool, (PATHS, CACHED)),
    Operation("de", "ediff (^ for the previous commit)", diff.ediff, (PATHS,)),
    Operation(
        "dc",
        "GUI diff of one commit",
        diff.diff_commit,
        (arg("ref", nargs="?", help="commit or branch regex (default: HEAD)"),),
    ),
    # rebase and history
    Operation("ri", "interactive rebase", sync.rebase_interactive, (arg("ref", help="HEAD~N, commit or branch regex"),)),
    Operation("rc", "rebase --continue", sync.rebase_continue),
    Operation("ra", "rebase --abort", sync.rebase_abort),
    Operation("rr", "rebase on a branch, or on the repo branch after pull main", sync.rebase, (BRANCH_RE,)),
    Operation(
        "rb",
        "rebase the last N commits onto a branch (default: main)",
        sync.rebase_back_onto,
        (
            BRANCH_RE,
            arg("-n", "--commits", type=int, default=1, help="number of commits to keep (default: 1)"),
            REVERT,
        ),
    ),
    Operation("ru", "uncommit", commit.uncommit, (COMMITS_OR_COMMIT,)),
    Operation("rd", "delete commits", commit.delete_commits, (COMMITS_OR_COMMIT,)),
    Operation("rs", "squash commits", commit.squash_commits, (COMMITS_OR_COMMIT,)),
    Operation("rt", "hard reset to a branch (default: main)", commit.reset_to_branch, (BRANCH_RE,)),
    # show
    Operation("s", "status", show.status),
    Operation("sc", "show commit summary", show.show_commit, (arg("refs", nargs="*", help="commits"),)),
    Operation(
        "sl",
        "list commits",
        show.list_commits,
        (
            arg("pattern_or_count", nargs="*", metavar="branch_re|n", help="branch regex and/or number of commits"),
            arg("-r", "--remote", action="store_true", help="match a remote branch"),
        ),
    ),
    Operation("sr", "list remote branches", show.list_remote_branches, (BRANCH_RE,)),
    Operation(
        "sv",
        "show file at a commit or branch",
        show.show_file_version,
        (arg("ref", help="commit or branch regex"), arg("file")),
    ),
    # github
    Operation("gh", "pull request status", github.pr_status),
    Operation(
        "gt",
        "push and create a pull request",
        github.create_pull,
        (
            arg("base_branch_re", nargs="?", help="base branch regex or commit (default: main)"),
            arg("-w", "--draft", action="store_true", help="create a draft"),
            arg("-s", "--silent", action="store_true", help="don't open the browser"),
        ),
    ),
    Operation("gp", "open pull request in browser", github.open_pull, (arg("ref", nargs="?", help="branch regex or PR number"),)),
    Operation("gs", "pull request state; clean up merged branches", github.pull_state, (BRANCH_RE,)),
    # worktrees
    Operation("wn", "new worktree wt-<id>", worktree.add_worktree, (arg("worktree_id"),)),
    Operation("wl", "list worktrees", worktree.list_worktrees),
    Operation(
        "wd",
        "remove worktree wt-<id> and its branch",
        worktree.remove_worktree,
        (arg("worktree_id"), arg("-f", "--force", action="store_true", help="remove even if dirty")),
    ),
    # misc
    Operation("i", "print current branch", show.print_head),
    Operation("repo", "print repository directory name", show.print_repo),
    Operation(
        "create",
        "create <prefix>.<alias> links",
        create_links,
        (
            arg("prefix", nargs="?", default=DEFAULT_LINK_PREFIX, help=f"link prefix (default: {DEFAULT_LINK_PREFIX})"),
            arg("-c", "--clean", action="store_true", help="only remove existing links"),
        ),
    ),
    Operation("help", "list aliases", show_help),
)


def get_operation(alias: str) -> Optional[Operation]:
    return next((op for op in OPERATIONS if op.alias == alias), None)
