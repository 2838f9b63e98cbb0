"""Read-only aliases: status, logs, commits, files and prompt helpers."""

import os

from git_shortcuts.commands.session import Session
from git_shortcuts.constants import DEFAULT_LOG_COUNT, LOG_FORMAT, PR_IN_TITLE_RE, STATUS_SEPARATOR
from git_shortcuts.exceptions import PreconditionError
from git_shortcuts.models.branch import BranchKind


def status(session: Session, args) -> None:
    """s: branch status with the last commit, its files if it has no PR yet, and the branch list."""
    git_ops = session.git_ops
    lines = git_ops.run("status", "-b").split("\n")
    head = lines[0]
    if head.startswith("On branch "):
        head = head[len("On branch "):]
    last_commit = git_ops.run("log", "-1", "--oneline", "--no-decorate")

    output = [f"{head}\t{last_commit}", STATUS_SEPARATOR]
    output.extend(lines[1:])
    if not git_ops.run("status", "--porcelain"):
        title = git_ops.run("log", "-n", "1", "--format=%s")
        if not PR_IN_TITLE_RE.search(title):
            files = git_ops.run("log", "-n", "1", "--format=", "--name-only")
            output.extend(f"   - {name}" for name in files.split("\n") if name)
    output.append(STATUS_SEPARATOR)
    output.append("  " + git_ops.run("branch", "-v"))
    session.out("\n".join(output))


def show_commit(session: Session, args) -> None:
    """sc"""
    session.out(session.git_ops.run("show", "--name-only", *args.refs))


def list_commits(session: Session, args) -> None:
    """sl: the last few commits of HEAD or of the one branch matching a pattern.

    Arguments may come in any order: a number is the count, anything else
    is the branch pattern.
    """
    count = DEFAULT_LOG_COUNT
    pattern = None
    for value in args.pattern_or_count:
        if value.isdigit():
            count = int(value)
        else:
            pattern = value

    command = ["log", "-n", str(count), LOG_FORMAT, "--date=local"]
    if pattern is not None:
        if args.remote:
            command.append(f"{session.context.remote_name}/{session.resolver.remote_branch(pattern)}")
        else:
            command.append(session.resolver.local_branch(pattern, include_current=True))
    command.append("--")
    session.out(session.git_ops.run(*command))


def list_remote_branches(session: Session, args) -> None:
    """sr"""
    for name in session.resolver.match(BranchKind.REMOTE, args.branch_re or ".*"):
        session.out(name)


def show_file_version(session: Session, args) -> None:
    """sv: print a file as of a commit or branch; the two arguments may be swapped."""
    cwd = session.context.working_dir
    ref, path = args.ref, args.file
    if os.path.isfile(os.path.join(cwd, ref)) and not os.path.isfile(os.path.join(cwd, path)):
        ref, path = path, ref
    ref = session.resolver.resolve_ref(ref)

    repo_dir = session.context.repo_dir()
    relative = os.path.relpath(os.path.realpath(os.path.join(cwd, path)), os.path.realpath(repo_dir))
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        raise PreconditionError("file is outside the repository", file=path, repo=repo_dir)
    session.out(session.git_ops.run("show", f"{ref}:{relative}"))


def print_head(session: Session, args) -> None:
    """i: current branch or short hash, without a newline; nothing outside a repository."""
    git_ops = session.git_ops
    branch = git_ops.run("rev-parse", "--abbrev-ref", "HEAD", ignore_errors=True)
    if branch == "HEAD":
        branch = git_ops.run("rev-parse", "--short", "HEAD", ignore_errors=True)
    if branch:
        session.out(branch, end="")


def print_repo(session: Session, args) -> None:
    """repo"""
    session.out(os.path.basename(session.context.repo_dir()), end="")
