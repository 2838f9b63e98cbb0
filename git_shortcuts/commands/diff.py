"""Diff and difftool aliases."""

from typing import List

from git_shortcuts.commands.session import Session

EDIFF_TOOL = "ediff"


def _tool_args(session: Session) -> List[str]:
    if session.config.difftool:
        return ["-t", session.config.difftool]
    return []


def diff(session: Session, args) -> None:
    """df: print the diff of the working tree, or of the index with -c."""
    command = ["diff"]
    if args.cached:
        command.append("--cached")
    command.extend(["--", *args.paths])
    session.out(session.git_ops.run(*command))


def difftool(session: Session, args) -> None:
    """dg: open the difftool on the working tree, or on the index with -c."""
    command = ["difftool", *_tool_args(session)]
    if args.cached:
        command.append("--cached")
    command.extend(["--", *args.paths])
    session.git_ops.run_interactive(*command)


def ediff(session: Session, args) -> None:
    """de: ediff the given paths; "^" compares with the previous commit."""
    paths = args.paths
    if paths == ["^"]:
        session.git_ops.run_interactive("difftool", "-t", EDIFF_TOOL, "HEAD~")
    else:
        session.git_ops.run_interactive("difftool", "-t", EDIFF_TOOL, "--", *paths)


def diff_commit(session: Session, args) -> None:
    """dc: difftool on the changes of one commit (HEAD by default)."""
    ref = "HEAD" if args.ref is None else session.resolver.resolve_ref(args.ref)
    session.git_ops.run_interactive("difftool", *_tool_args(session), f"{ref}~..{ref}")
