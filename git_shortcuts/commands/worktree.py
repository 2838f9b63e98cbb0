"""Worktree aliases."""

from git_shortcuts.commands.session import Session


def add_worktree(session: Session, args) -> None:
    """wn: create `wt-<id>` beside the repository on a branch of the same name."""
    name, path = session.context.worktrees.add_worktree(args.worktree_id)
    session.step(f"worktree {name} created at {path}")


def list_worktrees(session: Session, args) -> None:
    """wl"""
    session.out(session.git_ops.run("worktree", "list"))


def remove_worktree(session: Session, args) -> None:
    """wd: remove `wt-<id>` and delete its branch."""
    name, path = session.context.worktrees.worktree_dir(args.worktree_id)
    session.confirm(f"remove worktree {path} and delete branch {name}")
    session.context.worktrees.remove_worktree(args.worktree_id, force=args.force)
    session.step(f"worktree {name} removed")
