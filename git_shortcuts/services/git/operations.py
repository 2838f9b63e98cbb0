"""Git operations service"""

import subprocess
from typing import List, Union, TYPE_CHECKING

import git

from git_shortcuts.exceptions import GitOperationError
from git_shortcuts.logging_config import get_logger

if TYPE_CHECKING:
    from git_shortcuts.config import Config

logger = get_logger(__name__)


def _clean_stderr(e: git.exc.CommandError) -> str:
    """Strip GitPython's "stderr: '...'" decoration from an error."""
    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else "").strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip()
    return stderr.strip("'").strip()


def _describe_failure(command: List[str], status, stderr: str) -> str:
    cmdline = " ".join(command)
    if stderr:
        return f"'{cmdline}' failed (exit {status}): {stderr}"
    return f"'{cmdline}' failed with exit code {status}"


class GitOperations:
    """Service for running git commands in one working directory.

    Every command is an argument list; nothing is passed through a shell.
    """

    def __init__(self, working_dir: str, config: Union["Config", dict]):
        """Initialize the service.

        Args:
            working_dir: Directory git runs in (relative paths resolve against it)
            config: Configuration dictionary or Config object
        """
        self.working_dir = working_dir
        self.config = config
        self.remote_name = config.get("remote_name", "origin")

    def _git(self):
        return git.Git(self.working_dir)

    def in_directory(self, working_dir: str) -> "GitOperations":
        """Return operations bound to another working directory of the same repository."""
        return GitOperations(working_dir, self.config)

    def run(self, *args: str, ignore_errors: bool = False) -> str:
        """Run a git command and return its stripped stdout.

        Args:
            *args: Arguments after `git`
            ignore_errors: Treat a failure as empty output (for probes where absence is expected)

        Raises:
            GitOperationError: If the command fails and ignore_errors is False
        """
        command = ["git", *args]
        logger.info(" ".join(command))
        try:
            output = self._git().execute(command)
        except git.exc.CommandError as e:
            stderr = _clean_stderr(e)
            status = e.status if hasattr(e, "status") else "unknown"
            if ignore_errors:
                logger.debug(f"Ignoring failure of {' '.join(command)}: {stderr or status}")
                return ""
            raise GitOperationError(args[0] if args else "git", message=_describe_failure(command, status, stderr)) from e
        return output.strip() if isinstance(output, str) else str(output).strip()

    def run_interactive(self, *args: str) -> None:
        """Run a git command attached to the terminal (editors, difftools, interactive rebase)."""
        command = ["git", *args]
        logger.info(" ".join(command))
        try:
            subprocess.run(command, cwd=self.working_dir, check=True)
        except subprocess.CalledProcessError as e:
            raise GitOperationError(args[0] if args else "git", message=_describe_failure(command, e.returncode, "")) from e
        except FileNotFoundError as e:
            raise GitOperationError(args[0] if args else "git", message=str(e)) from e

    # Queries

    def toplevel(self) -> str:
        """Absolute path of the working tree containing working_dir."""
        return self.run("rev-parse", "--show-toplevel")

    def current_branch(self) -> str:
        """Current branch name, or the short commit hash when HEAD is detached."""
        branch = self.run("rev-parse", "--abbrev-ref", "HEAD")
        if branch == "HEAD":
            branch = self.run("rev-parse", "--short", "HEAD")
        return branch

    def short_hash(self, rev: str) -> str:
        return self.run("rev-parse", "--short", rev)

    def has_local_branch(self, name: str) -> bool:
        return bool(self.run("branch", "--list", name, "--format=%(refname:short)", ignore_errors=True))

    def remote_ref_exists(self, name: str) -> bool:
        """Ask the remote itself whether a branch exists there."""
        output = self.run("ls-remote", "--heads", self.remote_name, name, ignore_errors=True)
        return any(line.split("\t")[-1] == f"refs/heads/{name}" for line in output.splitlines())

    def is_staged(self) -> bool:
        """True if the index differs from HEAD."""
        return bool(self.run("diff-index", "--cached", "HEAD", ignore_errors=True))

    def commit_message(self, rev: str) -> str:
        return self.run("show", "-s", "--format=%B", rev)

    # Mutations

    def fetch(self) -> None:
        self.run("fetch", "--prune", "--tags")

    def checkout(self, branch: str) -> None:
        self.run("checkout", branch)

    def pull_rebase(self) -> None:
        self.run("pull", "--rebase")

    def rebase(self, onto: str) -> None:
        self.run("rebase", onto)

    def rebase_onto(self, base: str, upstream: str, branch: str) -> None:
        """Replay upstream..branch on top of base."""
        self.run("rebase", "--onto", base, upstream, branch)

    def create_branch(self, name: str, start_point: str) -> None:
        self.run("branch", name, start_point)

    def delete_local_branch(self, name: str) -> None:
        self.run("branch", "-D", name)

    def push(self, source: str, destination: str, force: bool = False) -> None:
        """Push a local ref to a named branch on the remote."""
        args = ["push"]
        if force:
            args.append("--force")
        args.extend([self.remote_name, f"{source}:{destination}"])
        self.run(*args)

    def prune_remote(self) -> None:
        """Drop tracking refs whose branch is gone from the remote."""
        self.run("remote", "prune", self.remote_name)

    def delete_remote_branch(self, name: str) -> None:
        """Delete a remote branch by pushing an empty ref."""
        self.run("push", self.remote_name, f":{name}")

    def reset(self, mode: str, rev: str) -> None:
        self.run("reset", f"--{mode}", rev)
