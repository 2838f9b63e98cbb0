"""GitHub pull request integration service"""

import os
from itertools import islice
from typing import Optional, List, TYPE_CHECKING, Union
from urllib.parse import urlparse

from github import Github, Auth, GithubException

from git_shortcuts.exceptions import GitHubAPIError, GitOperationError
from git_shortcuts.logging_config import get_logger
from git_shortcuts.models.branch import ReviewState

if TYPE_CHECKING:
    from github.PullRequest import PullRequest
    from github.Repository import Repository
    from git_shortcuts.config import Config
    from git_shortcuts.services.git.operations import GitOperations

logger = get_logger(__name__)

MAX_PULLS_TO_SCAN = 200


def parse_github_repo(remote_url: str) -> Optional[str]:
    """Extract "owner/repo" from a GitHub remote URL, None for other hosts."""
    if "github.com" not in remote_url:
        return None
    if remote_url.startswith("git@"):
        # Handle SSH URL format (git@github.com:org/repo.git)
        path = remote_url.split("github.com:", 1)[1]
    else:
        # Handle HTTPS URL format (https://github.com/org/repo.git)
        path = urlparse(remote_url).path.strip("/")
    if path.endswith(".git"):
        path = path[:-4]
    return path or None


class GitHubService:
    """Pull request state, creation and base retargeting.

    The API connection is set up on first use from the remote URL and the
    GitHub token. State is never cached: every query goes to GitHub.
    """

    def __init__(self, git_ops: "GitOperations", config: Union["Config", dict]):
        self.git_ops = git_ops
        self.config = config
        self.github_token = config.get("github_token") or os.environ.get("GITHUB_TOKEN")
        self.github_repo: Optional[str] = None
        self.github: Optional[Github] = None
        self.gh_repo: Optional["Repository"] = None

    def setup_github_api(self, remote_url: str) -> None:
        """Setup GitHub API access for the repository behind remote_url."""
        path = parse_github_repo(remote_url)
        if not path:
            raise GitHubAPIError("setup", f"remote is not a GitHub repository: {remote_url}")
        if not self.github_token:
            raise GitHubAPIError("setup", "GITHUB_TOKEN is not set")

        self.github_repo = path
        try:
            self.github = Github(auth=Auth.Token(self.github_token))
            self.gh_repo = self.github.get_repo(self.github_repo)
        except GithubException as e:
            raise GitHubAPIError("setup", str(e)) from e
        logger.debug(f"[GitHub] GitHub integration enabled for: {path}")

    def _repo(self) -> "Repository":
        if self.gh_repo is None:
            remote_url = self.git_ops.run("remote", "get-url", self.git_ops.remote_name)
            self.setup_github_api(remote_url)
        assert self.gh_repo is not None
        return self.gh_repo

    def _head(self, branch_name: str) -> str:
        assert self.github_repo is not None
        return f"{self.github_repo.split('/')[0]}:{branch_name}"

    def find_pull(self, ref: str = "") -> Optional["PullRequest"]:
        """Pull request for a branch (empty = current branch) or a PR number.

        An open PR wins over older closed or merged ones for the same branch.
        """
        gh_repo = self._repo()
        if ref.isdigit():
            return gh_repo.get_pull(int(ref))

        branch_name = ref or self.git_ops.current_branch()
        pulls = list(
            islice(
                gh_repo.get_pulls(state="all", head=self._head(branch_name), sort="created", direction="desc"),
                MAX_PULLS_TO_SCAN,
            )
        )
        if not pulls:
            return None
        return next((pr for pr in pulls if pr.state == "open"), pulls[0])

    def state_of(self, ref: str = "") -> ReviewState:
        """State of the pull request for a branch; NONE when absent or unreachable."""
        try:
            pull = self.find_pull(ref)
        except (GithubException, GitHubAPIError, GitOperationError) as e:
            logger.debug(f"[GitHub] Could not query PR for '{ref or 'current branch'}': {e}")
            return ReviewState.NONE

        if pull is None:
            return ReviewState.NONE
        if pull.state == "open":
            return ReviewState.OPEN
        if pull.merged:
            return ReviewState.MERGED
        return ReviewState.CLOSED

    def _open_pull(self, ref: str) -> "PullRequest":
        try:
            pull = self.find_pull(ref)
        except GithubException as e:
            raise GitHubAPIError("find_pull", str(e)) from e
        if pull is None or pull.state != "open":
            raise GitHubAPIError("find_pull", f"no pr is open for {ref or 'current branch'}")
        return pull

    def retarget_base(self, branch_name: str, base: str) -> None:
        """Point the open pull request of branch_name at a new base branch."""
        pull = self._open_pull(branch_name)
        logger.debug(f"[GitHub] Changing base of PR #{pull.number} to {base}")
        try:
            pull.edit(base=base)
        except GithubException as e:
            raise GitHubAPIError("edit_base", str(e)) from e

    def fill_title_and_body(self, base: str) -> tuple[str, str]:
        """Title and body from the commits not on the remote base, like `gh pr create --fill`."""
        remote_base = f"{self.git_ops.remote_name}/{base}"
        subjects = self.git_ops.run("log", "--format=%s", f"{remote_base}..HEAD", ignore_errors=True).splitlines()
        if len(subjects) == 1:
            return subjects[0], self.git_ops.run("show", "-s", "--format=%b", "HEAD")

        branch_name = self.git_ops.current_branch().split("/")[-1]
        title = branch_name.replace("-", " ").replace("_", " ").strip().capitalize()
        body = "\n".join(f"- {subject}" for subject in reversed(subjects))
        return title, body

    def create_pull(self, head: str, base: str, draft: bool = False) -> "PullRequest":
        """Open a pull request from head into base."""
        gh_repo = self._repo()
        title, body = self.fill_title_and_body(base)
        logger.debug(f"[GitHub] Creating PR {head} -> {base}: {title}")
        try:
            return gh_repo.create_pull(title=title, body=body, base=base, head=head, draft=draft)
        except GithubException as e:
            raise GitHubAPIError("create_pull", str(e)) from e

    def pull_url(self, ref: str = "") -> str:
        """Web URL of the open pull request for a branch or PR number."""
        return self._open_pull(ref).html_url

    def open_pulls_with_prefix(self, prefix: str) -> List["PullRequest"]:
        """Open pull requests whose head branch starts with prefix."""
        try:
            pulls = islice(self._repo().get_pulls(state="open", sort="updated", direction="desc"), MAX_PULLS_TO_SCAN)
            return [pr for pr in pulls if pr.head.ref.startswith(prefix)]
        except GithubException as e:
            raise GitHubAPIError("list_pulls", str(e)) from e

    def close(self) -> None:
        """Close the GitHub API connection to clean up resources."""
        if self.github:
            try:
                self.github.close()
                logger.debug("[GitHub] Closed GitHub API connection")
            except Exception as e:
                logger.debug(f"[GitHub] Error closing GitHub API connection: {e}")
