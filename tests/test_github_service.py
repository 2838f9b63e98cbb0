"""Tests for GitHubService"""
from unittest.mock import Mock, patch

import pytest
from github import GithubException

from git_shortcuts.exceptions import GitHubAPIError
from git_shortcuts.models.branch import ReviewState
from git_shortcuts.services.git.github import GitHubService, parse_github_repo


def make_pull(state="open", merged=False, head="alice/foo", base="main", number=1):
    pull = Mock()
    pull.state = state
    pull.merged = merged
    pull.number = number
    pull.head.ref = head
    pull.base.ref = base
    pull.html_url = f"https://github.com/test/repo/pull/{number}"
    return pull


@pytest.fixture
def git_ops():
    ops = Mock()
    ops.remote_name = "origin"
    ops.current_branch.return_value = "alice/foo"
    ops.run.return_value = "git@github.com:test/repo.git"
    return ops


@pytest.fixture
def service(git_ops, mock_config):
    """GitHubService with the API connection already mocked."""
    mock_config['github_token'] = "test_token"
    service = GitHubService(git_ops, mock_config)
    service.github_repo = "test/repo"
    service.gh_repo = Mock()
    return service


class TestGitHubServiceInit:
    """Test GitHubService initialization."""

    def test_init_without_token(self, git_ops, mock_config):
        service = GitHubService(git_ops, mock_config)
        assert service.github_token is None

    def test_init_with_token_from_config(self, git_ops, mock_config):
        mock_config['github_token'] = "test_token"
        service = GitHubService(git_ops, mock_config)
        assert service.github_token == "test_token"

    @patch.dict('os.environ', {'GITHUB_TOKEN': 'env_token'})
    def test_init_with_token_from_env(self, git_ops, mock_config):
        service = GitHubService(git_ops, mock_config)
        assert service.github_token == "env_token"


class TestGitHubServiceSetup:
    """Test GitHub API setup."""

    @pytest.mark.parametrize("url", [
        "git@github.com:test/repo.git",
        "https://github.com/test/repo.git",
        "https://github.com/test/repo",
    ])
    def test_parse_github_repo(self, url):
        assert parse_github_repo(url) == "test/repo"

    def test_parse_non_github_remote(self):
        assert parse_github_repo("/srv/git/repo.git") is None

    def test_setup_with_github_url(self, git_ops, mock_config):
        mock_config['github_token'] = "test_token"
        service = GitHubService(git_ops, mock_config)

        with patch('git_shortcuts.services.git.github.Github') as mock_github_class:
            mock_gh = Mock()
            mock_github_class.return_value = mock_gh

            service.setup_github_api("git@github.com:test/repo.git")

            assert service.github_repo == "test/repo"
            assert service.gh_repo is mock_gh.get_repo.return_value
            mock_gh.get_repo.assert_called_once_with("test/repo")

    def test_setup_without_token(self, git_ops, mock_config):
        service = GitHubService(git_ops, mock_config)
        with pytest.raises(GitHubAPIError):
            service.setup_github_api("git@github.com:test/repo.git")

    def test_setup_with_non_github_remote(self, git_ops, mock_config):
        mock_config['github_token'] = "test_token"
        service = GitHubService(git_ops, mock_config)
        with pytest.raises(GitHubAPIError):
            service.setup_github_api("/srv/git/repo.git")

    def test_lazy_setup_reads_remote_url(self, git_ops, mock_config):
        mock_config['github_token'] = "test_token"
        service = GitHubService(git_ops, mock_config)

        with patch('git_shortcuts.services.git.github.Github') as mock_github_class:
            repo = mock_github_class.return_value.get_repo.return_value
            repo.get_pulls.return_value = []
            service.find_pull("alice/foo")

        git_ops.run.assert_called_with("remote", "get-url", "origin")


class TestReviewState:
    """Test PR state lookup."""

    def test_open_pull_wins_over_older_merged_one(self, service):
        open_pull = make_pull(number=2)
        merged_pull = make_pull(state="closed", merged=True, number=1)
        service.gh_repo.get_pulls.return_value = [merged_pull, open_pull]

        assert service.find_pull("alice/foo") is open_pull
        service.gh_repo.get_pulls.assert_called_once_with(
            state="all", head="test:alice/foo", sort="created", direction="desc"
        )

    def test_current_branch_is_default(self, service, git_ops):
        service.gh_repo.get_pulls.return_value = []
        service.find_pull()
        assert service.gh_repo.get_pulls.call_args.kwargs["head"] == "test:alice/foo"

    def test_pull_number(self, service):
        service.find_pull("42")
        service.gh_repo.get_pull.assert_called_once_with(42)

    @pytest.mark.parametrize("state, merged, expected", [
        ("open", False, ReviewState.OPEN),
        ("closed", True, ReviewState.MERGED),
        ("closed", False, ReviewState.CLOSED),
    ])
    def test_states(self, service, state, merged, expected):
        service.gh_repo.get_pulls.return_value = [make_pull(state=state, merged=merged)]
        assert service.state_of("alice/foo") == expected

    def test_no_pull(self, service):
        service.gh_repo.get_pulls.return_value = []
        assert service.state_of("alice/foo") == ReviewState.NONE

    def test_api_error_means_none(self, service):
        service.gh_repo.get_pulls.side_effect = GithubException(
            status=403,
            data={'message': 'API rate limit exceeded'}
        )
        assert service.state_of("alice/foo") == ReviewState.NONE

    def test_missing_token_means_none(self, git_ops, mock_config):
        service = GitHubService(git_ops, mock_config)
        assert service.state_of("alice/foo") == ReviewState.NONE


class TestPullMutations:
    """Test base retargeting and PR creation."""

    def test_retarget_base(self, service):
        pull = make_pull()
        service.gh_repo.get_pulls.return_value = [pull]

        service.retarget_base("alice/foo", "alice/foo__TMP")

        pull.edit.assert_called_once_with(base="alice/foo__TMP")

    def test_retarget_without_open_pull(self, service):
        service.gh_repo.get_pulls.return_value = [make_pull(state="closed", merged=True)]
        with pytest.raises(GitHubAPIError):
            service.retarget_base("alice/foo", "main")

    def test_retarget_api_failure(self, service):
        pull = make_pull()
        pull.edit.side_effect = GithubException(status=422, data={'message': 'Validation Failed'})
        service.gh_repo.get_pulls.return_value = [pull]
        with pytest.raises(GitHubAPIError):
            service.retarget_base("alice/foo", "main")

    def test_fill_from_single_commit(self, service, git_ops):
        git_ops.run.side_effect = ["Fix parser", "Longer explanation"]
        assert service.fill_title_and_body("main") == ("Fix parser", "Longer explanation")
        git_ops.run.assert_any_call("log", "--format=%s", "origin/main..HEAD", ignore_errors=True)

    def test_fill_from_several_commits(self, service, git_ops):
        git_ops.current_branch.return_value = "alice/fix-parser"
        git_ops.run.side_effect = ["Second\nFirst"]
        title, body = service.fill_title_and_body("main")
        assert title == "Fix parser"
        assert body == "- First\n- Second"

    def test_create_pull(self, service, git_ops):
        git_ops.run.side_effect = ["Fix parser", ""]
        service.create_pull("alice/foo", "main", draft=True)
        service.gh_repo.create_pull.assert_called_once_with(
            title="Fix parser", body="", base="main", head="alice/foo", draft=True
        )

    def test_create_pull_failure(self, service, git_ops):
        git_ops.run.side_effect = ["Fix parser", ""]
        service.gh_repo.create_pull.side_effect = GithubException(status=422, data={'message': 'exists'})
        with pytest.raises(GitHubAPIError):
            service.create_pull("alice/foo", "main")

    def test_open_pulls_with_prefix(self, service):
        mine = make_pull(head="alice/foo")
        theirs = make_pull(head="bob/bar")
        service.gh_repo.get_pulls.return_value = [mine, theirs]
        assert service.open_pulls_with_prefix("alice/") == [mine]

    def test_pull_url(self, service):
        service.gh_repo.get_pulls.return_value = [make_pull(number=7)]
        assert service.pull_url("alice/foo") == "https://github.com/test/repo/pull/7"
