"""Pytest fixtures for git-shortcuts tests"""
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from git_shortcuts.commands.session import Session
from git_shortcuts.core.context import RepoContext
from git_shortcuts.models.branch import ReviewState


@pytest.fixture(autouse=True)
def isolated_git_env(monkeypatch, tmp_path):
    """Keep the user's git configuration and tokens out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_EDITOR", "true")
    for name in (
        "GITHUB_TOKEN",
        "GIT_SHORTCUTS_USER",
        "GIT_SHORTCUTS_MAIN_BRANCH",
        "GIT_SHORTCUTS_REMOTE",
        "GIT_SHORTCUTS_DIFFTOOL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'username': 'alice',
        'remote_name': 'origin',
        'main_branch': None,
        'revert_command': [],
        'github_token': None,
        'assume_yes': True,
        'verbose': False,
        'debug': False,
    }


@pytest.fixture
def commit_file():
    """Return a helper that writes a file in a repo and commits it."""
    def _commit(repo, name, content, message=None):
        path = Path(repo.working_dir) / name
        path.write_text(content)
        repo.index.add([name])
        return repo.index.commit(message or f"Add {name}")
    return _commit


@pytest.fixture
def git_repo(temp_dir, commit_file):
    """Create a real Git repository with a bare origin and main pushed to it."""
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True)

    repo_path = temp_dir / "project"
    repo_path.mkdir()
    repo = git.Repo.init(repo_path)
    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")
    repo.git.branch('-M', 'main')

    repo.create_remote('origin', str(origin_path))
    repo.git.push('-u', 'origin', 'main')
    git.Repo(origin_path).git.symbolic_ref('HEAD', 'refs/heads/main')
    repo.git.remote('set-head', 'origin', 'main')

    yield repo

    repo.close()


@pytest.fixture
def feature_repo(git_repo, commit_file):
    """Repository on alice/feature, three commits ahead of main."""
    git_repo.git.checkout('-b', 'alice/feature')
    for i in range(1, 4):
        commit_file(git_repo, f"feature{i}.txt", f"feature {i}\n", f"Feature commit {i}")
    return git_repo


@pytest.fixture
def secondary_worktree(git_repo):
    """A `wt-dev` worktree beside the repository on branch wt-dev."""
    path = Path(git_repo.working_dir).parent / "wt-dev"
    git_repo.git.worktree('add', '-b', 'wt-dev', str(path))
    yield git.Repo(path)


@pytest.fixture
def repo_context(git_repo, mock_config):
    return RepoContext(git_repo.working_dir, mock_config)


@pytest.fixture
def mock_github_service():
    """GitHubService stand-in reporting no pull requests."""
    service = Mock()
    service.state_of.return_value = ReviewState.NONE
    service.open_pulls_with_prefix.return_value = []
    return service


@pytest.fixture
def make_session(mock_config, mock_github_service):
    """Return a helper that builds a Session for a directory."""
    def _make(working_dir, answers=None, **overrides):
        config = dict(mock_config, **overrides)
        replies = iter(answers or [])
        context = RepoContext(str(working_dir), config)
        return Session(
            context,
            github_service=mock_github_service,
            input_func=lambda prompt: next(replies),
        )
    return _make
