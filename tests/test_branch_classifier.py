"""Tests for BranchClassifier and is_commit"""
import pytest

from git_shortcuts.models.branch import BranchRole
from git_shortcuts.services.branch_classifier import BranchClassifier, is_commit


@pytest.fixture
def classifier():
    return BranchClassifier("alice")


class TestIsCommit:
    """Test commit-like ref detection."""

    @pytest.mark.parametrize("ref", ["HEAD", "HEAD~3", "HEAD^", "abc123", "deadbeefcafe0123"])
    def test_commit_like(self, ref):
        assert is_commit(ref) is True

    @pytest.mark.parametrize("ref", ["main", "abc12", "ABC123", "alice/abc123", "feature"])
    def test_branch_like(self, ref):
        assert is_commit(ref) is False


class TestBranchRoles:
    """Test role derivation."""

    def test_ephemeral_wins_over_everything(self, classifier):
        assert classifier.role("alice/foo__TMP", "main", "main") == BranchRole.EPHEMERAL
        assert classifier.role("main__TMP", "main", "main") == BranchRole.EPHEMERAL

    def test_main_and_repo(self, classifier):
        assert classifier.role("main", "main", "wt-dev") == BranchRole.MAIN
        assert classifier.role("wt-dev", "main", "wt-dev") == BranchRole.REPO

    def test_feature_and_other(self, classifier):
        assert classifier.role("alice/foo", "main", "main") == BranchRole.FEATURE
        assert classifier.role("bob/foo", "main", "main") == BranchRole.OTHER

    def test_dev_is_the_repo_role(self, classifier):
        assert BranchRole.DEV is BranchRole.REPO
        assert classifier.role("wt-dev", "main", "wt-dev") == BranchRole.DEV

    def test_detached(self, classifier):
        assert classifier.role("abc1234", "main", "main", is_detached=True) == BranchRole.DETACHED

    def test_protected(self, classifier):
        assert classifier.is_protected("main", "main", "wt-dev")
        assert classifier.is_protected("wt-dev", "main", "wt-dev")
        assert not classifier.is_protected("alice/foo", "main", "wt-dev")


class TestNames:
    """Test derived branch names."""

    def test_feature_and_ephemeral_names(self, classifier):
        assert classifier.feature_name("foo") == "alice/foo"
        assert classifier.ephemeral_name("alice/foo") == "alice/foo__TMP"
        assert classifier.is_feature("alice/foo")
        assert classifier.is_ephemeral("alice/foo__TMP")
        assert not classifier.is_ephemeral("alice/foo")

    def test_repo_branch_in_secondary_worktree(self, classifier):
        assert classifier.repo_branch("/src/wt-dev", "main") == "wt-dev"
        assert classifier.repo_branch("/src/wt-dev/", "main") == "wt-dev"

    def test_repo_branch_in_primary_worktree(self, classifier):
        assert classifier.repo_branch("/src/project", "main") == "main"

    def test_custom_suffix_and_prefix(self):
        classifier = BranchClassifier("bob", tmp_suffix="-tmp", worktree_prefix="tree-")
        assert classifier.ephemeral_name("bob/x") == "bob/x-tmp"
        assert classifier.repo_branch("/src/tree-1", "master") == "tree-1"
        assert classifier.role("wt-1", "master", "master") == BranchRole.OTHER
