"""Tests for PatternResolver"""
from unittest.mock import Mock

import pytest

from git_shortcuts.exceptions import AmbiguousBranchError, PreconditionError
from git_shortcuts.models.branch import BranchKind
from git_shortcuts.services.branch_classifier import BranchClassifier
from git_shortcuts.services.git.branch_queries import BranchQueries, ListedBranch
from git_shortcuts.services.pattern_resolver import PatternResolver


def make_resolver(local=(), remote=()):
    queries = Mock(spec=BranchQueries)
    queries.local_branches.return_value = [
        ListedBranch(name=name.lstrip("*"), in_use=name.startswith("*")) for name in local
    ]
    queries.remote_branches.return_value = list(remote)
    return PatternResolver(queries, BranchClassifier("alice"), "origin")


class TestLocalResolution:
    """Test local branch lookup."""

    def test_ephemeral_branches_are_hidden(self):
        resolver = make_resolver(["*main", "alice/foo", "alice/foo__TMP"])
        assert resolver.local_branch("foo") == "alice/foo"

    def test_ambiguous_pattern_lists_candidates(self):
        resolver = make_resolver(["main", "alice/foo", "alice/foobar"])
        with pytest.raises(AmbiguousBranchError) as exc_info:
            resolver.local_branch("fo")
        assert exc_info.value.candidates == ["alice/foo", "alice/foobar"]
        assert "alice/foobar" in str(exc_info.value)

    def test_no_match(self):
        resolver = make_resolver(["main", "alice/foo"])
        with pytest.raises(AmbiguousBranchError) as exc_info:
            resolver.local_branch("nothing")
        assert exc_info.value.candidates == []
        assert "matches no local branch" in str(exc_info.value)

    def test_anchored_pattern_disambiguates(self):
        resolver = make_resolver(["main", "alice/foo", "alice/foobar"])
        assert resolver.local_branch("foo$") == "alice/foo"

    def test_current_branch_only_when_asked(self):
        resolver = make_resolver(["*alice/foo", "main"])
        with pytest.raises(AmbiguousBranchError):
            resolver.local_branch("foo")
        assert resolver.local_branch("foo", include_current=True) == "alice/foo"

    def test_match_can_include_ephemeral(self):
        resolver = make_resolver(["alice/foo", "alice/foo__TMP"])
        assert resolver.match(BranchKind.LOCAL, "foo", include_ephemeral=True) == ["alice/foo", "alice/foo__TMP"]

    def test_invalid_regex(self):
        resolver = make_resolver(["main"])
        with pytest.raises(PreconditionError):
            resolver.local_branch("(")


class TestRemoteResolution:
    """Test remote branch lookup."""

    def test_remote_prefix_is_stripped(self):
        resolver = make_resolver(remote=["origin/main", "origin/bob/bar"])
        assert resolver.remote_branch("bar") == "bob/bar"

    def test_pattern_sees_remote_prefix(self):
        resolver = make_resolver(remote=["origin/main", "origin/bob/bar"])
        assert resolver.remote_branch("^origin/main$") == "main"

    def test_mine_keeps_only_user_branches(self):
        resolver = make_resolver(remote=["origin/alice/foo", "origin/bob/foo", "origin/alice/foo__TMP"])
        assert resolver.match(BranchKind.REMOTE, "foo", mine=True) == ["alice/foo"]
        assert resolver.match(BranchKind.REMOTE, "foo", mine=True, include_ephemeral=True) == [
            "alice/foo",
            "alice/foo__TMP",
        ]


class TestResolveRef:
    """Test commit-like refs bypassing lookup."""

    @pytest.mark.parametrize("ref", ["HEAD~2", "abc1234"])
    def test_commit_refs_pass_through(self, ref):
        resolver = make_resolver([])
        assert resolver.resolve_ref(ref) == ref
        resolver.branch_queries.local_branches.assert_not_called()

    def test_branch_pattern_resolves(self):
        resolver = make_resolver(["*alice/foo", "main"])
        assert resolver.resolve_ref("foo") == "alice/foo"


class TestBranchListingParsing:
    """Test parsing of `git branch` output."""

    def test_parse_local_listing(self):
        output = "* alice/foo\n+ wt-dev\n  main\n"
        assert BranchQueries.parse_local_listing(output) == [
            ListedBranch("alice/foo", True),
            ListedBranch("wt-dev", True),
            ListedBranch("main", False),
        ]

    def test_parse_local_listing_skips_detached_head(self):
        output = "* (HEAD detached at abc1234)\n  main\n"
        assert BranchQueries.parse_local_listing(output) == [ListedBranch("main", False)]

    def test_parse_remote_listing_skips_symbolic_refs(self):
        output = "  origin/HEAD -> origin/main\n  origin/main\n  origin/alice/foo\n"
        assert BranchQueries.parse_remote_listing(output) == ["origin/main", "origin/alice/foo"]
