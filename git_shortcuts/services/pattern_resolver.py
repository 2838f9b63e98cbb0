"""Pattern resolution of user-supplied branch references."""

import re
from typing import Iterable, List, Pattern, TYPE_CHECKING

from git_shortcuts.exceptions import AmbiguousBranchError, PreconditionError
from git_shortcuts.logging_config import get_logger
from git_shortcuts.models.branch import BranchKind
from git_shortcuts.services.branch_classifier import BranchClassifier, is_commit
from git_shortcuts.services.git.branch_queries import BranchQueries, ListedBranch

if TYPE_CHECKING:
    from git_shortcuts.core.context import RepoContext

logger = get_logger(__name__)


def _compile(pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PreconditionError(f"invalid branch pattern: {e}", pattern=pattern) from e


class PatternResolver:
    """Resolves a regex to exactly one local or remote branch.

    The regex is searched anywhere in the name. Ambiguity is never resolved
    by guessing: zero or several matches raise AmbiguousBranchError.
    """

    def __init__(self, branch_queries: BranchQueries, classifier: BranchClassifier, remote_name: str = "origin"):
        self.branch_queries = branch_queries
        self.classifier = classifier
        self.remote_name = remote_name

    @classmethod
    def from_context(cls, context: "RepoContext") -> "PatternResolver":
        return cls(context.branch_queries, context.classifier, context.remote_name)

    def filter_local(
        self,
        branches: Iterable[ListedBranch],
        pattern: str,
        include_current: bool = False,
        include_ephemeral: bool = False,
    ) -> List[str]:
        """Local names surviving the visibility rules and the pattern."""
        regex = _compile(pattern)
        matches = []
        for branch in branches:
            if branch.in_use and not include_current:
                continue
            if not include_ephemeral and self.classifier.is_ephemeral(branch.name):
                continue
            if regex.search(branch.name):
                matches.append(branch.name)
        return matches

    def filter_remote(
        self,
        names: Iterable[str],
        pattern: str,
        mine: bool = False,
        include_ephemeral: bool = False,
    ) -> List[str]:
        """Remote names (remote prefix stripped) surviving the rules and the pattern.

        The pattern is matched against the name with its remote prefix.
        """
        regex = _compile(pattern)
        remote_prefix = f"{self.remote_name}/"
        mine_prefix = f"{remote_prefix}{self.classifier.feature_prefix}"
        matches = []
        for name in names:
            if mine and not name.startswith(mine_prefix):
                continue
            if not include_ephemeral and self.classifier.is_ephemeral(name):
                continue
            if regex.search(name):
                matches.append(name[len(remote_prefix):] if name.startswith(remote_prefix) else name)
        return matches

    def match(
        self,
        kind: BranchKind,
        pattern: str,
        include_current: bool = False,
        include_ephemeral: bool = False,
        mine: bool = False,
    ) -> List[str]:
        """All branches of a kind matching the pattern."""
        if kind == BranchKind.LOCAL:
            return self.filter_local(self.branch_queries.local_branches(), pattern, include_current, include_ephemeral)
        return self.filter_remote(self.branch_queries.remote_branches(), pattern, mine, include_ephemeral)

    def resolve(
        self,
        kind: BranchKind,
        pattern: str,
        include_current: bool = False,
        include_ephemeral: bool = False,
        mine: bool = False,
    ) -> str:
        """The one branch of a kind matching the pattern.

        Raises:
            AmbiguousBranchError: If zero or several branches match
        """
        matches = self.match(kind, pattern, include_current, include_ephemeral, mine)
        if len(matches) != 1:
            raise AmbiguousBranchError(pattern, matches, kind.value)
        logger.debug(f"Resolved {kind.value} pattern '{pattern}' to {matches[0]}")
        return matches[0]

    def local_branch(self, pattern: str, include_current: bool = False) -> str:
        return self.resolve(BranchKind.LOCAL, pattern, include_current=include_current)

    def remote_branch(self, pattern: str) -> str:
        return self.resolve(BranchKind.REMOTE, pattern)

    def resolve_ref(self, ref: str) -> str:
        """A commit-like ref as given, otherwise the one local branch it matches."""
        if is_commit(ref):
            return ref
        return self.local_branch(ref, include_current=True)
