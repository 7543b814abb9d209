"""Revision resolution service.

Decides which revision a link should cite: the current branch, the current
commit, or the remote's default branch. Branch names are percent-encoded;
commit hashes are returned as-is.

Every call re-reads the live repository state through the VcsGateway;
the branch, HEAD and push-default remote can all change between calls.
"""

from __future__ import annotations

import logging
from enum import Enum

from ..vcs.gateway import DETACHED_HEAD
from ..vcs.gateway import VcsGateway
from .url_builder import encode_uri_component

logger = logging.getLogger(__name__)


class RevisionPriority(str, Enum):
    """Which revision kind to prefer when both are available."""

    BRANCH = "branch"
    COMMIT = "commit"

    @classmethod
    def parse(cls, value: RevisionPriority | str | None) -> RevisionPriority:
        """Coerce a user-supplied value, falling back to BRANCH when unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unrecognized revision priority {value!r}, using {cls.BRANCH.value}")
            return cls.BRANCH


class RevisionResolver:
    """Resolves the revision to cite in a link.

    Strategies:
      - branch first: upstreamed current branch, else the commit when HEAD
        is detached and known locally, else the default branch
      - commit first: commit when known locally, else upstreamed current
        branch, else the default branch

    "Known locally" means present in the local commit history. That does
    not prove the commit was pushed to the remote.
    """

    def __init__(
        self,
        gateway: VcsGateway,
        remote: str | None = None,
        fallback_branch: str = "main",
    ) -> None:
        """Initialize with the gateway answering repository queries.

        Args:
            gateway: Live repository state
            remote: Remote to check branches against (default: push-default remote, read per call)
            fallback_branch: Used when the remote's default branch is unknown
        """
        self.gateway = gateway
        self.remote = remote
        self.fallback_branch = fallback_branch

    def resolve(self, priority: RevisionPriority | str = RevisionPriority.BRANCH) -> str:
        """Resolve the revision for priority.

        Args:
            priority: RevisionPriority or its string value; unknown values mean BRANCH

        Returns:
            Encoded branch name or raw commit hash
        """
        priority = RevisionPriority.parse(priority)
        remote = self.remote or self.gateway.get_default_remote()

        if priority is RevisionPriority.COMMIT:
            revision = self._commit_first(remote)
        else:
            revision = self._branch_first(remote)

        logger.debug(f"Resolved revision ({priority.value} first, remote {remote}): {revision}")
        return revision

    def _branch_first(self, remote: str) -> str:
        branch = self.gateway.get_current_branch()
        if self._is_named_branch(branch) and self.is_branch_upstreamed(remote, branch):
            return encode_uri_component(branch)

        if branch == DETACHED_HEAD:
            commit = self.gateway.get_current_commit()
            if self.gateway.is_commit_in_history(commit):
                return commit

        return self.default_branch(remote)

    def _commit_first(self, remote: str) -> str:
        commit = self.gateway.get_current_commit()
        if commit and self.gateway.is_commit_in_history(commit):
            return commit

        branch = self.gateway.get_current_branch()
        if self._is_named_branch(branch) and self.is_branch_upstreamed(remote, branch):
            return encode_uri_component(branch)

        return self.default_branch(remote)

    @staticmethod
    def _is_named_branch(branch: str) -> bool:
        # "" means git could not tell (e.g. no commits yet)
        return bool(branch) and branch != DETACHED_HEAD

    def is_branch_upstreamed(self, remote: str, branch: str) -> bool:
        """Whether branch exists on remote.

        Checks the local remote-tracking refs first; only when that is
        inconclusive asks the remote itself.
        """
        tracking_ref = f"{remote}/{branch}"
        listing = self.gateway.list_remote_branches(remote, branch)
        if any(line.strip() == tracking_ref for line in listing.splitlines()):
            return True

        logger.debug(f"{tracking_ref} not found locally, querying remote heads")
        # ls-remote matches patterns against the tail of the ref: "wip" also lists refs/heads/feature/wip
        head_ref = f"refs/heads/{branch}"
        heads = self.gateway.query_remote_heads(remote, branch)
        return any(line.partition("\t")[2].strip() == head_ref for line in heads.splitlines())

    def default_branch(self, remote: str) -> str:
        """Encoded default branch of remote."""
        branch = self.gateway.get_default_branch(remote)
        if not branch:
            logger.warning(f"Default branch of {remote} is unknown, using {self.fallback_branch}")
            branch = self.fallback_branch
        return encode_uri_component(branch)
