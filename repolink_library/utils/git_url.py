"""Git remote URL parsing utilities.

Turns the raw output of ``git config --get remote.<name>.url`` into a
RemoteDescriptor. Supported syntaxes, tried in this order:

1. http://host/owner/repo, https://[user@]host/owner/repo
2. ssh://[user@]host[:port]/owner/repo[.git]
3. user@host:owner/repo[.git] (scp-like shorthand)

The owner path is matched greedily so nested groups (gitlab.com/org/group/repo)
are kept whole; the last path segment is always the repository name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models import ParseFailure
from ..models import RemoteDescriptor
from ..models import RemoteProtocol


@dataclass(frozen=True)
class _ParseAttempt:
    """One remote URL syntax: a scheme guard and the full pattern."""

    protocol: RemoteProtocol
    guard: re.Pattern[str] | None
    pattern: re.Pattern[str]

    def applies(self, url: str) -> bool:
        return self.guard is None or self.guard.match(url) is not None


_PARSE_ATTEMPTS: tuple[_ParseAttempt, ...] = (
    _ParseAttempt(
        protocol=RemoteProtocol.HTTP,
        guard=re.compile(r"^https?://"),
        pattern=re.compile(r"^https?://(?:[^@/]+@)?(?P<host>[^/]+)/(?P<owner>.+)/(?P<repo>\S+)$"),
    ),
    _ParseAttempt(
        protocol=RemoteProtocol.SSH,
        guard=re.compile(r"^ssh://"),
        pattern=re.compile(r"^ssh://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<owner>.+)/(?P<repo>\S+)$"),
    ),
    _ParseAttempt(
        protocol=RemoteProtocol.SSH,
        guard=None,
        pattern=re.compile(r"^[^@]+@(?P<host>[^:]+):(?P<owner>.+)/(?P<repo>\S+)$"),
    ),
)


def parse_remote_url(raw_url: str) -> RemoteDescriptor | ParseFailure:
    """Parse a git remote URL into its host, owner path and repository name.

    Args:
        raw_url: Remote URL, possibly with the trailing newline of git's output

    Returns:
        RemoteDescriptor on success, ParseFailure when no syntax matches

    Examples:
        >>> parse_remote_url("git@gitlab.com:org/group/digital_repo.git")
        RemoteDescriptor(protocol=<RemoteProtocol.SSH: 'ssh'>, host='gitlab.com', owner_path='org/group', repo_name='digital_repo')

        >>> parse_remote_url("invalid remote url")
        ParseFailure(raw_url='invalid remote url', reason='not an http(s), ssh:// or user@host:path remote')
    """
    url = raw_url.strip().rstrip("/")

    for attempt in _PARSE_ATTEMPTS:
        if not attempt.applies(url):
            continue

        match = attempt.pattern.match(url)
        if match is None:
            if attempt.guard is None:
                break
            return ParseFailure(raw_url=raw_url, reason=f"malformed {attempt.protocol.value} remote")

        owner_path = match.group("owner").strip("/")
        repo_name = match.group("repo").removesuffix(".git")
        if not owner_path or not repo_name:
            return ParseFailure(raw_url=raw_url, reason="missing owner or repository name")

        return RemoteDescriptor(
            protocol=attempt.protocol,
            host=match.group("host"),
            owner_path=owner_path,
            repo_name=repo_name,
        )

    return ParseFailure(raw_url=raw_url, reason="not an http(s), ssh:// or user@host:path remote")
