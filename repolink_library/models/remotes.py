"""Remote repository models.

Value objects produced by remote URL parsing and consumed by the URL
builder. None of them outlive a single link-building operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class RemoteProtocol(str, Enum):
    """Transport a remote URL was written in."""

    HTTP = "http"
    SSH = "ssh"


@dataclass(frozen=True)
class RemoteDescriptor:
    """Parsed components of a git remote URL.

    Attributes:
        protocol: HTTP for http(s):// remotes, SSH for ssh:// and scp-like remotes
        host: Host as written in the remote (may be an SSH alias)
        owner_path: User, org or nested group path (e.g. "org/group"), no leading/trailing "/"
        repo_name: Repository name without a trailing ".git"
    """

    protocol: RemoteProtocol
    host: str
    owner_path: str
    repo_name: str

    def to_remote_url(self) -> str:
        """Render a canonical remote URL that parses back to this descriptor."""
        if self.protocol is RemoteProtocol.HTTP:
            return f"https://{self.host}/{self.owner_path}/{self.repo_name}"
        return f"git@{self.host}:{self.owner_path}/{self.repo_name}.git"


@dataclass(frozen=True)
class ParseFailure:
    """Explicit result for a remote URL that matched no known syntax."""

    raw_url: str
    reason: str


@dataclass(frozen=True)
class RepositoryContext:
    """Everything needed to build links for one working copy.

    Built fresh for every operation; the remote, branch and commit it was
    derived from can change between invocations.

    Attributes:
        repo_root: Working tree root
        remote_name: Remote the links point at
        remote: Parsed remote URL
        resolved_host: Web host (SSH aliases already resolved)
        base_url: Repository web URL, e.g. http://github.com/acme/widgets
    """

    repo_root: Path
    remote_name: str
    remote: RemoteDescriptor
    resolved_host: str
    base_url: str
