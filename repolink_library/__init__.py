"""repolink library layer.

Resolves a git working copy's remote to a web URL for a file, line range
or the repository tree. The CLI (repolink) is a thin layer on top.

Public Interface:
    Modules:
    - config: Configuration loading
    - models: Remote and repository value objects
    - services: Link building and revision resolution
    - utils: Remote URL parsing
    - vcs: git/ssh gateway
"""

from .exceptions import RepoLinkError
from .models import RemoteDescriptor
from .services import LinkService
from .services import RevisionPriority

__all__ = [
    "LinkService",
    "RemoteDescriptor",
    "RepoLinkError",
    "RevisionPriority",
]
