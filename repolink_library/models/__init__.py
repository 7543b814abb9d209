"""Shared data models for repolink_library."""

from .remotes import ParseFailure
from .remotes import RemoteDescriptor
from .remotes import RemoteProtocol
from .remotes import RepositoryContext

__all__ = [
    "ParseFailure",
    "RemoteDescriptor",
    "RemoteProtocol",
    "RepositoryContext",
]
