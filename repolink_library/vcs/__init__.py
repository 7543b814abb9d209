"""VCS access for repolink_library.

Public Interface:
    - VcsGateway: Protocol the resolver and link service depend on
    - GitGateway: git/ssh backed implementation
    - DETACHED_HEAD: Branch name git reports for a detached HEAD
"""

from .gateway import DEFAULT_REMOTE
from .gateway import DETACHED_HEAD
from .gateway import GitGateway
from .gateway import VcsGateway

__all__ = [
    "DEFAULT_REMOTE",
    "DETACHED_HEAD",
    "GitGateway",
    "VcsGateway",
]
