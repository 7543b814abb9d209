"""Services for repolink_library.

Public Interface:
    - LinkService: Build file and repository links for a working copy
    - RevisionResolver: Pick the branch or commit a link cites
    - RevisionPriority: Branch-first or commit-first resolution
"""

from .link_service import LinkService
from .revision_resolver import RevisionPriority
from .revision_resolver import RevisionResolver

__all__ = [
    "LinkService",
    "RevisionPriority",
    "RevisionResolver",
]
