"""Errors raised while building or opening repository links.

None of these are fatal: callers report the message and abort the
current operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ParseFailure


class RepoLinkError(Exception):
    """Base class for expected, user-facing failures."""


class NotARepositoryError(RepoLinkError):
    """Raised when the working directory is not inside a git repository."""


class GitNotFoundError(RepoLinkError):
    """Raised when the git executable cannot be launched."""

    def __init__(self, cause: object) -> None:
        super().__init__(f"Could not run the git executable, is git installed and on PATH? ({cause})")


class NoRemoteConfiguredError(RepoLinkError):
    """Raised when the selected remote has no URL."""

    def __init__(self, remote: str) -> None:
        self.remote = remote
        super().__init__(f"There is no git remote '{remote}' in this repo!")


class UnparseableRemoteUrlError(RepoLinkError):
    """Raised when a remote URL matches none of the supported syntaxes."""

    def __init__(self, failure: ParseFailure) -> None:
        self.failure = failure
        super().__init__(f"Error parsing remote URL {failure.raw_url!r}: {failure.reason}")


class NoActiveFileError(RepoLinkError):
    """Raised when a file URL is requested without a file."""

    def __init__(self, message: str = "There is no active file to open!") -> None:
        super().__init__(message)


class FileOutsideRepositoryError(NoActiveFileError):
    """Raised when the requested file does not live in the repository."""

    def __init__(self, file_path: str, repo_root: str) -> None:
        self.file_path = file_path
        self.repo_root = repo_root
        super().__init__(f"{file_path} is not inside the repository at {repo_root}")


class UrlOpenError(RepoLinkError):
    """Raised when the browser could not be launched for a URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Could not open the built URL {url}")
