"""Web URL construction.

Builds GitHub-style repository links:

    <base>/blob/<revision>/<path>[#L<start>[-L<end>]]
    <base>/tree/<revision>

where <base> is <scheme>://<host>/<owner-path>/<repo>. Path segments are
percent-encoded per RFC 3986; revisions arrive already encoded from the
revision resolver.
"""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass
from pathlib import PurePosixPath
from pathlib import PureWindowsPath

from ..exceptions import FileOutsideRepositoryError
from ..models import RemoteDescriptor


@dataclass(frozen=True)
class UrlRequest:
    """Inputs of a single file URL.

    Attributes:
        repo_base_url: Repository web URL without trailing "/"
        revision: Encoded branch name or raw commit hash
        relative_file_path: Encoded path with a leading "/"
        line_start: First line of the range (1-based)
        line_end: Last line of the range, only used together with line_start
    """

    repo_base_url: str
    revision: str
    relative_file_path: str
    line_start: int | None = None
    line_end: int | None = None

    def render(self) -> str:
        url = f"{self.repo_base_url}/blob/{self.revision}{self.relative_file_path}"
        if self.line_start is None:
            return url
        if self.line_end is None:
            return f"{url}#L{self.line_start}"
        return f"{url}#L{self.line_start}-L{self.line_end}"


def encode_uri_component(value: str) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set.

    ``A-Za-z0-9_.~-`` pass through; every other UTF-8 byte becomes ``%XX``
    with uppercase hex digits.

    Examples:
        >>> encode_uri_component("feature/a b")
        'feature%2Fa%20b'
        >>> encode_uri_component("ほげ")
        '%E3%81%BB%E3%81%92'
    """
    return urllib.parse.quote(value, safe="", encoding="utf-8", errors="strict")


def encode_file_path(relative_path: str) -> str:
    """Encode each segment of a repository-relative path, keeping "/" separators.

    Backslash separators (Windows paths) are treated as "/". Empty segments
    are dropped, so the result always has exactly one leading "/".
    """
    segments = [segment for segment in relative_path.replace("\\", "/").split("/") if segment]
    return "/" + "/".join(encode_uri_component(segment) for segment in segments)


def relative_file_path(repo_root: str | PurePosixPath, file_path: str | None) -> str:
    """Encoded path of file_path relative to repo_root.

    Returns "/" when there is no file; callers treat that as "no active file".

    Raises:
        FileOutsideRepositoryError: If file_path is not under repo_root
    """
    if not file_path:
        return "/"

    root = PurePosixPath(str(repo_root).replace("\\", "/"))
    path = PurePosixPath(str(file_path).replace("\\", "/"))

    try:
        relative = path.relative_to(root)
    except ValueError as e:
        # Relative paths are taken as relative to the repository root
        if path.is_absolute() or PureWindowsPath(str(file_path)).drive:
            raise FileOutsideRepositoryError(str(file_path), str(repo_root)) from e
        relative = path

    return encode_file_path(relative.as_posix() if relative.parts else "")


def build_repo_base_url(remote: RemoteDescriptor, resolved_host: str, scheme: str = "http") -> str:
    """Repository web URL for a parsed remote.

    Args:
        remote: Parsed remote URL
        resolved_host: Web host, i.e. remote.host after SSH alias resolution
        scheme: URL scheme of the link

    Returns:
        e.g. http://github.com/acme/widgets for git@work:acme/widgets.git
        when the SSH alias "work" resolves to github.com
    """
    return f"{scheme}://{resolved_host}/{remote.owner_path}/{remote.repo_name}"


def build_file_url(
    repo_base_url: str,
    revision: str,
    file_path: str,
    line_start: int | None = None,
    line_end: int | None = None,
) -> str:
    """Link to a file, optionally anchored at a line or line range.

    A line_end without line_start is ignored.
    """
    return UrlRequest(
        repo_base_url=repo_base_url,
        revision=revision,
        relative_file_path=file_path,
        line_start=line_start,
        line_end=line_end if line_start is not None else None,
    ).render()


def build_tree_url(repo_base_url: str, revision: str) -> str:
    """Link to the repository tree at revision."""
    return f"{repo_base_url}/tree/{revision}"
