"""Link service.

Builds web links for a working copy:

    remote URL (git) → RemoteDescriptor → SSH alias resolution → base URL
    → revision (RevisionResolver) → file or tree URL

A RepositoryContext is built fresh for every call and passed along
explicitly; nothing about the repository is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..config.settings import RepolinkSettings
from ..exceptions import NoActiveFileError
from ..exceptions import NoRemoteConfiguredError
from ..exceptions import UnparseableRemoteUrlError
from ..models import ParseFailure
from ..models import RemoteProtocol
from ..models import RepositoryContext
from ..utils.git_url import parse_remote_url
from ..vcs.gateway import GitGateway
from ..vcs.gateway import VcsGateway
from .revision_resolver import RevisionPriority
from .revision_resolver import RevisionResolver
from .url_builder import build_file_url
from .url_builder import build_repo_base_url
from .url_builder import build_tree_url
from .url_builder import relative_file_path

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[Path], VcsGateway]


class LinkService:
    """Builds file and tree links for the repository containing a directory."""

    def __init__(
        self,
        settings: RepolinkSettings | None = None,
        gateway_factory: GatewayFactory | None = None,
    ) -> None:
        """Initialize link service.

        Args:
            settings: Settings (default: RepolinkSettings())
            gateway_factory: Creates the VcsGateway for a working directory
                (default: GitGateway with the configured timeout)
        """
        self.settings = settings or RepolinkSettings()
        self.gateway_factory = gateway_factory or self._git_gateway

    def _git_gateway(self, cwd: Path) -> VcsGateway:
        return GitGateway(cwd, timeout=self.settings.command_timeout)

    def build_context(self, cwd: Path | str, gateway: VcsGateway | None = None) -> RepositoryContext:
        """Resolve the repository web URL for cwd.

        Args:
            cwd: Directory inside the working copy
            gateway: Gateway to query (default: created by the gateway factory)

        Returns:
            Fresh RepositoryContext

        Raises:
            NotARepositoryError: If cwd is not inside a git working copy
            NoRemoteConfiguredError: If the remote has no URL
            UnparseableRemoteUrlError: If the remote URL has an unsupported syntax
        """
        gateway = gateway or self.gateway_factory(Path(cwd))

        remote_name = self.settings.remote or gateway.get_default_remote()
        raw_url = gateway.get_remote_url(remote_name).strip()
        if not raw_url:
            raise NoRemoteConfiguredError(remote_name)

        remote = parse_remote_url(raw_url)
        if isinstance(remote, ParseFailure):
            raise UnparseableRemoteUrlError(remote)

        resolved_host = remote.host
        if remote.protocol is RemoteProtocol.SSH and self.settings.resolve_ssh_aliases:
            resolved_host = gateway.resolve_ssh_host(remote.host)

        base_url = build_repo_base_url(remote, resolved_host, scheme=self.settings.web_scheme)
        logger.debug(f"Remote {remote_name} ({raw_url}) → {base_url}")

        return RepositoryContext(
            repo_root=gateway.get_toplevel(),
            remote_name=remote_name,
            remote=remote,
            resolved_host=resolved_host,
            base_url=base_url,
        )

    def _resolve_revision(
        self,
        gateway: VcsGateway,
        priority: RevisionPriority | str | None,
        revision: str | None,
    ) -> str:
        if revision:
            return revision
        resolver = RevisionResolver(
            gateway,
            remote=self.settings.remote,
            fallback_branch=self.settings.fallback_branch,
        )
        return resolver.resolve(priority or self.settings.priority)

    def get_file_url(
        self,
        cwd: Path | str,
        file_path: str | None,
        priority: RevisionPriority | str | None = None,
        revision: str | None = None,
        line_start: int | None = None,
        line_end: int | None = None,
    ) -> str:
        """Link to file_path, optionally at a line or line range.

        Args:
            cwd: Directory inside the working copy
            file_path: Absolute path, or path relative to the repository root
            priority: Revision priority (default: configured priority)
            revision: Explicit revision, used verbatim instead of resolving one
            line_start: Line to anchor at
            line_end: End of the anchored range

        Raises:
            NoActiveFileError: If there is no file, or it is outside the repository
            plus everything build_context raises
        """
        gateway = self.gateway_factory(Path(cwd))
        context = self.build_context(cwd, gateway=gateway)

        encoded_path = relative_file_path(context.repo_root, file_path)
        if encoded_path == "/":
            raise NoActiveFileError()

        rev = self._resolve_revision(gateway, priority, revision)
        url = build_file_url(context.base_url, rev, encoded_path, line_start, line_end)
        logger.info(f"File URL: {url}")
        return url

    def get_repo_url(
        self,
        cwd: Path | str,
        priority: RevisionPriority | str | None = None,
        revision: str | None = None,
    ) -> str:
        """Link to the repository tree.

        Args:
            cwd: Directory inside the working copy
            priority: Revision priority (default: configured priority)
            revision: Explicit revision, used verbatim instead of resolving one
        """
        gateway = self.gateway_factory(Path(cwd))
        context = self.build_context(cwd, gateway=gateway)

        rev = self._resolve_revision(gateway, priority, revision)
        url = build_tree_url(context.base_url, rev)
        logger.info(f"Repository URL: {url}")
        return url
