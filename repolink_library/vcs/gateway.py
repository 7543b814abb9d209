"""VCS gateway.

Defines the VcsGateway protocol the revision resolver and link service work
against, and GitGateway, which answers every query by running git (through
GitPython) or ``ssh -G``. No business logic lives here.

A failing or timed-out query is reported as an empty result. Only "not a
git repository" and "git cannot be launched" are raised.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from git import Repo
from git.exc import GitCommandError
from git.exc import GitCommandNotFound
from git.exc import InvalidGitRepositoryError
from git.exc import NoSuchPathError

from ..exceptions import GitNotFoundError
from ..exceptions import NotARepositoryError

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"
DETACHED_HEAD = "HEAD"


class VcsGateway(Protocol):
    """Interface for the live repository state links are built from."""

    def get_toplevel(self) -> Path:
        """Working tree root of the repository."""
        ...

    def get_default_remote(self) -> str:
        """Push-default remote, "origin" when none is configured."""
        ...

    def get_remote_url(self, remote: str) -> str:
        """URL configured for remote, empty when there is none."""
        ...

    def resolve_ssh_host(self, host: str) -> str:
        """Real hostname behind an SSH alias, host itself when not aliased."""
        ...

    def get_current_branch(self) -> str:
        """Current branch name, DETACHED_HEAD when HEAD is detached."""
        ...

    def get_current_commit(self) -> str:
        """Full hash of HEAD."""
        ...

    def list_remote_branches(self, remote: str, branch: str) -> str:
        """Remote-tracking branches matching remote/branch (local refs only)."""
        ...

    def query_remote_heads(self, remote: str, branch: str) -> str:
        """Heads on the remote matching branch (network round-trip)."""
        ...

    def is_commit_in_history(self, commit_sha: str) -> bool:
        """Whether commit_sha is part of the local commit history."""
        ...

    def get_default_branch(self, remote: str) -> str:
        """Default branch of remote, empty when <remote>/HEAD is unknown."""
        ...


class GitGateway:
    """VcsGateway backed by the git and ssh command line tools."""

    def __init__(self, cwd: Path | str, timeout: float = 5.0) -> None:
        """Open the repository containing cwd.

        Args:
            cwd: Any directory inside the working copy
            timeout: Seconds before a single git/ssh query is killed

        Raises:
            NotARepositoryError: If cwd is not inside a git working copy
        """
        self.cwd = Path(cwd)
        self.timeout = timeout
        try:
            self.repo = Repo(self.cwd, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotARepositoryError(f"Not a git repository: {self.cwd}") from e

        if self.repo.working_tree_dir is None:
            raise NotARepositoryError(f"Bare repository has no working tree: {self.cwd}")

    def _git(self, command: str, *args: str) -> str:
        """Run a git subcommand, returning stripped stdout or "" on failure.

        Raises:
            GitNotFoundError: If the git executable cannot be launched
        """
        method = getattr(self.repo.git, command.replace("-", "_"))
        try:
            return method(*args, kill_after_timeout=self.timeout).strip()
        except GitCommandNotFound as e:
            raise GitNotFoundError(e) from e
        except GitCommandError as e:
            logger.debug(f"git {command} {' '.join(args)} failed (status {e.status}): {str(e.stderr).strip()}")
            return ""

    def get_toplevel(self) -> Path:
        return Path(self.repo.working_tree_dir).resolve()

    def get_default_remote(self) -> str:
        remote = self._git("config", "remote.pushDefault")
        return remote or DEFAULT_REMOTE

    def get_remote_url(self, remote: str) -> str:
        return self._git("config", "--get", f"remote.{remote}.url")

    def resolve_ssh_host(self, host: str) -> str:
        try:
            proc = subprocess.run(
                ["ssh", "-G", host],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"ssh -G {host} failed: {e}")
            return host

        if proc.returncode != 0:
            logger.debug(f"ssh -G {host} exited with {proc.returncode}: {proc.stderr.strip()}")
            return host

        for line in proc.stdout.splitlines():
            key, _, value = line.strip().partition(" ")
            if key.lower() == "hostname" and value.strip():
                resolved = value.strip()
                if resolved != host:
                    logger.debug(f"Resolved SSH alias {host} → {resolved}")
                return resolved
        return host

    def get_current_branch(self) -> str:
        return self._git("rev-parse", "--abbrev-ref", "HEAD")

    def get_current_commit(self) -> str:
        return self._git("rev-parse", "HEAD")

    def list_remote_branches(self, remote: str, branch: str) -> str:
        return self._git("branch", "-r", "--list", f"{remote}/{branch}")

    def query_remote_heads(self, remote: str, branch: str) -> str:
        return self._git("ls-remote", "--exit-code", "--heads", remote, branch)

    def is_commit_in_history(self, commit_sha: str) -> bool:
        if not commit_sha:
            return False
        history = self._git("log", "--format=%H")
        return commit_sha in history.splitlines()

    def get_default_branch(self, remote: str) -> str:
        # "origin/main"; branch names may themselves contain "/"
        ref = self._git("rev-parse", "--abbrev-ref", f"{remote}/HEAD")
        prefix = f"{remote}/"
        if not ref.startswith(prefix) or ref == f"{remote}/{DETACHED_HEAD}":
            return ""
        return ref[len(prefix) :]
