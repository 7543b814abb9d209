"""
Shared pytest fixtures for repolink test suite.

Provides fixtures for:
- Temporary storage directories (REPOLINK_HOME)
- A scripted VcsGateway for resolver and service tests
- Real temporary git repositories (GitPython) for gateway and CLI tests
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from git import Repo

from tests.fakes import FakeGateway
from tests.fakes import commit_file


@pytest.fixture(autouse=True)
def clean_repolink_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's REPOLINK_* variables out of every test."""
    for key in list(os.environ):
        if key.startswith("REPOLINK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def temp_storage_dir() -> Generator[Path, None, None]:
    """Create temporary storage directory for tests.

    Automatically cleaned up after test completes.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point REPOLINK_HOME at a temporary directory.

    This ensures tests never read or create the real ~/.repolink.

    Returns:
        Path to temporary storage directory
    """
    monkeypatch.setenv("REPOLINK_HOME", str(temp_storage_dir))
    return temp_storage_dir


@pytest.fixture
def fake_gateway() -> FakeGateway:
    """Gateway for a checked-out, upstreamed main of github.com/acme/widgets at /repo."""
    return FakeGateway()


@pytest.fixture
def git_repo(tmp_path: Path) -> Generator[Repo, None, None]:
    """Working copy on branch main with one commit and an https origin.

    origin/main and origin/HEAD exist as local remote-tracking refs, so no
    query ever has to reach the network.
    """
    work_dir = (tmp_path / "work").resolve()
    work_dir.mkdir()
    repo = Repo.init(work_dir, initial_branch="main")
    commit_file(repo, "README.md", "# widgets\n", "Initial commit")
    repo.create_remote("origin", "https://github.com/acme/widgets.git")
    repo.git.update_ref("refs/remotes/origin/main", "HEAD")
    repo.git.symbolic_ref("refs/remotes/origin/HEAD", "refs/remotes/origin/main")

    yield repo

    repo.close()


@pytest.fixture
def bare_remote(tmp_path: Path, git_repo: Repo) -> Path:
    """Local bare repository registered as remote "local" of git_repo, with main pushed."""
    bare_path = (tmp_path / "remote.git").resolve()
    Repo.init(bare_path, bare=True).close()
    git_repo.create_remote("local", str(bare_path))
    git_repo.git.push("local", "main")
    return bare_path
