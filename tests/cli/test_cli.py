"""Tests for the repolink CLI."""

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from git import Repo

from repolink.cli import cli
from repolink_library.exceptions import GitNotFoundError
from repolink_library.vcs.gateway import GitGateway
from tests.fakes import commit_file


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """Drop the handlers configure_logging installs on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def work_dir(git_repo: Repo) -> Path:
    return Path(git_repo.working_tree_dir)


@pytest.mark.integration
class TestFileCommand:
    """Test `repolink file`."""

    def test_prints_and_opens_url(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test the URL is printed and handed to the browser."""
        target = work_dir / "src" / "a b.ts"
        target.parent.mkdir()
        target.write_text("export {}\n")

        with patch("repolink.cli.open_url", return_value=True) as open_url:
            result = runner.invoke(cli, ["file", str(target)])

        expected = "http://github.com/acme/widgets/blob/main/src/a%20b.ts"
        assert result.exit_code == 0, result.output
        assert expected in result.output
        open_url.assert_called_once_with(expected)

    def test_no_open(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test --no-open only prints."""
        with patch("repolink.cli.open_url") as open_url:
            result = runner.invoke(cli, ["file", str(work_dir / "README.md"), "--no-open"])

        assert result.exit_code == 0, result.output
        assert "http://github.com/acme/widgets/blob/main/README.md" in result.output
        open_url.assert_not_called()

    def test_line_range(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test --line and --end-line become the anchor."""
        result = runner.invoke(cli, ["file", str(work_dir / "README.md"), "-l", "3", "-e", "8", "--no-open"])

        assert result.exit_code == 0, result.output
        assert "/blob/main/README.md#L3-L8" in result.output

    def test_relative_path_with_cwd(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test a relative PATH is taken relative to --cwd."""
        result = runner.invoke(cli, ["file", "README.md", "-C", str(work_dir), "--no-open"])

        assert result.exit_code == 0, result.output
        assert "/blob/main/README.md" in result.output

    def test_commit_priority(
        self, runner: CliRunner, mock_storage_env: Path, git_repo: Repo, work_dir: Path
    ) -> None:
        """Test --priority commit links to the commit hash."""
        sha = commit_file(git_repo, "src/app.py", "print('hi')\n", "Add app")

        result = runner.invoke(cli, ["file", str(work_dir / "src" / "app.py"), "-p", "commit", "--no-open"])

        assert result.exit_code == 0, result.output
        assert f"/blob/{sha}/src/app.py" in result.output

    def test_revision_override(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test --revision is used verbatim."""
        result = runner.invoke(cli, ["file", str(work_dir / "README.md"), "-r", "v1.0.0", "--no-open"])

        assert result.exit_code == 0, result.output
        assert "/blob/v1.0.0/README.md" in result.output

    def test_no_file(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test a missing PATH is a user-facing error."""
        result = runner.invoke(cli, ["file", "-C", str(work_dir), "--no-open"])

        assert result.exit_code == 1
        assert "There is no active file to open!" in result.output

    def test_end_line_requires_line(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test --end-line alone is a usage error."""
        result = runner.invoke(cli, ["file", str(work_dir / "README.md"), "-e", "4"])

        assert result.exit_code == 2
        assert "--end-line requires --line" in result.output

    def test_open_failure_reports_url(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test a failed browser launch prints the URL so it can be copied."""
        with patch("repolink.cli.open_url", return_value=False):
            result = runner.invoke(cli, ["file", str(work_dir / "README.md")])

        assert result.exit_code == 1
        assert "Could not open the built URL http://github.com/acme/widgets/blob/main/README.md" in result.output


@pytest.mark.integration
class TestRepoCommand:
    """Test `repolink repo`."""

    def test_tree_url(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test the tree URL at the upstreamed branch."""
        result = runner.invoke(cli, ["repo", "-C", str(work_dir), "--no-open"])

        assert result.exit_code == 0, result.output
        assert "http://github.com/acme/widgets/tree/main" in result.output

    def test_ssh_remote_without_alias_resolution(
        self, runner: CliRunner, mock_storage_env: Path, git_repo: Repo, work_dir: Path, monkeypatch
    ) -> None:
        """Test scp-style remotes with alias resolution turned off through the environment."""
        git_repo.git.remote("set-url", "origin", "git@gitlab.com:org/group/widgets.git")
        monkeypatch.setenv("REPOLINK_RESOLVE_SSH_ALIASES", "false")

        result = runner.invoke(cli, ["repo", "-C", str(work_dir), "--no-open"])

        assert result.exit_code == 0, result.output
        assert "http://gitlab.com/org/group/widgets/tree/main" in result.output

    def test_no_remote(self, runner: CliRunner, mock_storage_env: Path, git_repo: Repo, work_dir: Path) -> None:
        """Test a repository without the remote."""
        git_repo.delete_remote("origin")

        result = runner.invoke(cli, ["repo", "-C", str(work_dir), "--no-open"])

        assert result.exit_code == 1
        assert "There is no git remote 'origin' in this repo!" in result.output

    def test_unknown_priority_falls_back_to_branch(
        self, runner: CliRunner, mock_storage_env: Path, work_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test an unrecognized REPOLINK_PRIORITY links to the branch."""
        monkeypatch.setenv("REPOLINK_PRIORITY", "tag")

        result = runner.invoke(cli, ["repo", "-C", str(work_dir), "--no-open"])

        assert result.exit_code == 0, result.output
        assert "http://github.com/acme/widgets/tree/main" in result.output

    def test_invalid_configuration(
        self, runner: CliRunner, mock_storage_env: Path, work_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test invalid settings are reported without a traceback."""
        monkeypatch.setenv("REPOLINK_COMMAND_TIMEOUT", "0")

        result = runner.invoke(cli, ["repo", "-C", str(work_dir), "--no-open"])

        assert result.exit_code == 1
        assert "Error: Invalid configuration" in result.output
        assert "command_timeout" in result.output

    def test_git_not_found(self, runner: CliRunner, mock_storage_env: Path, work_dir: Path) -> None:
        """Test a git executable that cannot be launched is reported."""
        with patch.object(GitGateway, "get_default_remote", side_effect=GitNotFoundError("git: not found")):
            result = runner.invoke(cli, ["repo", "-C", str(work_dir), "--no-open"])

        assert result.exit_code == 1
        assert "Error: Could not run the git executable" in result.output

    def test_log_to_file(
        self, runner: CliRunner, mock_storage_env: Path, work_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test log_to_file writes repolink.log below REPOLINK_HOME."""
        monkeypatch.setenv("REPOLINK_LOG_TO_FILE", "true")

        result = runner.invoke(cli, ["-v", "repo", "-C", str(work_dir), "--no-open"])

        log_file = mock_storage_env / "logs" / "repolink.log"
        assert result.exit_code == 0, result.output
        assert log_file.exists()
        assert "Repository URL:" in log_file.read_text(encoding="utf-8")

    def test_not_a_repository(self, runner: CliRunner, mock_storage_env: Path, tmp_path: Path) -> None:
        """Test a directory outside any working copy."""
        plain = tmp_path / "plain"
        plain.mkdir()

        result = runner.invoke(cli, ["repo", "-C", str(plain), "--no-open"])

        assert result.exit_code == 1
        assert "Not a git repository" in result.output


@pytest.mark.unit
class TestConfigPathCommand:
    """Test `repolink config-path`."""

    def test_prints_config_path(self, runner: CliRunner, mock_storage_env: Path) -> None:
        """Test the config file inside REPOLINK_HOME is shown and created."""
        result = runner.invoke(cli, ["config-path"])

        config_path = mock_storage_env / "config" / "repolink.yaml"
        assert result.exit_code == 0, result.output
        assert str(config_path) in result.output
        assert config_path.exists()

    def test_version(self, runner: CliRunner, mock_storage_env: Path) -> None:
        """Test --version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "repolink" in result.output


@pytest.mark.unit
class TestOpenUrl:
    """Test the browser opener."""

    def test_reports_launch(self) -> None:
        """Test the webbrowser result is passed through."""
        from repolink.opener import open_url

        with patch("repolink.opener.webbrowser.open", return_value=True) as browser_open:
            assert open_url("http://github.com/acme/widgets") is True
        browser_open.assert_called_once_with("http://github.com/acme/widgets")

    def test_browser_error(self) -> None:
        """Test webbrowser errors become False."""
        import webbrowser

        from repolink.opener import open_url

        with patch("repolink.opener.webbrowser.open", side_effect=webbrowser.Error("no browser")):
            assert open_url("http://github.com/acme/widgets") is False
