"""repolink CLI.

Prints (and by default opens) the web URL of a file, line range or the
repository tree of the git working copy it is run in.
"""

import logging
import sys
from collections.abc import Callable
from pathlib import Path

import click
from pydantic import ValidationError

from repolink_library.config import get_config_path
from repolink_library.config import load_config
from repolink_library.config.settings import RepolinkSettings
from repolink_library.exceptions import RepoLinkError
from repolink_library.exceptions import UrlOpenError
from repolink_library.services import LinkService
from repolink_library.storage.paths import get_log_dir

from . import __version__
from .opener import open_url

logger = logging.getLogger(__name__)

PRIORITY_CHOICE = click.Choice(["branch", "commit"], case_sensitive=False)


def configure_logging(settings: RepolinkSettings, verbose: bool = False) -> None:
    """Configure root logging from settings.

    Args:
        settings: Loaded settings (log_level, log_to_file)
        verbose: Force DEBUG level
    """
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(logging.FileHandler(get_log_dir() / "repolink.log", encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def emit_url(build: Callable[[], str], no_open: bool) -> None:
    """Build a URL, print it and open it unless no_open.

    Expected failures are reported on stderr and exit with status 1.
    """
    try:
        url = build()
        click.echo(url)
        if not no_open and not open_url(url):
            raise UrlOpenError(url)
    except RepoLinkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="repolink")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: $REPOLINK_HOME/config/repolink.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None):
    """repolink - Open git files and repositories in their web UI."""
    try:
        settings = load_config(config_path)
    except ValidationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)
    configure_logging(settings, verbose)
    ctx.obj = settings


@cli.command("file")
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.option("-l", "--line", "line_start", type=click.IntRange(min=1), help="Line to link to")
@click.option("-e", "--end-line", "line_end", type=click.IntRange(min=1), help="Last line of a range (needs --line)")
@click.option("-p", "--priority", type=PRIORITY_CHOICE, default=None, help="Prefer the branch or the commit")
@click.option("-r", "--revision", default=None, help="Link to this revision instead of resolving one")
@click.option(
    "-C",
    "--cwd",
    type=click.Path(path_type=Path, file_okay=False, exists=True),
    default=None,
    help="Working copy directory (default: the file's directory)",
)
@click.option("--no-open", is_flag=True, help="Only print the URL")
@click.pass_obj
def file_command(
    settings: RepolinkSettings,
    path: Path | None,
    line_start: int | None,
    line_end: int | None,
    priority: str | None,
    revision: str | None,
    cwd: Path | None,
    no_open: bool,
):
    """Link to PATH, optionally at a line or line range."""
    if line_end is not None and line_start is None:
        raise click.UsageError("--end-line requires --line")
    if line_start is not None and line_end is not None and line_end < line_start:
        raise click.UsageError(f"--end-line {line_end} is before --line {line_start}")

    file_path = None
    if path is not None:
        if not path.is_absolute() and cwd is not None:
            path = cwd / path
        file_path = path.resolve()

    if cwd is not None:
        work_dir = cwd.resolve()
    elif file_path is not None:
        work_dir = file_path.parent if not file_path.is_dir() else file_path
    else:
        work_dir = Path.cwd()

    service = LinkService(settings)
    emit_url(
        lambda: service.get_file_url(
            work_dir,
            str(file_path) if file_path is not None else None,
            priority=priority,
            revision=revision,
            line_start=line_start,
            line_end=line_end,
        ),
        no_open,
    )


@cli.command("repo")
@click.option("-p", "--priority", type=PRIORITY_CHOICE, default=None, help="Prefer the branch or the commit")
@click.option("-r", "--revision", default=None, help="Link to this revision instead of resolving one")
@click.option(
    "-C",
    "--cwd",
    type=click.Path(path_type=Path, file_okay=False, exists=True),
    default=None,
    help="Working copy directory (default: current directory)",
)
@click.option("--no-open", is_flag=True, help="Only print the URL")
@click.pass_obj
def repo_command(
    settings: RepolinkSettings,
    priority: str | None,
    revision: str | None,
    cwd: Path | None,
    no_open: bool,
):
    """Link to the repository tree."""
    work_dir = cwd.resolve() if cwd is not None else Path.cwd()

    service = LinkService(settings)
    emit_url(lambda: service.get_repo_url(work_dir, priority=priority, revision=revision), no_open)


@cli.command("config-path")
def config_path_command():
    """Show where the configuration file lives."""
    click.echo(get_config_path())


def main():
    """Entry point for repolink CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted")
        sys.exit(0)


if __name__ == "__main__":
    main()
