"""qgh - quickly find and jump between local git repositories.

Usage:
    qgh                 - browse repositories below the current directory
    qgh api             - start with "api" typed into the search box
    qgh --pr review     - search your open PR titles instead
    qgh --skip-ignore   - also descend into directories listed in .gitignore
"""
import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .app import RepoExplorerApp
from .config import CD_HANDOFF_FILE, AppConfig
from .filtering import filter_repositories
from .git import find_repositories, is_git_repository, repository_info, search_directory
from .github import GhClient
from .models import Repository
from .state import list_state, single_repo_state
from .views import repositories_table

logger = logging.getLogger("qgh")
console = Console()


def setup_logging(debug: bool = False) -> None:
    """Send qgh log records to stderr. Safe to call more than once."""
    if logger.handlers:
        logger.setLevel(logging.DEBUG if debug else logging.WARNING)
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)


def is_interactive() -> bool:
    return sys.stdout.isatty() and sys.stdin.isatty()


def write_cd_handoff(path: str) -> bool:
    try:
        CD_HANDOFF_FILE.write_text(path)
        return True
    except OSError as e:
        logger.error("Error writing cd path: %s", e)
        return False


def run_interactive(app: RepoExplorerApp) -> None:
    app.run()
    if app.pending_cd and not write_cd_handoff(app.pending_cd):
        sys.exit(1)


def print_repositories(repos: list[Repository], client: GhClient) -> None:
    cache = client.load_pr_cache()
    annotated = filter_repositories(repos, "", False, cache)
    console.print(repositories_table(annotated))


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--skip-ignore", is_flag=True, help="Skip .gitignore files and traverse all directories")
@click.option("--pr", "pr_mode", is_flag=True, help="PR search mode: search your open PRs and show matching repositories")
@click.option("--debug", is_flag=True, help="Log debug output to stderr")
@click.argument("search", required=False, default="")
@click.version_option(version=__version__, prog_name="qgh")
def main(skip_ignore: bool, pr_mode: bool, debug: bool, search: str) -> None:
    """Find a git repository below the current directory by fuzzy search."""
    setup_logging(debug)
    config = AppConfig.load()
    client = GhClient(pr_limit=config.pr_limit)

    working_dir = Path(os.getcwd()).resolve()
    root = search_directory(working_dir, config.workspace)
    repos = find_repositories(root, skip_ignore=skip_ignore or config.skip_ignore)
    logger.debug("Found %d repositories below %s", len(repos), root)

    if not repos and is_git_repository(root) and is_interactive():
        # Surface the auth warning before the app takes over the screen
        client.check_auth()
        state = single_repo_state(repository_info(root), pr_mode=pr_mode)
        run_interactive(RepoExplorerApp(state, client))
        return

    if not repos:
        click.echo("No git repositories found in subdirectories.")
        return

    if not is_interactive():
        print_repositories(repos, client)
        return

    client.check_auth()
    run_interactive(RepoExplorerApp(list_state(repos, search, pr_mode), client))
