"""Repository discovery and origin remote lookup."""
import fnmatch
import logging
import os
import re
import subprocess
from pathlib import Path

from .models import NO_REMOTE, NON_GITHUB, Repository

logger = logging.getLogger(__name__)

SSH_REMOTE_RE = re.compile(r"^(?:ssh://)?git@github\.com[:/](.+)/(.+?)(?:\.git)?$")
HTTPS_REMOTE_RE = re.compile(r"^https://github\.com/(.+)/(.+?)(?:\.git)?$")


def run_git(args: list[str], cwd: Path) -> tuple[bool, str]:
    try:
        result = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=30,
        )
        if result.returncode == 0:
            return True, result.stdout.strip()
        error = result.stderr.strip() or result.stdout.strip()
        for line in error.split('\n'):
            if line.startswith(('fatal:', 'error:')):
                return False, line
        lines = [l for l in error.split('\n') if l.strip()]
        return False, lines[-1] if lines else "Unknown error"
    except subprocess.TimeoutExpired:
        return False, "Command timed out after 30s"
    except OSError as e:
        return False, str(e)


def get_origin_remote(repo_path: Path) -> str:
    ok, output = run_git(["remote", "get-url", "origin"], repo_path)
    if not ok or not output:
        logger.debug("No origin remote for %s: %s", repo_path, output)
        return NO_REMOTE
    return output


def to_github_url(origin: str) -> str:
    """Canonical https://github.com/<owner>/<repo> for an origin remote."""
    if not origin or origin == NO_REMOTE:
        return NO_REMOTE
    for pattern in (SSH_REMOTE_RE, HTTPS_REMOTE_RE):
        match = pattern.match(origin)
        if match:
            return f"https://github.com/{match.group(1)}/{match.group(2)}"
    if "github.com" in origin:
        return origin
    return NON_GITHUB


def is_git_repository(path: Path) -> bool:
    # .git is a file for worktrees and submodules
    git_path = path / ".git"
    return git_path.is_dir() or git_path.is_file()


def repository_info(repo_path: Path) -> Repository:
    origin = get_origin_remote(repo_path)
    return Repository(
        directory=str(repo_path),
        origin=origin,
        github_url=to_github_url(origin),
    )


def should_skip_directory(dir_path: Path) -> bool:
    """Check whether the parent's .gitignore excludes this directory."""
    gitignore = dir_path.parent / ".gitignore"
    try:
        lines = gitignore.read_text().splitlines()
    except OSError:
        return False

    name = dir_path.name
    for line in lines:
        pattern = line.strip()
        if not pattern or pattern.startswith("#"):
            continue
        pattern = pattern.removesuffix("/")
        if pattern in (name, "*") or fnmatch.fnmatchcase(name, pattern):
            return True
    return False


def find_repositories(root: Path, skip_ignore: bool = False) -> list[Repository]:
    """Find git repositories below root, not including root itself.

    Nested repositories are found too. Unless skip_ignore is set, directories
    excluded by their parent's .gitignore are not visited.
    """
    repos: list[Repository] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=lambda e: logger.debug("Skipping: %s", e)):
        current = Path(dirpath)
        if (".git" in dirnames or ".git" in filenames) and current != root:
            repos.append(repository_info(current))
        kept = []
        for name in sorted(dirnames):
            if name == ".git":
                continue
            if not skip_ignore and should_skip_directory(current / name):
                continue
            kept.append(name)
        dirnames[:] = kept
    return repos


def search_directory(working_dir: Path, workspace: Path | None) -> Path:
    """Directory to scan: the working directory if it is a repository,
    else the configured workspace if it exists, else the working directory."""
    if is_git_repository(working_dir):
        return working_dir
    if workspace is not None and workspace.is_dir():
        return workspace
    return working_dir
