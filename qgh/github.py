"""Pull request lookups through the GitHub CLI (gh)."""
import json
import logging
import re
import subprocess
import webbrowser

from .config import DEFAULT_PR_LIMIT
from .models import PRCache, PullRequest, Repository

logger = logging.getLogger(__name__)

GITHUB_REPO_RE = re.compile(r"https://github\.com/([^/]+)/([^/]+)")


class GhError(Exception):
    """A gh call failed or returned something unusable."""


def run_gh(args: list[str], timeout: int = 30) -> tuple[bool, str]:
    try:
        result = subprocess.run(
            ["gh"] + args,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        if result.returncode == 0:
            return True, result.stdout.strip()
        error = result.stderr.strip() or result.stdout.strip()
        lines = [l.strip() for l in error.split('\n') if l.strip()]
        return False, lines[0] if lines else f"gh exited with status {result.returncode}"
    except subprocess.TimeoutExpired:
        return False, "Command timed out"
    except OSError as e:
        # gh not installed
        return False, str(e)


def repo_full_name(repo_url: str) -> str | None:
    """owner/name from a https://github.com/owner/name URL."""
    match = GITHUB_REPO_RE.match(repo_url)
    if not match:
        return None
    return f"{match.group(1)}/{match.group(2)}"


class GhClient:
    """Wraps the gh calls qgh needs.

    Remembers whether the missing-authentication warning was already shown so
    it appears at most once per client.
    """

    def __init__(self, pr_limit: int = DEFAULT_PR_LIMIT) -> None:
        self.pr_limit = pr_limit
        self.has_warned = False
        self._authenticated: bool | None = None

    def is_authenticated(self) -> bool:
        if self._authenticated is None:
            ok, output = run_gh(["auth", "status"], timeout=10)
            if not ok:
                logger.debug("gh auth status failed: %s", output)
            self._authenticated = ok
        return self._authenticated

    def check_auth(self) -> bool:
        """Like is_authenticated, warning on stderr the first time it fails."""
        if self.is_authenticated():
            return True
        if not self.has_warned:
            self.has_warned = True
            logger.warning(
                "GitHub CLI not authenticated. PR counts will be unavailable. "
                "Run 'gh auth login' to enable PR features."
            )
        return False

    def load_pr_cache(self) -> PRCache:
        """Fetch all open PRs by the current user.

        Never raises: if gh is missing, unauthenticated or fails, the result is
        a loaded cache with no entries.
        """
        if not self.check_auth():
            return PRCache.from_pull_requests([])

        ok, output = run_gh([
            "search", "prs", "--author", "@me", "--state", "open",
            "--json", "number,title,url,repository", "--limit", str(self.pr_limit),
        ])
        if not ok:
            logger.debug("PR search failed: %s", output)
            return PRCache.from_pull_requests([])
        try:
            results = json.loads(output) if output else []
            prs = [
                PullRequest(
                    number=int(item.get("number", 0)),
                    title=item.get("title", ""),
                    url=item.get("url", ""),
                    repo_url=f"https://github.com/{item['repository']['nameWithOwner']}",
                )
                for item in results
            ]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.debug("Could not parse PR search results: %s", e)
            return PRCache.from_pull_requests([])
        return PRCache.from_pull_requests(prs)

    def repository_prs(self, repo: Repository) -> list[PullRequest]:
        """Open PRs by the current user in one repository. Raises GhError."""
        if not repo.has_github:
            raise GhError("not a GitHub repository")
        if not self.is_authenticated():
            raise GhError("GitHub CLI not authenticated")
        full_name = repo_full_name(repo.github_url)
        if full_name is None:
            raise GhError("invalid GitHub URL format")

        ok, output = run_gh([
            "pr", "list", "--repo", full_name, "--author", "@me",
            "--json", "number,title,url",
        ])
        if not ok:
            raise GhError(f"failed to get PRs: {output}")
        try:
            items = json.loads(output) if output else []
            return [
                PullRequest(
                    number=int(item["number"]),
                    title=item.get("title", ""),
                    url=item.get("url", ""),
                    repo_url=repo.github_url,
                )
                for item in items
            ]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise GhError(f"failed to parse PR data: {e}") from e


def open_in_browser(url: str) -> tuple[bool, str]:
    """Open URL in default browser."""
    try:
        webbrowser.open(url)
        return True, "Opened in browser"
    except webbrowser.Error as e:
        return False, str(e)
