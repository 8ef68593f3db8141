from dataclasses import dataclass, field

NO_REMOTE = "N/A"
NON_GITHUB = "Non-GitHub"


@dataclass(frozen=True)
class PullRequest:
    """An open PR authored by the current user."""
    number: int
    title: str
    url: str
    repo_url: str = ""  # e.g., "https://github.com/owner/repo"


@dataclass(frozen=True)
class Repository:
    directory: str
    origin: str = NO_REMOTE
    github_url: str = NO_REMOTE
    pr_count: int = 0
    matching_prs: tuple[PullRequest, ...] = ()

    @property
    def has_github(self) -> bool:
        return self.github_url not in (NO_REMOTE, NON_GITHUB)


@dataclass(frozen=True)
class PRCache:
    """All open PRs by the current user, grouped by repository URL.

    A default-constructed cache is "not loaded yet". A loaded cache with no
    entries means gh was unavailable or the user simply has no open PRs.
    """
    pull_requests: tuple[PullRequest, ...] = ()
    by_repo: dict[str, tuple[PullRequest, ...]] = field(default_factory=dict)
    loaded: bool = False

    @classmethod
    def from_pull_requests(cls, prs: list[PullRequest]) -> "PRCache":
        grouped: dict[str, list[PullRequest]] = {}
        for pr in prs:
            grouped.setdefault(pr.repo_url, []).append(pr)
        return cls(
            pull_requests=tuple(prs),
            by_repo={url: tuple(items) for url, items in grouped.items()},
            loaded=True,
        )

    def for_repo(self, repo_url: str) -> tuple[PullRequest, ...]:
        return self.by_repo.get(repo_url, ())

    def count_for(self, repo_url: str) -> int:
        return len(self.for_repo(repo_url))
