"""Search filtering for the repository list.

Local mode matches the search text against each repository's directory and
GitHub URL. PR mode matches it against the titles of the user's cached open
PRs and keeps the repositories those PRs belong to.
"""
from dataclasses import replace

from .matching import matches_mnemonic
from .models import PRCache, PullRequest, Repository


def text_matches(text: str, search: str) -> bool:
    """Case-insensitive substring or mnemonic match."""
    return search.lower() in text.lower() or matches_mnemonic(text, search)


def with_cache_count(repo: Repository, cache: PRCache) -> Repository:
    """Copy of repo annotated with its cached PR count and no matching PRs."""
    count = cache.count_for(repo.github_url) if cache.loaded and repo.has_github else 0
    return replace(repo, pr_count=count, matching_prs=())


def filter_local(repos: list[Repository], search: str, cache: PRCache) -> list[Repository]:
    # The N/A and Non-GitHub sentinels are searched like any URL, so "n/a" lists
    # the repositories without a remote
    return [
        with_cache_count(repo, cache)
        for repo in repos
        if text_matches(repo.directory, search) or text_matches(repo.github_url, search)
    ]


def filter_by_prs(repos: list[Repository], search: str, cache: PRCache) -> list[Repository]:
    # Never show a partial result while the cache is still loading
    if not cache.loaded:
        return []

    matching: dict[str, list[PullRequest]] = {}
    for pr in cache.pull_requests:
        if text_matches(pr.title, search):
            matching.setdefault(pr.repo_url, []).append(pr)

    result = []
    for repo in repos:
        if not repo.has_github or repo.github_url not in matching:
            continue
        result.append(replace(
            repo,
            pr_count=cache.count_for(repo.github_url),  # total, not just matching
            matching_prs=tuple(matching[repo.github_url]),
        ))
    return result


def filter_repositories(
    repos: list[Repository], search: str, pr_mode: bool, cache: PRCache
) -> list[Repository]:
    """Run one filter pass and return fresh annotated copies of the repos."""
    if not search:
        return [with_cache_count(repo, cache) for repo in repos]
    if pr_mode:
        return filter_by_prs(repos, search, cache)
    return filter_local(repos, search, cache)
