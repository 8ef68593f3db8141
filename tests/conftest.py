"""Shared fixtures for qgh tests."""
import logging

import pytest

from qgh.models import NO_REMOTE, NON_GITHUB, PRCache, PullRequest, Repository

FRONTEND_URL = "https://github.com/acme/frontend"
HELM_URL = "https://github.com/acme/istio-helm"


def make_repo(directory: str, github_url: str = NO_REMOTE) -> Repository:
    origin = github_url if github_url not in (NO_REMOTE, NON_GITHUB) else NO_REMOTE
    return Repository(directory=directory, origin=origin, github_url=github_url)


@pytest.fixture
def repos():
    return [
        make_repo("/work/frontend", FRONTEND_URL),
        make_repo("/work/backend", "https://github.com/acme/backend"),
        make_repo("/work/operations-istio-cni-helm", HELM_URL),
        make_repo("/work/scratch"),
        make_repo("/work/mirror", NON_GITHUB),
    ]


@pytest.fixture
def login_pr():
    return PullRequest(1, "Fix login bug", f"{FRONTEND_URL}/pull/1", FRONTEND_URL)


@pytest.fixture
def cache(login_pr):
    return PRCache.from_pull_requests([
        login_pr,
        PullRequest(2, "Add-dark-mode", f"{FRONTEND_URL}/pull/2", FRONTEND_URL),
        PullRequest(7, "Bump chart version", f"{HELM_URL}/pull/7", HELM_URL),
    ])


@pytest.fixture
def many_repos():
    return [
        make_repo(f"/work/repo{i:02d}", f"https://github.com/acme/repo{i:02d}")
        for i in range(30)
    ]


@pytest.fixture(autouse=True)
def reset_qgh_logger():
    yield
    logger = logging.getLogger("qgh")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
