"""Test configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import Mock, patch

import pytest

from gh_release_cache.cache.store import ReleaseCacheStore
from gh_release_cache.config import CacheConfig
from gh_release_cache.github_client.client import GitHubClient

RawFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def clean_env() -> Generator[None]:
    """Run with no GitHub or cache settings in the environment."""
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture
def cache_config(clean_env: None) -> CacheConfig:
    """Default configuration with a dummy token."""
    config = CacheConfig()
    config.github_token = "test_token"
    return config


@pytest.fixture
def raw_asset() -> RawFactory:
    """Build a REST release asset record."""

    def _make(name: str, download_count: int = 0) -> dict[str, Any]:
        return {
            "name": name,
            "browser_download_url": f"https://example.com/download/{name}",
            "download_count": download_count,
            "size": 1024,
        }

    return _make


@pytest.fixture
def raw_release() -> RawFactory:
    """Build a REST release record."""

    def _make(
        tag_name: str,
        prerelease: bool = False,
        draft: bool = False,
        assets: list[dict[str, Any]] | None = None,
        body: str | None = "Release notes",
        published_at: str | None = "2024-01-02T00:00:00Z",
    ) -> dict[str, Any]:
        return {
            "tag_name": tag_name,
            "name": tag_name,
            "draft": draft,
            "prerelease": prerelease,
            "created_at": "2024-01-01T00:00:00Z",
            "published_at": published_at,
            "html_url": f"https://github.com/PCSX2/pcsx2/releases/tag/{tag_name}",
            "body": body,
            "assets": assets or [],
        }

    return _make


@pytest.fixture
def pr_node() -> RawFactory:
    """Build a GraphQL pull request node."""

    def _make(
        number: int,
        is_draft: bool = False,
        state: str | None = "SUCCESS",
        title: str = "Fix something",
        body: str = "Some description",
        author: str | None = "contributor",
    ) -> dict[str, Any]:
        rollup = {"state": state} if state is not None else None
        return {
            "number": number,
            "author": {"login": author} if author else None,
            "updatedAt": "2024-03-01T12:00:00Z",
            "body": body,
            "title": title,
            "additions": 10,
            "deletions": 2,
            "isDraft": is_draft,
            "permalink": f"https://github.com/PCSX2/pcsx2/pull/{number}",
            "commits": {"nodes": [{"commit": {"statusCheckRollup": rollup}}]},
        }

    return _make


def graphql_page(
    nodes: list[dict[str, Any]], has_next_page: bool = False, end_cursor: str | None = None
) -> dict[str, Any]:
    """Wrap nodes the way the pull request query returns them."""
    return {
        "repository": {
            "pullRequests": {
                "nodes": nodes,
                "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
            }
        }
    }


@pytest.fixture
def graphql_response() -> Callable[..., dict[str, Any]]:
    return graphql_page


@pytest.fixture
def mock_client() -> Mock:
    """GitHubClient double with no releases and no pull requests."""
    client = Mock(spec=GitHubClient)
    client.fetch_releases.return_value = []
    client.graphql_query.return_value = graphql_page([])
    return client


@pytest.fixture
def store(mock_client: Mock, cache_config: CacheConfig) -> ReleaseCacheStore:
    """Cold store backed by the mock client."""
    return ReleaseCacheStore(mock_client, cache_config)
