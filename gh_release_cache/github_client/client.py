"""GitHub API client using PyGitHub."""

import logging
import os
import time
from typing import Any

from github import Auth, Github
from github.GithubException import GithubException

logger = logging.getLogger(__name__)

RATE_LIMIT_FLOOR = 10


class GitHubClient:
    """GitHub API client with rate limiting and authentication.

    Exposes the two remote capabilities the cache needs: listing every
    release of a repository (REST, page by page) and running a GraphQL query.
    Transport-level retries are left to PyGitHub's default retry policy.
    """

    def __init__(self, token: str | None = None, per_page: int = 100):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN (or GH_TOKEN) env var.
            per_page: Default page size for paginated REST calls
        """
        self.token = token or os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.per_page = per_page
        self.github = Github(auth=Auth.Token(self.token), per_page=per_page)

    def check_rate_limit(self, cid: str = "-") -> None:
        """Check rate limit and sleep if necessary."""
        try:
            rate_limit = self.github.get_rate_limit()
            remaining = rate_limit.rate.remaining
            logger.debug(f"[{cid}] GitHub API rate limit: {remaining} requests remaining")

            if remaining < RATE_LIMIT_FLOOR:
                reset_time = rate_limit.rate.reset.timestamp()
                sleep_time = max(reset_time - time.time() + 1, 0)
                logger.warning(
                    f"[{cid}] Rate limit low, sleeping for {sleep_time:.1f} seconds..."
                )
                time.sleep(sleep_time)

        except Exception as e:
            logger.warning(f"[{cid}] Could not check rate limit: {e}")

    def fetch_releases(
        self,
        owner: str,
        repo: str,
        page_size: int | None = None,
        cid: str = "-",
    ) -> list[dict[str, Any]]:
        """Fetch every release of a repository as raw REST records.

        Drafts are included when the token can see them; filtering is up to
        the caller.

        Args:
            owner: Repository owner
            repo: Repository name
            page_size: Releases per request (defaults to the client's per_page)
            cid: Correlation id for log lines

        Returns:
            List of release dicts in the order GitHub returns them

        Raises:
            GithubException: If any page request fails
        """
        page_size = page_size or self.per_page
        url = f"/repos/{owner}/{repo}/releases"
        releases: list[dict[str, Any]] = []
        page_number = 1

        while True:
            _, data = self.github.requester.requestJsonAndCheck(
                "GET", url, parameters={"per_page": page_size, "page": page_number}
            )
            if not data:
                break
            releases.extend(data)
            logger.debug(
                f"[{cid}] Fetched page {page_number} of {owner}/{repo} releases "
                f"({len(data)} records)"
            )
            if len(data) < page_size:
                break
            page_number += 1

        return releases

    def graphql_query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            GithubException: On transport errors or if the response
                carries GraphQL errors
        """
        headers, response = self.github.requester.graphql_query(query, variables)
        if response.get("errors"):
            raise GithubException(200, response, headers)
        return response.get("data") or {}
