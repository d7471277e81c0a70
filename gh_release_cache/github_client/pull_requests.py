"""Open pull requests with passing builds, via the GraphQL API."""

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ..cache.models import PullRequest
from ..utils.text import strip_html
from .models import CheckStatus, RawPullRequestConnection, RawPullRequestNode

if TYPE_CHECKING:
    from .client import GitHubClient

logger = logging.getLogger(__name__)

GHOST_LOGIN = "ghost"

PULL_REQUEST_QUERY = """
fragment pr on PullRequest {
  number
  author {
    login
  }
  updatedAt
  body
  title
  additions
  deletions
  isDraft
  permalink
  commits(last: 1) {
    nodes {
      commit {
        statusCheckRollup {
          state
        }
      }
    }
  }
}

query ($owner: String!, $repo: String!, $states: [PullRequestState!], $baseRefName: String, $orderField: IssueOrderField = UPDATED_AT, $orderDirection: OrderDirection = DESC, $perPage: Int!, $endCursor: String) {
  repository(owner: $owner, name: $repo) {
    pullRequests(states: $states, orderBy: {field: $orderField, direction: $orderDirection}, baseRefName: $baseRefName, first: $perPage, after: $endCursor) {
      nodes {
        ...pr
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""


class MalformedResponseError(Exception):
    """GraphQL response did not have the expected shape."""


def is_passing_build(node: RawPullRequestNode) -> bool:
    """Whether a pull request should be offered as a build.

    Drafts are never offered; otherwise the latest commit's combined check
    state must be SUCCESS.
    """
    if node.is_draft:
        return False
    return node.latest_check_status is CheckStatus.SUCCESS


def convert_pull_request(node: RawPullRequestNode) -> PullRequest:
    """Convert a GraphQL pull request node to the cached model."""
    return PullRequest(
        number=node.number,
        link=node.permalink,
        github_user=node.author.login if node.author else GHOST_LOGIN,
        updated_at=node.updated_at,
        body=strip_html(node.body) or "",
        title=strip_html(node.title) or "",
        additions=node.additions,
        deletions=node.deletions,
    )


class PullRequestFetcher:
    """Walks every page of open pull requests against a base branch."""

    def __init__(
        self,
        client: "GitHubClient",
        owner: str,
        repo: str,
        base_branch: str = "master",
        page_size: int = 100,
    ):
        """Initialize fetcher for one repository.

        Args:
            client: Authenticated GitHubClient instance
            owner: Repository owner
            repo: Repository name
            base_branch: Only pull requests targeting this branch are listed
            page_size: Nodes requested per GraphQL page
        """
        self.client = client
        self.owner = owner
        self.repo = repo
        self.base_branch = base_branch
        self.page_size = page_size

    def _fetch_page(self, cursor: str | None) -> RawPullRequestConnection:
        data = self.client.graphql_query(
            PULL_REQUEST_QUERY,
            {
                "owner": self.owner,
                "repo": self.repo,
                "states": ["OPEN"],
                "baseRefName": self.base_branch,
                "perPage": self.page_size,
                "endCursor": cursor,
            },
        )
        try:
            connection = data["repository"]["pullRequests"]
            return RawPullRequestConnection.model_validate(connection)
        except (KeyError, TypeError, ValidationError) as e:
            raise MalformedResponseError(
                f"Unexpected pull request page for {self.owner}/{self.repo}: {e}"
            ) from e

    def fetch_all(self, cid: str = "-") -> list[PullRequest]:
        """Fetch every open pull request whose latest commit passed its checks.

        All pages are fetched before anything is returned; an error on any
        page propagates and nothing from earlier pages is kept.

        Args:
            cid: Correlation id for log lines

        Returns:
            Pull requests in the order GitHub returns them (most recently
            updated first)

        Raises:
            GithubException: If a page request fails
            MalformedResponseError: If a page is missing required fields
        """
        pull_requests: list[PullRequest] = []
        cursor: str | None = None
        page_number = 0

        while True:
            connection = self._fetch_page(cursor)
            page_number += 1

            for raw_node in connection.nodes:
                try:
                    node = RawPullRequestNode.model_validate(raw_node)
                except ValidationError as e:
                    logger.warning(
                        f"[{cid}] Skipping malformed pull request "
                        f"#{raw_node.get('number', '?')}: {e.error_count()} "
                        f"validation error(s)"
                    )
                    continue

                if is_passing_build(node):
                    pull_requests.append(convert_pull_request(node))

            if not connection.page_info.has_next_page:
                break
            if not connection.page_info.end_cursor:
                raise MalformedResponseError(
                    f"Page {page_number} reports more pages but has no end cursor"
                )
            cursor = connection.page_info.end_cursor

        logger.debug(
            f"[{cid}] Read {page_number} page(s) of pull requests, "
            f"{len(pull_requests)} passing"
        )
        return pull_requests
