"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import CheckStatus, RawPullRequestNode, RawRelease, RawReleaseAsset
from .pull_requests import MalformedResponseError, PullRequestFetcher

__all__ = [
    "GitHubClient",
    "PullRequestFetcher",
    "MalformedResponseError",
    "CheckStatus",
    "RawRelease",
    "RawReleaseAsset",
    "RawPullRequestNode",
]
