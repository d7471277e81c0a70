"""Pydantic models for raw GitHub API payloads.

These models map directly to the REST release objects and the GraphQL
pull request nodes the cache consumes. Only the fields the cache reads are
declared; anything else in the payload is ignored.
API Reference: https://docs.github.com/en/rest/releases/releases
API Reference: https://docs.github.com/en/graphql/reference/objects#pullrequest
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CheckStatus(str, Enum):
    """Combined status check state of a commit (GraphQL ``StatusState``)."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    PENDING = "PENDING"
    ERROR = "ERROR"
    EXPECTED = "EXPECTED"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def _missing_(cls, value: object) -> "CheckStatus":
        return cls.UNRECOGNIZED


class RawReleaseAsset(BaseModel):
    """Release asset as returned by the REST API.

    API Reference: https://docs.github.com/en/rest/releases/assets
    """

    name: str = Field(..., description="Asset filename including extension")
    browser_download_url: str = Field(..., description="Public download URL")
    download_count: int = Field(0, ge=0, description="Number of downloads")


class RawRelease(BaseModel):
    """Release as returned by ``GET /repos/{owner}/{repo}/releases``."""

    tag_name: str = Field(..., description="Name of the git tag (string)")
    draft: bool = Field(False, description="Whether the release is unpublished")
    prerelease: bool = Field(False, description="Whether marked as a prerelease")
    created_at: datetime = Field(..., description="Creation timestamp (ISO 8601)")
    published_at: datetime | None = Field(
        None, description="Publication timestamp, null for drafts (ISO 8601)"
    )
    html_url: str = Field(..., description="Web page of the release")
    body: str | None = Field(None, description="Release notes in markdown")
    assets: list[RawReleaseAsset] = Field(
        default_factory=list, description="Uploaded release artifacts"
    )


class _GraphQLModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawActor(_GraphQLModel):
    login: str


class RawStatusCheckRollup(_GraphQLModel):
    state: str

    @property
    def status(self) -> CheckStatus:
        return CheckStatus(self.state.upper())


class RawCommit(_GraphQLModel):
    status_check_rollup: RawStatusCheckRollup | None = None


class RawCommitNode(_GraphQLModel):
    commit: RawCommit


class RawCommitConnection(_GraphQLModel):
    nodes: list[RawCommitNode] = Field(default_factory=list)


class RawPullRequestNode(_GraphQLModel):
    """Pull request node selected by the build query.

    ``commits`` holds only the most recent commit (``commits(last: 1)``).
    """

    number: int = Field(..., gt=0)
    author: RawActor | None = Field(
        None, description="Null when the author account was deleted"
    )
    updated_at: datetime
    body: str = ""
    title: str
    additions: int = Field(..., ge=0)
    deletions: int = Field(..., ge=0)
    is_draft: bool
    permalink: str
    commits: RawCommitConnection = Field(default_factory=RawCommitConnection)

    @property
    def latest_check_status(self) -> CheckStatus | None:
        """Rollup state of the latest commit, None if it has no checks."""
        if not self.commits.nodes:
            return None
        rollup = self.commits.nodes[-1].commit.status_check_rollup
        if rollup is None:
            return None
        return rollup.status


class RawPageInfo(_GraphQLModel):
    has_next_page: bool
    end_cursor: str | None = None


class RawPullRequestConnection(_GraphQLModel):
    """One page of ``repository.pullRequests``.

    Nodes stay untyped here so a single malformed node can be skipped
    without discarding the rest of the page.
    """

    nodes: list[dict] = Field(default_factory=list)
    page_info: RawPageInfo
