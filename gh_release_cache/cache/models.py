"""Pydantic models for cached releases and pull request builds.

These are the values served to readers. They are immutable and rebuilt on
every refresh; JSON output uses camelCase keys (``model_dump(by_alias=True)``).
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReleaseType(str, Enum):
    """Release channel."""

    STABLE = "Stable"
    NIGHTLY = "Nightly"


class ReleasePlatform(str, Enum):
    """Target platform of a release asset."""

    WINDOWS = "Windows"
    LINUX = "Linux"
    MACOS = "MacOS"
    UNRECOGNIZED = "Unrecognized"

    @classmethod
    def from_token(cls, token: str) -> "ReleasePlatform":
        """Map a filename component such as ``windows`` or ``macOS``."""
        return _PLATFORM_TOKENS.get(token.lower(), cls.UNRECOGNIZED)

    @classmethod
    def known(cls) -> list["ReleasePlatform"]:
        """Platforms that get an asset bucket on every release."""
        return [cls.WINDOWS, cls.LINUX, cls.MACOS]


_PLATFORM_TOKENS = {
    "windows": ReleasePlatform.WINDOWS,
    "linux": ReleasePlatform.LINUX,
    "macos": ReleasePlatform.MACOS,
}


class _CacheModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class ReleaseAsset(_CacheModel):
    """Downloadable artifact attached to a release."""

    url: str = Field(..., description="Direct download URL")
    display_name: str = Field(..., description="Human label, e.g. 'Windows x64'")
    additional_tags: list[str] = Field(
        default_factory=list,
        description="Extra filename components such as build variant markers",
    )
    download_count: int = Field(0, ge=0, description="Number of downloads")


def empty_asset_buckets() -> dict[ReleasePlatform, list[ReleaseAsset]]:
    """Asset mapping with every known platform present and empty."""
    return {platform: [] for platform in ReleasePlatform.known()}


class Release(_CacheModel):
    """Published release of the project."""

    version: str = Field(..., description="Raw tag name")
    url: str = Field(..., description="Web page of the release")
    semver_major: int = Field(..., ge=0)
    semver_minor: int = Field(..., ge=0)
    semver_patch: int = Field(..., ge=0)
    description: str | None = Field(
        None, description="Release notes with HTML tags removed"
    )
    assets: dict[ReleasePlatform, list[ReleaseAsset]] = Field(
        default_factory=empty_asset_buckets,
        description="Assets per platform; every known platform is present",
    )
    type: ReleaseType
    prerelease: bool = False
    created_at: datetime
    published_at: datetime | None = None

    @property
    def semver(self) -> tuple[int, int, int]:
        return (self.semver_major, self.semver_minor, self.semver_patch)


class PullRequest(_CacheModel):
    """Open pull request whose latest commit passed its checks."""

    number: int = Field(..., gt=0)
    link: str
    github_user: str = Field(..., description="Author login")
    updated_at: datetime
    body: str = ""
    title: str
    additions: int = Field(0, ge=0)
    deletions: int = Field(0, ge=0)


class PageInfo(_CacheModel):
    total: int = Field(..., ge=0, description="Collection length at read time")


class Page(_CacheModel):
    """One offset/limit slice of a cached collection."""

    data: list[Any]
    page_info: PageInfo


class LatestSummary(_CacheModel):
    """First page of every collection, returned in a single response."""

    stable_releases: Page
    nightly_releases: Page
    pull_request_builds: Page
