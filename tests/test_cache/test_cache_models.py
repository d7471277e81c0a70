"""Tests for cached release and pull request models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from gh_release_cache.cache.models import (
    Page,
    PageInfo,
    PullRequest,
    Release,
    ReleaseAsset,
    ReleasePlatform,
    ReleaseType,
    empty_asset_buckets,
)


def _release(**overrides: object) -> Release:
    fields: dict[str, object] = {
        "version": "v1.7.0",
        "url": "https://github.com/PCSX2/pcsx2/releases/tag/v1.7.0",
        "semver_major": 1,
        "semver_minor": 7,
        "semver_patch": 0,
        "type": ReleaseType.STABLE,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Release(**fields)


class TestReleasePlatform:
    """Test ReleasePlatform enum."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("windows", ReleasePlatform.WINDOWS),
            ("Linux", ReleasePlatform.LINUX),
            ("macOS", ReleasePlatform.MACOS),
            ("android", ReleasePlatform.UNRECOGNIZED),
        ],
    )
    def test_from_token(self, token: str, expected: ReleasePlatform) -> None:
        """Test case-insensitive platform lookup."""
        assert ReleasePlatform.from_token(token) is expected

    def test_known_excludes_unrecognized(self) -> None:
        """Test the known platforms."""
        assert ReleasePlatform.UNRECOGNIZED not in ReleasePlatform.known()
        assert len(ReleasePlatform.known()) == 3


class TestRelease:
    """Test Release model."""

    def test_default_assets_have_every_platform(self) -> None:
        """Test that every known platform has a bucket."""
        release = _release()
        assert release.assets == empty_asset_buckets()
        assert set(release.assets) == set(ReleasePlatform.known())

    def test_semver(self) -> None:
        """Test the sort key."""
        assert _release(semver_patch=3).semver == (1, 7, 3)

    def test_frozen(self) -> None:
        """Test that cached releases cannot be modified."""
        release = _release()
        with pytest.raises(ValidationError):
            release.version = "v9.9.9"

    def test_negative_version_component(self) -> None:
        """Test version components must not be negative."""
        with pytest.raises(ValidationError):
            _release(semver_minor=-1)

    def test_camel_case_dump(self) -> None:
        """Test JSON field names."""
        asset = ReleaseAsset(
            url="https://example.com/a.7z",
            display_name="Windows x64",
            additional_tags=["Qt"],
            download_count=7,
        )
        buckets = empty_asset_buckets()
        buckets[ReleasePlatform.WINDOWS].append(asset)

        data = _release(assets=buckets).model_dump(by_alias=True, mode="json")

        assert data["semverMajor"] == 1
        assert data["publishedAt"] is None
        assert data["type"] == "Stable"
        assert data["assets"]["Windows"][0] == {
            "url": "https://example.com/a.7z",
            "displayName": "Windows x64",
            "additionalTags": ["Qt"],
            "downloadCount": 7,
        }
        assert data["assets"]["MacOS"] == []


class TestPullRequest:
    """Test PullRequest model."""

    def test_camel_case_dump(self) -> None:
        """Test JSON field names."""
        pull_request = PullRequest(
            number=5,
            link="https://github.com/PCSX2/pcsx2/pull/5",
            github_user="dev",
            updated_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
            title="Fix",
        )

        data = pull_request.model_dump(by_alias=True)

        assert data["githubUser"] == "dev"
        assert data["updatedAt"] == datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert data["body"] == ""

    def test_number_positive(self) -> None:
        """Test pull request numbers must be positive."""
        with pytest.raises(ValidationError):
            PullRequest(
                number=0,
                link="x",
                github_user="dev",
                updated_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
                title="Fix",
            )


class TestPage:
    """Test Page model."""

    def test_dump(self) -> None:
        """Test the page envelope shape."""
        page = Page(data=[], page_info=PageInfo(total=0))
        assert page.model_dump(by_alias=True) == {"data": [], "pageInfo": {"total": 0}}

    def test_total_non_negative(self) -> None:
        """Test totals cannot be negative."""
        with pytest.raises(ValidationError):
            PageInfo(total=-1)
