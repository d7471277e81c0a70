"""Tests for raw GitHub payload models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from gh_release_cache.github_client.models import (
    CheckStatus,
    RawPullRequestNode,
    RawRelease,
    RawReleaseAsset,
)


class TestCheckStatus:
    """Test CheckStatus enum."""

    def test_known_state(self) -> None:
        """Test looking up a documented state."""
        assert CheckStatus("SUCCESS") is CheckStatus.SUCCESS

    def test_unknown_state(self) -> None:
        """Test that unknown states map to UNRECOGNIZED."""
        assert CheckStatus("SOMETHING_NEW") is CheckStatus.UNRECOGNIZED


class TestRawRelease:
    """Test RawRelease model."""

    def test_valid_release(self) -> None:
        """Test parsing a REST release record, ignoring unknown fields."""
        release = RawRelease.model_validate(
            {
                "id": 1,
                "tag_name": "v1.7.3",
                "draft": False,
                "prerelease": True,
                "created_at": "2024-01-01T00:00:00Z",
                "published_at": None,
                "html_url": "https://github.com/PCSX2/pcsx2/releases/tag/v1.7.3",
                "body": None,
                "assets": [
                    {
                        "name": "pcsx2-v1.7.3-windows-64bit.7z",
                        "browser_download_url": "https://example.com/a.7z",
                        "download_count": 3,
                    }
                ],
            }
        )

        assert release.tag_name == "v1.7.3"
        assert release.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert release.published_at is None
        assert release.assets[0].download_count == 3

    def test_missing_tag(self) -> None:
        """Test validation with missing fields."""
        with pytest.raises(ValidationError):
            RawRelease.model_validate(
                {"created_at": "2024-01-01T00:00:00Z", "html_url": "x"}
            )

    def test_negative_download_count(self) -> None:
        """Test that download counts cannot be negative."""
        with pytest.raises(ValidationError):
            RawReleaseAsset(
                name="a.7z", browser_download_url="https://example.com", download_count=-1
            )


class TestRawPullRequestNode:
    """Test RawPullRequestNode model."""

    def test_camel_case_fields(self) -> None:
        """Test parsing GraphQL camelCase fields."""
        node = RawPullRequestNode.model_validate(
            {
                "number": 12,
                "author": {"login": "dev"},
                "updatedAt": "2024-03-01T12:00:00Z",
                "body": "",
                "title": "Title",
                "additions": 1,
                "deletions": 0,
                "isDraft": False,
                "permalink": "https://github.com/PCSX2/pcsx2/pull/12",
                "commits": {
                    "nodes": [{"commit": {"statusCheckRollup": {"state": "success"}}}]
                },
            }
        )

        assert node.is_draft is False
        assert node.latest_check_status is CheckStatus.SUCCESS

    def test_non_positive_number(self) -> None:
        """Test that pull request numbers must be positive."""
        with pytest.raises(ValidationError):
            RawPullRequestNode.model_validate(
                {
                    "number": 0,
                    "updatedAt": "2024-03-01T12:00:00Z",
                    "title": "Title",
                    "additions": 1,
                    "deletions": 0,
                    "isDraft": False,
                    "permalink": "https://example.com",
                }
            )
