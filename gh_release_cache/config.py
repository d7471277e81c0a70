"""Configuration for the release cache."""

import os
from typing import Optional

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 30
SUMMARY_PAGE_SIZE = 25


def _split_repo(full_name: str) -> tuple[str, str]:
    parts = full_name.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(
            f"Repository must be given as 'owner/name', got '{full_name}'"
        )
    return parts[0], parts[1]


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")


class CacheConfig:
    """Configuration class for the release cache and its GitHub sources."""

    def __init__(self) -> None:
        """Initialize cache configuration from environment variables."""
        self.github_token: Optional[str] = os.getenv("GITHUB_TOKEN") or os.getenv(
            "GH_TOKEN"
        )
        self.main_repo: str = os.getenv("RELEASE_CACHE_MAIN_REPO", "PCSX2/pcsx2")
        self.legacy_repo: str = os.getenv("RELEASE_CACHE_LEGACY_REPO", "PCSX2/archive")
        self.pr_base_branch: str = os.getenv("RELEASE_CACHE_PR_BASE_BRANCH", "master")
        self.fetch_page_size: int = _int_from_env("RELEASE_CACHE_FETCH_PAGE_SIZE", 100)
        self.platform_index: int = _int_from_env("RELEASE_CACHE_PLATFORM_INDEX", 2)
        self.log_level: str = os.getenv("RELEASE_CACHE_LOG_LEVEL", "INFO").upper()

    @property
    def main_owner_repo(self) -> tuple[str, str]:
        """Owner and name of the repository holding current releases."""
        return _split_repo(self.main_repo)

    @property
    def legacy_owner_repo(self) -> tuple[str, str]:
        """Owner and name of the legacy nightly archive repository."""
        return _split_repo(self.legacy_repo)

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        _split_repo(self.main_repo)
        _split_repo(self.legacy_repo)

        if not 1 <= self.fetch_page_size <= MAX_PAGE_SIZE:
            raise ValueError(
                f"RELEASE_CACHE_FETCH_PAGE_SIZE must be between 1 and "
                f"{MAX_PAGE_SIZE}, got {self.fetch_page_size}"
            )
        if self.platform_index < 0:
            raise ValueError(
                f"RELEASE_CACHE_PLATFORM_INDEX must not be negative, "
                f"got {self.platform_index}"
            )
        if not self.pr_base_branch:
            raise ValueError("RELEASE_CACHE_PR_BASE_BRANCH must not be empty")
