"""In-memory store of releases and pull request builds.

Every collection is rebuilt from scratch on refresh and installed with a
single attribute assignment, so readers on other threads see either the old
list or the new one, never a mix. Installed lists are never mutated.
Writers serialise their installs on one lock so the combined nightly view is
always built from the latest main and legacy lists; readers never take it.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any

import requests
from github.GithubException import GithubException
from pydantic import ValidationError

from ..config import SUMMARY_PAGE_SIZE, CacheConfig
from ..github_client.models import RawRelease
from ..github_client.pull_requests import PullRequestFetcher
from ..utils.text import strip_html
from .assets import gather_release_assets
from .exceptions import CacheRefreshError
from .models import LatestSummary, Page, PullRequest, Release, ReleaseType
from .pagination import page
from .versions import parse_version

if TYPE_CHECKING:
    from ..github_client.client import GitHubClient

logger = logging.getLogger(__name__)


def _tag_of(record: Any) -> str:
    if isinstance(record, dict):
        return str(record.get("tag_name", "?"))
    return "?"


def sort_releases(releases: list[Release]) -> list[Release]:
    """Newest first by (major, minor, patch); ties keep their source order."""
    return sorted(releases, key=lambda release: release.semver, reverse=True)


def build_releases(
    records: list[dict[str, Any]],
    legacy: bool = False,
    platform_index: int = 2,
    cid: str = "-",
) -> list[Release]:
    """Turn raw release records into cached releases.

    Drafts are dropped silently. Records that fail validation or whose tag
    is not a semantic version are dropped with a warning.

    Args:
        records: Raw REST release dicts
        legacy: Records come from the legacy archive (all nightly, Windows only)
        platform_index: Position of the platform component in asset names
        cid: Correlation id for log lines

    Returns:
        Releases in source order
    """
    releases = []

    for record in records:
        try:
            raw = RawRelease.model_validate(record)
        except ValidationError as e:
            logger.warning(
                f"[{cid}] Skipping malformed release record "
                f"'{_tag_of(record)}': {e.error_count()} validation error(s)"
            )
            continue

        if raw.draft:
            continue

        semver = parse_version(raw.tag_name)
        if semver is None:
            logger.warning(
                f"[{cid}] Skipping release '{raw.tag_name}': "
                f"tag is not a semantic version"
            )
            continue

        if legacy or raw.prerelease:
            release_type = ReleaseType.NIGHTLY
        else:
            release_type = ReleaseType.STABLE

        releases.append(
            Release(
                version=raw.tag_name,
                url=raw.html_url,
                semver_major=semver.major,
                semver_minor=semver.minor,
                semver_patch=semver.patch,
                description=strip_html(raw.body),
                assets=gather_release_assets(raw.assets, legacy, platform_index),
                type=release_type,
                prerelease=raw.prerelease,
                created_at=raw.created_at,
                published_at=raw.published_at,
            )
        )

    return releases


class ReleaseCacheStore:
    """Owns the cached release and pull request collections."""

    def __init__(
        self,
        client: "GitHubClient",
        config: CacheConfig | None = None,
        pull_request_fetcher: PullRequestFetcher | None = None,
    ):
        """Initialize an empty (cold) store.

        Args:
            client: GitHubClient used for every refresh
            config: Source repositories and fetch settings
            pull_request_fetcher: Override for the pull request source
        """
        self.client = client
        self.config = config or CacheConfig()
        self.config.validate()

        if pull_request_fetcher is None:
            owner, repo = self.config.main_owner_repo
            pull_request_fetcher = PullRequestFetcher(
                client,
                owner,
                repo,
                base_branch=self.config.pr_base_branch,
                page_size=self.config.fetch_page_size,
            )
        self.pull_request_fetcher = pull_request_fetcher

        self._stable_releases: list[Release] = []
        self._nightly_releases: list[Release] = []
        self._legacy_nightly_releases: list[Release] = []
        self._combined_nightly_releases: list[Release] = []
        self._pull_request_builds: list[PullRequest] = []
        self._warm = False
        self._install_lock = threading.Lock()

    @property
    def is_warm(self) -> bool:
        """Whether any refresh has installed data yet."""
        return self._warm

    @property
    def stable_releases(self) -> list[Release]:
        return list(self._stable_releases)

    @property
    def nightly_releases(self) -> list[Release]:
        return list(self._nightly_releases)

    @property
    def legacy_nightly_releases(self) -> list[Release]:
        return list(self._legacy_nightly_releases)

    @property
    def combined_nightly_releases(self) -> list[Release]:
        return list(self._combined_nightly_releases)

    @property
    def pull_request_builds(self) -> list[PullRequest]:
        return list(self._pull_request_builds)

    def _fetch_releases(self, source: str, owner: str, repo: str, cid: str) -> list:
        try:
            self.client.check_rate_limit(cid)
            return self.client.fetch_releases(
                owner, repo, page_size=self.config.fetch_page_size, cid=cid
            )
        except (GithubException, requests.RequestException) as e:
            raise CacheRefreshError(source, f"{owner}/{repo}: {e}") from e

    def _recompute_combined(self) -> None:
        # caller holds _install_lock; current nightlies precede the legacy archive
        self._combined_nightly_releases = (
            self._nightly_releases + self._legacy_nightly_releases
        )

    def refresh_main(self, cid: str = "-") -> None:
        """Rebuild stable and nightly releases from the main repository.

        Raises:
            CacheRefreshError: If the releases could not be fetched; every
                collection keeps its previous contents
        """
        owner, repo = self.config.main_owner_repo
        logger.info(f"[{cid}] Refreshing main release cache from {owner}/{repo}")

        records = self._fetch_releases("main", owner, repo, cid)
        releases = build_releases(
            records, legacy=False, platform_index=self.config.platform_index, cid=cid
        )

        stable = sort_releases([r for r in releases if r.type is ReleaseType.STABLE])
        nightly = sort_releases(
            [r for r in releases if r.type is ReleaseType.NIGHTLY]
        )
        with self._install_lock:
            self._stable_releases = stable
            self._nightly_releases = nightly
            self._recompute_combined()
            self._warm = True

        logger.info(
            f"[{cid}] Main release cache refreshed: {len(stable)} stable, "
            f"{len(nightly)} nightly"
        )

    def refresh_legacy(self, cid: str = "-") -> None:
        """Rebuild nightly releases from the legacy archive repository.

        Raises:
            CacheRefreshError: If the releases could not be fetched; every
                collection keeps its previous contents
        """
        owner, repo = self.config.legacy_owner_repo
        logger.info(f"[{cid}] Refreshing legacy release cache from {owner}/{repo}")

        records = self._fetch_releases("legacy", owner, repo, cid)
        releases = sort_releases(
            build_releases(
                records,
                legacy=True,
                platform_index=self.config.platform_index,
                cid=cid,
            )
        )
        with self._install_lock:
            self._legacy_nightly_releases = releases
            self._recompute_combined()
            self._warm = True

        logger.info(
            f"[{cid}] Legacy release cache refreshed: {len(releases)} nightly"
        )

    def refresh_pull_requests(self, cid: str = "-") -> bool:
        """Rebuild the pull request build list.

        Failures are logged and the previous list is kept.

        Returns:
            True if the list was replaced, False if the refresh failed
        """
        logger.info(f"[{cid}] Refreshing pull request build cache")
        try:
            self.client.check_rate_limit(cid)
            pull_requests = self.pull_request_fetcher.fetch_all(cid)
        except Exception:
            logger.exception(
                f"[{cid}] Error occurred when refreshing pull request build cache"
            )
            return False

        with self._install_lock:
            self._pull_request_builds = pull_requests
            self._warm = True
        logger.info(
            f"[{cid}] Pull request build cache refreshed: "
            f"{len(pull_requests)} passing pull requests"
        )
        return True

    def get_latest_summary(self, cid: str = "-") -> LatestSummary:
        """First page of stable releases, nightlies and pull requests."""
        return LatestSummary(
            stable_releases=self.get_stable(cid),
            nightly_releases=self.get_nightly(cid),
            pull_request_builds=self.get_pull_requests(cid),
        )

    def get_stable(
        self, cid: str = "-", offset: int = 0, page_size: int = SUMMARY_PAGE_SIZE
    ) -> Page:
        logger.debug(f"[{cid}] Reading stable releases offset={offset} size={page_size}")
        return page(self._stable_releases, offset, page_size)

    def get_nightly(
        self, cid: str = "-", offset: int = 0, page_size: int = SUMMARY_PAGE_SIZE
    ) -> Page:
        """Page through current nightlies followed by legacy nightlies."""
        logger.debug(f"[{cid}] Reading nightly releases offset={offset} size={page_size}")
        return page(self._combined_nightly_releases, offset, page_size)

    def get_pull_requests(
        self, cid: str = "-", offset: int = 0, page_size: int = SUMMARY_PAGE_SIZE
    ) -> Page:
        logger.debug(f"[{cid}] Reading pull request builds offset={offset} size={page_size}")
        return page(self._pull_request_builds, offset, page_size)
