"""CLI commands for reading the release and pull request cache."""

import logging
from collections.abc import Callable
from functools import partial

import typer
from rich.console import Console
from rich.table import Table

from ..cache.models import Page, Release, ReleasePlatform
from ..cache.store import ReleaseCacheStore
from ..config import CacheConfig
from ..github_client.client import GitHubClient
from ..triggers import RefreshSignal, new_correlation_id, refresh_all
from .options import OFFSET_OPTION, PAGE_SIZE_OPTION, TABLE_OPTION, TOKEN_OPTION

logger = logging.getLogger(__name__)
console = Console()
app = typer.Typer(help="Read releases and pull request builds")


def load_config() -> CacheConfig:
    """Read and validate configuration from the environment.

    Raises:
        typer.Exit: If a setting is malformed or out of range
    """
    try:
        config = CacheConfig()
        config.validate()
    except ValueError as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)
    return config


def build_store(token: str | None = None) -> ReleaseCacheStore:
    """Create a cold store from environment configuration.

    Raises:
        typer.Exit: If the token or configuration is missing or invalid
    """
    config = load_config()
    try:
        client = GitHubClient(
            token=token or config.github_token, per_page=config.fetch_page_size
        )
        return ReleaseCacheStore(client, config)
    except ValueError as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)


def warm_store(
    store: ReleaseCacheStore, signals: list[RefreshSignal], cid: str
) -> None:
    """Run the refreshes a read needs, exiting if a release refresh failed.

    A failed pull request refresh only warns; reads then serve whatever
    pull request builds the store already holds.
    """
    results = refresh_all(store, cid, signals)
    if results.get(RefreshSignal.PULL_REQUESTS) is False:
        logger.warning(
            f"[{cid}] Pull request builds could not be refreshed; "
            f"serving the cached list"
        )

    failed = [
        signal.value
        for signal, ok in results.items()
        if not ok and signal is not RefreshSignal.PULL_REQUESTS
    ]
    if failed:
        console.print(
            f"[red]❌ Error: could not refresh {', '.join(failed)} "
            f"(correlation id {cid})[/red]"
        )
        raise typer.Exit(1)


def _asset_cell(release: Release, platform: ReleasePlatform) -> str:
    assets = release.assets.get(platform, [])
    return ", ".join(asset.display_name for asset in assets) or "-"


def release_table(title: str, releases_page: Page) -> Table:
    table = Table(title=f"{title} ({releases_page.page_info.total} total)")
    table.add_column("Version", style="cyan")
    table.add_column("Type")
    table.add_column("Published")
    for platform in ReleasePlatform.known():
        table.add_column(platform.value, style="green")

    for release in releases_page.data:
        published = release.published_at or release.created_at
        table.add_row(
            release.version,
            release.type.value,
            published.strftime("%Y-%m-%d"),
            *(_asset_cell(release, platform) for platform in ReleasePlatform.known()),
        )
    return table


def pull_request_table(pull_requests_page: Page) -> Table:
    table = Table(
        title=f"Pull Request Builds ({pull_requests_page.page_info.total} total)"
    )
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Title")
    table.add_column("Author", style="magenta")
    table.add_column("+/-", justify="right")
    table.add_column("Updated")

    for pull_request in pull_requests_page.data:
        table.add_row(
            str(pull_request.number),
            pull_request.title,
            pull_request.github_user,
            f"[green]+{pull_request.additions}[/green] "
            f"[red]-{pull_request.deletions}[/red]",
            pull_request.updated_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def print_page(page: Page, as_table: bool, render: Callable[[Page], Table]) -> None:
    if as_table:
        console.print(render(page))
    else:
        console.print_json(page.model_dump_json(by_alias=True))


@app.command()
def latest(
    table: bool = TABLE_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """Show the first page of stable releases, nightlies and pull requests.

    Examples:
        gh-release-cache latest
        gh-release-cache latest --table
    """
    cid = new_correlation_id()
    store = build_store(token)
    warm_store(store, list(RefreshSignal), cid)
    summary = store.get_latest_summary(cid)

    if not table:
        console.print_json(summary.model_dump_json(by_alias=True))
        return

    console.print(release_table("Stable Releases", summary.stable_releases))
    console.print(release_table("Nightly Releases", summary.nightly_releases))
    console.print(pull_request_table(summary.pull_request_builds))


@app.command()
def stable(
    offset: int = OFFSET_OPTION,
    page_size: int = PAGE_SIZE_OPTION,
    table: bool = TABLE_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """Page through stable releases, newest first."""
    cid = new_correlation_id()
    store = build_store(token)
    warm_store(store, [RefreshSignal.MAIN], cid)
    print_page(
        store.get_stable(cid, offset, page_size),
        table,
        partial(release_table, "Stable Releases"),
    )


@app.command()
def nightly(
    offset: int = OFFSET_OPTION,
    page_size: int = PAGE_SIZE_OPTION,
    table: bool = TABLE_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """Page through nightly releases, current builds before the legacy archive."""
    cid = new_correlation_id()
    store = build_store(token)
    warm_store(store, [RefreshSignal.MAIN, RefreshSignal.LEGACY], cid)
    print_page(
        store.get_nightly(cid, offset, page_size),
        table,
        partial(release_table, "Nightly Releases"),
    )


@app.command(name="pull-requests")
def pull_requests(
    offset: int = OFFSET_OPTION,
    page_size: int = PAGE_SIZE_OPTION,
    table: bool = TABLE_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """Page through open pull requests whose latest build passed."""
    cid = new_correlation_id()
    store = build_store(token)
    warm_store(store, [RefreshSignal.PULL_REQUESTS], cid)
    print_page(
        store.get_pull_requests(cid, offset, page_size), table, pull_request_table
    )

