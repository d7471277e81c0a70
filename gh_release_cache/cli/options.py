"""Standardized CLI option definitions shared by the read commands.

Offsets and page sizes are validated here, before anything reaches the
cache.
"""

import typer

from ..config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def validate_offset(value: int) -> int:
    """Reject negative offsets."""
    if value < 0:
        raise typer.BadParameter("Invalid offset value")
    return value


def validate_page_size(value: int) -> int:
    """Reject page sizes outside 1..MAX_PAGE_SIZE."""
    if value > MAX_PAGE_SIZE:
        raise typer.BadParameter(
            f"pageSize exceeded maximum allowed '{MAX_PAGE_SIZE}'"
        )
    if value < 1:
        raise typer.BadParameter("pageSize must be at least 1")
    return value


# Paging options - used by every read command
OFFSET_OPTION = typer.Option(
    0,
    "--offset",
    "-o",
    help="Index of the first entry to return",
    callback=validate_offset,
)

PAGE_SIZE_OPTION = typer.Option(
    DEFAULT_PAGE_SIZE,
    "--page-size",
    "-p",
    help=f"Number of entries to return (max {MAX_PAGE_SIZE})",
    callback=validate_page_size,
)

# Output options
TABLE_OPTION = typer.Option(
    False, "--table", "-t", help="Render a table instead of JSON"
)

# Connection options
TOKEN_OPTION = typer.Option(
    None, "--token", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

# Logging options - accepted by the top-level command
LOG_LEVEL_OPTION = typer.Option(
    None,
    "--log-level",
    help="Log level (defaults to RELEASE_CACHE_LOG_LEVEL or INFO)",
)

LOG_FILE_OPTION = typer.Option(
    None, "--log-file", help="Also write logs to this file", dir_okay=False
)

PAYLOAD_OPTION = typer.Option(
    ...,
    "--payload",
    help="Path to a webhook payload JSON file",
    exists=True,
    dir_okay=False,
    readable=True,
)

EVENT_OPTION = typer.Option(
    ..., "--event", "-e", help="Webhook event name (X-GitHub-Event header)"
)
