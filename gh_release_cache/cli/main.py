"""Main CLI entry point."""

from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from ..utils.logging import configure_logging
from .events import event
from .options import LOG_FILE_OPTION, LOG_LEVEL_OPTION
from .releases import latest, load_config, nightly, pull_requests, stable

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="gh-release-cache",
    help="Cached GitHub releases and passing pull request builds",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.callback()
def main(
    log_level: str | None = LOG_LEVEL_OPTION,
    log_file: Path | None = LOG_FILE_OPTION,
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level or load_config().log_level, log_file)


app.command(name="latest", context_settings={"help_option_names": ["-h", "--help"]})(
    latest
)
app.command(name="stable", context_settings={"help_option_names": ["-h", "--help"]})(
    stable
)
app.command(name="nightly", context_settings={"help_option_names": ["-h", "--help"]})(
    nightly
)
app.command(
    name="pull-requests", context_settings={"help_option_names": ["-h", "--help"]}
)(pull_requests)
app.command(name="event", context_settings={"help_option_names": ["-h", "--help"]})(
    event
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_release_cache import __version__

    console.print(f"GitHub Release Cache v{__version__}")


if __name__ == "__main__":
    app()
