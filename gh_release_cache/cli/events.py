"""CLI command for replaying GitHub webhook events against the cache."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..triggers import new_correlation_id, refresh_all, signals_for_event
from .options import EVENT_OPTION, PAYLOAD_OPTION, TOKEN_OPTION
from .releases import build_store, load_config

console = Console()


def event(
    event_name: str = EVENT_OPTION,
    payload: Path = PAYLOAD_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """Run the refreshes a GitHub webhook event calls for.

    The payload must already be authenticated; signatures are not checked.

    Examples:
        gh-release-cache event --event release --payload release.json
        gh-release-cache event -e check_suite --payload suite.json
    """
    cid = new_correlation_id()

    try:
        body = json.loads(payload.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]❌ Error: {payload} is not valid JSON: {e}[/red]")
        raise typer.Exit(1)
    if not isinstance(body, dict):
        console.print(f"[red]❌ Error: {payload} must contain a JSON object[/red]")
        raise typer.Exit(1)

    signals = signals_for_event(event_name, body, load_config())
    if not signals:
        console.print(f"ℹ️  Event '{event_name}' does not require a refresh")
        return

    store = build_store(token)
    results = refresh_all(store, cid, signals)

    table = Table(title=f"Refresh Results ({cid})")
    table.add_column("Cache", style="cyan")
    table.add_column("Result")
    for signal, ok in results.items():
        status = "[green]✅ refreshed[/green]" if ok else "[red]❌ failed[/red]"
        table.add_row(signal.value, status)
    console.print(table)

    if not all(results.values()):
        raise typer.Exit(1)
