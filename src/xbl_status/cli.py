"""xbl-status CLI entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from xbl_status.config.models import XblStatusConfig
from xbl_status.status.models import FetchResult, ServiceLevel

app = typer.Typer(
    name="xbl-status",
    help="Xbox LIVE service status from the kvchecker feed",
    no_args_is_help=True,
)
console = Console()

LEVEL_STYLES: dict[ServiceLevel, str] = {
    ServiceLevel.FULLY: "green",
    ServiceLevel.MOSTLY: "yellow",
    ServiceLevel.INOPERATIONAL: "red",
    ServiceLevel.UNKNOWN: "dim",
}


@app.callback()
def main_callback(
    log_level: str = typer.Option("WARNING", "--log-level", help="Python logging level"),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(path: Path | None) -> XblStatusConfig:
    import yaml

    from xbl_status.config.loader import load_config

    try:
        return load_config(path, required=False)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


def _render_table(result: FetchResult) -> Table:
    table = Table(title="Xbox LIVE Status")
    table.add_column("Service", style="bold")
    table.add_column("Status")
    table.add_column("Description")
    for s in result.services:
        style = LEVEL_STYLES.get(s.level, "dim")
        table.add_row(s.name, f"[{style}]{s.level_text}[/{style}]", s.description or "—")
    return table


@app.command()
def status(
    timeout: int | None = typer.Option(None, "--timeout", "-t", min=1, help="Deadline in milliseconds"),
    path: Path | None = typer.Option(None, "--config", "-c", help="Path to .xbl-status.yaml"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
) -> None:
    """Fetch the current service status once."""
    from xbl_status.status.fetcher import StatusFetcher

    config = _load(path)
    result = StatusFetcher(config.fetcher).fetch_status_sync(timeout_ms=timeout)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        console.print(_render_table(result))
        console.print(f"[dim]Last updated {result.last_updated:%Y-%m-%d %H:%M:%S} UTC[/dim]")
    else:
        console.print(f"[red]{result.error_message}[/red]")

    if not result.success:
        raise typer.Exit(1)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind host"),
    port: int | None = typer.Option(None, help="Bind port"),
) -> None:
    """Start the status HTTP API."""
    import uvicorn

    config = _load(None)
    if host is None:
        host = config.api.host
    if port is None:
        port = config.api.port
    console.print(f"[bold]xbl-status[/bold] starting on http://{host}:{port}")
    uvicorn.run("xbl_status.api.app:app", host=host, port=port, reload=False)


config_app = typer.Typer(name="config", help="Configuration commands")
app.add_typer(config_app)


@config_app.command("validate")
def config_validate(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .xbl-status.yaml"),
) -> None:
    """Validate configuration file."""
    from urllib.parse import urlparse

    import yaml

    from xbl_status.config.loader import load_config

    try:
        config = load_config(path=path)
        console.print("[green]✓[/green] YAML parses correctly")
        console.print("[green]✓[/green] Pydantic validation passes")
    except FileNotFoundError as exc:
        console.print(f"[red]✗ {exc}[/red]")
        raise typer.Exit(1)
    except yaml.YAMLError as exc:
        console.print(f"[red]✗ YAML parsing failed: {exc}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print("[green]✓[/green] YAML parses correctly")
        console.print(f"[red]✗ Pydantic validation failed: {exc}[/red]")
        raise typer.Exit(1)

    errors: list[str] = []
    parsed = urlparse(config.fetcher.url)
    if parsed.scheme not in ("ws", "wss") or not parsed.netloc:
        errors.append(f"Fetcher URL must be ws:// or wss://, got '{config.fetcher.url}'")
    origin = urlparse(config.fetcher.origin)
    if not origin.scheme or not origin.netloc:
        errors.append(f"Origin '{config.fetcher.origin}' is not a valid origin")

    if errors:
        for err in errors:
            console.print(f"[red]✗ {err}[/red]")
        console.print(f"\n[red bold]{len(errors)} validation error(s) found.[/red bold]")
        raise typer.Exit(1)
    console.print("\n[green bold]Configuration is valid.[/green bold]")


@config_app.command("show")
def config_show(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .xbl-status.yaml"),
) -> None:
    """Print resolved configuration."""
    config = _load(path)
    f = config.fetcher
    console.print("[bold]Fetcher:[/bold]")
    console.print(f"  URL: {f.url}")
    console.print(f"  Origin: {f.origin}")
    console.print(f"  Timeout: {f.timeout_ms}ms")
    console.print(f"  Operational color: {f.operational_color}")
    console.print(f"  Max message size: {f.max_message_size} bytes\n")
    console.print("[bold]API:[/bold]")
    console.print(f"  Bind: {config.api.host}:{config.api.port}")


def main() -> None:
    app()
