"""
Health Check Commands.

Commands for checking backend health (requires running server).
"""

import asyncio

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from notekeeper.cli.client import close_api_client, get_api_client

app = typer.Typer(help="Health check commands")
console = Console()


@app.command()
def status() -> None:
    """
    Check backend readiness, including the database.

    Examples:
        cli.py health status
    """
    asyncio.run(_status())


async def _status() -> None:
    client = get_api_client()

    try:
        response = await client.get("/health/ready")
    except httpx.HTTPError as e:
        console.print(f"[red]Error: Cannot connect to backend ({e})[/red]")
        console.print("[dim]Is the server running? Start with: cli.py server start[/dim]")
        raise typer.Exit(1)
    finally:
        await close_api_client()

    data = response.json()
    if response.status_code == 503:
        # HTTPException wraps the payload in "detail"
        data = data.get("detail", data)
    _display_health(data)

    if response.status_code != 200:
        raise typer.Exit(1)


def _display_health(data: dict) -> None:
    """Display readiness results."""
    status_value = data.get("status", "unknown")
    color = "green" if status_value == "healthy" else "red"
    console.print(Panel(f"[{color}]{status_value.upper()}[/{color}]", title="Backend Status"))

    checks = data.get("checks", {})
    if not checks:
        return

    table = Table(show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")
    for component, check in checks.items():
        check_status = check.get("status", "unknown")
        check_color = "green" if check_status == "healthy" else "red"
        details = []
        if "latency_ms" in check:
            details.append(f"latency: {check['latency_ms']}ms")
        if "backend" in check:
            details.append(f"backend: {check['backend']}")
        if "error" in check:
            details.append(f"error: {check['error']}")
        table.add_row(
            component,
            f"[{check_color}]{check_status}[/{check_color}]",
            ", ".join(details) or "-",
        )
    console.print(table)


@app.command()
def ping() -> None:
    """
    Simple ping to check if backend is reachable.

    Examples:
        cli.py health ping
    """
    asyncio.run(_ping())


async def _ping() -> None:
    client = get_api_client()

    try:
        response = await client.get("/health")
    except httpx.HTTPError:
        console.print("[red]✗ Backend is not reachable[/red]")
        raise typer.Exit(1)
    finally:
        await close_api_client()

    if response.status_code == 200:
        console.print("[green]✓ Backend is reachable[/green]")
    else:
        console.print(f"[yellow]Backend responded with status {response.status_code}[/yellow]")
