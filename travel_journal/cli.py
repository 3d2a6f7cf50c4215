"""
Travel Journal CLI Tool

Command-line helpers for running and poking at the journal API.

Usage:
    journal serve              - Start the API server
    journal list               - List journal entries
    journal upload PATH        - Upload an image
    journal check-storage      - Validate the storage connection string offline
"""
import mimetypes
import os
import sys
from pathlib import Path

import click
import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from travel_journal import __version__
from travel_journal.errors import ConfigurationError
from travel_journal.storage.connection import parse_connection_string

# Load environment variables
load_dotenv()

console = Console()

API_BASE = os.getenv("API_BASE_URL", "http://localhost:8000")


def _headers(user_id: str | None, username: str | None) -> dict[str, str]:
    headers = {}
    if user_id:
        headers["X-User-ID"] = user_id
        headers["X-User-Name"] = username or user_id
    return headers


@click.group()
@click.version_option(version=__version__, prog_name="Travel Journal")
def main():
    """
    Travel Journal - journal entries, likes, comments and photo uploads.
    """
    pass


@main.command()
@click.option("--port", default=8000, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(port: int, reload: bool):
    """Start the API server."""
    import uvicorn

    console.print(f"[green]✓[/green] Starting Travel Journal on port {port}")
    uvicorn.run("travel_journal.main:app", host="0.0.0.0", port=port, reload=reload)


@main.command(name="list")
@click.option("--view", type=click.Choice(["public", "dashboard"]), default="public")
@click.option("--user", "user_id", default=None, help="Act as this user id")
@click.option("--name", "username", default=None, help="Display name for --user")
def list_entries(view: str, user_id: str | None, username: str | None):
    """
    List journal entries, newest first.

    Example:
        journal list --view dashboard --user u1
    """
    try:
        response = httpx.get(
            f"{API_BASE}/api/journals",
            params={"view": view},
            headers=_headers(user_id, username),
            timeout=10.0,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Could not fetch journals: {e}[/red]")
        sys.exit(1)

    entries = response.json()
    if not entries:
        console.print("[yellow]No journals found.[/yellow]")
        return

    table = Table(title=f"Journals ({len(entries)})", show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Title", style="cyan")
    table.add_column("Location")
    table.add_column("Author", style="dim")
    table.add_column("Likes", justify="right")
    table.add_column("Comments", justify="right")

    for entry in entries:
        title = entry.get("title", "")
        if entry.get("isPrivate"):
            title = f"{title} [dim](private)[/dim]"
        table.add_row(
            entry.get("date", ""),
            title,
            entry.get("location", ""),
            entry.get("authorName", ""),
            str(len(entry.get("likes", []))),
            str(len(entry.get("comments", []))),
        )

    console.print(table)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def upload(path: Path):
    """
    Upload an image and print its URL.

    Example:
        journal upload ./kyoto.jpg
    """
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    try:
        with path.open("rb") as fh:
            response = httpx.post(
                f"{API_BASE}/api/upload",
                files={"file": (path.name, fh, content_type)},
                timeout=60.0,
            )
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Upload failed: {e}[/red]")
        sys.exit(1)

    if response.status_code != 200:
        error = response.json().get("error", response.text)
        console.print(f"[red]✗ Upload failed ({response.status_code}): {error}[/red]")
        sys.exit(1)

    data = response.json()
    console.print(f"[green]✓[/green] Uploaded as [cyan]{data['filename']}[/cyan]")
    console.print(data["url"])


@main.command(name="check-storage")
def check_storage():
    """Parse BLOB_CONNECTION_STRING without contacting Azure."""
    from travel_journal.config import get_settings

    settings = get_settings()
    try:
        info = parse_connection_string(settings.BLOB_CONNECTION_STRING)
    except ConfigurationError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        sys.exit(1)

    console.print("[green]✓ Storage connection string is valid[/green]")
    console.print(f"Account:   [cyan]{info.account_name}[/cyan]")
    console.print(f"Endpoint:  [cyan]{info.account_url}[/cyan]")
    console.print(f"Container: [cyan]{settings.BLOB_CONTAINER}[/cyan]")


if __name__ == "__main__":
    main()
