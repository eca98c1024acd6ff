"""CLI utilities."""

from __future__ import annotations

import json
import logging
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from gitlab_clusters.client import GitLabClient
from gitlab_clusters.exceptions import GitLabError

console = Console()
error_console = Console(stderr=True)


def get_client() -> GitLabClient:
    """Get an authenticated GitLabClient from environment and config file."""
    try:
        return GitLabClient()
    except ValueError as e:
        error_console.print(f"[red]Authentication error:[/red] {e}")
        error_console.print("\nTo authenticate, run:")
        error_console.print("  gitlab-clusters config set private_token <token>")
        raise typer.Exit(1) from None


def setup_logging(verbose: bool) -> None:
    """Send gitlab_clusters log records to stderr through rich."""
    logger = logging.getLogger("gitlab_clusters")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=error_console, show_path=False))


def output_json(data: Any) -> None:
    """Output data as JSON."""
    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")
    elif isinstance(data, list) and data and hasattr(data[0], "model_dump"):
        data = [item.model_dump(mode="json") for item in data]

    console.print_json(json.dumps(data, default=str))


def output_table(
    data: list[Any],
    columns: list[tuple[str, str]],
    title: str | None = None,
) -> None:
    """Output data as a Rich table.

    Args:
        data: List of objects
        columns: List of (field_name, header) tuples. Dotted names reach
            into nested objects.
        title: Optional table title
    """
    table = Table(title=title, show_header=True, header_style="bold")

    for _, header in columns:
        table.add_column(header)

    for item in data:
        row = []
        for field, _ in columns:
            value = item
            for part in field.split("."):
                if value is None:
                    break
                if isinstance(value, dict):
                    value = value.get(part)
                else:
                    value = getattr(value, part, None)

            if value is None or value == "":
                value = "-"
            elif isinstance(value, bool):
                value = "Yes" if value else "No"
            elif hasattr(value, "isoformat"):
                value = value.strftime("%Y-%m-%d %H:%M:%S")

            row.append(str(value))

        table.add_row(*row)

    console.print(table)


def handle_error(e: Exception) -> None:
    """Handle and display an error."""
    if isinstance(e, GitLabError):
        error_console.print(f"[red]Error:[/red] {e.message}")
    else:
        error_console.print(f"[red]Error:[/red] {e}")

    raise typer.Exit(1)


def get_json_flag(ctx: typer.Context) -> bool:
    """Get JSON output flag from context."""
    return ctx.obj.get("json", False) if ctx.obj else False
