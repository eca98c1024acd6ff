"""Configuration CLI commands."""

from __future__ import annotations

import typer
from rich.console import Console

from gitlab_clusters import _config
from gitlab_clusters._config import (
    GitLabConfig,
    get_config_value,
    set_config_value,
)

app = typer.Typer(help="Configuration management.")
console = Console()

SECRET_KEYS = ("private_token", "auth.token")


def mask(value: str) -> str:
    """Hide all but the edges of a secret."""
    return value[:8] + "..." + value[-4:] if len(value) > 12 else "***"


@app.command("get")
def get(
    key: str = typer.Argument(..., help="Configuration key"),
) -> None:
    """Get a configuration value.

    Example:
        gitlab-clusters config get url
    """
    value = get_config_value(key)

    if value is None:
        console.print(f"[dim]No value set for '{key}'[/dim]")
    else:
        if key in SECRET_KEYS and value:
            value = mask(value)
        console.print(value)


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Configuration key"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value.

    Example:
        gitlab-clusters config set url https://gitlab.example.com
        gitlab-clusters config set timeout 120
    """
    if value.lower() in ("true", "false"):
        typed_value: str | bool | int | float = value.lower() == "true"
    elif value.isdigit():
        typed_value = int(value)
    elif value.replace(".", "", 1).isdigit():
        typed_value = float(value)
    else:
        typed_value = value

    set_config_value(key, typed_value)
    shown = mask(value) if key in SECRET_KEYS else value
    console.print(f"[green]Set {key} = {shown}[/green]")


@app.command("list")
def list_config() -> None:
    """List all configuration values."""
    config = GitLabConfig.load()

    console.print("[bold]Current Configuration[/bold]\n")

    console.print("  private_token:", end=" ")
    if config.private_token:
        console.print(mask(config.private_token))
    else:
        console.print("[dim]not set[/dim]")

    console.print(f"  url: {config.base_url}")
    console.print(f"  timeout: {config.timeout}")
    console.print(f"  max_retries: {config.max_retries}")
    console.print(f"  verify_ssl: {config.verify_ssl}")
    console.print(f"  debug: {config.debug}")

    if config.auth.type:
        console.print(f"\n  auth.type: {config.auth.type}")
    if config.auth.token:
        console.print(f"  auth.token: {mask(config.auth.token)}")

    console.print(f"\n[dim]Config file: {_config.CONFIG_FILE}[/dim]")
