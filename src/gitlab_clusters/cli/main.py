"""Main CLI entry point."""

from __future__ import annotations

import typer
from rich.console import Console

from gitlab_clusters._config import GitLabConfig
from gitlab_clusters._version import __version__
from gitlab_clusters.cli import clusters, config
from gitlab_clusters.cli._utils import setup_logging

app = typer.Typer(
    name="gitlab-clusters",
    help="Manage the Kubernetes clusters of GitLab groups.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(clusters.app, name="clusters", help="Group cluster management")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"gitlab-clusters version {__version__}")


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output in JSON format",
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log HTTP requests",
    ),
) -> None:
    """Manage the Kubernetes clusters of GitLab groups."""
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    setup_logging(verbose or GitLabConfig.load().debug)


if __name__ == "__main__":
    app()
