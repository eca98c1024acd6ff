"""Group cluster CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from gitlab_clusters.cli._utils import (
    get_client,
    get_json_flag,
    handle_error,
    output_json,
    output_table,
)
from gitlab_clusters.models.cluster import (
    AddGroupClusterOptions,
    EditGroupClusterOptions,
    GroupCluster,
)

app = typer.Typer(help="Group cluster commands.")
console = Console()

LIST_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("domain", "Domain"),
    ("environment_scope", "Scope"),
    ("provider_type", "Provider"),
    ("platform_kubernetes.api_url", "API URL"),
]


def parse_group(value: str) -> int | str:
    """Treat an all-digit argument as a numeric group id, anything else as a path."""
    return int(value) if value.isdigit() else value


def _print_cluster(cluster: GroupCluster) -> None:
    console.print(f"[bold]Cluster: {cluster.id}[/bold]")
    console.print(f"  Name: {cluster.name}")
    console.print(f"  Domain: {cluster.domain or '-'}")
    console.print(f"  Environment scope: {cluster.environment_scope}")
    console.print(f"  Type: {cluster.cluster_type or '-'}")
    console.print(f"  Provider: {cluster.provider_type or '-'}")
    if cluster.created_at:
        console.print(f"  Created: {cluster.created_at}")
    if cluster.user:
        console.print(f"  Added by: {cluster.user.username}")
    if cluster.group:
        console.print(f"  Group: {cluster.group.name} ({cluster.group.id})")

    k8s = cluster.platform_kubernetes
    if k8s:
        console.print("\n  Kubernetes:")
        console.print(f"    API URL: {k8s.api_url}")
        console.print(f"    Authorization: {k8s.authorization_type or '-'}")
        console.print(f"    CA certificate: {'set' if k8s.ca_cert else 'not set'}")


def _show(ctx: typer.Context, cluster: GroupCluster) -> None:
    if get_json_flag(ctx):
        output_json(cluster)
    else:
        _print_cluster(cluster)


@app.command("list")
def list_clusters(
    ctx: typer.Context,
    group: str = typer.Argument(..., help="Group ID or full path"),
) -> None:
    """List the clusters of a group."""
    client = get_client()
    try:
        clusters = client.group_clusters.list(parse_group(group))

        if get_json_flag(ctx):
            output_json(clusters)
        elif not clusters:
            console.print("[dim]No clusters found.[/dim]")
        else:
            output_table(clusters, LIST_COLUMNS, title=f"Clusters of {group}")

    except Exception as e:
        handle_error(e)


@app.command("get")
def get(
    ctx: typer.Context,
    group: str = typer.Argument(..., help="Group ID or full path"),
    cluster_id: int = typer.Argument(..., help="Cluster ID"),
) -> None:
    """Show a single group cluster."""
    client = get_client()
    try:
        cluster = client.group_clusters.get(parse_group(group), cluster_id)
        _show(ctx, cluster)

    except Exception as e:
        handle_error(e)


@app.command("add")
def add(
    ctx: typer.Context,
    group: str = typer.Argument(..., help="Group ID or full path"),
    name: str = typer.Option(..., "--name", "-n", help="Cluster name"),
    api_url: str = typer.Option(..., "--api-url", help="Kubernetes API URL"),
    token: str = typer.Option(
        ..., "--token", help="Kubernetes service account token", envvar="KUBE_TOKEN"
    ),
    ca_cert_file: Path | None = typer.Option(
        None, "--ca-cert-file", help="PEM CA certificate file", exists=True, dir_okay=False
    ),
    domain: str | None = typer.Option(None, "--domain", "-d", help="Base domain"),
    environment_scope: str | None = typer.Option(
        None, "--environment-scope", "-e", help="Environment scope (default *)"
    ),
    authorization_type: str | None = typer.Option(
        None, "--authorization-type", help="rbac, abac or unknown_authorization"
    ),
    managed: bool | None = typer.Option(
        None, "--managed/--unmanaged", help="Let GitLab manage namespaces and service accounts"
    ),
    enabled: bool | None = typer.Option(None, "--enabled/--disabled", help="Cluster is active"),
) -> None:
    """Attach an existing Kubernetes cluster to a group."""
    client = get_client()
    try:
        k8s: dict[str, Any] = {"api_url": api_url, "token": token}
        if ca_cert_file is not None:
            k8s["ca_cert"] = ca_cert_file.read_text()
        if authorization_type is not None:
            k8s["authorization_type"] = authorization_type

        fields: dict[str, Any] = {"name": name, "platform_kubernetes_attributes": k8s}
        for key, value in (
            ("domain", domain),
            ("environment_scope", environment_scope),
            ("managed", managed),
            ("enabled", enabled),
        ):
            if value is not None:
                fields[key] = value

        cluster = client.group_clusters.add(
            parse_group(group), AddGroupClusterOptions.model_validate(fields)
        )

        if get_json_flag(ctx):
            output_json(cluster)
        else:
            console.print(f"[green]Added cluster:[/green] {cluster.id}")
            console.print(f"  Name: {cluster.name}")

    except Exception as e:
        handle_error(e)


@app.command("edit")
def edit(
    ctx: typer.Context,
    group: str = typer.Argument(..., help="Group ID or full path"),
    cluster_id: int = typer.Argument(..., help="Cluster ID"),
    name: str | None = typer.Option(None, "--name", "-n", help="New cluster name"),
    domain: str | None = typer.Option(None, "--domain", "-d", help="New base domain"),
    environment_scope: str | None = typer.Option(
        None, "--environment-scope", "-e", help="New environment scope"
    ),
    api_url: str | None = typer.Option(None, "--api-url", help="New Kubernetes API URL"),
    ca_cert_file: Path | None = typer.Option(
        None, "--ca-cert-file", help="Replace the CA certificate", exists=True, dir_okay=False
    ),
    clear_ca_cert: bool = typer.Option(False, "--clear-ca-cert", help="Remove the CA certificate"),
) -> None:
    """Update a group cluster. Only the given options are changed."""
    if ca_cert_file is not None and clear_ca_cert:
        handle_error(ValueError("--ca-cert-file and --clear-ca-cert are mutually exclusive"))

    client = get_client()
    try:
        fields: dict[str, Any] = {}
        for key, value in (
            ("name", name),
            ("domain", domain),
            ("environment_scope", environment_scope),
        ):
            if value is not None:
                fields[key] = value

        k8s: dict[str, Any] = {}
        if api_url is not None:
            k8s["api_url"] = api_url
        if ca_cert_file is not None:
            k8s["ca_cert"] = ca_cert_file.read_text()
        elif clear_ca_cert:
            k8s["ca_cert"] = None
        if k8s:
            fields["platform_kubernetes_attributes"] = k8s

        cluster = client.group_clusters.edit(
            parse_group(group), cluster_id, EditGroupClusterOptions.model_validate(fields)
        )
        _show(ctx, cluster)

    except Exception as e:
        handle_error(e)


@app.command("delete")
def delete(
    group: str = typer.Argument(..., help="Group ID or full path"),
    cluster_id: int = typer.Argument(..., help="Cluster ID"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation",
    ),
) -> None:
    """Remove a cluster from a group."""
    if not force and not typer.confirm(f"Remove cluster {cluster_id} from {group}?"):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(0)

    client = get_client()
    try:
        client.group_clusters.delete(parse_group(group), cluster_id)
        console.print(f"[yellow]Removed cluster:[/yellow] {cluster_id}")

    except Exception as e:
        handle_error(e)
