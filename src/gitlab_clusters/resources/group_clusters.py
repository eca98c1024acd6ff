"""Group clusters resource for gitlab-clusters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gitlab_clusters._identifiers import GroupID, resolve_cluster_id, resolve_group_id
from gitlab_clusters.models.cluster import (
    AddGroupClusterOptions,
    EditGroupClusterOptions,
    GroupCluster,
)
from gitlab_clusters.resources._base import (
    AsyncResource,
    SyncResource,
    parse_response,
    sudo_headers,
)

if TYPE_CHECKING:
    import httpx

    from gitlab_clusters._http import AsyncHttpClient, HttpClient

logger = logging.getLogger(__name__)

# GitLab answers a successful cluster removal with 202 Accepted
DELETE_STATUS = 202


def _clusters_path(gid: GroupID) -> str:
    return f"/groups/{resolve_group_id(gid)}/clusters"


def _cluster_path(gid: GroupID, cluster_id: int) -> str:
    return f"{_clusters_path(gid)}/{resolve_cluster_id(cluster_id)}"


def _add_payload(options: AddGroupClusterOptions | dict[str, Any]) -> dict[str, Any]:
    if not isinstance(options, AddGroupClusterOptions):
        options = AddGroupClusterOptions.model_validate(options)
    return options.to_payload()


def _edit_payload(options: EditGroupClusterOptions | dict[str, Any] | None) -> dict[str, Any]:
    if options is None:
        return {}
    if not isinstance(options, EditGroupClusterOptions):
        options = EditGroupClusterOptions.model_validate(options)
    return options.to_payload()


class GroupClusters(SyncResource):
    """Kubernetes clusters attached to a group.

    Groups are addressed either by numeric id or by full path; paths are
    escaped automatically.

    Example:
        ```python
        from gitlab_clusters import GitLabClient
        from gitlab_clusters.models import AddGroupClusterOptions

        client = GitLabClient(private_token="glpat-...")

        for cluster in client.group_clusters.list("my-org/platform"):
            print(f"{cluster.id}: {cluster.name} ({cluster.environment_scope})")

        cluster = client.group_clusters.add(
            "my-org/platform",
            AddGroupClusterOptions(
                name="staging",
                platform_kubernetes_attributes={
                    "api_url": "https://10.0.0.1",
                    "token": "k8s-token",
                },
            ),
        )

        client.group_clusters.edit("my-org/platform", cluster.id, {"domain": "example.com"})
        client.group_clusters.delete("my-org/platform", cluster.id)
        ```
    """

    def __init__(self, http: HttpClient) -> None:
        """Initialize group clusters resource.

        Args:
            http: HTTP client instance.
        """
        super().__init__(http)

    def list(self, gid: GroupID, *, sudo: str | int | None = None) -> list[GroupCluster]:
        """List all clusters of a group.

        Args:
            gid: Group id or full path.
            sudo: Username or id to impersonate (administrators only).

        Returns:
            Clusters in the order the server returned them. Empty if the
            group has none.
        """
        response = self._http.get(_clusters_path(gid), headers=sudo_headers(sudo))
        return parse_response(response, list[GroupCluster])

    def get(
        self, gid: GroupID, cluster_id: int, *, sudo: str | int | None = None
    ) -> GroupCluster:
        """Get a single group cluster.

        Args:
            gid: Group id or full path.
            cluster_id: The cluster ID.
            sudo: Username or id to impersonate.

        Returns:
            Cluster details.

        Raises:
            NotFoundError: If the cluster does not belong to the group.
        """
        response = self._http.get(_cluster_path(gid, cluster_id), headers=sudo_headers(sudo))
        return parse_response(response, GroupCluster)

    def add(
        self,
        gid: GroupID,
        options: AddGroupClusterOptions | dict[str, Any],
        *,
        sudo: str | int | None = None,
    ) -> GroupCluster:
        """Attach an existing Kubernetes cluster to a group.

        The access token is sent but never returned; do not expect it on
        the result.

        Args:
            gid: Group id or full path.
            options: Cluster attributes. Dicts are validated into
                AddGroupClusterOptions first.
            sudo: Username or id to impersonate.

        Returns:
            The attached cluster.

        Raises:
            ValidationError: If the server rejects the payload.
        """
        path = f"{_clusters_path(gid)}/user"
        payload = _add_payload(options)
        response = self._http.post(path, json=payload, headers=sudo_headers(sudo))
        cluster = parse_response(response, GroupCluster)
        logger.info("Added cluster %s to group %s", cluster.id, gid)
        return cluster

    def edit(
        self,
        gid: GroupID,
        cluster_id: int,
        options: EditGroupClusterOptions | dict[str, Any] | None = None,
        *,
        sudo: str | int | None = None,
    ) -> GroupCluster:
        """Update a group cluster.

        Only fields set on options are sent; the server keeps the rest.

        Args:
            gid: Group id or full path.
            cluster_id: The cluster ID.
            options: Fields to change.
            sudo: Username or id to impersonate.

        Returns:
            Updated cluster.
        """
        response = self._http.put(
            _cluster_path(gid, cluster_id),
            json=_edit_payload(options),
            headers=sudo_headers(sudo),
        )
        return parse_response(response, GroupCluster)

    def delete(
        self, gid: GroupID, cluster_id: int, *, sudo: str | int | None = None
    ) -> httpx.Response:
        """Remove a cluster from a group.

        Args:
            gid: Group id or full path.
            cluster_id: The cluster ID to delete.
            sudo: Username or id to impersonate.

        Returns:
            The raw response (status 202).

        Raises:
            UnexpectedStatusError: If the server answers with any other
                success status.
        """
        response = self._http.delete(
            _cluster_path(gid, cluster_id),
            headers=sudo_headers(sudo),
            expected_status=DELETE_STATUS,
        )
        logger.info("Deleted cluster %s from group %s", cluster_id, gid)
        return response


class AsyncGroupClusters(AsyncResource):
    """Async Kubernetes clusters attached to a group."""

    def __init__(self, http: AsyncHttpClient) -> None:
        super().__init__(http)

    async def list(self, gid: GroupID, *, sudo: str | int | None = None) -> list[GroupCluster]:
        """List all clusters of a group."""
        response = await self._http.get(_clusters_path(gid), headers=sudo_headers(sudo))
        return parse_response(response, list[GroupCluster])

    async def get(
        self, gid: GroupID, cluster_id: int, *, sudo: str | int | None = None
    ) -> GroupCluster:
        """Get a single group cluster."""
        response = await self._http.get(
            _cluster_path(gid, cluster_id), headers=sudo_headers(sudo)
        )
        return parse_response(response, GroupCluster)

    async def add(
        self,
        gid: GroupID,
        options: AddGroupClusterOptions | dict[str, Any],
        *,
        sudo: str | int | None = None,
    ) -> GroupCluster:
        """Attach an existing Kubernetes cluster to a group."""
        path = f"{_clusters_path(gid)}/user"
        payload = _add_payload(options)
        response = await self._http.post(path, json=payload, headers=sudo_headers(sudo))
        cluster = parse_response(response, GroupCluster)
        logger.info("Added cluster %s to group %s", cluster.id, gid)
        return cluster

    async def edit(
        self,
        gid: GroupID,
        cluster_id: int,
        options: EditGroupClusterOptions | dict[str, Any] | None = None,
        *,
        sudo: str | int | None = None,
    ) -> GroupCluster:
        """Update a group cluster."""
        response = await self._http.put(
            _cluster_path(gid, cluster_id),
            json=_edit_payload(options),
            headers=sudo_headers(sudo),
        )
        return parse_response(response, GroupCluster)

    async def delete(
        self, gid: GroupID, cluster_id: int, *, sudo: str | int | None = None
    ) -> httpx.Response:
        """Remove a cluster from a group."""
        response = await self._http.delete(
            _cluster_path(gid, cluster_id),
            headers=sudo_headers(sudo),
            expected_status=DELETE_STATUS,
        )
        logger.info("Deleted cluster %s from group %s", cluster_id, gid)
        return response
