"""Group cluster models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from gitlab_clusters.models.common import GitLabModel, OptionsModel


class ProviderType(str, Enum):
    """How the cluster was provisioned."""

    USER = "user"
    GCP = "gcp"
    AWS = "aws"


class PlatformType(str, Enum):
    """Cluster platform."""

    KUBERNETES = "kubernetes"


class ClusterType(str, Enum):
    """Level the cluster is attached at."""

    GROUP = "group_type"
    PROJECT = "project_type"
    INSTANCE = "instance_type"


class AuthorizationType(str, Enum):
    """Kubernetes authorization mode."""

    RBAC = "rbac"
    ABAC = "abac"
    UNKNOWN = "unknown_authorization"


class ClusterUser(GitLabModel):
    """User who added the cluster."""

    id: int
    name: str = ""
    username: str = ""
    state: str = ""
    avatar_url: str | None = None
    web_url: str | None = None


class ClusterGroup(GitLabModel):
    """Group the cluster is attached to."""

    id: int
    name: str = ""
    web_url: str | None = None


class PlatformKubernetes(GitLabModel):
    """Kubernetes connection details of a cluster.

    The token is write-only: GitLab does not echo it back, so it is
    normally None on responses.
    """

    api_url: str = ""
    token: str | None = Field(None, repr=False)
    ca_cert: str | None = None
    authorization_type: str | None = None
    namespace: str | None = None


class GroupCluster(GitLabModel):
    """A Kubernetes cluster attached to a group.

    Type fields are plain strings so that values newer than ProviderType,
    PlatformType, ClusterType and AuthorizationType still parse; the enums
    compare equal to the values they know.
    """

    id: int = Field(..., description="Cluster ID")
    name: str = Field(..., description="Cluster name")
    domain: str | None = Field(None, description="Base domain")
    created_at: datetime | None = Field(None, description="Creation timestamp")
    provider_type: str | None = None
    platform_type: str | None = None
    environment_scope: str = Field("*", description="Environments the cluster serves")
    cluster_type: str | None = None
    enabled: bool | None = None
    managed: bool | None = None
    user: ClusterUser | None = None
    platform_kubernetes: PlatformKubernetes | None = None
    group: ClusterGroup | None = None


class AddPlatformKubernetesOptions(OptionsModel):
    """Kubernetes connection for AddGroupClusterOptions."""

    api_url: str
    token: str = Field(..., repr=False)
    ca_cert: str | None = None
    authorization_type: AuthorizationType | None = None


class AddGroupClusterOptions(OptionsModel):
    """Options for attaching an existing cluster to a group."""

    name: str | None = None
    domain: str | None = None
    enabled: bool | None = None
    managed: bool | None = None
    environment_scope: str | None = None
    management_project_id: int | None = None
    platform_kubernetes_attributes: AddPlatformKubernetesOptions


class EditPlatformKubernetesOptions(OptionsModel):
    """Kubernetes connection fields that can change after creation.

    Set ca_cert to None explicitly to remove the certificate.
    """

    api_url: str | None = None
    ca_cert: str | None = None


class EditGroupClusterOptions(OptionsModel):
    """Options for updating a group cluster. Unset fields are left alone."""

    name: str | None = None
    domain: str | None = None
    environment_scope: str | None = None
    management_project_id: int | None = None
    platform_kubernetes_attributes: EditPlatformKubernetesOptions | None = None
