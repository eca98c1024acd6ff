"""Pydantic models for gitlab-clusters."""

from gitlab_clusters.models.cluster import (
    AddGroupClusterOptions,
    AddPlatformKubernetesOptions,
    AuthorizationType,
    ClusterGroup,
    ClusterType,
    ClusterUser,
    EditGroupClusterOptions,
    EditPlatformKubernetesOptions,
    GroupCluster,
    PlatformKubernetes,
    PlatformType,
    ProviderType,
)
from gitlab_clusters.models.common import GitLabModel, OptionsModel

__all__ = [
    # Common
    "GitLabModel",
    "OptionsModel",
    # Cluster
    "GroupCluster",
    "ClusterUser",
    "ClusterGroup",
    "PlatformKubernetes",
    "ProviderType",
    "PlatformType",
    "ClusterType",
    "AuthorizationType",
    # Options
    "AddGroupClusterOptions",
    "AddPlatformKubernetesOptions",
    "EditGroupClusterOptions",
    "EditPlatformKubernetesOptions",
]
