"""
gitlab-clusters - Python client for GitLab group cluster management.

List, inspect, attach, update and remove the Kubernetes clusters of a group.
"""

from gitlab_clusters._identifiers import GroupID, resolve_group_id
from gitlab_clusters._version import __version__
from gitlab_clusters.client import AsyncGitLabClient, GitLabClient
from gitlab_clusters.exceptions import (
    AuthenticationError,
    ConflictError,
    ConnectionError,
    DecodeError,
    ForbiddenError,
    GitLabError,
    HTTPError,
    InvalidIdentifierError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TimeoutError,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
)
from gitlab_clusters.models.cluster import (
    AddGroupClusterOptions,
    AddPlatformKubernetesOptions,
    EditGroupClusterOptions,
    EditPlatformKubernetesOptions,
    GroupCluster,
)

__all__ = [
    # Version
    "__version__",
    # Clients
    "GitLabClient",
    "AsyncGitLabClient",
    # Identifiers
    "GroupID",
    "resolve_group_id",
    # Models
    "GroupCluster",
    "AddGroupClusterOptions",
    "AddPlatformKubernetesOptions",
    "EditGroupClusterOptions",
    "EditPlatformKubernetesOptions",
    # Exceptions
    "GitLabError",
    "InvalidIdentifierError",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "DecodeError",
    "HTTPError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "UnexpectedStatusError",
]
