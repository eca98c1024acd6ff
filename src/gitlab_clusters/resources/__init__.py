"""API resource modules."""

from gitlab_clusters.resources.group_clusters import AsyncGroupClusters, GroupClusters

__all__ = [
    "GroupClusters",
    "AsyncGroupClusters",
]
