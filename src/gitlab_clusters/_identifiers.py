"""Group and cluster identifier handling.

GitLab accepts a group either by numeric id or by its full path
(``parent/child``). Both address the same resource, but only the path
form must be percent-escaped when placed in a URL.
"""

from __future__ import annotations

from typing import Union
from urllib.parse import quote

from gitlab_clusters.exceptions import InvalidIdentifierError

GroupID = Union[int, str]


def resolve_group_id(gid: GroupID) -> str:
    """Turn a group id or path into a URL path segment.

    Args:
        gid: Numeric group id or full group path.

    Returns:
        The id verbatim, or the path with every reserved character escaped.

    Raises:
        InvalidIdentifierError: If gid is neither an int nor a non-empty string.
    """
    # bool is an int subclass but never a valid id
    if isinstance(gid, bool):
        raise InvalidIdentifierError(f"invalid group id: {gid!r}")
    if isinstance(gid, int):
        return str(gid)
    if isinstance(gid, str):
        if not gid.strip():
            raise InvalidIdentifierError("group id must not be empty")
        return quote(gid, safe="")
    raise InvalidIdentifierError(
        f"invalid group id type {type(gid).__name__}, expected int or str"
    )


def resolve_cluster_id(cluster_id: int | str) -> str:
    """Validate a cluster id and return it as a path segment."""
    if isinstance(cluster_id, bool):
        raise InvalidIdentifierError(f"invalid cluster id: {cluster_id!r}")
    if isinstance(cluster_id, int):
        if cluster_id < 0:
            raise InvalidIdentifierError(f"invalid cluster id: {cluster_id}")
        return str(cluster_id)
    if isinstance(cluster_id, str) and cluster_id.isascii() and cluster_id.isdigit():
        return cluster_id
    raise InvalidIdentifierError(f"invalid cluster id: {cluster_id!r}")
