"""Base resource classes and response parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import pydantic

from gitlab_clusters.exceptions import DecodeError

if TYPE_CHECKING:
    import httpx

    from gitlab_clusters._http import AsyncHttpClient, HttpClient

T = TypeVar("T")


class SyncResource:
    """Base class for synchronous API resources."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http


class AsyncResource:
    """Base class for asynchronous API resources."""

    def __init__(self, http: AsyncHttpClient) -> None:
        self._http = http


def sudo_headers(sudo: str | int | None) -> dict[str, str] | None:
    """Build the Sudo header used by administrators to act as another user."""
    if sudo is None:
        return None
    return {"Sudo": str(sudo)}


def parse_response(response: httpx.Response, type_: type[T] | Any) -> T:
    """Decode a JSON body and validate it into ``type_``.

    Raises:
        DecodeError: If the body is not JSON or does not fit ``type_``.
    """
    try:
        data = response.json()
    except ValueError as e:
        raise DecodeError(f"Invalid JSON in response: {e}", response=response) from e

    try:
        return pydantic.TypeAdapter(type_).validate_python(data)
    except pydantic.ValidationError as e:
        raise DecodeError(f"Unexpected response shape: {e}", response=response) from e
