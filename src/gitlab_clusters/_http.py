"""HTTP client infrastructure for gitlab-clusters.

Handles:
- Authentication via AuthProvider
- Retries with exponential backoff
- Rate limit handling
- Error mapping
"""

from __future__ import annotations

import contextlib
import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from gitlab_clusters._version import __version__
from gitlab_clusters.exceptions import (
    AuthenticationError,
    ConflictError,
    ConnectionError,
    ForbiddenError,
    HTTPError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TimeoutError,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
)

if TYPE_CHECKING:
    from gitlab_clusters.auth import AuthProvider

logger = logging.getLogger(__name__)

API_PATH = "/api/v4"

# Only retried when the request never reached the server
NON_IDEMPOTENT_METHODS = frozenset({"POST"})

DEFAULT_HEADERS = {
    "User-Agent": f"gitlab-clusters-python/{__version__}",
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def api_base_url(url: str) -> str:
    """Append the REST API prefix to an instance URL unless already present."""
    url = url.rstrip("/")
    if url.endswith(API_PATH):
        return url
    return f"{url}{API_PATH}"


class HttpClient:
    """Synchronous HTTP client for the GitLab REST API."""

    def __init__(
        self,
        base_url: str,
        auth: AuthProvider | None = None,
        timeout: float = 60.0,
        max_retries: int = 3,
        verify_ssl: bool = True,
    ) -> None:
        self._base_url = api_base_url(base_url)
        self._auth = auth
        self._timeout = timeout
        self._max_retries = max_retries

        self._client = httpx.Client(
            base_url=self._base_url,
            headers=DEFAULT_HEADERS.copy(),
            timeout=timeout,
            verify=verify_ssl,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform GET request."""
        return self.request("GET", path, params=params, headers=headers)

    def post(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform POST request."""
        return self.request("POST", path, json=json, headers=headers)

    def put(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform PUT request."""
        return self.request("PUT", path, json=json, headers=headers)

    def delete(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        expected_status: int | None = None,
    ) -> httpx.Response:
        """Perform DELETE request."""
        return self.request("DELETE", path, headers=headers, expected_status=expected_status)

    def _get_auth_headers(self) -> dict[str, str]:
        """Get authentication headers from auth provider."""
        if self._auth is None:
            return {}
        return self._auth.get_headers()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        expected_status: int | None = None,
    ) -> httpx.Response:
        """Perform HTTP request with retries and error handling.

        Args:
            method: HTTP verb.
            path: Path relative to the API base URL.
            params: Query parameters; None values are dropped.
            json: Request body.
            headers: Extra headers for this request only.
            expected_status: Exact status required for success. Any other
                status raises even if it is 2xx.

        Returns:
            The httpx.Response once it passed status checks.
        """
        last_exception: Exception | None = None
        retry_count = 0

        while retry_count <= self._max_retries:
            wait_time = 2**retry_count * 0.1
            try:
                response = self._client.request(
                    method,
                    path,
                    params=_filter_none(params) if params else None,
                    json=json,
                    headers={**self._get_auth_headers(), **(headers or {})},
                )
                logger.debug("%s %s -> %s", method, response.request.url, response.status_code)
                _raise_for_status(response, expected_status)
                return response

            except httpx.TimeoutException as e:
                if method in NON_IDEMPOTENT_METHODS and not isinstance(e, httpx.ConnectTimeout):
                    raise TimeoutError(f"Request timed out: {e}") from e
                last_exception = TimeoutError(f"Request timed out: {e}")
                last_exception.__cause__ = e

            except httpx.ConnectError as e:
                last_exception = ConnectionError(f"Failed to connect: {e}")
                last_exception.__cause__ = e

            except httpx.TransportError as e:
                raise TransportError(f"Transport failure: {e}") from e

            except RateLimitError as e:
                wait_time = e.retry_after or (2**retry_count)
                last_exception = e

            except ServerError as e:
                if method in NON_IDEMPOTENT_METHODS:
                    raise
                last_exception = e

            retry_count += 1
            if retry_count <= self._max_retries:
                logger.warning(
                    "%s %s failed (%s), retrying in %.1fs (%d/%d)",
                    method,
                    path,
                    last_exception,
                    wait_time,
                    retry_count,
                    self._max_retries,
                )
                time.sleep(wait_time)

        if last_exception:
            raise last_exception
        raise TransportError("Request failed after retries")


class AsyncHttpClient:
    """Asynchronous HTTP client for the GitLab REST API."""

    def __init__(
        self,
        base_url: str,
        auth: AuthProvider | None = None,
        timeout: float = 60.0,
        max_retries: int = 3,
        verify_ssl: bool = True,
    ) -> None:
        self._base_url = api_base_url(base_url)
        self._auth = auth
        self._timeout = timeout
        self._max_retries = max_retries

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=DEFAULT_HEADERS.copy(),
            timeout=timeout,
            verify=verify_ssl,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform GET request."""
        return await self.request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform POST request."""
        return await self.request("POST", path, json=json, headers=headers)

    async def put(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform PUT request."""
        return await self.request("PUT", path, json=json, headers=headers)

    async def delete(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        expected_status: int | None = None,
    ) -> httpx.Response:
        """Perform DELETE request."""
        return await self.request(
            "DELETE", path, headers=headers, expected_status=expected_status
        )

    def _get_auth_headers(self) -> dict[str, str]:
        if self._auth is None:
            return {}
        return self._auth.get_headers()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        expected_status: int | None = None,
    ) -> httpx.Response:
        """Perform HTTP request with retries and error handling."""
        import anyio

        last_exception: Exception | None = None
        retry_count = 0

        while retry_count <= self._max_retries:
            wait_time = 2**retry_count * 0.1
            try:
                response = await self._client.request(
                    method,
                    path,
                    params=_filter_none(params) if params else None,
                    json=json,
                    headers={**self._get_auth_headers(), **(headers or {})},
                )
                logger.debug("%s %s -> %s", method, response.request.url, response.status_code)
                _raise_for_status(response, expected_status)
                return response

            except httpx.TimeoutException as e:
                if method in NON_IDEMPOTENT_METHODS and not isinstance(e, httpx.ConnectTimeout):
                    raise TimeoutError(f"Request timed out: {e}") from e
                last_exception = TimeoutError(f"Request timed out: {e}")
                last_exception.__cause__ = e

            except httpx.ConnectError as e:
                last_exception = ConnectionError(f"Failed to connect: {e}")
                last_exception.__cause__ = e

            except httpx.TransportError as e:
                raise TransportError(f"Transport failure: {e}") from e

            except RateLimitError as e:
                wait_time = e.retry_after or (2**retry_count)
                last_exception = e

            except ServerError as e:
                if method in NON_IDEMPOTENT_METHODS:
                    raise
                last_exception = e

            retry_count += 1
            if retry_count <= self._max_retries:
                logger.warning(
                    "%s %s failed (%s), retrying in %.1fs (%d/%d)",
                    method,
                    path,
                    last_exception,
                    wait_time,
                    retry_count,
                    self._max_retries,
                )
                await anyio.sleep(wait_time)

        if last_exception:
            raise last_exception
        raise TransportError("Request failed after retries")


def _raise_for_status(response: httpx.Response, expected_status: int | None = None) -> None:
    """Map a response status to the matching exception."""
    if response.is_success:
        if expected_status is not None and response.status_code != expected_status:
            raise UnexpectedStatusError(
                f"Expected HTTP {expected_status}, got {response.status_code}",
                response=response,
            )
        return

    try:
        data = response.json()
    except ValueError:
        data = None

    message = _extract_error_message(data, response)
    status = response.status_code

    if status == 401:
        raise AuthenticationError(message, response=response)

    if status == 403:
        raise ForbiddenError(message, response=response)

    if status == 404:
        raise NotFoundError(message, response=response)

    if status == 409:
        raise ConflictError(message, response=response)

    if status in (400, 422):
        raise ValidationError(message, errors=_extract_field_errors(data), response=response)

    if status == 429:
        retry_after = response.headers.get("Retry-After")
        retry_after_int: int | None = None
        if retry_after:
            with contextlib.suppress(ValueError):
                retry_after_int = int(retry_after)
        raise RateLimitError(message, retry_after=retry_after_int, response=response)

    if status >= 500:
        raise ServerError(f"Server error: {message}", response=response)

    raise HTTPError(message, response=response)


def _extract_error_message(data: Any, response: httpx.Response) -> str:
    """Extract error message from a GitLab error body.

    GitLab answers with ``{"message": "..."}``, ``{"message": {field: [..]}}``
    or OAuth style ``{"error": "...", "error_description": "..."}``.
    """
    if isinstance(data, dict):
        if "message" in data:
            msg = data["message"]
            if isinstance(msg, str):
                return msg
            if isinstance(msg, dict):
                return "; ".join(
                    f"{key} {', '.join(map(str, val)) if isinstance(val, list) else val}"
                    for key, val in msg.items()
                )
            return str(msg)
        if "error" in data:
            error = data["error"]
            description = data.get("error_description")
            if description:
                return f"{error}: {description}"
            return str(error)

    return f"HTTP {response.status_code}: {response.reason_phrase}"


def _extract_field_errors(data: Any) -> list[dict[str, Any]]:
    """Collect per-field validation messages from a GitLab 400 body."""
    if not isinstance(data, dict):
        return []
    msg = data.get("message")
    if isinstance(msg, dict):
        return [
            {"field": key, "messages": val if isinstance(val, list) else [val]}
            for key, val in msg.items()
        ]
    return []


def _filter_none(params: dict[str, Any]) -> dict[str, Any]:
    """Remove None values from params dict."""
    return {k: v for k, v in params.items() if v is not None}
