"""gitlab-clusters exceptions.

All exceptions inherit from GitLabError for easy catching. Whenever a
request reached the server, the raw ``httpx.Response`` is kept on
``error.response`` so callers can inspect status code and headers.
"""

from __future__ import annotations

from typing import Any


class GitLabError(Exception):
    """Base exception for all gitlab-clusters errors."""

    def __init__(self, message: str, *, response: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.response = response

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidIdentifierError(GitLabError):
    """Group or cluster identifier is malformed.

    Raised locally, before any request is sent.
    """


class TransportError(GitLabError):
    """The request could not be completed or its body could not be read."""


class ConnectionError(TransportError):
    """Failed to connect to the GitLab API.

    Check network connectivity and the configured url.
    """


class TimeoutError(TransportError):
    """Request timed out.

    Consider increasing the timeout.
    """


class DecodeError(TransportError):
    """Response body is not valid JSON or does not match the expected shape."""


class HTTPError(GitLabError):
    """The server answered with a status the operation does not accept."""

    @property
    def status_code(self) -> int | None:
        return getattr(self.response, "status_code", None)


class AuthenticationError(HTTPError):
    """Invalid or missing token.

    Check that GITLAB_TOKEN is set or pass private_token to GitLabClient.
    """


class ForbiddenError(HTTPError):
    """Token is valid but lacks permission for this group or cluster."""


class NotFoundError(HTTPError):
    """Resource not found.

    The group does not exist, is not visible to the caller, or the
    cluster does not belong to it.
    """

    def __init__(
        self, message: str, *, resource_type: str = "", resource_id: str = "", response: Any = None
    ) -> None:
        super().__init__(message, response=response)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ValidationError(HTTPError):
    """The server rejected the request payload.

    Check errors for per-field failures.
    """

    def __init__(
        self, message: str, *, errors: list[dict[str, Any]] | None = None, response: Any = None
    ) -> None:
        super().__init__(message, response=response)
        self.errors = errors or []


class ConflictError(HTTPError):
    """The request conflicts with existing state, e.g. a duplicate cluster."""


class RateLimitError(HTTPError):
    """Rate limit exceeded.

    Check retry_after for when to retry.
    """

    def __init__(
        self, message: str, *, retry_after: int | None = None, response: Any = None
    ) -> None:
        super().__init__(message, response=response)
        self.retry_after = retry_after


class ServerError(HTTPError):
    """GitLab returned a 5xx status."""


class UnexpectedStatusError(HTTPError):
    """A successful status other than the one the operation expects."""
