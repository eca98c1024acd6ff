"""gitlab-clusters client.

Main entry point for interacting with the GitLab API.
"""

from __future__ import annotations

import os
from typing import Any

from gitlab_clusters._config import GitLabConfig
from gitlab_clusters._http import AsyncHttpClient, HttpClient
from gitlab_clusters.auth import AuthProvider, JobTokenAuth, OAuthTokenAuth, PrivateTokenAuth
from gitlab_clusters.resources.group_clusters import AsyncGroupClusters, GroupClusters


def resolve_auth(
    private_token: str | None = None,
    oauth_token: str | None = None,
    job_token: str | None = None,
    auth: AuthProvider | None = None,
    config: GitLabConfig | None = None,
) -> AuthProvider:
    """Resolve authentication provider from parameters, environment, and config.

    Priority order:
    1. Explicit auth provider
    2. Explicit private_token
    3. Explicit oauth_token
    4. Explicit job_token
    5. GITLAB_TOKEN env var
    6. GITLAB_OAUTH_TOKEN env var
    7. CI_JOB_TOKEN env var
    8. Config file (private_token or [auth] section)

    Returns:
        Resolved AuthProvider instance.

    Raises:
        ValueError: If no authentication credentials are provided.
    """
    if auth is not None:
        return auth

    if private_token:
        return PrivateTokenAuth(token=private_token)
    if oauth_token:
        return OAuthTokenAuth(token=oauth_token)
    if job_token:
        return JobTokenAuth(token=job_token)

    env_token = os.environ.get("GITLAB_TOKEN")
    if env_token:
        return PrivateTokenAuth(token=env_token)

    env_oauth = os.environ.get("GITLAB_OAUTH_TOKEN")
    if env_oauth:
        return OAuthTokenAuth(token=env_oauth)

    env_job = os.environ.get("CI_JOB_TOKEN")
    if env_job:
        return JobTokenAuth(token=env_job)

    if config:
        if config.private_token:
            return PrivateTokenAuth(token=config.private_token)

        auth_cfg = config.auth
        if auth_cfg.token:
            if auth_cfg.type == "oauth":
                return OAuthTokenAuth(token=auth_cfg.token)
            if auth_cfg.type == "job_token":
                return JobTokenAuth(token=auth_cfg.token)
            if auth_cfg.type in (None, "private_token"):
                return PrivateTokenAuth(token=auth_cfg.token)

    raise ValueError(
        "No authentication credentials provided. "
        "Provide one of: private_token, oauth_token, job_token, or auth provider. "
        "Or set environment variables: GITLAB_TOKEN, GITLAB_OAUTH_TOKEN, or CI_JOB_TOKEN."
    )


class GitLabClient:
    """Synchronous client for the GitLab cluster API.

    Example:
        ```python
        from gitlab_clusters import GitLabClient

        client = GitLabClient(private_token="glpat-...", url="https://gitlab.example.com")

        clusters = client.group_clusters.list(1234)
        cluster = client.group_clusters.get("my-org/platform", 18)
        ```

    Environment variables:
        GITLAB_URL: Instance URL (default: https://gitlab.com)
        GITLAB_TOKEN: Personal/group/project access token
        GITLAB_OAUTH_TOKEN: OAuth2 token
        CI_JOB_TOKEN: CI/CD job token
        GITLAB_TIMEOUT: Request timeout in seconds (default: 60)
        GITLAB_MAX_RETRIES: Max retries (default: 3)
        GITLAB_VERIFY_SSL: Verify TLS certificates (default: true)
    """

    def __init__(
        self,
        private_token: str | None = None,
        *,
        oauth_token: str | None = None,
        job_token: str | None = None,
        auth: AuthProvider | None = None,
        url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        verify_ssl: bool | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            private_token: Access token sent as PRIVATE-TOKEN.
            oauth_token: OAuth2 token sent as a Bearer token.
            job_token: CI/CD job token.
            auth: Explicit AuthProvider instance to use.
            url: GitLab instance URL; /api/v4 is appended.
            timeout: Request timeout in seconds.
            max_retries: Maximum number of retries for failed requests.
            verify_ssl: Whether to verify SSL certificates.
        """
        config = GitLabConfig.load()

        self._url = url or config.base_url
        self._timeout = timeout if timeout is not None else config.timeout
        self._max_retries = max_retries if max_retries is not None else config.max_retries
        self._verify_ssl = verify_ssl if verify_ssl is not None else config.verify_ssl

        self._auth = resolve_auth(
            private_token=private_token,
            oauth_token=oauth_token,
            job_token=job_token,
            auth=auth,
            config=config,
        )

        self._http = HttpClient(
            base_url=self._url,
            auth=self._auth,
            timeout=self._timeout,
            max_retries=self._max_retries,
            verify_ssl=self._verify_ssl,
        )

        self.group_clusters = GroupClusters(self._http)

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    def __enter__(self) -> GitLabClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"GitLabClient(url={self._url!r})"

    @property
    def url(self) -> str:
        return self._url


class AsyncGitLabClient:
    """Asynchronous client for the GitLab cluster API.

    Example:
        ```python
        import asyncio
        from gitlab_clusters import AsyncGitLabClient

        async def main():
            async with AsyncGitLabClient(private_token="glpat-...") as client:
                clusters = await client.group_clusters.list("my-org/platform")

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        private_token: str | None = None,
        *,
        oauth_token: str | None = None,
        job_token: str | None = None,
        auth: AuthProvider | None = None,
        url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        verify_ssl: bool | None = None,
    ) -> None:
        config = GitLabConfig.load()

        self._url = url or config.base_url
        self._timeout = timeout if timeout is not None else config.timeout
        self._max_retries = max_retries if max_retries is not None else config.max_retries
        self._verify_ssl = verify_ssl if verify_ssl is not None else config.verify_ssl

        self._auth = resolve_auth(
            private_token=private_token,
            oauth_token=oauth_token,
            job_token=job_token,
            auth=auth,
            config=config,
        )

        self._http = AsyncHttpClient(
            base_url=self._url,
            auth=self._auth,
            timeout=self._timeout,
            max_retries=self._max_retries,
            verify_ssl=self._verify_ssl,
        )

        self.group_clusters = AsyncGroupClusters(self._http)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    async def __aenter__(self) -> AsyncGitLabClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"AsyncGitLabClient(url={self._url!r})"

    @property
    def url(self) -> str:
        return self._url
