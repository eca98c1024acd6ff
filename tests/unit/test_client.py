"""Tests for GitLabClient."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from gitlab_clusters.auth import JobTokenAuth, OAuthTokenAuth, PrivateTokenAuth
from gitlab_clusters.client import AsyncGitLabClient, GitLabClient
from gitlab_clusters.resources.group_clusters import AsyncGroupClusters, GroupClusters


def test_client_requires_auth() -> None:
    """Test that client raises error without any authentication."""
    with pytest.raises(ValueError) as exc_info:
        GitLabClient(url="https://gitlab.example.com")

    assert "No authentication" in str(exc_info.value)


def test_client_with_private_token(private_token: str, base_url: str) -> None:
    """Test client initialization with an access token."""
    client = GitLabClient(private_token=private_token, url=base_url)

    assert isinstance(client._auth, PrivateTokenAuth)
    assert client._auth.token == private_token
    assert client.url == base_url
    assert isinstance(client.group_clusters, GroupClusters)

    client.close()


def test_client_context_manager(private_token: str, base_url: str) -> None:
    with GitLabClient(private_token=private_token, url=base_url) as client:
        assert isinstance(client._auth, PrivateTokenAuth)


def test_client_repr_hides_token(private_token: str, base_url: str) -> None:
    with GitLabClient(private_token=private_token, url=base_url) as client:
        assert base_url in repr(client)
        assert private_token not in repr(client)


def test_client_oauth_token(base_url: str) -> None:
    with GitLabClient(oauth_token="oauth-1", url=base_url) as client:
        assert isinstance(client._auth, OAuthTokenAuth)


def test_client_explicit_auth_wins(base_url: str) -> None:
    auth = JobTokenAuth(token="job-1")
    with GitLabClient(private_token="ignored", auth=auth, url=base_url) as client:
        assert client._auth is auth


def test_client_default_url() -> None:
    with GitLabClient(private_token="t") as client:
        assert client.url == "https://gitlab.com"
        assert str(client._http._client.base_url).rstrip("/") == "https://gitlab.com/api/v4"


class TestEnvironmentAuth:
    """Auth and settings resolved from environment variables."""

    def test_gitlab_token_env(self) -> None:
        with patch.dict(os.environ, {"GITLAB_TOKEN": "env-token"}):
            client = GitLabClient()

        assert isinstance(client._auth, PrivateTokenAuth)
        assert client._auth.token == "env-token"

    def test_oauth_env(self) -> None:
        with patch.dict(os.environ, {"GITLAB_OAUTH_TOKEN": "env-oauth"}):
            client = GitLabClient()

        assert isinstance(client._auth, OAuthTokenAuth)

    def test_ci_job_token_env(self) -> None:
        with patch.dict(os.environ, {"CI_JOB_TOKEN": "ci-token"}):
            client = GitLabClient()

        assert isinstance(client._auth, JobTokenAuth)
        assert client._auth.token == "ci-token"

    def test_explicit_token_beats_env(self) -> None:
        with patch.dict(os.environ, {"GITLAB_TOKEN": "env-token"}):
            client = GitLabClient(private_token="arg-token")

        assert client._auth.token == "arg-token"

    def test_url_and_timeout_env(self) -> None:
        with patch.dict(
            os.environ,
            {"GITLAB_TOKEN": "t", "GITLAB_URL": "https://git.corp", "GITLAB_TIMEOUT": "5"},
        ):
            client = GitLabClient()

        assert client.url == "https://git.corp"
        assert client._timeout == 5.0


class TestConfigFileAuth:
    """Auth resolved from the config file."""

    def test_private_token_from_config(self, isolated_config: Path) -> None:
        isolated_config.write_text('private_token = "config-token"\nurl = "https://git.corp"\n')

        client = GitLabClient()

        assert isinstance(client._auth, PrivateTokenAuth)
        assert client._auth.token == "config-token"
        assert client.url == "https://git.corp"

    def test_oauth_from_auth_section(self, isolated_config: Path) -> None:
        isolated_config.write_text('[auth]\ntype = "oauth"\ntoken = "config-oauth"\n')

        client = GitLabClient()

        assert isinstance(client._auth, OAuthTokenAuth)
        assert client._auth.token == "config-oauth"

    def test_job_token_from_auth_section(self, isolated_config: Path) -> None:
        isolated_config.write_text('[auth]\ntype = "job_token"\ntoken = "config-job"\n')

        client = GitLabClient()

        assert isinstance(client._auth, JobTokenAuth)

    def test_env_beats_config(self, isolated_config: Path) -> None:
        isolated_config.write_text('private_token = "config-token"\n')

        with patch.dict(os.environ, {"GITLAB_TOKEN": "env-token"}):
            client = GitLabClient()

        assert client._auth.token == "env-token"


def test_async_client(private_token: str, base_url: str) -> None:
    client = AsyncGitLabClient(private_token=private_token, url=base_url)

    assert client.url == base_url
    assert isinstance(client.group_clusters, AsyncGroupClusters)
    assert base_url in repr(client)


def test_async_client_requires_auth() -> None:
    with pytest.raises(ValueError):
        AsyncGitLabClient(url="https://gitlab.example.com")
