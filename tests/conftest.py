"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generator

import pytest
import respx

from gitlab_clusters.client import GitLabClient

CA_CERT = (
    "-----BEGIN CERTIFICATE-----\r\nhFiK1L61owwDQYJKoZIhvcNAQELBQAw\r\n"
    "LzEtMCsGA1UEAxMkZDA1YzQ1YjctNzdiMS00NDY0LThjNmEtMTQ0ZDJkZjM4ZDBj\r\n"
    "-----END CERTIFICATE-----"
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's config file and GitLab env vars out of tests."""
    config_file = tmp_path / "config.toml"
    monkeypatch.setattr("gitlab_clusters._config.CONFIG_FILE", config_file)
    for var in (
        "GITLAB_URL",
        "GITLAB_TOKEN",
        "GITLAB_OAUTH_TOKEN",
        "CI_JOB_TOKEN",
        "GITLAB_TIMEOUT",
        "GITLAB_MAX_RETRIES",
        "GITLAB_VERIFY_SSL",
        "GITLAB_DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)
    return config_file


@pytest.fixture
def private_token() -> str:
    """Test access token."""
    return "glpat-test-token-12345"


@pytest.fixture
def base_url() -> str:
    """Test GitLab instance URL."""
    return "https://gitlab.test"


@pytest.fixture
def api_url(base_url: str) -> str:
    """REST API root of the test instance."""
    return f"{base_url}/api/v4"


@pytest.fixture
def mock_api(api_url: str) -> Generator[respx.MockRouter, None, None]:
    """Mock API router."""
    with respx.mock(base_url=api_url, assert_all_called=False) as router:
        yield router


@pytest.fixture
def client(private_token: str, base_url: str) -> Generator[GitLabClient, None, None]:
    """Create a test GitLabClient."""
    c = GitLabClient(private_token=private_token, url=base_url, max_retries=0)
    yield c
    c.close()


@pytest.fixture
def sample_user() -> dict[str, Any]:
    """User embedded in cluster responses."""
    return {
        "id": 1,
        "name": "Administrator",
        "username": "root",
        "state": "active",
        "avatar_url": "https://www.gravatar.com/avatar/4249f4df72b..",
        "web_url": "https://gitlab.example.com/root",
    }


@pytest.fixture
def sample_group() -> dict[str, Any]:
    """Group embedded in cluster responses."""
    return {
        "id": 26,
        "name": "group-with-clusters-api",
        "web_url": "https://gitlab.example.com/group-with-clusters-api",
    }


@pytest.fixture
def sample_cluster(sample_user: dict[str, Any], sample_group: dict[str, Any]) -> dict[str, Any]:
    """Single group cluster response."""
    return {
        "id": 18,
        "name": "cluster-1",
        "domain": "example.com",
        "created_at": "2019-01-02T20:18:12.563Z",
        "provider_type": "user",
        "platform_type": "kubernetes",
        "environment_scope": "*",
        "cluster_type": "group_type",
        "user": sample_user,
        "platform_kubernetes": {
            "api_url": "https://104.197.68.152",
            "authorization_type": "rbac",
            "ca_cert": CA_CERT,
        },
        "group": sample_group,
    }


@pytest.fixture
def sample_cluster_list(sample_cluster: dict[str, Any]) -> list[dict[str, Any]]:
    """List response; group is not included on list entries."""
    entry = {k: v for k, v in sample_cluster.items() if k != "group"}
    return [entry]


@pytest.fixture
def added_cluster(sample_user: dict[str, Any], sample_group: dict[str, Any]) -> dict[str, Any]:
    """Response to attaching a cluster."""
    return {
        "id": 24,
        "name": "cluster-5",
        "created_at": "2019-01-03T21:53:40.610Z",
        "provider_type": "user",
        "platform_type": "kubernetes",
        "environment_scope": "*",
        "cluster_type": "group_type",
        "user": sample_user,
        "platform_kubernetes": {
            "api_url": "https://35.111.51.20",
            "authorization_type": "rbac",
            "ca_cert": CA_CERT,
        },
        "group": sample_group,
    }


@pytest.fixture
def edited_cluster(sample_user: dict[str, Any], sample_group: dict[str, Any]) -> dict[str, Any]:
    """Response to editing a cluster: new name and domain, CA cert removed."""
    return {
        "id": 24,
        "name": "new-cluster-name",
        "domain": "new-domain.com",
        "created_at": "2019-01-03T21:53:40.610Z",
        "provider_type": "user",
        "platform_type": "kubernetes",
        "environment_scope": "*",
        "cluster_type": "group_type",
        "user": sample_user,
        "platform_kubernetes": {
            "api_url": "https://new-api-url.com",
            "authorization_type": "rbac",
            "ca_cert": None,
        },
        "group": sample_group,
    }
