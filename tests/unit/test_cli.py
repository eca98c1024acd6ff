"""Tests for the gitlab-clusters CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import respx
from httpx import Response
from typer.testing import CliRunner

from gitlab_clusters._config import get_config_value
from gitlab_clusters._version import __version__
from gitlab_clusters.cli.main import app

runner = CliRunner()

BASE_URL = "https://gitlab.test"
API = f"{BASE_URL}/api/v4"


@pytest.fixture
def cli_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the CLI at the mocked instance."""
    monkeypatch.setenv("GITLAB_TOKEN", "glpat-cli-token")
    monkeypatch.setenv("GITLAB_URL", BASE_URL)
    monkeypatch.setenv("GITLAB_MAX_RETRIES", "0")


def test_version() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_credentials() -> None:
    result = runner.invoke(app, ["clusters", "list", "1234"])

    assert result.exit_code == 1


@pytest.mark.usefixtures("cli_env")
class TestClustersCommands:
    """Test clusters sub-commands against a mocked API."""

    @respx.mock
    def test_list_table(self, sample_cluster_list: list[dict[str, Any]]) -> None:
        route = respx.get(f"{API}/groups/1234/clusters").mock(
            return_value=Response(200, json=sample_cluster_list)
        )

        result = runner.invoke(app, ["clusters", "list", "1234"])

        assert result.exit_code == 0
        assert "cluster-1" in result.output
        assert route.calls.last.request.headers["PRIVATE-TOKEN"] == "glpat-cli-token"

    @respx.mock
    def test_list_json(self, sample_cluster_list: list[dict[str, Any]]) -> None:
        respx.get(f"{API}/groups/1234/clusters").mock(
            return_value=Response(200, json=sample_cluster_list)
        )

        result = runner.invoke(app, ["--json", "clusters", "list", "1234"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [c["id"] for c in data] == [18]

    @respx.mock
    def test_list_empty(self) -> None:
        respx.get(f"{API}/groups/1234/clusters").mock(return_value=Response(200, json=[]))

        result = runner.invoke(app, ["clusters", "list", "1234"])

        assert result.exit_code == 0
        assert "No clusters found" in result.output

    @respx.mock
    def test_list_by_path(self, sample_cluster_list: list[dict[str, Any]]) -> None:
        route = respx.get(url__startswith=f"{API}/groups/").mock(
            return_value=Response(200, json=sample_cluster_list)
        )

        result = runner.invoke(app, ["clusters", "list", "my-org/platform"])

        assert result.exit_code == 0
        assert route.calls.last.request.url.raw_path == b"/api/v4/groups/my-org%2Fplatform/clusters"

    @respx.mock
    def test_get(self, sample_cluster: dict[str, Any]) -> None:
        respx.get(f"{API}/groups/1234/clusters/18").mock(
            return_value=Response(200, json=sample_cluster)
        )

        result = runner.invoke(app, ["clusters", "get", "1234", "18"])

        assert result.exit_code == 0
        assert "cluster-1" in result.output
        assert "example.com" in result.output

    @respx.mock
    def test_get_not_found(self) -> None:
        respx.get(f"{API}/groups/1234/clusters/99").mock(
            return_value=Response(404, json={"message": "404 Cluster Not Found"})
        )

        result = runner.invoke(app, ["clusters", "get", "1234", "99"])

        assert result.exit_code == 1

    @respx.mock
    def test_add(self, added_cluster: dict[str, Any], tmp_path: Path) -> None:
        ca_file = tmp_path / "ca.pem"
        ca_file.write_text("-----BEGIN CERTIFICATE-----")
        route = respx.post(f"{API}/groups/1234/clusters/user").mock(
            return_value=Response(201, json=added_cluster)
        )

        result = runner.invoke(
            app,
            [
                "clusters",
                "add",
                "1234",
                "--name",
                "cluster-5",
                "--api-url",
                "https://35.111.51.20",
                "--token",
                "kube-token",
                "--ca-cert-file",
                str(ca_file),
                "--unmanaged",
            ],
        )

        assert result.exit_code == 0
        assert "24" in result.output
        assert json.loads(route.calls.last.request.content) == {
            "name": "cluster-5",
            "managed": False,
            "platform_kubernetes_attributes": {
                "api_url": "https://35.111.51.20",
                "token": "kube-token",
                "ca_cert": "-----BEGIN CERTIFICATE-----",
            },
        }

    @respx.mock
    def test_edit_clear_ca_cert(self, edited_cluster: dict[str, Any]) -> None:
        route = respx.put(f"{API}/groups/1234/clusters/24").mock(
            return_value=Response(200, json=edited_cluster)
        )

        result = runner.invoke(
            app,
            ["clusters", "edit", "1234", "24", "--name", "new-cluster-name", "--clear-ca-cert"],
        )

        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content) == {
            "name": "new-cluster-name",
            "platform_kubernetes_attributes": {"ca_cert": None},
        }

    def test_edit_conflicting_ca_options(self, tmp_path: Path) -> None:
        ca_file = tmp_path / "ca.pem"
        ca_file.write_text("pem")

        result = runner.invoke(
            app,
            ["clusters", "edit", "1234", "24", "--ca-cert-file", str(ca_file), "--clear-ca-cert"],
        )

        assert result.exit_code == 1

    @respx.mock
    def test_delete_force(self) -> None:
        route = respx.delete(f"{API}/groups/1234/clusters/24").mock(return_value=Response(202))

        result = runner.invoke(app, ["clusters", "delete", "1234", "24", "--force"])

        assert result.exit_code == 0
        assert route.called

    @respx.mock(assert_all_called=False)
    def test_delete_declined(self) -> None:
        route = respx.delete(f"{API}/groups/1234/clusters/24").mock(return_value=Response(202))

        result = runner.invoke(app, ["clusters", "delete", "1234", "24"], input="n\n")

        assert result.exit_code == 0
        assert not route.called

    @respx.mock
    def test_delete_unexpected_status(self) -> None:
        respx.delete(f"{API}/groups/1234/clusters/24").mock(return_value=Response(204))

        result = runner.invoke(app, ["clusters", "delete", "1234", "24", "--force"])

        assert result.exit_code == 1


class TestConfigCommands:
    """Test config sub-commands."""

    def test_set_and_get(self) -> None:
        result = runner.invoke(app, ["config", "set", "url", "https://git.corp"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["config", "get", "url"])
        assert result.exit_code == 0
        assert "https://git.corp" in result.output

    def test_set_typed_value(self) -> None:
        runner.invoke(app, ["config", "set", "max_retries", "5"])

        assert get_config_value("max_retries") == 5

    def test_token_is_masked(self) -> None:
        token = "glpat-abcdefghijklmnop"

        result = runner.invoke(app, ["config", "set", "private_token", token])
        assert token not in result.output

        result = runner.invoke(app, ["config", "list"])
        assert result.exit_code == 0
        assert token not in result.output
        assert "glpat-ab" in result.output

    def test_auth_token_is_masked(self) -> None:
        token = "oauth-abcdefghijklmnop"
        runner.invoke(app, ["config", "set", "auth.type", "oauth"])

        result = runner.invoke(app, ["config", "set", "auth.token", token])
        assert result.exit_code == 0
        assert token not in result.output

        result = runner.invoke(app, ["config", "get", "auth.token"])
        assert result.exit_code == 0
        assert token not in result.output
        assert "oauth-ab" in result.output

        result = runner.invoke(app, ["config", "list"])
        assert token not in result.output
        assert "auth.type: oauth" in result.output
