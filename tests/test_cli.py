"""Tests for CLI commands in __main__.py."""

import importlib
import json
from pathlib import Path

import httpx
import keyring
import pytest
import yaml
from click.testing import CliRunner
from samples import SAMPLE_PARAMETERS

from sifflet_sources.__main__ import cli
from sifflet_sources.client import SiffletClient
from sifflet_sources.config import SIFFLET_HOST_ENV
from sifflet_sources.credentials import SIFFLET_TOKEN_ENV

SOURCE_ID = "5a1f3b7e-2c4d-4e6f-8a9b-0c1d2e3f4a5b"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


def write_source(path: Path, tag: str = "bigquery", **fields) -> None:
    """Write a source definition with one parameters block."""
    data = {"name": "warehouse", "credentials": "creds", **fields}
    data["parameters"] = {tag: SAMPLE_PARAMETERS[tag]}
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


class TestCLITypes:
    """Tests for the 'types' command."""

    def test_lists_source_types(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["types"])

        assert result.exit_code == 0
        assert "bigquery" in result.output
        assert "DBT_CLOUD" in result.output
        assert "power_bi" in result.output


class TestCLISchema:
    """Tests for the 'schema' command."""

    def test_shows_fields(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schema", "bigquery"])

        assert result.exit_code == 0
        assert "project_id" in result.output
        assert "Credential: required" in result.output

    def test_credential_free_type(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schema", "dbt"])

        assert result.exit_code == 0
        assert "Credential: not accepted" in result.output

    def test_case_insensitive(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schema", "BIGQUERY"])
        assert result.exit_code == 0

    def test_unknown_type(self, runner: CliRunner) -> None:
        """Test unknown types fail with a hint."""
        result = runner.invoke(cli, ["schema", "teradata"])

        assert result.exit_code != 0
        assert "unsupported source type: teradata" in result.output


class TestCLIValidate:
    """Tests for the 'validate' command."""

    def test_valid_source(self, runner: CliRunner) -> None:
        """Test a valid source prints its request body."""
        with runner.isolated_filesystem():
            write_source(Path("source.yml"))

            result = runner.invoke(cli, ["validate", "source.yml"])

            assert result.exit_code == 0
            assert '"projectId": "my-project"' in result.output
            assert "is a valid BIGQUERY source" in result.output

    def test_update_request(self, runner: CliRunner) -> None:
        with runner.isolated_filesystem():
            write_source(Path("source.yml"), "snowflake")

            result = runner.invoke(cli, ["validate", "--update", "source.yml"])

            assert result.exit_code == 0
            assert '"type": "SNOWFLAKE"' in result.output

    def test_two_parameter_blocks(self, runner: CliRunner) -> None:
        """Test a source with two parameters blocks is rejected."""
        with runner.isolated_filesystem():
            data = {
                "name": "warehouse",
                "credentials": "creds",
                "parameters": {
                    "bigquery": SAMPLE_PARAMETERS["bigquery"],
                    "dbt": SAMPLE_PARAMETERS["dbt"],
                },
            }
            Path("source.yml").write_text(yaml.safe_dump(data), encoding="utf-8")

            result = runner.invoke(cli, ["validate", "source.yml"])

            assert result.exit_code != 0
            assert "Source validation error" in result.output

    def test_credential_rule(self, runner: CliRunner) -> None:
        """Test a credential on a credential-free type is reported."""
        with runner.isolated_filesystem():
            write_source(Path("source.yml"), "dbt")

            result = runner.invoke(cli, ["validate", "source.yml"])

            assert result.exit_code != 0
            assert "Invalid credential" in result.output
            assert "not a valid source definition" in result.output

    def test_invalid_yaml(self, runner: CliRunner) -> None:
        with runner.isolated_filesystem():
            Path("source.yml").write_text("name: [unclosed\n", encoding="utf-8")

            result = runner.invoke(cli, ["validate", "source.yml"])

            assert result.exit_code != 0
            assert "YAML parsing error" in result.output

    def test_missing_file(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["validate", "does-not-exist.yml"])
        assert result.exit_code != 0


class TestCLIDecode:
    """Tests for the 'decode' command."""

    def test_decode_parameters(self, runner: CliRunner) -> None:
        """Test a parameters payload decodes into a configuration block."""
        with runner.isolated_filesystem():
            Path("params.json").write_text(
                json.dumps(
                    {
                        "type": "SNOWFLAKE",
                        "accountIdentifier": "a",
                        "database": "d",
                        "schema": "s",
                        "warehouse": "w",
                    }
                ),
                encoding="utf-8",
            )

            result = runner.invoke(cli, ["decode", "params.json"])

            assert result.exit_code == 0
            assert "source_type: snowflake" in result.output
            assert "account_identifier: a" in result.output

    def test_decode_unknown(self, runner: CliRunner) -> None:
        with runner.isolated_filesystem():
            Path("params.json").write_text('{"type": "TERADATA"}', encoding="utf-8")

            result = runner.invoke(cli, ["decode", "params.json"])

            assert result.exit_code != 0
            assert "Unable to decode parameters" in result.output

    def test_decode_page(self, runner: CliRunner) -> None:
        """Test a page of sources decodes item by item."""
        page = {
            "totalElements": 1,
            "data": [
                {
                    "id": SOURCE_ID,
                    "name": "jaffle",
                    "parameters": {"type": "DBT", "projectName": "p", "target": "prod"},
                }
            ],
        }
        with runner.isolated_filesystem():
            Path("page.json").write_text(json.dumps(page), encoding="utf-8")

            result = runner.invoke(cli, ["decode", "--page", "page.json"])

            assert result.exit_code == 0
            assert "total_elements: 1" in result.output
            assert "project_name: p" in result.output


class TestCLIPlan:
    """Tests for the 'plan' command."""

    def test_same_type(self, runner: CliRunner) -> None:
        with runner.isolated_filesystem():
            write_source(Path("state.yml"))
            write_source(Path("planned.yml"), description="changed")

            result = runner.invoke(cli, ["plan", "state.yml", "planned.yml"])

            assert result.exit_code == 0
            assert "bigquery -> bigquery" in result.output
            assert "In-place update" in result.output

    def test_type_change(self, runner: CliRunner) -> None:
        """Test a bare parameters block is accepted as well."""
        with runner.isolated_filesystem():
            write_source(Path("state.yml"))
            Path("planned.yml").write_text(
                yaml.safe_dump({"snowflake": SAMPLE_PARAMETERS["snowflake"]}),
                encoding="utf-8",
            )

            result = runner.invoke(cli, ["plan", "state.yml", "planned.yml"])

            assert result.exit_code == 0
            assert "bigquery -> snowflake" in result.output
            assert "Replacement required" in result.output

    def test_unknown_state(self, runner: CliRunner) -> None:
        """Test an empty state file warns and replaces."""
        with runner.isolated_filesystem():
            Path("state.yml").write_text("", encoding="utf-8")
            write_source(Path("planned.yml"))

            result = runner.invoke(cli, ["plan", "state.yml", "planned.yml"])

            assert result.exit_code == 0
            assert "Unable to determine source type" in result.output
            assert "Replacement required" in result.output


class TestCLIGet:
    """Tests for the 'get' command."""

    @pytest.fixture
    def api(self, monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
        """Route the command's client to an in-memory API."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path.endswith(SOURCE_ID):
                return httpx.Response(
                    200,
                    json={
                        "id": SOURCE_ID,
                        "name": "warehouse",
                        "credentials": "bq-creds",
                        "parameters": {
                            "type": "BIGQUERY",
                            "projectId": "my-project",
                            "datasetId": "analytics",
                        },
                    },
                )
            return httpx.Response(404, json={"title": "Not Found"})

        def make_client(config, token):
            return SiffletClient(config, token, transport=httpx.MockTransport(handler))

        get_module = importlib.import_module("sifflet_sources.cli.commands.get_cmd")
        monkeypatch.setattr(get_module, "SiffletClient", make_client)
        monkeypatch.setenv(SIFFLET_HOST_ENV, "acme.siffletdata.com/api")
        monkeypatch.setenv(SIFFLET_TOKEN_ENV, "secret-token")
        return requests

    def test_get_source(self, runner: CliRunner, api: list[httpx.Request]) -> None:
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["get", SOURCE_ID])

        assert result.exit_code == 0
        assert "source_type: bigquery" in result.output
        assert "dataset_id: analytics" in result.output
        assert api[0].headers["Authorization"] == "Bearer secret-token"

    def test_api_error(self, runner: CliRunner, api: list[httpx.Request]) -> None:
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["get", "missing"])

        assert result.exit_code != 0
        assert "Unable to read source" in result.output

    def test_missing_token(
        self, runner: CliRunner, api: list[httpx.Request], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(SIFFLET_TOKEN_ENV)
        monkeypatch.setattr(keyring, "get_password", lambda service, key: None)

        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["get", SOURCE_ID])

        assert result.exit_code != 0
        assert "No Sifflet API token found" in result.output
        assert api == []


class TestCLISearch:
    """Tests for the 'search' command."""

    @pytest.fixture
    def api(self, monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
        """Route the command's client to an in-memory API with two sources."""
        requests: list[httpx.Request] = []
        items = [
            {
                "id": SOURCE_ID,
                "name": "warehouse",
                "credentials": "bq-creds",
                "parameters": {
                    "type": "BIGQUERY",
                    "projectId": "my-project",
                    "datasetId": "analytics",
                },
            },
            {
                "id": "3f2a8c54-5d0e-4a6f-9b44-2a9d2c1e7b10",
                "name": "jaffle",
                "parameters": {"type": "DBT", "projectName": "p", "target": "prod"},
            },
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            size = json.loads(request.content)["pagination"]["itemsPerPage"]
            return httpx.Response(
                200, json={"totalElements": len(items), "data": items[:size]}
            )

        def make_client(config, token):
            return SiffletClient(config, token, transport=httpx.MockTransport(handler))

        search_module = importlib.import_module("sifflet_sources.cli.commands.search")
        monkeypatch.setattr(search_module, "SiffletClient", make_client)
        monkeypatch.setenv(SIFFLET_HOST_ENV, "acme.siffletdata.com/api")
        monkeypatch.setenv(SIFFLET_TOKEN_ENV, "secret-token")
        return requests

    def test_search(self, runner: CliRunner, api: list[httpx.Request]) -> None:
        """Test the filter is sent and matches are listed."""
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli,
                ["search", "--text", "ware", "--type", "bigquery", "--tag", "finance"],
            )

        assert result.exit_code == 0
        assert "warehouse" in result.output
        assert "jaffle" in result.output
        assert json.loads(api[0].content)["filter"] == {
            "textSearch": "ware",
            "types": ["BIGQUERY"],
            "tags": [{"name": "finance"}],
        }

    def test_max_results(self, runner: CliRunner, api: list[httpx.Request]) -> None:
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["search", "--max-results", "1"])

        assert result.exit_code == 0
        assert "Sources (1)" in result.output
        assert json.loads(api[0].content)["pagination"] == {
            "page": 0,
            "itemsPerPage": 1,
        }

    def test_unknown_type(self, runner: CliRunner, api: list[httpx.Request]) -> None:
        """Test an unknown type fails before any request is sent."""
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["search", "--type", "teradata"])

        assert result.exit_code != 0
        assert "Invalid search filter" in result.output
        assert api == []


class TestCLIAuth:
    """Tests for the 'auth' command group."""

    @pytest.fixture
    def passwords(self, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
        store: dict[str, str] = {}
        monkeypatch.delenv(SIFFLET_TOKEN_ENV, raising=False)
        monkeypatch.setattr(keyring, "get_password", lambda service, key: store.get(key))
        monkeypatch.setattr(
            keyring, "set_password", lambda service, key, value: store.update({key: value})
        )
        monkeypatch.setattr(
            keyring, "delete_password", lambda service, key: store.pop(key)
        )
        return store

    def test_login_and_status(self, runner: CliRunner, passwords: dict[str, str]) -> None:
        result = runner.invoke(cli, ["auth", "login", "--token", "abc"])
        assert result.exit_code == 0
        assert passwords == {"api-token": "abc"}

        result = runner.invoke(cli, ["auth", "status"])
        assert "from keychain" in result.output

    def test_status_not_configured(
        self, runner: CliRunner, passwords: dict[str, str]
    ) -> None:
        result = runner.invoke(cli, ["auth", "status"])
        assert "Not configured" in result.output

    def test_status_from_env(
        self, runner: CliRunner, passwords: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(SIFFLET_TOKEN_ENV, "from-env")

        result = runner.invoke(cli, ["auth", "status"])
        assert f"from {SIFFLET_TOKEN_ENV}" in result.output

    def test_clear(self, runner: CliRunner, passwords: dict[str, str]) -> None:
        passwords["api-token"] = "abc"

        result = runner.invoke(cli, ["auth", "clear"])
        assert "Cleared API token" in result.output
        assert passwords == {}


class TestCLIHelp:
    """Tests for help output."""

    def test_root_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in (
            "types",
            "schema",
            "validate",
            "decode",
            "plan",
            "get",
            "search",
            "auth",
        ):
            assert command in result.output

    def test_unknown_log_level(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--log-level", "verbose", "types"])
        assert result.exit_code != 0
