"""Tests for configuration loading and validation in config.py."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from pydantic import ValidationError

from sifflet_sources.config import (
    DEFAULT_TIMEOUT,
    SIFFLET_HOST_ENV,
    SIFFLET_HTTPS_VERIFY_ENV,
    SIFFLET_TIMEOUT_ENV,
    ClientConfig,
    find_config,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of config tests."""
    for name in (SIFFLET_HOST_ENV, SIFFLET_TIMEOUT_ENV, SIFFLET_HTTPS_VERIFY_ENV):
        monkeypatch.delenv(name, raising=False)


class TestClientConfigFromYaml:
    """Tests for ClientConfig.from_yaml parsing."""

    def test_minimal_config(self) -> None:
        """Test parsing a config with only the host."""
        config = ClientConfig.from_yaml("host: https://acme.siffletdata.com/api\n")

        assert config.host == "https://acme.siffletdata.com/api"
        assert config.api_prefix == "/v1"
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.verify_tls is True
        assert config.log_level == "WARNING"

    def test_full_config(self) -> None:
        """Test parsing a config with every setting."""
        content = """\
host: https://acme.siffletdata.com/api
api_prefix: v2/
timeout: 60
verify_tls: false
log_level: debug
"""
        config = ClientConfig.from_yaml(content)

        assert config.api_prefix == "/v2"
        assert config.timeout == 60.0
        assert config.verify_tls is False
        assert config.log_level == "DEBUG"
        assert config.base_url == "https://acme.siffletdata.com/api/v2"

    def test_empty_file(self) -> None:
        """Test an empty file gives the defaults."""
        config = ClientConfig.from_yaml("")
        assert config.host == ""

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClientConfig.from_yaml("hots: https://acme.siffletdata.com\n")

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError, match="Invalid log_level"):
            ClientConfig.from_yaml("log_level: verbose\n")

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError, match="timeout must be positive"):
            ClientConfig.from_yaml("timeout: 0\n")


class TestHostNormalization:
    """Tests for host URL normalization."""

    def test_trailing_slash_removed(self) -> None:
        config = ClientConfig(host="https://acme.siffletdata.com/api/")
        assert config.host == "https://acme.siffletdata.com/api"

    def test_scheme_added(self) -> None:
        config = ClientConfig(host="acme.siffletdata.com/api")
        assert config.host == "https://acme.siffletdata.com/api"

    def test_http_upgraded(self) -> None:
        config = ClientConfig(host="http://acme.siffletdata.com/api")
        assert config.host == "https://acme.siffletdata.com/api"

    def test_base_url(self) -> None:
        config = ClientConfig(host="https://acme.siffletdata.com/api")
        assert config.base_url == "https://acme.siffletdata.com/api/v1"

    def test_empty_prefix(self) -> None:
        config = ClientConfig(host="https://acme.siffletdata.com/api/v1", api_prefix="")
        assert config.base_url == "https://acme.siffletdata.com/api/v1"


class TestEnvOverrides:
    """Tests for environment variable overrides."""

    def test_host_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(SIFFLET_HOST_ENV, "other.siffletdata.com/api")
        config = ClientConfig(host="https://acme.siffletdata.com/api").with_env_overrides()

        assert config.host == "https://other.siffletdata.com/api"

    def test_timeout_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(SIFFLET_TIMEOUT_ENV, "5")
        assert ClientConfig().with_env_overrides().timeout == 5.0

    def test_invalid_timeout_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(SIFFLET_TIMEOUT_ENV, "soon")
        assert ClientConfig(timeout=12).with_env_overrides().timeout == 12.0

    @pytest.mark.parametrize(
        "value,expected",
        [("false", False), ("0", False), ("off", False), ("TRUE", True), ("", True)],
    )
    def test_verify_override(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
    ) -> None:
        monkeypatch.setenv(SIFFLET_HTTPS_VERIFY_ENV, value)
        assert ClientConfig().with_env_overrides().verify_tls is expected


class TestFindConfig:
    """Tests for config file discovery."""

    def test_find_in_current_dir(self) -> None:
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "sifflet.yml"
            config_path.write_text("host: acme\n")

            assert find_config(tmpdir) == config_path.resolve()

    def test_find_in_parent_dir(self) -> None:
        """Test config is found from a nested directory."""
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "sifflet.yaml"
            config_path.write_text("host: acme\n")
            nested = Path(tmpdir) / "a" / "b"
            nested.mkdir(parents=True)

            assert find_config(nested) == config_path.resolve()

    def test_hidden_filename(self) -> None:
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / ".sifflet.yml"
            config_path.write_text("host: acme\n")

            assert find_config(tmpdir) == config_path.resolve()


class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_path(self) -> None:
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "custom.yml"
            config_path.write_text("host: acme.siffletdata.com/api\ntimeout: 10\n")

            config = load_config(config_path)

        assert config.host == "https://acme.siffletdata.com/api"
        assert config.timeout == 10.0

    def test_explicit_path_missing(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/sifflet.yml")

    def test_defaults_when_not_found(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test defaults plus environment apply when no file exists."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(SIFFLET_HOST_ENV, "acme.siffletdata.com/api")

        config = load_config()

        assert config.host == "https://acme.siffletdata.com/api"

    def test_env_overrides_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "sifflet.yml"
            config_path.write_text("host: acme\ntimeout: 10\n")
            monkeypatch.setenv(SIFFLET_TIMEOUT_ENV, "3")

            config = load_config(config_path)

        assert config.timeout == 3.0
