"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.identity_gateway.runtime.config.config_data import ConfigData
from src.identity_gateway.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    substitute_env_vars,
)

CONFIG_YAML = """
config:
  platform:
    base_url: ${PLATFORM_BASE_URL:-https://openapi.wps.cn}
    app_id: "${PLATFORM_APP_ID:-}"
    app_secret: "${PLATFORM_APP_SECRET:-}"
    request_timeout: ${PLATFORM_REQUEST_TIMEOUT:-10}
  identity:
    join_key: external_union_id
  database:
    url: ${DATABASE_URL:-sqlite:///./contacts.db}
  app:
    environment: ${APP_ENVIRONMENT:-development}
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    return path


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        """Test substitution of a simple environment variable."""
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            result = substitute_env_vars("Server running at http://${HOST}:${PORT}/api")
            assert result == "Server running at http://localhost:8080/api"

    def test_substitute_env_var_with_default(self):
        """Test substitution with default value when env var is not set."""
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-default_value}") == "default_value"

    def test_substitute_env_var_with_default_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual_value"}):
            assert substitute_env_vars("${PRESENT_VAR:-default_value}") == "actual_value"

    def test_substitute_env_var_with_empty_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-}") == ""

    def test_substitute_required_env_var_missing(self):
        """Test substitution fails when required env var is missing."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_substitute_required_with_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="APP_KEY: needed for login"):
                substitute_env_vars("${APP_KEY:?needed for login}")

    def test_text_without_placeholders_is_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"


class TestApplyEnvironmentOverrides:
    def test_prefixed_variables_are_reexported(self):
        """PRODUCTION_X becomes X when running in production."""
        with patch.dict(
            os.environ,
            {"PRODUCTION_PLATFORM_APP_ID": "AK-prod", "DEVELOPMENT_PLATFORM_APP_ID": "AK-dev"},
            clear=True,
        ):
            applied = apply_environment_overrides("production")

            assert applied == ["PLATFORM_APP_ID"]
            assert os.environ["PLATFORM_APP_ID"] == "AK-prod"

    def test_no_matching_variables(self):
        with patch.dict(os.environ, {"UNRELATED": "1"}, clear=True):
            assert apply_environment_overrides("test") == []


class TestLoadTemplatedYaml:
    """Test loading the YAML configuration."""

    def test_load_with_defaults(self, config_file: Path):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(config_file)

        assert isinstance(config, ConfigData)
        assert config.platform.base_url == "https://openapi.wps.cn"
        assert config.platform.app_id == ""
        assert config.platform.is_configured is False
        assert config.platform.request_timeout == 10.0
        assert config.identity.join_key == "external_union_id"
        assert config.database.url == "sqlite:///./contacts.db"

    def test_load_with_environment(self, config_file: Path):
        env = {
            "PLATFORM_APP_ID": "AK-123",
            "PLATFORM_APP_SECRET": "secret",
            "PLATFORM_REQUEST_TIMEOUT": "2.5",
            "DATABASE_URL": "postgresql://db/contacts",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.platform.app_id == "AK-123"
        assert config.platform.is_configured is True
        assert config.platform.request_timeout == 2.5
        assert config.database.url == "postgresql://db/contacts"

    def test_environment_specific_override(self, config_file: Path):
        env = {
            "APP_ENVIRONMENT": "production",
            "PLATFORM_APP_ID": "AK-dev",
            "PRODUCTION_PLATFORM_APP_ID": "AK-prod",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.app.environment == "production"
        assert config.platform.app_id == "AK-prod"

    def test_invalid_value(self, config_file: Path):
        with patch.dict(os.environ, {"PLATFORM_REQUEST_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ValueError, match="Invalid configuration"):
                load_templated_yaml(config_file)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path)

    def test_malformed_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("config: [unclosed")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "absent.yaml")

    def test_repository_config_loads(self):
        """The shipped config.yaml validates with an empty environment."""
        path = Path(__file__).resolve().parents[3] / "config.yaml"

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path)

        assert config.platform.scope == "kso.user_base.read"
        assert config.logging.file == ""
