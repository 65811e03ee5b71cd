"""Unit tests for ConfigLoader and environment helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from previewctl.config.env_loader import (
    get_env_var,
    load_env_file,
    substitute_env_vars,
)
from previewctl.config.loader import ConfigLoader
from previewctl.lib.errors import ConfigError


class TestEnvHelpers:
    """Tests for env_loader helpers."""

    def test_substitute_env_vars(
        self, isolated_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("APP_NAME", "hello-web")

        assert substitute_env_vars("name: ${APP_NAME}") == "name: hello-web"

    def test_substitute_missing_var_raises(self, isolated_env: dict[str, str]) -> None:
        with pytest.raises(ConfigError) as exc_info:
            substitute_env_vars("token: ${PREVIEWCTL_UNSET_FOR_TEST}")

        assert exc_info.value.field == "PREVIEWCTL_UNSET_FOR_TEST"

    def test_text_without_references_is_unchanged(self) -> None:
        assert substitute_env_vars("region: us-east-1") == "region: us-east-1"

    def test_get_env_var_treats_empty_as_unset(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PREVIEWCTL_EMPTY_FOR_TEST", "")

        assert get_env_var("PREVIEWCTL_EMPTY_FOR_TEST", "fallback") == "fallback"

    def test_load_env_file_does_not_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "PREVIEWCTL_KEEP_FOR_TEST=from-file\nPREVIEWCTL_NEW_FOR_TEST=added\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("PREVIEWCTL_KEEP_FOR_TEST", "from-runner")
        monkeypatch.delenv("PREVIEWCTL_NEW_FOR_TEST", raising=False)

        assert load_env_file(env_file) is True

        assert get_env_var("PREVIEWCTL_KEEP_FOR_TEST") == "from-runner"
        assert get_env_var("PREVIEWCTL_NEW_FOR_TEST") == "added"
        monkeypatch.delenv("PREVIEWCTL_NEW_FOR_TEST")

    def test_load_env_file_missing(self, tmp_path: Path) -> None:
        assert load_env_file(tmp_path / "absent.env") is False


class TestConfigLoaderFromEnvironment:
    """Tests for building configuration from runner variables."""

    def test_loads_from_environment(self, github_env: dict[str, str]) -> None:
        config = ConfigLoader(env=github_env).load()

        assert config.application_name == "hello-web"
        assert config.environment_prefix == "pr"
        assert config.aws.region == "us-east-1"
        assert config.github.owner == "acme"
        assert config.github.name == "hello-web"
        assert config.resolved_log_url() == (
            "https://github.com/acme/hello-web/actions/runs/987"
        )

    def test_default_region_fallback(self, github_env: dict[str, str]) -> None:
        env = dict(github_env)
        del env["AWS_REGION"]
        env["AWS_DEFAULT_REGION"] = "eu-west-1"

        assert ConfigLoader(env=env).load().aws.region == "eu-west-1"

    def test_empty_variable_is_ignored(self, github_env: dict[str, str]) -> None:
        env = dict(github_env, AWS_REGION="", AWS_DEFAULT_REGION="eu-west-1")

        assert ConfigLoader(env=env).load().aws.region == "eu-west-1"

    def test_missing_required_settings(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(env={}).load()

        assert exc_info.value.field == "controller_config"
        assert "application_name" in exc_info.value.message

    def test_invalid_value_is_reported(self, github_env: dict[str, str]) -> None:
        env = dict(github_env, GITHUB_REPOSITORY="not-a-repo")

        with pytest.raises(ConfigError, match="github.repository"):
            ConfigLoader(env=env).load()


class TestConfigLoaderFromFile:
    """Tests for YAML configuration files."""

    def test_file_overrides_environment(
        self, tmp_path: Path, github_env: dict[str, str]
    ) -> None:
        config_file = tmp_path / "previewctl.yaml"
        config_file.write_text(
            "application_name: other-app\n"
            "environment_prefix: preview\n"
            "aws:\n"
            "  region: us-west-2\n",
            encoding="utf-8",
        )

        config = ConfigLoader(env=github_env).load(str(config_file))

        assert config.application_name == "other-app"
        assert config.environment_prefix == "preview"
        assert config.aws.region == "us-west-2"
        # Nested keys not in the file still come from the environment
        assert config.github.token == "ghp_test"

    def test_file_substitutes_variables(
        self,
        tmp_path: Path,
        github_env: dict[str, str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PREVIEWCTL_TOKEN_FOR_TEST", "ghp_from_file")
        config_file = tmp_path / "previewctl.yaml"
        config_file.write_text(
            "github:\n  token: ${PREVIEWCTL_TOKEN_FOR_TEST}\n", encoding="utf-8"
        )

        config = ConfigLoader(env=github_env).load(str(config_file))

        assert config.github.token == "ghp_from_file"

    def test_empty_file_uses_environment(
        self, tmp_path: Path, github_env: dict[str, str]
    ) -> None:
        config_file = tmp_path / "previewctl.yaml"
        config_file.write_text("", encoding="utf-8")

        config = ConfigLoader(env=github_env).load(str(config_file))

        assert config.application_name == "hello-web"

    def test_missing_file(self, tmp_path: Path, github_env: dict[str, str]) -> None:
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(env=github_env).load(str(tmp_path / "missing.yaml"))

        assert exc_info.value.field == "config_file"

    def test_invalid_yaml(self, tmp_path: Path, github_env: dict[str, str]) -> None:
        config_file = tmp_path / "previewctl.yaml"
        config_file.write_text("aws: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(env=github_env).load(str(config_file))

        assert exc_info.value.field == "yaml_parse"

    def test_non_mapping_yaml(self, tmp_path: Path, github_env: dict[str, str]) -> None:
        config_file = tmp_path / "previewctl.yaml"
        config_file.write_text("- one\n- two\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="mapping"):
            ConfigLoader(env=github_env).load(str(config_file))

    def test_unknown_keys_rejected(
        self, tmp_path: Path, github_env: dict[str, str]
    ) -> None:
        config_file = tmp_path / "previewctl.yaml"
        config_file.write_text("aws:\n  zone: us-east-1a\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="aws.zone"):
            ConfigLoader(env=github_env).load(str(config_file))
