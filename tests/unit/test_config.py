"""Tests for configuration resolution."""

import json
from unittest.mock import patch

import pytest

from atlassian_mcp.config import (
    AtlassianConfig,
    ConfigOptions,
    expand_path,
    load_config_file,
    resolve_config,
)
from atlassian_mcp.exceptions import ConfigurationError
from tests.utils.factories import ConfigFactory

FULL_ENV = {
    "ATLASSIAN_DOMAIN": "env.atlassian.net",
    "ATLASSIAN_EMAIL": "env@example.com",
    "ATLASSIAN_API_TOKEN": "env-token",
}


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def cwd(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path


def write_config(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content) if not isinstance(content, str) else content)
    return path


class TestAtlassianConfig:
    def test_valid(self):
        config = AtlassianConfig("test.atlassian.net", "me@example.com", "secret")
        assert config.domain == "test.atlassian.net"
        assert config.email == "me@example.com"
        assert config.api_token == "secret"

    def test_token_not_in_repr(self):
        config = ConfigFactory.create(api_token="super-secret-token")
        assert "super-secret-token" not in repr(config)

    def test_blank_field_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            AtlassianConfig("test.atlassian.net", "", "secret")
        assert exc_info.value.missing == ("email",)


class TestExpandPath:
    def test_tilde_prefix(self, home, cwd):
        assert expand_path("~/.atlassian-mcp.json", home=home, cwd=cwd) == (
            home / ".atlassian-mcp.json"
        )

    def test_bare_tilde(self, home, cwd):
        assert expand_path("~", home=home, cwd=cwd) == home

    def test_relative_path_uses_cwd(self, home, cwd):
        assert expand_path("conf/a.json", home=home, cwd=cwd) == cwd / "conf" / "a.json"

    def test_absolute_path_unchanged(self, home, cwd, tmp_path):
        target = tmp_path / "elsewhere.json"
        assert expand_path(str(target), home=home, cwd=cwd) == target


class TestLoadConfigFile:
    def test_missing_file_returns_none(self, home, cwd):
        assert load_config_file("~/nope.json", home=home, cwd=cwd) is None

    def test_valid_file(self, home, cwd):
        write_config(home / "config.json", ConfigFactory.create_file_content())
        assert load_config_file("~/config.json", home=home, cwd=cwd) == {
            "domain": "file.atlassian.net",
            "email": "file@example.com",
            "apiToken": "file-token",
        }

    def test_invalid_json(self, home, cwd):
        write_config(home / "config.json", "{not json")
        with pytest.raises(ConfigurationError, match="Failed to parse config file"):
            load_config_file("~/config.json", home=home, cwd=cwd)

    def test_missing_fields_listed(self, home, cwd):
        write_config(home / "config.json", {"domain": "file.atlassian.net"})
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file("~/config.json", home=home, cwd=cwd)
        assert "missing required fields: email, apiToken" in str(exc_info.value)
        assert exc_info.value.missing == ("email", "apiToken")

    def test_blank_field_counts_as_missing(self, home, cwd):
        write_config(
            home / "config.json", ConfigFactory.create_file_content(apiToken="")
        )
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file("~/config.json", home=home, cwd=cwd)
        assert exc_info.value.missing == ("apiToken",)

    def test_non_object_json(self, home, cwd):
        write_config(home / "config.json", "[1, 2, 3]")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file("~/config.json", home=home, cwd=cwd)
        assert exc_info.value.missing == ("domain", "email", "apiToken")

    def test_non_string_field_rejected(self, home, cwd):
        write_config(
            home / "config.json",
            ConfigFactory.create_file_content(apiToken=12345, email=["a@example.com"]),
        )
        with pytest.raises(ConfigurationError, match="non-string fields: email, apiToken"):
            load_config_file("~/config.json", home=home, cwd=cwd)


class TestResolveConfig:
    def test_environment_only(self, home, cwd):
        config = resolve_config(env=FULL_ENV, home=home, cwd=cwd)
        assert config == AtlassianConfig("env.atlassian.net", "env@example.com", "env-token")

    def test_explicit_arguments_only(self, home, cwd):
        options = ConfigOptions(domain="cli.atlassian.net", email="cli@example.com", api_token="cli-token")
        config = resolve_config(options, env={}, home=home, cwd=cwd)
        assert config.domain == "cli.atlassian.net"

    def test_precedence_file_env_explicit(self, home, cwd):
        write_config(home / ".atlassian-mcp.json", ConfigFactory.create_file_content())
        options = ConfigOptions(email="cli@example.com")
        env = {"ATLASSIAN_DOMAIN": "env.atlassian.net"}

        config = resolve_config(options, env=env, home=home, cwd=cwd)

        assert config.domain == "env.atlassian.net"
        assert config.email == "cli@example.com"
        assert config.api_token == "file-token"

    def test_same_field_from_every_tier(self, home, cwd):
        write_config(
            home / ".atlassian-mcp.json",
            ConfigFactory.create_file_content(domain="file.x"),
        )
        env = {"ATLASSIAN_DOMAIN": "env.x"}

        config = resolve_config(env=env, home=home, cwd=cwd)
        assert config.domain == "env.x"

        config = resolve_config(ConfigOptions(domain="cli.x"), env=env, home=home, cwd=cwd)
        assert config.domain == "cli.x"
        assert config.email == "file@example.com"

    def test_empty_env_value_does_not_override(self, home, cwd):
        write_config(home / ".atlassian-mcp.json", ConfigFactory.create_file_content())
        config = resolve_config(env={"ATLASSIAN_DOMAIN": ""}, home=home, cwd=cwd)
        assert config.domain == "file.atlassian.net"

    def test_explicit_config_path(self, home, cwd, tmp_path):
        path = write_config(
            tmp_path / "custom.json", ConfigFactory.create_file_content(domain="custom.atlassian.net")
        )
        config = resolve_config(ConfigOptions(config_path=str(path)), env={}, home=home, cwd=cwd)
        assert config.domain == "custom.atlassian.net"

    def test_explicit_config_path_skips_defaults(self, home, cwd):
        write_config(home / ".atlassian-mcp.json", ConfigFactory.create_file_content())
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(
                ConfigOptions(config_path="~/missing.json"), env={}, home=home, cwd=cwd
            )
        assert exc_info.value.missing == ("domain", "email", "apiToken")

    def test_first_existing_default_wins(self, home, cwd):
        write_config(
            home / ".config" / "atlassian-mcp" / "config.json",
            ConfigFactory.create_file_content(domain="second.atlassian.net"),
        )
        write_config(
            cwd / ".atlassian-mcp.json",
            ConfigFactory.create_file_content(domain="third.atlassian.net"),
        )
        config = resolve_config(env={}, home=home, cwd=cwd)
        assert config.domain == "second.atlassian.net"

    def test_invalid_first_default_is_not_skipped(self, home, cwd):
        write_config(home / ".atlassian-mcp.json", "{broken")
        write_config(cwd / ".atlassian-mcp.json", ConfigFactory.create_file_content())
        with pytest.raises(ConfigurationError, match="Failed to parse config file"):
            resolve_config(env=FULL_ENV, home=home, cwd=cwd)

    def test_unreadable_default_aborts(self, home, cwd):
        with patch(
            "atlassian_mcp.config.Path.stat", side_effect=PermissionError("denied")
        ):
            with pytest.raises(ConfigurationError, match="Failed to parse config file"):
                resolve_config(env=FULL_ENV, home=home, cwd=cwd)

    def test_missing_everything(self, home, cwd):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(env={}, home=home, cwd=cwd)
        message = str(exc_info.value)
        assert message.startswith("Missing required configuration: domain, email, apiToken")
        assert "ATLASSIAN_DOMAIN" in message
        assert "--config" in message

    def test_missing_reports_only_absent_fields(self, home, cwd):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(
                env={"ATLASSIAN_DOMAIN": "env.atlassian.net", "ATLASSIAN_EMAIL": "e@x.io"},
                home=home,
                cwd=cwd,
            )
        assert exc_info.value.missing == ("apiToken",)

    def test_process_environment_is_default(self, home, cwd):
        with patch.dict("os.environ", FULL_ENV, clear=True):
            config = resolve_config(home=home, cwd=cwd)
        assert config.email == "env@example.com"
