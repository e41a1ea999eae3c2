"""Tests for the atlassian-mcp command-line entry point."""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from atlassian_mcp import __version__, main
from atlassian_mcp.config import AtlassianConfig
from tests.utils.factories import ConfigFactory


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_run():
    """Replace server startup so main() returns right after resolution."""
    with (
        patch("atlassian_mcp.server.run_server", new=MagicMock()) as mock_run_server,
        patch("atlassian_mcp.asyncio.run") as mock_asyncio_run,
        patch("atlassian_mcp.load_dotenv") as mock_load_dotenv,
    ):
        yield {
            "run_server": mock_run_server,
            "asyncio_run": mock_asyncio_run,
            "load_dotenv": mock_load_dotenv,
        }


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "atlassian.json"
    path.write_text(json.dumps(ConfigFactory.create_file_content()))
    return path


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_starts_server_with_config_file(runner, mock_run, config_file):
    with patch.dict("os.environ", {}, clear=True):
        result = runner.invoke(main, ["--config", str(config_file)])

    assert result.exit_code == 0, result.output
    mock_run["asyncio_run"].assert_called_once()
    mock_run["run_server"].assert_called_once_with(
        AtlassianConfig("file.atlassian.net", "file@example.com", "file-token"),
        read_only=False,
    )


def test_cli_options_override_file(runner, mock_run, config_file):
    with patch.dict("os.environ", {"ATLASSIAN_EMAIL": "env@example.com"}, clear=True):
        result = runner.invoke(
            main,
            ["-c", str(config_file), "-d", "cli.atlassian.net", "-t", "cli-token"],
        )

    assert result.exit_code == 0, result.output
    config = mock_run["run_server"].call_args.args[0]
    assert config == AtlassianConfig("cli.atlassian.net", "env@example.com", "cli-token")


def test_read_only_from_environment(runner, mock_run, config_file):
    with patch.dict("os.environ", {"READ_ONLY_MODE": "true"}, clear=True):
        result = runner.invoke(main, ["-c", str(config_file)])

    assert result.exit_code == 0, result.output
    assert mock_run["run_server"].call_args.kwargs["read_only"] is True


def test_read_only_flag_overrides_environment(runner, mock_run, config_file):
    with patch.dict("os.environ", {"READ_ONLY_MODE": "true"}, clear=True):
        result = runner.invoke(main, ["-c", str(config_file), "--no-read-only"])

    assert result.exit_code == 0, result.output
    assert mock_run["run_server"].call_args.kwargs["read_only"] is False


def test_env_file_loaded(runner, mock_run, config_file, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("LOG_LEVEL=DEBUG\n")
    with patch.dict("os.environ", {}, clear=True):
        result = runner.invoke(main, ["-c", str(config_file), "--env-file", str(env_file)])

    assert result.exit_code == 0, result.output
    mock_run["load_dotenv"].assert_called_once_with(str(env_file))


def test_missing_configuration_exits_with_status_1(runner, mock_run, tmp_path):
    with patch.dict("os.environ", {}, clear=True):
        result = runner.invoke(main, ["-c", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "Missing required configuration: domain, email, apiToken" in result.output
    mock_run["asyncio_run"].assert_not_called()


def test_malformed_config_file_exits_with_status_1(runner, mock_run, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{oops")
    with patch.dict("os.environ", {}, clear=True):
        result = runner.invoke(main, ["-c", str(path), "-d", "d", "-e", "e", "-t", "t"])

    assert result.exit_code == 1
    assert "Failed to parse config file" in result.output
    mock_run["asyncio_run"].assert_not_called()
