"""Pytest configuration and shared fixtures."""

import pytest
from click.testing import CliRunner

from pb import config
from pb.cli import cli


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point every test at its own config file and clear the cache.

    The config layer caches the loaded file at module level, so it is reset
    before and after each test.
    """
    path = tmp_path / "pb" / "config.json"
    monkeypatch.setenv("PB_CONFIG", str(path))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    config.reset()
    yield path
    config.reset()


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional stdin input.

    Usage:
        result = invoke(["profile", "list"])
        result = invoke(["profile", "add", "local", "http://x"], input_data="u\\np\\n")
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke


@pytest.fixture
def sample_records():
    return [
        {"p_timestamp": "2024-01-02T03:04:05.000", "level": "info", "status": 200},
        {"p_timestamp": "2024-01-02T03:04:06.000", "level": "error", "status": 500},
        {"p_timestamp": "2024-01-02T03:04:07.000", "level": "info"},
    ]
