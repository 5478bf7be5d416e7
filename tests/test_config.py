"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from golang_mcp.tools.config import Config, FixDefaults, ToolDefaults


def test_defaults(test_config):
    assert test_config.server_name == "mcp-golang"
    assert test_config.server_version == "1.0.0"
    assert test_config.command_timeout is None
    assert test_config.strategies is None
    assert test_config.defaults.vet.path == "./..."
    assert test_config.defaults.format.write is False
    assert test_config.defaults.test.verbose is True
    assert test_config.defaults.test.coverprofile == "coverage.out"
    assert test_config.defaults.fix == FixDefaults()


def test_tool_defaults_are_frozen():
    defaults = ToolDefaults()
    with pytest.raises(ValidationError):
        defaults.fix.deps = False  # type: ignore[misc]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GOLANG_MCP_COMMAND_TIMEOUT", "120")
    monkeypatch.setenv("GOLANG_MCP_STRATEGIES", '["async"]')
    monkeypatch.setenv("GOLANG_MCP_DEFAULTS__TEST__RACE", "true")

    config = Config(_env_file=None)

    assert config.command_timeout == 120
    assert config.strategies == ["async"]
    assert config.defaults.test.race is True
    assert config.defaults.test.verbose is True


def test_unknown_option_rejected():
    with pytest.raises(ValidationError):
        Config(_env_file=None, not_an_option=True)
