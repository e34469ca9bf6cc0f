"""Tests for configuration loading."""

from pathlib import Path

import pytest

from project_guard.config import ConfigError, GuardConfig, load_config
from project_guard.usage import JsonlUsageLog, UsageLog


def test_defaults_when_missing(tmp_path):
    config = load_config(tmp_path)
    assert isinstance(config, GuardConfig)
    assert config.root == tmp_path.resolve()
    assert config.usage_log_enabled is True
    assert config.usage_log_dir == Path(".guard-logs")
    assert config.default_category == "component"
    assert config.verbose is False


def test_parses_fields(tmp_path):
    (tmp_path / ".project-guard.yml").write_text(
        "usage_log:\n"
        "  enabled: true\n"
        "  directory: logs/usage\n"
        "search:\n"
        "  default_category: Modal\n"
        "verbose: true\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    assert config.usage_log_dir == Path("logs/usage")
    assert config.default_category == "modal"
    assert config.verbose is True

    usage_log = config.usage_log()
    assert isinstance(usage_log, JsonlUsageLog)
    assert usage_log.directory == tmp_path.resolve() / "logs" / "usage"


def test_explicit_file(tmp_path):
    config_file = tmp_path / "custom.yml"
    config_file.write_text("usage_log:\n  enabled: false\n", encoding="utf-8")
    config = load_config(config_file)
    assert config.usage_log_enabled is False
    assert not isinstance(config.usage_log(), JsonlUsageLog)
    assert isinstance(config.usage_log(), UsageLog)


def test_empty_file(tmp_path):
    (tmp_path / ".project-guard.yml").write_text("", encoding="utf-8")
    assert load_config(tmp_path).usage_log_enabled is True


def test_invalid_yaml(tmp_path):
    (tmp_path / ".project-guard.yml").write_text("usage_log: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_non_mapping(tmp_path):
    (tmp_path / ".project-guard.yml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_missing_project_dir(tmp_path):
    config = load_config(tmp_path / "missing")
    assert config.root == (tmp_path / "missing").resolve()
