"""Configuration loading (.project-guard.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .usage import DEFAULT_LOG_DIR, JsonlUsageLog, UsageLog

CONFIG_FILENAME = ".project-guard.yml"
DEFAULT_CATEGORY = "component"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GuardConfig:
    """Settings read from .project-guard.yml, all optional."""

    root: Path
    usage_log_enabled: bool = True
    usage_log_dir: Path = Path(DEFAULT_LOG_DIR)
    default_category: str = DEFAULT_CATEGORY
    verbose: bool = False

    def usage_log(self) -> UsageLog:
        if not self.usage_log_enabled:
            return UsageLog()
        log_dir = self.usage_log_dir
        if not log_dir.is_absolute():
            log_dir = self.root / log_dir
        return JsonlUsageLog(log_dir)


def load_config(path: str | Path) -> GuardConfig:
    """Load config from a project directory or an explicit file.

    A missing file yields defaults.
    """
    config_file = _resolve_config_path(Path(path))
    root = config_file.parent

    if not config_file.is_file():
        return GuardConfig(root=root)

    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to parse {config_file.name}: {e}") from e

    if data is None:
        return GuardConfig(root=root)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = GuardConfig(root=root)

    usage = _as_dict(data.get("usage_log"))
    if "enabled" in usage:
        config.usage_log_enabled = bool(usage["enabled"])
    if usage.get("directory"):
        config.usage_log_dir = Path(str(usage["directory"]))

    search = _as_dict(data.get("search"))
    if search.get("default_category"):
        config.default_category = str(search["default_category"]).lower()

    if "verbose" in data:
        config.verbose = bool(data["verbose"])

    return config


def _resolve_config_path(path: Path) -> Path:
    path = path.expanduser().resolve()
    if path.suffix in (".yml", ".yaml") and not path.is_dir():
        return path
    return path / CONFIG_FILENAME


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}
