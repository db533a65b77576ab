"""Configuration loading for ts-type-watcher (ts-type-watcher-config.json)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigurationError
from .scanner import SERVICE_FILE_SUFFIX

DEFAULT_CONFIG_FILENAME = "ts-type-watcher-config.json"

_REQUIRED_KEYS = ("servicesDirectory", "outputFile", "prismaIndexFile")


@dataclass(frozen=True)
class WatcherConfig:
    """Paths the regeneration pipeline reads from and writes to."""

    services_directory: Path
    output_file: Path
    prisma_index_file: Path
    service_suffix: str = SERVICE_FILE_SUFFIX


def default_config_path() -> Path:
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_config(config_path: Path | None = None) -> WatcherConfig:
    """Load configuration from disk.

    Relative paths inside the file are resolved against the directory holding
    the configuration file.

    Raises:
        ConfigurationError: when the file is missing, unparsable, or lacks a
            required key.
    """
    config_file = Path(config_path).expanduser() if config_path else default_config_path()
    if config_file.is_dir():
        config_file = config_file / DEFAULT_CONFIG_FILENAME
    config_file = config_file.resolve()

    if not config_file.is_file():
        raise ConfigurationError(f"Configuration file not found at {config_file}")

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_file.name} must contain a mapping at the root")

    missing = [key for key in _REQUIRED_KEYS if not _as_str(data.get(key))]
    if missing:
        raise ConfigurationError(
            f"{config_file.name} is missing required keys: {', '.join(missing)}"
        )

    root = config_file.parent
    suffix = data.get("serviceFileSuffix", SERVICE_FILE_SUFFIX)
    if not _as_str(suffix):
        raise ConfigurationError("serviceFileSuffix must be a non-empty string")

    return WatcherConfig(
        services_directory=_resolve_path(root, data["servicesDirectory"]),
        output_file=_resolve_path(root, data["outputFile"]),
        prisma_index_file=_resolve_path(root, data["prismaIndexFile"]),
        service_suffix=suffix,
    )


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc


def _resolve_path(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value.strip() else None


__all__ = ["DEFAULT_CONFIG_FILENAME", "WatcherConfig", "default_config_path", "load_config"]
