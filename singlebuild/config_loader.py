"""Helpers for locating, loading and interpreting the optional configuration file."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Sequence

import json
import os
import tomllib

import yaml

from .build_tool import (
    DEFAULT_BUILD_ARGUMENTS,
    DEFAULT_ENV_VAR,
    DEFAULT_RELATIVE_PATH,
    BuildToolSettings,
)
from .locator import DEFAULT_PATTERN


CONFIG_ENV_VAR = "SINGLEBUILD_CONFIG"

ConfigLoader = Callable[[Any], Mapping[str, Any]]


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""

    exit_code = 1


FILE_LOADERS: Dict[str, ConfigLoader] = {
    ".toml": lambda stream: tomllib.load(stream),
    ".json": lambda stream: json.load(stream),
    ".yaml": lambda stream: yaml.safe_load(stream),
    ".yml": lambda stream: yaml.safe_load(stream),
}
"""Mapping of file suffixes to loader callables."""


@dataclass(frozen=True, slots=True)
class Settings:
    pattern: str = DEFAULT_PATTERN
    build_tool: BuildToolSettings = field(default_factory=BuildToolSettings)


def load_config_file(path: Path) -> Mapping[str, Any]:
    """Load and decode a configuration mapping from ``path``."""

    suffix = path.suffix.lower()
    loader = FILE_LOADERS.get(suffix)
    if loader is None:
        supported = ", ".join(sorted(FILE_LOADERS))
        raise ConfigError(
            f"Unsupported configuration file extension: {suffix}. Supported: {supported}"
        )

    mode = "rb" if suffix == ".toml" else "r"
    kwargs: Dict[str, Any] = {}
    if mode == "r":
        kwargs["encoding"] = "utf-8"

    try:
        with path.open(mode, **kwargs) as handle:
            data = loader(handle)
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file '{path}': {exc}") from exc
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse configuration file '{path}': {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration file '{path}' must contain a mapping at the root")

    return data


def locate_config_file(explicit: Path | None, env: Mapping[str, str] | None = None) -> Path | None:
    """Return the configuration path to use: CLI > environment > none."""

    if explicit is not None:
        return explicit
    environ = os.environ if env is None else env
    from_env = environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return None


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _optional_string(section: Mapping[str, Any], key: str, *, label: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{label}.{key} must be a non-empty string")
    return value.strip()


def _string_list(value: Any, *, field_name: str) -> List[str]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ConfigError(f"{field_name} must be a list of strings")
    items: List[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"{field_name} entries must be strings")
        text = item.strip()
        if text:
            items.append(text)
    return items


def parse_settings(data: Mapping[str, Any]) -> Settings:
    """Build :class:`Settings` from a decoded configuration mapping."""

    search = _section(data, "search")
    tool = _section(data, "build_tool")

    pattern = _optional_string(search, "pattern", label="search") or DEFAULT_PATTERN

    arguments: Sequence[str] = DEFAULT_BUILD_ARGUMENTS
    if "arguments" in tool:
        arguments = tuple(_string_list(tool["arguments"], field_name="build_tool.arguments"))

    explicit_path = _optional_string(tool, "path", label="build_tool")
    relative = _optional_string(tool, "relative_path", label="build_tool")

    return Settings(
        pattern=pattern,
        build_tool=BuildToolSettings(
            env_var=_optional_string(tool, "env_var", label="build_tool") or DEFAULT_ENV_VAR,
            relative_path=Path(relative) if relative else DEFAULT_RELATIVE_PATH,
            path=Path(explicit_path).expanduser() if explicit_path else None,
            arguments=tuple(arguments),
        ),
    )


def load_settings(path: Path | None) -> Settings:
    """Load :class:`Settings` from ``path``; defaults when ``path`` is ``None``."""

    if path is None:
        return Settings()
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")
    return parse_settings(load_config_file(path))


__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "FILE_LOADERS",
    "Settings",
    "load_config_file",
    "load_settings",
    "locate_config_file",
    "parse_settings",
]
