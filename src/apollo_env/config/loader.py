from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml
from dotenv import load_dotenv

from apollo_env.config.models import (
    AppConfig,
    ConfigLoadRequest,
    HttpSettings,
    LoggingSettings,
)

# Required coordinates start empty so env overrides can target them; emptiness is
# reported as MissingRequiredField when URLs are built. Empty query fields add nothing.
_APOLLO_DEFAULTS: dict[str, Any] = {
    "app_id": "",
    "cluster_name": "",
    "config_server_url": "",
    "client_ip": "",
    "is_cache": False,
    "release_key": "",
}

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _default_config() -> dict[str, Any]:
    return {
        "apollo": dict(_APOLLO_DEFAULTS),
        "http": HttpSettings().model_dump(mode="python"),
        "logging": LoggingSettings().model_dump(mode="python"),
    }


def _merge_section(target: MutableMapping[str, Any], incoming: Mapping[str, Any]) -> None:
    """Merge `incoming` into `target` in place; nested mappings merge, everything else replaces."""
    for key, value in incoming.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, MutableMapping):
            _merge_section(current, value)
        else:
            target[key] = value


def _read_yaml_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")
    return data


def _parse_bool(dotted: str, raw: str) -> bool:
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Invalid boolean for '{dotted}': {raw!r}")


def _override_target(config: MutableMapping[str, Any], name: str, prefix: str) -> tuple[MutableMapping[str, Any], str]:
    """Resolve `PREFIX__SECTION__KEY` to the mapping holding `key`."""
    segments = [part.lower() for part in name[len(prefix) :].split("__") if part]
    if not segments:
        raise ValueError(f"Invalid environment variable override name: {name}")

    dotted = ".".join(segments)
    parent: Any = config
    for segment in segments[:-1]:
        parent = parent.get(segment) if isinstance(parent, MutableMapping) else None
        if parent is None:
            raise KeyError(f"Unknown configuration key path: {dotted}")
    if not isinstance(parent, MutableMapping):
        raise TypeError(f"Configuration key path does not point to a mapping: {dotted}")
    if segments[-1] not in parent:
        raise KeyError(f"Unknown configuration key path: {dotted}")
    return parent, segments[-1]


def _apply_env_overrides(config: MutableMapping[str, Any], env_prefix: str) -> None:
    """Apply string and boolean overrides from the environment; other value types are rejected."""
    for name, raw in os.environ.items():
        if not name.startswith(env_prefix):
            continue

        parent, leaf = _override_target(config, name, env_prefix)
        existing = parent[leaf]
        dotted = name[len(env_prefix) :].lower().replace("__", ".")
        if isinstance(existing, bool):
            parent[leaf] = _parse_bool(dotted, raw)
        elif isinstance(existing, str):
            parent[leaf] = raw
        else:
            raise TypeError(
                f"Environment variable overrides are only allowed for string and boolean values. "
                f"Key '{dotted}' is {type(existing).__name__}."
            )


class YamlConfigLoader:
    async def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> AppConfig:
        config = _default_config()
        _merge_section(config, _read_yaml_config(Path(request.yaml_path)))

        if request.dotenv_path is not None:
            dotenv_path = Path(request.dotenv_path)
            if dotenv_path.exists():
                load_dotenv(dotenv_path=dotenv_path, override=False)

        _apply_env_overrides(config, request.env_prefix)
        return AppConfig.model_validate(config)
