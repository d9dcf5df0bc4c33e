"""Configuration resolution helpers."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Iterable

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import FileFinchConfig

ENV_PREFIX = "FILEFINCH__"


def resolve_with_precedence(
    *,
    defaults: FileFinchConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> FileFinchConfig:
    """Layer overrides onto ``defaults``: file, then environment, then CLI.

    Keys may be nested mappings or dotted paths such as ``"logging.level"``.

    Raises:
        ConfigError: If an override is malformed or the result fails validation.
    """
    merged = defaults.model_dump(mode="python")
    layers = (("file", file_overrides), ("environment", env_overrides), ("cli", cli_overrides))
    for source_name, layer in layers:
        if layer is None:
            continue
        merged = merge_mappings(merged, expand_dotted(layer, source_name=source_name))

    try:
        return FileFinchConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: FileFinchConfig) -> dict[str, str]:
    """Render ``config`` as ``FILEFINCH__SECTION__KEY`` environment variables."""
    flat: dict[str, str] = {}
    for path, value in _walk(config.model_dump(mode="python"), ()):
        key = ENV_PREFIX + "__".join(segment.upper() for segment in path)
        if value is None:
            flat[key] = "null"
        elif isinstance(value, bool):
            flat[key] = "true" if value else "false"
        elif isinstance(value, list):
            flat[key] = yaml.safe_dump(value, default_flow_style=True).strip()
        else:
            flat[key] = str(value)
    return flat


def parse_env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``FILEFINCH__`` variables into a nested override mapping.

    Values are parsed as YAML literals so ``"true"`` and ``"12"`` become
    typed values; unparsable values are kept as raw strings.
    """
    overrides: dict[str, Any] = {}
    for key, raw_value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        segments = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
        if not segments:
            continue
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        overrides = merge_mappings(overrides, _nest(segments, value))
    return overrides


def expand_dotted(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    """Turn dotted keys into nested mappings, validating key types."""
    if not isinstance(source, Mapping):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, Mapping):
            value = expand_dotted(value, source_name=source_name)
        segments = key.split(".")
        parent = expanded
        for segment in segments[:-1]:
            child = parent.setdefault(segment, {})
            if not isinstance(child, dict):
                raise ConfigError(
                    f"{source_name.capitalize()} override for {key} conflicts with existing value."
                )
            parent = child
        leaf = segments[-1]
        if isinstance(value, dict) and isinstance(parent.get(leaf), dict):
            parent[leaf] = merge_mappings(parent[leaf], value)
        else:
            parent[leaf] = value
    return expanded


def merge_mappings(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of ``base`` with ``overrides`` merged recursively."""
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_mappings(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def _nest(segments: list[str], value: Any) -> dict[str, Any]:
    nested: Any = value
    for segment in reversed(segments):
        nested = {segment: nested}
    return nested


def _walk(data: Mapping[str, Any], prefix: tuple[str, ...]) -> Iterable[tuple[tuple[str, ...], Any]]:
    for key, value in data.items():
        path = (*prefix, str(key))
        if isinstance(value, Mapping):
            yield from _walk(value, path)
        else:
            yield path, value


__all__ = [
    "ENV_PREFIX",
    "expand_dotted",
    "flatten_for_env",
    "merge_mappings",
    "parse_env_overrides",
    "resolve_with_precedence",
]
