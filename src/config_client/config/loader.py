from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterator, Mapping, MutableMapping, Tuple

import yaml
from dotenv import load_dotenv

from config_client.config.models import AppConfig, ConfigLoadRequest

logger = logging.getLogger(__name__)

_SEGMENT_SEPARATOR = "__"


def _merge_into(base: MutableMapping[str, Any], layer: Mapping[str, Any]) -> None:
    """Recursively overlay `layer` onto `base`; non-mapping values replace what is there."""
    for key, value in layer.items():
        current = base.get(key)
        if isinstance(value, Mapping) and isinstance(current, MutableMapping):
            _merge_into(current, value)
        else:
            base[key] = value


def _read_yaml_layer(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open(encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")
    return data


def _iter_env_overrides(prefix: str) -> Iterator[Tuple[Tuple[str, ...], str]]:
    # APP__SPRING__CLOUD__CONFIG__URI -> ("spring", "cloud", "config", "uri")
    for name, value in os.environ.items():
        if not name.startswith(prefix):
            continue
        segments = tuple(part.lower() for part in name[len(prefix) :].split(_SEGMENT_SEPARATOR) if part)
        if not segments:
            raise ValueError(f"Invalid environment variable override name: {name}")
        yield segments, value


def _set_scalar(config: MutableMapping[str, Any], segments: Tuple[str, ...], value: str) -> None:
    dotted = ".".join(segments)
    node: Any = config
    for segment in segments[:-1]:
        if not isinstance(node, MutableMapping) or segment not in node:
            raise KeyError(f"Unknown configuration key path: {dotted}")
        node = node[segment]
    if not isinstance(node, MutableMapping):
        raise TypeError(f"Configuration key path does not point to a mapping: {dotted}")

    leaf = segments[-1]
    if leaf not in node:
        raise KeyError(f"Unknown configuration key path: {dotted}")
    if isinstance(node[leaf], (dict, list)):
        raise TypeError(
            f"Environment variable overrides are only allowed for scalar values. "
            f"Key '{dotted}' is {type(node[leaf]).__name__}."
        )
    # Coercion ("false" -> bool, "2.5" -> float) happens during model validation.
    node[leaf] = value
    logger.debug("Applied environment override. key=%s", dotted)


class YamlConfigLoader:
    """
    Builds the local AppConfig.

    Layers, lowest first: model defaults, the YAML file, then `<prefix>SECTION__KEY`
    environment variables (optionally seeded from a .env file that never replaces
    variables already set in the process).
    """

    async def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> AppConfig:
        config: dict[str, Any] = AppConfig().model_dump(mode="python")
        _merge_into(config, _read_yaml_layer(Path(request.yaml_path)))

        if request.dotenv_path is not None:
            dotenv_path = Path(request.dotenv_path)
            if dotenv_path.exists():
                load_dotenv(dotenv_path=dotenv_path, override=False)

        for segments, value in _iter_env_overrides(request.env_prefix):
            _set_scalar(config, segments, value)
        return AppConfig.model_validate(config)
