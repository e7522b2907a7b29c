"""Layered configuration loading.

Layers, lowest precedence first::

    AppConfig field defaults < YAML file < STATIONCAST_* env (+ .env) < CLI

Every layer is reduced to the sectioned shape of ``config.yaml`` before
merging, so flat keys (``catalog_url``, ``log_level``) and nested keys
(``catalog: {url: ...}``) can be mixed freely.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .schema import AppConfig, EnvOverrides

# Flat-key prefix -> config section.
_SECTION_PREFIXES: dict[str, str] = {
    "catalog_": "catalog",
    "http_": "http",
    "log_": "logging",
}
_SECTIONS = frozenset(_SECTION_PREFIXES.values())


def _flat_key_targets() -> dict[str, tuple[str, str]]:
    targets: dict[str, tuple[str, str]] = {}
    for name in EnvOverrides.model_fields:
        for prefix, section in _SECTION_PREFIXES.items():
            if name.startswith(prefix):
                targets[name] = (section, name[len(prefix):])
                break
    return targets


_FLAT_KEY_TARGETS = _flat_key_targets()


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in layer.items():
        if key in _SECTIONS and isinstance(value, Mapping):
            out.setdefault(key, {}).update(value)
        elif key in _FLAT_KEY_TARGETS:
            section, field = _FLAT_KEY_TARGETS[key]
            out.setdefault(section, {})[field] = value
        else:
            out[key] = value
    return out


def _merged(lower: Mapping[str, Any], upper: Mapping[str, Any]) -> dict[str, Any]:
    out = dict(lower)
    for key, value in upper.items():
        below = out.get(key)
        if isinstance(below, Mapping) and isinstance(value, Mapping):
            out[key] = _merged(below, value)
        else:
            out[key] = value
    return out


def _defaults_layer() -> dict[str, Any]:
    layer = AppConfig().to_sectioned_dict()
    # Unset so that the format is re-derived from the final environment.
    layer["logging"].pop("format")
    return layer


def _yaml_layer(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open(encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config YAML must be a mapping, got {type(data).__name__}")
    return data


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Merge every configuration layer and validate the result.

    Args:
        config_path: Optional YAML file (sectioned or flat keys).
        dotenv_path: Optional ``.env`` file. Its variables join the
            environment layer without replacing variables already set.
        cli_overrides: Highest-precedence values, flat or sectioned.

    Raises:
        FileNotFoundError: ``config_path`` or ``dotenv_path`` does not exist.
        ValueError: the YAML file is not a mapping.
        pydantic.ValidationError: the merged values are invalid.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [_defaults_layer()]
    if config_path is not None:
        layers.append(_yaml_layer(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        merged = _merged(merged, _sectioned(layer))

    return AppConfig.model_validate(merged)
