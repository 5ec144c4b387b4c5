"""Configuration source utilities for :mod:`json_hash.config_loader`."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import cast

import yaml

from json_hash.settings import JsonHashSettings

LOGGER = logging.getLogger(__name__)

_DEFAULT_CANDIDATES: tuple[Path, ...] = (
    Path("json_hash.yml"),
    Path("json_hash.yaml"),
    Path("json_hash.json"),
    Path("config/json_hash.yml"),
    Path("config/json_hash.yaml"),
    Path("config/json_hash.json"),
)


def load_structured_config(
    path: str | Path | None, settings: JsonHashSettings
) -> dict[str, object] | None:
    """Load configuration data from disk.

    Args:
        path: Explicit configuration path provided by the caller.
        settings: Environment-derived settings used for fallback discovery.

    Returns:
        A dictionary representation of the first readable configuration file,
        otherwise ``None``.
    """

    candidates: Iterable[Path]
    if path is not None:
        candidates = (Path(path),)
    elif settings.config_path:
        candidates = (Path(settings.config_path),)
    else:
        candidates = _DEFAULT_CANDIDATES

    for candidate in candidates:
        data = _load_config_file(candidate)
        if data is not None:
            LOGGER.debug("Loaded configuration", extra={"config_path": str(candidate)})
            return data
    return None


def _load_config_file(path: Path) -> dict[str, object] | None:
    """Load a configuration file based on its suffix.

    Args:
        path: Candidate configuration path.

    Returns:
        Parsed mapping when the file exists and is valid, otherwise ``None``.
    """

    if not path.is_file():
        return None
    suffix = path.suffix.lower()
    if suffix == ".json":
        return _load_json(path)
    if suffix in {".yml", ".yaml"}:
        return _load_yaml(path)
    LOGGER.warning("Ignoring configuration file with unknown suffix: %s", path)
    return None


def _load_json(path: Path) -> dict[str, object] | None:
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        LOGGER.warning("Ignoring unreadable configuration file %s: %s", path, exc)
        return None
    return _normalize_mapping(data, path)


def _load_yaml(path: Path) -> dict[str, object] | None:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        LOGGER.warning("Ignoring unreadable configuration file %s: %s", path, exc)
        return None
    return _normalize_mapping(data, path)


def _normalize_mapping(value: object, path: Path) -> dict[str, object] | None:
    """Restrict parsed content to a mapping with string keys.

    Args:
        value: Object produced by JSON/YAML parsing.
        path: Source file, used for diagnostics.

    Returns:
        Mapping restricted to string keys, or ``None`` for non-mappings.
    """

    if not isinstance(value, dict):
        LOGGER.warning("Configuration file %s does not contain a mapping", path)
        return None
    value_dict = cast(dict[object, object], value)
    return {key: item for key, item in value_dict.items() if isinstance(key, str)}
