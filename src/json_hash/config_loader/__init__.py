"""Public entry points for the :mod:`json_hash` configuration loader."""

from __future__ import annotations

from pathlib import Path

from json_hash.config import HashConfig
from json_hash.config_loader.parsing import (
    apply_environment_overrides,
    apply_structured_overrides,
)
from json_hash.config_loader.sources import load_structured_config
from json_hash.settings import JsonHashSettings, get_settings

__all__ = ["load_config"]


def load_config(
    path: str | Path | None = None, *, settings: JsonHashSettings | None = None
) -> HashConfig:
    """Load configuration from environment and optional file sources.

    Environment values override the defaults, and a configuration file
    overrides both.

    Args:
        path: Optional explicit path to a configuration file. When omitted the
            loader inspects ``JSON_HASH_CONFIG_PATH`` and the default search
            locations.
        settings: Optional pre-instantiated environment settings. When omitted
            :func:`json_hash.settings.get_settings` is used.

    Returns:
        Fully populated :class:`HashConfig` instance.

    Raises:
        ConfigurationError: If the resulting values are inconsistent.
    """

    env_settings = settings or get_settings()
    base = apply_environment_overrides(HashConfig.default(), env_settings)
    structured = load_structured_config(path, env_settings)
    if structured is None:
        return base
    return apply_structured_overrides(base, structured)
