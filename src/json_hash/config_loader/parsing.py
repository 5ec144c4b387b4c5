"""Parsing and transformation helpers for :mod:`json_hash.config_loader`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace

from json_hash.config import HashConfig, NumberHashingConfig
from json_hash.settings import JsonHashSettings

_UNSET = object()


def apply_environment_overrides(
    config: HashConfig, settings: JsonHashSettings
) -> HashConfig:
    """Apply environment-derived overrides to the configuration.

    Args:
        config: Base configuration instance.
        settings: Environment-derived settings.

    Returns:
        Configuration with environment overrides applied.

    Raises:
        ConfigurationError: If the combined values are inconsistent.
    """

    updated = config
    if settings.hash_length is not None:
        updated = replace(updated, hash_length=settings.hash_length)
    if settings.hash_algorithm is not None:
        updated = replace(updated, hash_algorithm=settings.hash_algorithm)

    numbers = _number_overrides(
        updated.number_config,
        precision=settings.precision,
        precision_step=(
            settings.precision_step
            if settings.precision_step is not None
            else _UNSET
        ),
        max_num=settings.max_num,
        min_num=settings.min_num,
        throw_on_range_error=settings.throw_on_range_error,
    )
    return replace(updated, number_config=numbers)


def apply_structured_overrides(
    config: HashConfig, data: Mapping[str, object]
) -> HashConfig:
    """Apply overrides sourced from structured configuration data.

    Args:
        config: Base configuration instance.
        data: Mapping parsed from a configuration file.

    Returns:
        Configuration updated according to the provided mapping.
    """

    updated = config

    hash_section = _expect_mapping(data.get("hash"))
    if hash_section is not None:
        length = _coerce_int(hash_section.get("length"))
        if length is not None:
            updated = replace(updated, hash_length=length)
        algorithm = _coerce_str(hash_section.get("algorithm"))
        if algorithm is not None:
            updated = replace(updated, hash_algorithm=algorithm)

    numbers_section = _expect_mapping(data.get("numbers"))
    if numbers_section is not None:
        step: object = _UNSET
        if "precision_step" in numbers_section:
            raw_step = numbers_section["precision_step"]
            step = None if raw_step is None else _coerce_float(raw_step)
            if step is None and raw_step is not None:
                step = _UNSET
        numbers = _number_overrides(
            updated.number_config,
            precision=_coerce_int(numbers_section.get("precision")),
            precision_step=step,
            max_num=_coerce_float(numbers_section.get("max_num")),
            min_num=_coerce_float(numbers_section.get("min_num")),
            throw_on_range_error=_coerce_bool(
                numbers_section.get("throw_on_range_error")
            ),
        )
        updated = replace(updated, number_config=numbers)

    return updated


def _number_overrides(
    numbers: NumberHashingConfig,
    *,
    precision: int | None,
    precision_step: object,
    max_num: float | None,
    min_num: float | None,
    throw_on_range_error: bool | None,
) -> NumberHashingConfig:
    """Return ``numbers`` with every non-``None`` override applied at once.

    ``precision_step`` uses a sentinel because ``None`` is a meaningful value
    (it selects the truncation profile).
    """

    changes: dict[str, object] = {}
    if precision is not None:
        changes["precision"] = precision
    if precision_step is not _UNSET:
        changes["precision_step"] = precision_step
    if max_num is not None:
        changes["max_num"] = max_num
    if min_num is not None:
        changes["min_num"] = min_num
    if throw_on_range_error is not None:
        changes["throw_on_range_error"] = throw_on_range_error
    if not changes:
        return numbers
    return replace(numbers, **changes)  # type: ignore[arg-type]


def _coerce_float(value: object) -> float | None:
    """Parse a float from arbitrary input.

    Args:
        value: Raw value.

    Returns:
        Parsed float when conversion succeeds, otherwise ``None``.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _coerce_int(value: object) -> int | None:
    """Parse an integer from arbitrary input.

    Args:
        value: Raw value.

    Returns:
        Parsed integer when conversion succeeds, otherwise ``None``.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _coerce_bool(value: object) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes"}:
            return True
        if lowered in {"false", "0", "no"}:
            return False
    return None


def _coerce_str(value: object) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def _expect_mapping(value: object) -> Mapping[str, object] | None:
    """Return the value when it is a mapping with string keys.

    Args:
        value: Raw configuration value.

    Returns:
        Mapping with string keys suitable for further parsing, or ``None``.
    """

    if not isinstance(value, Mapping):
        return None
    if not all(isinstance(key, str) for key in value.keys()):
        return None
    return value
