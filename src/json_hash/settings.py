"""Environment-backed settings primitives for :mod:`json_hash`."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["JsonHashSettings", "get_settings"]


class JsonHashSettings(BaseSettings):
    """Expose environment-derived configuration knobs for json-hash.

    All attributes default to ``None`` when the corresponding variable is not
    present, so that only explicitly configured values override the built-in
    defaults.

    Attributes:
        hash_length: Number of hash characters (``JSON_HASH_LENGTH``).
        hash_algorithm: :mod:`hashlib` algorithm (``JSON_HASH_ALGORITHM``).
        precision: Decimal digits kept by truncation (``JSON_HASH_PRECISION``).
        precision_step: Absolute precision step enabling the strict number
            profile (``JSON_HASH_PRECISION_STEP``).
        max_num: Upper bound for non-integer numbers (``JSON_HASH_MAX_NUM``).
        min_num: Lower bound for non-integer numbers (``JSON_HASH_MIN_NUM``).
        throw_on_range_error: Reject out-of-range numbers
            (``JSON_HASH_THROW_ON_RANGE_ERROR``).
        config_path: Explicit configuration file (``JSON_HASH_CONFIG_PATH``).
    """

    hash_length: int | None = Field(default=None, alias="JSON_HASH_LENGTH")
    hash_algorithm: str | None = Field(default=None, alias="JSON_HASH_ALGORITHM")
    precision: int | None = Field(default=None, alias="JSON_HASH_PRECISION")
    precision_step: float | None = Field(
        default=None, alias="JSON_HASH_PRECISION_STEP"
    )
    max_num: float | None = Field(default=None, alias="JSON_HASH_MAX_NUM")
    min_num: float | None = Field(default=None, alias="JSON_HASH_MIN_NUM")
    throw_on_range_error: bool | None = Field(
        default=None, alias="JSON_HASH_THROW_ON_RANGE_ERROR"
    )
    config_path: str | None = Field(default=None, alias="JSON_HASH_CONFIG_PATH")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("precision_step", "max_num", "min_num", mode="before")
    @classmethod
    def _parse_optional_float(cls, value: object) -> float | None:
        """Parse optional float fields while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed float when conversion succeeds, otherwise ``None``.
        """

        if value is None:
            return None
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

    @field_validator("hash_length", "precision", mode="before")
    @classmethod
    def _parse_optional_int(cls, value: object) -> int | None:
        if value is None or isinstance(value, bool):
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

    @field_validator("throw_on_range_error", mode="before")
    @classmethod
    def _parse_optional_bool(cls, value: object) -> bool | None:
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"true", "1", "yes", "on"}:
                return True
            if lowered in {"false", "0", "no", "off"}:
                return False
        return None

    @field_validator("hash_algorithm", "config_path", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None


def get_settings() -> JsonHashSettings:
    """Return a :class:`JsonHashSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return JsonHashSettings()
