"""Immutable configuration objects for hashing, number handling and apply policy."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .digests import normalize_algorithm
from .errors import ConfigurationError

__all__ = ["ApplyConfig", "HashConfig", "NumberHashingConfig"]


@dataclass(frozen=True, slots=True)
class NumberHashingConfig:
    """Controls how numbers are normalised before hashing.

    Two mutually exclusive profiles exist. By default non-integer numbers are
    truncated to ``precision`` decimal digits. When ``precision_step`` is set,
    numbers are hashed unchanged but must be a multiple of the step.

    Attributes:
        precision: Number of decimal digits kept by truncation.
        precision_step: Absolute precision step enabling the strict profile.
        max_num: Upper bound for non-integer numbers.
        min_num: Lower bound for non-integer numbers.
        throw_on_range_error: Whether out-of-range numbers are rejected.
    """

    precision: int = 10
    precision_step: float | None = None
    max_num: float = 1_000_000_000.0
    min_num: float = -1_000_000_000.0
    throw_on_range_error: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ConfigurationError("precision must be an integer")
        if self.precision < 0:
            raise ConfigurationError("precision must be >= 0")
        if self.precision_step is not None:
            if not math.isfinite(self.precision_step) or self.precision_step <= 0:
                raise ConfigurationError("precision_step must be a positive number")
        if math.isnan(self.max_num) or math.isnan(self.min_num):
            raise ConfigurationError("max_num and min_num must be numbers")
        if self.min_num > self.max_num:
            raise ConfigurationError("min_num must not be greater than max_num")

    @property
    def truncates(self) -> bool:
        """Return ``True`` when the truncation profile is active."""

        return self.precision_step is None

    @classmethod
    def default(cls) -> NumberHashingConfig:
        return cls()


@dataclass(frozen=True, slots=True)
class ApplyConfig:
    """Options used when writing hashes into a document.

    Attributes:
        in_place: Mutate the caller's document instead of a deep copy.
        update_existing_hashes: Recompute hashes that are already present.
            When ``False`` every map that already carries a hash is kept
            as-is and treated as an opaque leaf.
        throw_on_hash_mismatch: Raise when a present hash differs from the
            recomputed one instead of overwriting it.
        recursive: Descend into children that already carry a hash. When
            ``False`` such children are kept as-is even if
            ``update_existing_hashes`` is ``True``.
    """

    in_place: bool = False
    update_existing_hashes: bool = True
    throw_on_hash_mismatch: bool = True
    recursive: bool = True

    @classmethod
    def default(cls) -> ApplyConfig:
        return cls()


@dataclass(frozen=True, slots=True)
class HashConfig:
    """Top level hashing configuration.

    Attributes:
        hash_length: Number of characters kept from the encoded digest.
        hash_algorithm: :mod:`hashlib` algorithm name.
        number_config: Number normalisation settings.
    """

    hash_length: int = 22
    hash_algorithm: str = "sha256"
    number_config: NumberHashingConfig = field(default_factory=NumberHashingConfig)

    def __post_init__(self) -> None:
        if isinstance(self.hash_length, bool) or not isinstance(self.hash_length, int):
            raise ConfigurationError("hash_length must be an integer")
        if self.hash_length < 1:
            raise ConfigurationError("hash_length must be >= 1")
        object.__setattr__(
            self, "hash_algorithm", normalize_algorithm(self.hash_algorithm)
        )

    @classmethod
    def default(cls) -> HashConfig:
        return cls()
