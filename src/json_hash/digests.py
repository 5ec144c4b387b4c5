"""Digest primitive selection and the URL-safe hash string encoding."""

from __future__ import annotations

import base64
import hashlib
from collections.abc import Callable

from .errors import ConfigurationError

__all__ = ["Digest", "encode_digest", "normalize_algorithm", "resolve_digest"]

Digest = Callable[[bytes], bytes]


def normalize_algorithm(name: str) -> str:
    """Map spellings such as ``"SHA-256"`` onto :mod:`hashlib` names.

    Raises:
        ConfigurationError: If no matching algorithm is available.
    """

    lowered = name.strip().lower()
    available = hashlib.algorithms_available
    for candidate in (lowered, lowered.replace("-", ""), lowered.replace("-", "_")):
        if candidate in available:
            return candidate
    raise ConfigurationError(f"Unsupported hash algorithm: {name}")


def resolve_digest(algorithm: str) -> Digest:
    """Return a ``digest(bytes) -> bytes`` function for ``algorithm``."""

    name = normalize_algorithm(algorithm)

    def digest(data: bytes) -> bytes:
        return hashlib.new(name, data).digest()

    return digest


def encode_digest(digest: bytes, length: int) -> str:
    """Encode digest bytes as URL-safe base64 without padding, cut to ``length``."""

    encoded = base64.b64encode(digest).decode("ascii")[:length]
    return encoded.replace("+", "-").replace("/", "_").replace("=", "")
