"""json-hash - deterministic, content-addressed hashes for JSON documents."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "ApplyConfig",
    "ConfigurationError",
    "CyclicStructureError",
    "HashConfig",
    "HashMismatchError",
    "HashMissingError",
    "HashReport",
    "InvalidNumberError",
    "JsonHash",
    "JsonHashError",
    "NumberHashingConfig",
    "PrecisionExceededError",
    "RangeExceededError",
    "UnsupportedTypeError",
    "apply",
    "apply_in_place",
    "apply_to_string",
    "calc_hash",
    "copy_json",
    "copy_list",
    "jh",
    "json_string",
    "load_config",
    "truncate",
    "validate",
]

if TYPE_CHECKING:
    from .config import ApplyConfig, HashConfig, NumberHashingConfig
    from .config_loader import load_config
    from .copying import copy_json, copy_list
    from .encoding import json_string
    from .errors import (
        ConfigurationError,
        CyclicStructureError,
        HashMismatchError,
        HashMissingError,
        InvalidNumberError,
        JsonHashError,
        PrecisionExceededError,
        RangeExceededError,
        UnsupportedTypeError,
    )
    from .hasher import (
        JsonHash,
        apply,
        apply_in_place,
        apply_to_string,
        calc_hash,
        jh,
        validate,
    )
    from .numeric import truncate
    from .schemas import HashReport


_MODULE_MAP = {
    "ApplyConfig": "config",
    "HashConfig": "config",
    "NumberHashingConfig": "config",
    "load_config": "config_loader",
    "copy_json": "copying",
    "copy_list": "copying",
    "json_string": "encoding",
    "ConfigurationError": "errors",
    "CyclicStructureError": "errors",
    "HashMismatchError": "errors",
    "HashMissingError": "errors",
    "InvalidNumberError": "errors",
    "JsonHashError": "errors",
    "PrecisionExceededError": "errors",
    "RangeExceededError": "errors",
    "UnsupportedTypeError": "errors",
    "JsonHash": "hasher",
    "apply": "hasher",
    "apply_in_place": "hasher",
    "apply_to_string": "hasher",
    "calc_hash": "hasher",
    "jh": "hasher",
    "validate": "hasher",
    "truncate": "numeric",
    "HashReport": "schemas",
}


def __getattr__(name: str) -> Any:
    """Lazily import submodules so that pydantic is only loaded when needed."""

    if name not in _MODULE_MAP:
        raise AttributeError(name)

    module = import_module(f".{_MODULE_MAP[name]}", __name__)
    return getattr(module, name)
