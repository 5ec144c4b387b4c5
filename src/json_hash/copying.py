"""Deep structural copies of JSON documents."""

from __future__ import annotations

from typing import cast

from .errors import CyclicStructureError, UnsupportedTypeError
from .types import JsonMap, JsonValue, check_key, join_path, node_kind

__all__ = ["copy_json", "copy_list"]


def copy_json(json: JsonMap) -> JsonMap:
    """Return an independent deep copy of ``json``.

    Raises:
        UnsupportedTypeError: If the document holds an unsupported value.
        CyclicStructureError: If a container contains itself.
    """

    if not isinstance(json, dict):
        raise UnsupportedTypeError(json)
    return _copy_map(json, "", set())


def copy_list(items: list[JsonValue]) -> list[JsonValue]:
    """Return an independent deep copy of ``items``."""

    if not isinstance(items, list):
        raise UnsupportedTypeError(items)
    return _copy_list(items, "", set())


def _copy_value(value: JsonValue, path: str, active: set[int]) -> JsonValue:
    kind = node_kind(value, path)
    if kind == "map":
        return _copy_map(cast(JsonMap, value), path, active)
    if kind == "list":
        return _copy_list(cast("list[JsonValue]", value), path, active)
    return value


def _copy_map(json: JsonMap, path: str, active: set[int]) -> JsonMap:
    marker = id(json)
    if marker in active:
        raise CyclicStructureError(path=path)
    active.add(marker)
    try:
        copy: JsonMap = {}
        for key, value in json.items():
            child_path = join_path(path, check_key(key, path))
            copy[key] = _copy_value(value, child_path, active)
        return copy
    finally:
        active.discard(marker)


def _copy_list(items: list[JsonValue], path: str, active: set[int]) -> list[JsonValue]:
    marker = id(items)
    if marker in active:
        raise CyclicStructureError(path=path)
    active.add(marker)
    try:
        return [
            _copy_value(item, join_path(path, index), active)
            for index, item in enumerate(items)
        ]
    finally:
        active.discard(marker)
