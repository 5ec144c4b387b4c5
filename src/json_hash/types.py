"""Type definitions for JSON documents handled by :mod:`json_hash`."""

from __future__ import annotations

from typing import Final, Literal, TypeAlias, Union

from .errors import UnsupportedTypeError

JsonValue: TypeAlias = Union[
    None, bool, int, float, str, dict[str, "JsonValue"], list["JsonValue"]
]
JsonMap: TypeAlias = dict[str, JsonValue]

NodeKind = Literal["null", "bool", "number", "string", "map", "list"]

HASH_KEY: Final[str] = "_hash"

def node_kind(value: object, path: str = "") -> NodeKind:
    """Classify ``value`` into one of the six supported kinds.

    ``bool`` is tested before ``int`` because it is an ``int`` subclass.

    Raises:
        UnsupportedTypeError: For any other Python type.
    """

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "map"
    if isinstance(value, list):
        return "list"
    raise UnsupportedTypeError(value, path=path)


def check_key(key: object, path: str) -> str:
    """Return ``key`` when it is a string, otherwise raise."""

    if not isinstance(key, str):
        raise UnsupportedTypeError(key, path=path)
    return key

def join_path(path: str, segment: str | int) -> str:
    """Append a field name or list index to a structural path."""

    return f"{path}/{segment}"
