"""Canonical encoding of reduced maps.

The canonical form is a minimal JSON rendering: keys sorted ascending, no
whitespace, string values escaped for the double quote only and keys written
verbatim. It intentionally differs from :func:`json.dumps` so that hashes
agree with existing implementations of the algorithm.
"""

from __future__ import annotations

from typing import Any

from .numeric import format_number
from .types import check_key, node_kind

__all__ = ["encode_value", "json_string"]


def encode_value(value: Any) -> str:
    """Render a single reduced value.

    Raises:
        UnsupportedTypeError: For values outside the supported kinds.
    """

    kind = node_kind(value)
    if kind == "null":
        return "null"
    if kind == "bool":
        return "true" if value else "false"
    if kind == "string":
        return '"' + value.replace('"', '\\"') + '"'
    if kind == "number":
        return format_number(value)
    if kind == "list":
        return "[" + ",".join(encode_value(item) for item in value) + "]"
    return json_string(value)


def json_string(mapping: dict[str, Any]) -> str:
    """Render ``mapping`` with keys sorted ascending and no whitespace."""

    keys = sorted(check_key(key, "") for key in mapping)
    pairs = (f'"{key}":{encode_value(mapping[key])}' for key in keys)
    return "{" + ",".join(pairs) + "}"
