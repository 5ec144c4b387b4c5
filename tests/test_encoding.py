"""Unit tests for the canonical encoder and digest encoding."""

import hashlib
from decimal import Decimal

import pytest

from json_hash.digests import encode_digest, normalize_algorithm, resolve_digest
from json_hash.encoding import encode_value, json_string
from json_hash.errors import ConfigurationError, UnsupportedTypeError


def test_json_string_sorts_keys():
    """Keys are emitted in ascending order without whitespace."""
    assert json_string({"b": 1, "a": 2, "c": "x"}) == '{"a":2,"b":1,"c":"x"}'


def test_json_string_is_independent_of_insertion_order():
    """Equal mappings produce identical bytes."""
    first = {"a": "value", "b": 1.0, "c": True}
    second = {"c": True, "b": 1.0, "a": "value"}
    assert json_string(first) == json_string(second)


def test_json_string_renders_scalars():
    """Booleans, null and numbers use their JSON spelling."""
    encoded = json_string({"t": True, "f": False, "n": None, "i": 1, "x": 1.0, "y": 0.5})
    assert encoded == '{"f":false,"i":1,"n":null,"t":true,"x":1,"y":0.5}'


def test_json_string_escapes_only_quotes():
    """Only the double quote is escaped in string values."""
    assert json_string({"k": 'say "hi"'}) == '{"k":"say \\"hi\\""}'
    assert json_string({"k": "back\\slash\nline"}) == '{"k":"back\\slash\nline"}'
    assert json_string({"k": "äö€"}) == '{"k":"äö€"}'


def test_json_string_nests_lists_and_maps():
    """Lists keep their order, nested maps are sorted too."""
    encoded = json_string({"l": [3, [1, None], "a"], "m": {"z": 1, "a": 2}})
    assert encoded == '{"l":[3,[1,null],"a"],"m":{"a":2,"z":1}}'


def test_encode_value_rejects_unsupported_types():
    """Unsupported values abort encoding with the offending type name."""
    with pytest.raises(UnsupportedTypeError, match="Unsupported type: Decimal"):
        encode_value(Decimal("1.5"))
    with pytest.raises(UnsupportedTypeError, match="Unsupported type: tuple"):
        json_string({"a": (1, 2)})


def test_json_string_rejects_non_string_keys():
    """Map keys must be strings."""
    with pytest.raises(UnsupportedTypeError, match="int"):
        json_string({1: "a"})


def test_encode_digest_is_url_safe_and_truncated():
    """Digest bytes become URL-safe base64 without padding."""
    digest = bytes([0xFB, 0xFF, 0xBF]) * 11
    encoded = encode_digest(digest, 8)
    assert encoded == "-_-_-_-_"
    assert "=" not in encode_digest(b"\x00", 10)


def test_encode_digest_reference_value():
    """The canonical bytes of {"key":"value"} hash to the published value."""
    digest = hashlib.sha256(b'{"key":"value"}').digest()
    assert encode_digest(digest, 22) == "5Dq88zdSRIOcAS-WM_lYYt"


def test_normalize_algorithm_accepts_common_spellings():
    """Hyphenated names map to hashlib names."""
    assert normalize_algorithm("SHA-256") == "sha256"
    assert normalize_algorithm("sha512") == "sha512"
    assert normalize_algorithm("SHA3-256") == "sha3_256"


def test_resolve_digest_rejects_unknown_algorithms():
    """Unknown algorithms are a configuration error."""
    with pytest.raises(ConfigurationError):
        resolve_digest("definitely-not-a-hash")


def test_resolve_digest_returns_bytes():
    """The resolved primitive maps bytes to digest bytes."""
    digest = resolve_digest("sha256")
    assert digest(b"abc") == hashlib.sha256(b"abc").digest()
