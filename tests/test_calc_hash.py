"""Tests for hashing standalone strings, lists and maps."""

import pytest

from json_hash.config import HashConfig
from json_hash.errors import UnsupportedTypeError
from json_hash.hasher import JsonHash, calc_hash


def test_calc_hash_of_string():
    """Strings are hashed directly, without JSON encoding."""
    assert calc_hash("hello") == "LPJNul-wow4m6Dsqxbninh"
    assert calc_hash('{"key":"value"}') == "5Dq88zdSRIOcAS-WM_lYYt"


def test_calc_hash_of_list_wraps_it():
    """Lists are hashed as the map {"array": list}."""
    assert calc_hash([1, 2]) == "_c_8AFU_ZcjZ552PUFz6W3"
    assert calc_hash([1, 2]) == calc_hash({"array": [1, 2]})


def test_calc_hash_of_list_does_not_mutate_input():
    """Maps inside the list do not receive a hash."""
    items = [{"x": 1}, 2]
    calc_hash(items)
    assert items == [{"x": 1}, 2]


def test_calc_hash_of_list_keeps_existing_hashes():
    """Already-hashed elements are used as they are."""
    with_hash = calc_hash([{"x": 1, "_hash": "UEG_H3E98gR4Q1PoL2pKU1"}])
    without_hash = calc_hash([{"x": 1}])
    assert with_hash == without_hash
    assert calc_hash([{"x": 1, "_hash": "custom"}]) != without_hash


def test_calc_hash_of_map_matches_apply(hasher):
    """Maps hash the same as their applied root hash."""
    document = {"a": 1, "b": 2}
    assert hasher.calc_hash(document) == "QyWM_3g_5wNtikMDP4MK38"
    assert "_hash" not in document


def test_calc_hash_honours_hash_length():
    """Configured length applies to every hash."""
    hasher = JsonHash(HashConfig(hash_length=5))
    assert hasher.calc_hash("hello") == "LPJNu"


@pytest.mark.parametrize("value", [5, 1.5, None, True, ("a",)])
def test_calc_hash_rejects_other_types(value):
    """Only strings, lists and maps can be hashed."""
    with pytest.raises(UnsupportedTypeError):
        calc_hash(value)  # type: ignore[arg-type]
