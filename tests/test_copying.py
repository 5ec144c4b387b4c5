"""Tests for deep copies of JSON documents."""

from datetime import datetime

import pytest

from json_hash.copying import copy_json, copy_list
from json_hash.errors import CyclicStructureError, UnsupportedTypeError


def test_copy_json_is_fully_independent():
    """Mutating the copy never touches the original."""
    original = {"a": 1, "child": {"b": [1, {"c": 2}]}, "n": None}
    copy = copy_json(original)

    assert copy == original
    copy["child"]["b"][1]["c"] = 3
    copy["child"]["b"].append(4)
    assert original == {"a": 1, "child": {"b": [1, {"c": 2}]}, "n": None}


def test_copy_json_unshares_shared_subtrees():
    """A subtree referenced twice becomes two independent copies."""
    shared = {"x": 1}
    copy = copy_json({"left": shared, "right": shared})

    assert copy["left"] is not copy["right"]
    copy["left"]["x"] = 2
    assert copy["right"]["x"] == 1


def test_copy_list_copies_nested_lists():
    """Nested lists are copied element by element."""
    original = [[1, 2], [3, [4]], None, "s", True]
    copy = copy_list(original)
    assert copy == original
    assert copy[0] is not original[0]
    assert copy[1][1] is not original[1][1]


def test_copy_json_rejects_unsupported_types():
    """Unsupported values fail with the path of the offending field."""
    with pytest.raises(UnsupportedTypeError) as excinfo:
        copy_json({"a": {"when": datetime(2024, 1, 1)}})
    assert excinfo.value.type_name == "datetime"
    assert excinfo.value.path == "/a/when"


def test_copy_list_rejects_unsupported_types():
    """Lists are checked symmetrically to maps."""
    with pytest.raises(UnsupportedTypeError, match="set"):
        copy_list([1, {2}])


def test_copy_json_rejects_non_map_root():
    """Only maps can be copied with copy_json."""
    with pytest.raises(UnsupportedTypeError):
        copy_json([1, 2])  # type: ignore[arg-type]


def test_copy_json_detects_cycles():
    """A map containing itself is rejected instead of recursing forever."""
    cyclic: dict[str, object] = {"a": 1}
    cyclic["self"] = cyclic
    with pytest.raises(CyclicStructureError) as excinfo:
        copy_json(cyclic)  # type: ignore[arg-type]
    assert excinfo.value.path == "/self"


def test_copy_list_detects_cycles():
    """A list containing itself is rejected."""
    cyclic: list[object] = [1]
    cyclic.append(cyclic)
    with pytest.raises(CyclicStructureError):
        copy_list(cyclic)  # type: ignore[arg-type]
