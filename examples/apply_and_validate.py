#!/usr/bin/env python3
"""
Apply and Validate Example

This example demonstrates:
- Adding hashes to a nested document
- Rejecting numbers finer than a precision step
- Hashing in place and keeping existing hashes
- Validating documents and reading the error details
"""

import json

from json_hash import (
    ApplyConfig,
    HashConfig,
    HashMismatchError,
    JsonHash,
    NumberHashingConfig,
    PrecisionExceededError,
)


def demonstrate_apply(jh):
    """Hash a nested document; children are hashed before their parent."""
    print("Add hashes to the json structure")
    document = jh.apply({"a": "0", "b": "1", "child": {"d": 3, "e": 4}})
    print(json.dumps(document, indent=2))
    assert document["child"]["_hash"] == "nfTEHYDoqVPb3ieJSmBxft"
    assert document["_hash"] == "k-3v5I-Q6Q9vPdVJxsMYUk"


def demonstrate_precision_step():
    """Use the strict number profile."""
    print("Set a maximum floating point precision")
    strict = JsonHash(
        HashConfig(number_config=NumberHashingConfig(precision_step=0.001))
    )
    try:
        strict.apply({"a": 1.000001})
    except PrecisionExceededError as e:
        print(e)


def demonstrate_in_place(jh):
    """Modify the caller's document instead of a copy."""
    print('Use the "in_place" option to modify the input object')
    document = {"a": 1, "b": 2}
    jh.apply(document, ApplyConfig(in_place=True))
    assert document["_hash"] == "QyWM_3g_5wNtikMDP4MK38"


def demonstrate_keep_existing(jh):
    """Create missing hashes but leave existing ones alone."""
    print('Set "update_existing_hashes=False" to keep existing hashes')
    document = jh.apply(
        {"a": 1, "b": 2, "child": {"c": 3}, "child2": {"_hash": "ABC123", "d": 4}},
        ApplyConfig(update_existing_hashes=False),
    )
    assert document["_hash"] == "pos6bn6mON0sirhEaXq41-"
    assert document["child"]["_hash"] == "yrqcsGrHfad4G4u9fgcAxY"
    assert document["child2"]["_hash"] == "ABC123"


def demonstrate_validate(jh):
    """Check hashes and inspect a mismatch."""
    print("Use validate to check if the hashes are correct")
    jh.validate(jh.apply({"a": 1, "b": 2}))

    try:
        jh.validate({"a": 3, "_hash": "invalid"})
    except HashMismatchError as e:
        print(e)
        print(f"expected={e.expected} actual={e.actual} path={e.path!r}")


def main():
    jh = JsonHash()
    demonstrate_apply(jh)
    demonstrate_precision_step()
    demonstrate_in_place(jh)
    demonstrate_keep_existing(jh)
    demonstrate_validate(jh)


if __name__ == "__main__":
    main()
