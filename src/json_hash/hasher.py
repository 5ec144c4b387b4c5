"""Write and validate content-addressed hashes inside JSON documents.

Every map of a document receives a ``_hash`` field. A map's hash covers its
own fields, except ``_hash``, with each nested map replaced by that map's
hash and each list replaced by a flattened list of hashes and scalars. Maps
are therefore hashed leaves first, and changing any value changes the hash
of every enclosing map up to the root.
"""

from __future__ import annotations

import json as jsonlib
import logging
from typing import cast

from .config import ApplyConfig, HashConfig
from .copying import copy_json, copy_list
from .digests import Digest, encode_digest, resolve_digest
from .encoding import json_string
from .errors import (
    CyclicStructureError,
    HashMismatchError,
    HashMissingError,
    UnsupportedTypeError,
)
from .numeric import NumberNormalizer
from .types import HASH_KEY, JsonMap, JsonValue, check_key, join_path, node_kind

__all__ = [
    "JsonHash",
    "apply",
    "apply_in_place",
    "apply_to_string",
    "calc_hash",
    "jh",
    "validate",
]

LOGGER = logging.getLogger(__name__)

_VALIDATION_APPLY_CONFIG = ApplyConfig(
    in_place=False, update_existing_hashes=True, throw_on_hash_mismatch=False
)


class JsonHash:
    """Adds hashes to JSON documents and validates them.

    Args:
        config: Hash length, digest algorithm and number settings. Defaults
            to :meth:`HashConfig.default`.
        digest: Optional ``digest(bytes) -> bytes`` replacing the primitive
            selected by ``config.hash_algorithm``.
    """

    def __init__(
        self, config: HashConfig | None = None, *, digest: Digest | None = None
    ) -> None:
        self.config = config or HashConfig.default()
        self._digest = digest or resolve_digest(self.config.hash_algorithm)
        self._numbers = NumberNormalizer(self.config.number_config)

    @classmethod
    def default(cls) -> JsonHash:
        return cls()

    def apply(self, json: JsonMap, apply_config: ApplyConfig | None = None) -> JsonMap:
        """Write hashes into ``json``.

        Args:
            json: The document. The top level value must be a map.
            apply_config: Copy/mutate and update policy. Defaults to
                :meth:`ApplyConfig.default`.

        Returns:
            The hashed document: ``json`` itself when ``in_place`` is set,
            otherwise an independent copy.

        Raises:
            JsonHashError: On unsupported values, invalid numbers, cycles or,
                when ``throw_on_hash_mismatch`` is set, outdated hashes.
                No hash is written into the document when an error is raised.
        """

        apply_config = apply_config or ApplyConfig.default()
        if not isinstance(json, dict):
            raise UnsupportedTypeError(json)

        target = json if apply_config.in_place else copy_json(json)
        reducer = _Reducer(self, apply_config)
        reducer.hash_map(target, "", root=True)
        reducer.commit()

        LOGGER.debug(
            "Applied hashes",
            extra={
                "maps_hashed": reducer.hashed,
                "maps_kept": reducer.kept,
                "in_place": apply_config.in_place,
            },
        )
        return target

    def apply_in_place(
        self,
        json: JsonMap,
        update_existing_hashes: bool = False,
        throw_on_hash_mismatch: bool = True,
    ) -> JsonMap:
        """Write hashes directly into ``json`` and return it."""

        apply_config = ApplyConfig(
            in_place=True,
            update_existing_hashes=update_existing_hashes,
            throw_on_hash_mismatch=throw_on_hash_mismatch,
        )
        return self.apply(json, apply_config)

    def apply_to_string(self, text: str) -> str:
        """Parse a JSON object, add hashes and serialise it compactly."""

        json = jsonlib.loads(text)
        if not isinstance(json, dict):
            raise UnsupportedTypeError(json)
        hashed = self.apply(json, ApplyConfig(in_place=True))
        return jsonlib.dumps(hashed, separators=(",", ":"), ensure_ascii=False)

    def calc_hash(self, value: str | list[JsonValue] | JsonMap) -> str:
        """Return the hash of a string, a list or a map.

        Strings are hashed as they are. A list is hashed as the synthetic
        map ``{"array": value}``, keeping hashes already present on maps
        inside the list. A map is hashed like :meth:`apply` would.
        """

        if isinstance(value, str):
            return self.hash_string(value)
        if isinstance(value, list):
            wrapper: JsonMap = {"array": copy_list(value)}
            self.apply_in_place(wrapper)
            return str(wrapper[HASH_KEY])
        if isinstance(value, dict):
            return str(self.apply(value)[HASH_KEY])
        raise UnsupportedTypeError(value)

    def hash_string(self, text: str) -> str:
        """Digest the UTF-8 bytes of ``text`` and encode the configured length."""

        digest = self._digest(text.encode("utf-8"))
        return encode_digest(digest, self.config.hash_length)

    def validate(self, json: JsonMap) -> JsonMap:
        """Check every hash in ``json`` without modifying it.

        Hashes are compared top-down; children are only inspected after
        their parent matched, so the reported path is the outermost point of
        divergence.

        Returns:
            ``json`` unchanged.

        Raises:
            HashMissingError: If a map has no ``_hash``.
            HashMismatchError: If a stored hash differs from the computed one.
        """

        if not isinstance(json, dict):
            raise UnsupportedTypeError(json)
        expected = self.apply(json, _VALIDATION_APPLY_CONFIG)
        self._validate_map(json, expected, "")
        LOGGER.debug("Validated hashes", extra={"root_hash": json[HASH_KEY]})
        return json

    def normalize_number(self, value: int | float, path: str = "") -> int | float:
        return self._numbers.normalize(value, path)

    def _validate_map(self, actual: JsonMap, expected: JsonMap, path: str) -> None:
        actual_hash = actual.get(HASH_KEY)
        expected_hash = str(expected[HASH_KEY])

        if actual_hash is None:
            raise HashMissingError(path=path)
        if actual_hash != expected_hash:
            raise HashMismatchError(
                expected=expected_hash, actual=str(actual_hash), path=path
            )

        for key, value in actual.items():
            if key == HASH_KEY:
                continue
            should = expected[key]
            if isinstance(value, dict) and isinstance(should, dict):
                self._validate_map(value, should, join_path(path, key))
            elif isinstance(value, list) and isinstance(should, list):
                self._validate_list(value, should, join_path(path, key))

    def _validate_list(
        self, actual: list[JsonValue], expected: list[JsonValue], path: str
    ) -> None:
        for index, (item, should) in enumerate(zip(actual, expected)):
            if isinstance(item, dict) and isinstance(should, dict):
                self._validate_map(item, should, join_path(path, index))
            elif isinstance(item, list) and isinstance(should, list):
                self._validate_list(item, should, join_path(path, index))


class _Reducer:
    """One post-order apply pass over a document.

    Fresh hashes are collected while the pass runs and only written into the
    maps by :meth:`commit`, so a failing pass leaves the document untouched.
    """

    def __init__(self, owner: JsonHash, apply_config: ApplyConfig) -> None:
        self._owner = owner
        self._config = apply_config
        self._active: set[int] = set()
        self._fresh: dict[int, tuple[JsonMap, str]] = {}
        self.hashed = 0
        self.kept = 0

    def hash_map(self, obj: JsonMap, path: str, *, root: bool = False) -> None:
        existing = obj.get(HASH_KEY)
        if existing and self._keeps_existing(root):
            self.kept += 1
            return

        self._enter(obj, path)
        try:
            for key, value in obj.items():
                if key == HASH_KEY:
                    continue
                child_path = join_path(path, check_key(key, path))
                kind = node_kind(value, child_path)
                if kind == "map":
                    self.hash_map(cast(JsonMap, value), child_path)
                elif kind == "list":
                    self.process_list(cast("list[JsonValue]", value), child_path)

            reduced: JsonMap = {
                key: self.reduce_value(value, join_path(path, key))
                for key, value in obj.items()
                if key != HASH_KEY
            }
            fresh = self._owner.hash_string(json_string(reduced))
        finally:
            self._leave(obj)

        if existing and existing != fresh:
            if self._config.throw_on_hash_mismatch:
                raise HashMismatchError.while_applying(
                    expected=fresh, actual=str(existing), path=path
                )
            LOGGER.debug(
                "Overwriting outdated hash", extra={"path": path or "/", "old": existing}
            )

        self._fresh[id(obj)] = (obj, fresh)
        self.hashed += 1

    def process_list(self, items: list[JsonValue], path: str) -> None:
        self._enter(items, path)
        try:
            for index, element in enumerate(items):
                element_path = join_path(path, index)
                kind = node_kind(element, element_path)
                if kind == "map":
                    self.hash_map(cast(JsonMap, element), element_path)
                elif kind == "list":
                    self.process_list(cast("list[JsonValue]", element), element_path)
        finally:
            self._leave(items)

    def reduce_value(self, value: JsonValue, path: str) -> JsonValue:
        kind = node_kind(value, path)
        if kind == "map":
            return self.hash_of(cast(JsonMap, value))
        if kind == "list":
            return [
                self.reduce_value(element, join_path(path, index))
                for index, element in enumerate(cast("list[JsonValue]", value))
            ]
        if kind == "number":
            return self._owner.normalize_number(cast("int | float", value), path)
        return value

    def hash_of(self, obj: JsonMap) -> JsonValue:
        """Return the hash computed in this pass, else the stored one."""

        fresh = self._fresh.get(id(obj))
        if fresh is not None:
            return fresh[1]
        return obj.get(HASH_KEY)

    def commit(self) -> None:
        """Write every hash computed in this pass into its map."""

        for obj, fresh in self._fresh.values():
            obj[HASH_KEY] = fresh

    def _keeps_existing(self, root: bool) -> bool:
        if not self._config.update_existing_hashes:
            return True
        return not self._config.recursive and not root

    def _enter(self, container: JsonMap | list[JsonValue], path: str) -> None:
        marker = id(container)
        if marker in self._active:
            raise CyclicStructureError(path=path)
        self._active.add(marker)

    def _leave(self, container: JsonMap | list[JsonValue]) -> None:
        self._active.discard(id(container))


jh = JsonHash.default()
"""Shared instance using the default configuration."""


def apply(json: JsonMap, apply_config: ApplyConfig | None = None) -> JsonMap:
    """Shortcut for :meth:`JsonHash.apply` on the default instance."""

    return jh.apply(json, apply_config)


def apply_in_place(
    json: JsonMap,
    update_existing_hashes: bool = False,
    throw_on_hash_mismatch: bool = True,
) -> JsonMap:
    """Shortcut for :meth:`JsonHash.apply_in_place` on the default instance."""

    return jh.apply_in_place(json, update_existing_hashes, throw_on_hash_mismatch)


def apply_to_string(text: str) -> str:
    """Shortcut for :meth:`JsonHash.apply_to_string` on the default instance."""

    return jh.apply_to_string(text)


def calc_hash(value: str | list[JsonValue] | JsonMap) -> str:
    """Shortcut for :meth:`JsonHash.calc_hash` on the default instance."""

    return jh.calc_hash(value)


def validate(json: JsonMap) -> JsonMap:
    """Shortcut for :meth:`JsonHash.validate` on the default instance."""

    return jh.validate(json)
