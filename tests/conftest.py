"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from json_hash.hasher import JsonHash  # noqa: E402

_ENV_VARS = (
    "JSON_HASH_LENGTH",
    "JSON_HASH_ALGORITHM",
    "JSON_HASH_PRECISION",
    "JSON_HASH_PRECISION_STEP",
    "JSON_HASH_MAX_NUM",
    "JSON_HASH_MIN_NUM",
    "JSON_HASH_THROW_ON_RANGE_ERROR",
    "JSON_HASH_CONFIG_PATH",
)


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep developer environment variables and config files out of tests."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def hasher() -> JsonHash:
    return JsonHash()
