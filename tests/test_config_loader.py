"""Tests for loading configuration from the environment and from files."""

import json
import logging

import pytest

from json_hash.config_loader import load_config
from json_hash.errors import ConfigurationError
from json_hash.settings import JsonHashSettings


def test_load_config_defaults_without_sources():
    """Without environment or files the defaults are returned."""
    config = load_config()
    assert config.hash_length == 22
    assert config.number_config.precision == 10


def test_env_var_override(monkeypatch):
    """Environment variables override defaults."""
    monkeypatch.setenv("JSON_HASH_LENGTH", "10")
    monkeypatch.setenv("JSON_HASH_ALGORITHM", "SHA-512")
    monkeypatch.setenv("JSON_HASH_PRECISION", "4")
    monkeypatch.setenv("JSON_HASH_MAX_NUM", "5000")
    monkeypatch.setenv("JSON_HASH_THROW_ON_RANGE_ERROR", "false")

    config = load_config()
    assert config.hash_length == 10
    assert config.hash_algorithm == "sha512"
    assert config.number_config.precision == 4
    assert config.number_config.max_num == 5000.0
    assert config.number_config.throw_on_range_error is False


def test_env_precision_step_selects_strict_profile(monkeypatch):
    """A step from the environment disables truncation."""
    monkeypatch.setenv("JSON_HASH_PRECISION_STEP", "0.001")
    config = load_config()
    assert config.number_config.precision_step == 0.001
    assert not config.number_config.truncates


def test_malformed_env_values_are_ignored(monkeypatch):
    """Values that cannot be parsed fall back to the defaults."""
    monkeypatch.setenv("JSON_HASH_LENGTH", "many")
    monkeypatch.setenv("JSON_HASH_MAX_NUM", "lots")
    monkeypatch.setenv("JSON_HASH_THROW_ON_RANGE_ERROR", "maybe")

    config = load_config()
    assert config.hash_length == 22
    assert config.number_config.max_num == 1e9
    assert config.number_config.throw_on_range_error is True


def test_inconsistent_env_values_raise(monkeypatch):
    """Parsed but invalid values surface as configuration errors."""
    monkeypatch.setenv("JSON_HASH_LENGTH", "0")
    with pytest.raises(ConfigurationError):
        load_config()


def test_load_from_yaml_file(tmp_path):
    """YAML files use the hash and numbers sections."""
    cfg_file = tmp_path / "json_hash.yaml"
    cfg_file.write_text(
        """
hash:
  length: 16
  algorithm: sha384
numbers:
  precision: 6
  min_num: -100
  max_num: 100
""",
        encoding="utf-8",
    )

    config = load_config(cfg_file)
    assert config.hash_length == 16
    assert config.hash_algorithm == "sha384"
    assert config.number_config.precision == 6
    assert config.number_config.min_num == -100.0
    assert config.number_config.max_num == 100.0


def test_load_from_json_file_via_env(monkeypatch, tmp_path):
    """JSON_HASH_CONFIG_PATH points at the file to load."""
    cfg_file = tmp_path / "settings.json"
    cfg_file.write_text(
        json.dumps({"numbers": {"precision_step": 0.5, "throw_on_range_error": "no"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("JSON_HASH_CONFIG_PATH", str(cfg_file))

    config = load_config()
    assert config.number_config.precision_step == 0.5
    assert config.number_config.throw_on_range_error is False


def test_file_overrides_environment(monkeypatch, tmp_path):
    """Files take precedence over environment variables."""
    monkeypatch.setenv("JSON_HASH_LENGTH", "10")
    monkeypatch.setenv("JSON_HASH_PRECISION_STEP", "0.25")
    cfg_file = tmp_path / "json_hash.yml"
    cfg_file.write_text("hash:\n  length: 12\nnumbers:\n  precision_step: null\n")

    config = load_config(cfg_file)
    assert config.hash_length == 12
    assert config.number_config.precision_step is None


def test_default_search_location(tmp_path, monkeypatch):
    """A json_hash.yml in the working directory is discovered."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "json_hash.yml").write_text("hash:\n  length: 8\n")

    assert load_config().hash_length == 8


def test_explicit_settings_instance(tmp_path):
    """A pre-built settings object replaces the environment."""
    settings = JsonHashSettings(JSON_HASH_LENGTH=11)
    assert load_config(settings=settings).hash_length == 11


def test_invalid_json_handling(tmp_path, caplog):
    """Unreadable files are ignored with a warning."""
    cfg_file = tmp_path / "invalid.json"
    cfg_file.write_text("{invalid json}", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="json_hash"):
        config = load_config(cfg_file)

    assert config.hash_length == 22
    assert "Ignoring unreadable configuration file" in caplog.text


def test_non_mapping_file_is_ignored(tmp_path, caplog):
    """A YAML list is not a configuration."""
    cfg_file = tmp_path / "list.yaml"
    cfg_file.write_text("- 1\n- 2\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="json_hash"):
        config = load_config(cfg_file)

    assert config.hash_length == 22
    assert "does not contain a mapping" in caplog.text


def test_unknown_suffix_is_ignored(tmp_path, caplog):
    """Only JSON and YAML files are read."""
    cfg_file = tmp_path / "json_hash.toml"
    cfg_file.write_text("[hash]\nlength = 4\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="json_hash"):
        config = load_config(cfg_file)

    assert config.hash_length == 22
    assert "unknown suffix" in caplog.text


def test_invalid_file_values_raise(tmp_path):
    """Values that parse but violate invariants raise."""
    cfg_file = tmp_path / "json_hash.yml"
    cfg_file.write_text("numbers:\n  min_num: 5\n  max_num: 1\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(cfg_file)
