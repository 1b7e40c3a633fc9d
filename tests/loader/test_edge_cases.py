"""Tests for edge cases and error handling."""

from pathlib import Path

import pytest

from hostcheck.core.config import State
from hostcheck.core.yaml_settings import YamlWithIncludesSettingsSource


@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


def test_circular_include_detected(fixtures_dir):
    """Circular include raises ValueError during initialization."""
    yaml_file = fixtures_dir / "circular_a.yaml"

    with pytest.raises(ValueError, match="Circular include"):
        YamlWithIncludesSettingsSource(State, yaml_file=str(yaml_file))


def test_missing_include_file_raises_error(tmp_path):
    """Missing include file raises FileNotFoundError."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
include: does_not_exist.yaml

config:
  run_name: missing
""")

    with pytest.raises(FileNotFoundError):
        YamlWithIncludesSettingsSource(State, yaml_file=str(config_file))


def test_missing_base_file_is_skipped(tmp_path):
    """A project config that does not exist leaves only the defaults."""
    source = YamlWithIncludesSettingsSource(
        State, yaml_file=str(tmp_path / "hostcheck.yaml")
    )
    data = source()

    assert data["config"]["run_name"] == "hostcheck"
    assert data["config"]["checks"] == []


def test_empty_include_list(tmp_path):
    """Empty include: list is handled correctly."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
include: []

config:
  run_name: empty-include
""")

    source = YamlWithIncludesSettingsSource(State, yaml_file=str(config_file))
    data = source()

    assert data["config"]["run_name"] == "empty-include"


def test_include_with_no_config_section(tmp_path):
    """Include file with no config: section is handled."""
    partial_file = tmp_path / "partial.yaml"
    partial_file.write_text("""
# Nothing under config:
other: value
""")

    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
include: partial.yaml

config:
  run_name: partial
""")

    source = YamlWithIncludesSettingsSource(State, yaml_file=str(config_file))
    data = source()

    assert data["config"]["run_name"] == "partial"
    assert data["other"] == "value"


def test_absolute_include_path(fixtures_dir, tmp_path):
    """Include with absolute path works."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"""
include: {(fixtures_dir / 'override_logging.yaml').resolve()}

config:
  run_name: absolute
""")

    source = YamlWithIncludesSettingsSource(State, yaml_file=str(config_file))
    data = source()

    assert data["config"]["logger"]["level"] == "debug"


def test_empty_yaml_file(tmp_path):
    """Empty YAML file is handled gracefully."""
    empty_file = tmp_path / "empty.yaml"
    empty_file.write_text("")

    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
include: empty.yaml

config:
  run_name: with-empty
""")

    source = YamlWithIncludesSettingsSource(State, yaml_file=str(config_file))
    data = source()

    assert data["config"]["run_name"] == "with-empty"
