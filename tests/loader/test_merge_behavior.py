"""Tests for how configuration layers merge."""

from pathlib import Path

import pytest

from hostcheck.core.config import State
from hostcheck.core.yaml_settings import (
    YamlWithIncludesSettingsSource,
    deep_merge,
)


@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


def test_deep_merge_preserves_non_overlapping():
    base = {"config": {"run_name": "a", "command_timeout": 60}}
    override = {"config": {"run_name": "b"}}

    assert deep_merge(base, override) == {
        "config": {"run_name": "b", "command_timeout": 60}
    }


def test_deep_merge_adds_new_keys():
    assert deep_merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}


def test_deep_merge_nested_dicts():
    base = {"logger": {"console": {"enabled": True, "colors": "auto"}}}
    override = {"logger": {"console": {"colors": "never"}}}

    merged = deep_merge(base, override)

    assert merged["logger"]["console"] == {
        "enabled": True, "colors": "never"
    }


def test_deep_merge_does_not_modify_inputs():
    base = {"logger": {"level": "info"}}
    override = {"logger": {"level": "debug"}}

    deep_merge(base, override)

    assert base == {"logger": {"level": "info"}}


def test_list_replacement_not_merge(fixtures_dir, tmp_path):
    """A later checklist replaces an earlier one outright."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
include: {}

config:
  checks:
    - check: Host
      parameters: [localhost]
""".format(fixtures_dir / "extra_checks.yaml"))

    source = YamlWithIncludesSettingsSource(State, yaml_file=str(config_file))
    data = source()

    assert data["config"]["checks"] == [
        {"check": "Host", "parameters": ["localhost"]}
    ]


def test_merge_order_matters(fixtures_dir, tmp_path):
    """The last include wins over earlier ones."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"""
include:
  - {fixtures_dir / 'override_logging.yaml'}
  - {fixtures_dir / 'minimal.yaml'}
""")

    source = YamlWithIncludesSettingsSource(State, yaml_file=str(config_file))
    data = source()

    assert data["config"]["command_timeout"] == 30


def test_defaults_lowest_priority(fixtures_dir):
    """Package defaults only fill what no file sets."""
    source = YamlWithIncludesSettingsSource(
        State, yaml_file=str(fixtures_dir / "override_logging.yaml")
    )
    data = source()

    assert data["config"]["command_timeout"] == 5
    assert data["config"]["logger"]["console"]["colors"] == "never"
    assert data["config"]["logger"]["console"]["enabled"] is True
    assert data["config"]["run_name"] == "hostcheck"
