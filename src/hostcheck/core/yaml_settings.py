"""YAML configuration loading with include support."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic_settings import BaseSettings, YamlConfigSettingsSource

PROJECT_CONFIG = "hostcheck.yaml"

_bootstrap_logger = None


def _get_bootstrap_logger():
    """Logger used while configuration is still loading.

    Created lazily; log.py would otherwise be imported before the
    settings classes exist.
    """
    global _bootstrap_logger
    if _bootstrap_logger is None:
        from hostcheck.core.log import ConsoleSink, Logger
        _bootstrap_logger = Logger(console=ConsoleSink(level="warn"))
        _bootstrap_logger.setup(log_root=Path.home(), run_name="bootstrap")
    return _bootstrap_logger


def _cleanup_bootstrap_logger():
    global _bootstrap_logger
    if _bootstrap_logger:
        _bootstrap_logger.close()
        _bootstrap_logger = None


def cli_includes(argv: list[str] | None = None) -> list[str]:
    """Values of every `--include FILE` on the command line."""
    argv = sys.argv if argv is None else argv
    includes = []
    i = 1
    while i < len(argv):
        if argv[i] == "--include" and i + 1 < len(argv):
            includes.append(argv[i + 1])
            i += 1
        i += 1
    return includes


class YamlWithIncludesSettingsSource(YamlConfigSettingsSource):
    """YAML settings source supporting include: and --include.

    Files are deep-merged, later wins:
    package defaults < user config < ./hostcheck.yaml (or the
    given yaml_file) < --include files in command-line order.
    Inside any file, `include:` names further files, resolved
    relative to the including file, whose values the including
    file overrides.
    """

    def __init__(self, settings_cls: type[BaseSettings], yaml_file=None):
        base = yaml_file or settings_cls.model_config.get("yaml_file")
        includes = cli_includes()
        if base and includes:
            yaml_file = (
                [base] if isinstance(base, (str, os.PathLike)) else list(base)
            ) + includes
        elif includes:
            yaml_file = includes
        else:
            yaml_file = base

        super().__init__(settings_cls, yaml_file)

    def _read_files(self, files, **kwargs):  # noqa: ARG002
        """Load every configuration layer that exists and merge them.

        Layers are always deep-merged, whatever the base class asks.

        Args:
            files: The project file and/or --include files

        Returns:
            Deep-merged dictionary of all loaded data
        """
        files_to_load = [
            Path(__file__).parent.parent / "defaults" / "default.yaml",
            Path(user_config_dir("hostcheck", appauthor=False))
            / PROJECT_CONFIG,
        ]
        if files:
            if isinstance(files, (str, os.PathLike)):
                files = [files]
            files_to_load.extend(Path(f).expanduser() for f in files)

        result = {}
        for file_path in files_to_load:
            if not file_path.is_file():
                _get_bootstrap_logger().debug(
                    "Configuration file not found (skipping)",
                    file=str(file_path),
                )
                continue
            with _get_bootstrap_logger().span(
                "Configuration loading", file=str(file_path)
            ):
                data = self._load_file_recursive(file_path, set())
                result = deep_merge(result, data)
        return result

    def _load_file_recursive(
        self, filepath: Path, visited: set[Path]
    ) -> dict:
        """Load a file, resolving its include: directive.

        Raises:
            ValueError: On a circular include
        """
        filepath = filepath.resolve()
        if filepath in visited:
            raise ValueError(f"Circular include: {filepath}")
        visited.add(filepath)

        with open(filepath) as f:
            data = yaml.safe_load(f) or {}

        includes = data.pop("include", None) or []
        if isinstance(includes, str):
            includes = [includes]

        for inc in includes:
            inc_path = Path(inc)
            if not inc_path.is_absolute():
                inc_path = filepath.parent / inc_path
            with _get_bootstrap_logger().span(
                f"Including {inc_path.name}",
                included_from=str(filepath),
                include_file=str(inc_path),
            ):
                inc_data = self._load_file_recursive(inc_path, visited.copy())
                data = deep_merge(inc_data, data)

        return data


def deep_merge(base: dict, override: dict) -> dict:
    """Merge `override` into a copy of `base`; nested dicts merge,
    everything else (lists included) is replaced."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
