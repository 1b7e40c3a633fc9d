"""Application state and configuration."""

from __future__ import annotations

from pathlib import Path

import platformdirs
from pydantic import ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hostcheck.core.base import BaseConfig
from hostcheck.core.log import Logger
from hostcheck.core.yaml_settings import (
    PROJECT_CONFIG,
    YamlWithIncludesSettingsSource,
)


class CheckSpec(BaseConfig):
    """One entry of a checklist."""

    check: str = Field(
        description="Registered check name (e.g. 'Port', 'UserInGroup')"
    )
    parameters: list[str] = Field(
        default_factory=list,
        description="Positional parameters, in order",
    )

    @model_validator(mode='before')
    @classmethod
    def _stringify_parameters(cls, data):
        # YAML reads `- 8080` as an int; checks take strings
        if isinstance(data, dict) and isinstance(data.get("parameters"), list):
            data = {
                **data,
                "parameters": [str(p) for p in data["parameters"]],
            }
        return data


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger = Field(
        default=None,
        description="Logger configuration and runtime instance",
    )
    log_level: str = Field(
        default="info",
        alias="log-level",
        description=(
            "Console log level: 'spew', 'trace', 'debug', 'info', "
            "'warn', 'error', 'fatal'"
        ),
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "hostcheck"
        ),
        description="Root directory for log files",
    )
    run_name: str = Field(
        default="hostcheck",
        description="Name of this check run (log directory, service name)",
    )
    command_timeout: int | None = Field(
        default=None,
        description=(
            "Seconds before a probe command such as `docker ps -a` "
            "is abandoned; unset waits indefinitely"
        ),
    )
    checks: list[CheckSpec] = Field(
        default_factory=list,
        description="Checklist run by `hostcheck run`, in order",
    )

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Initialize the global logger once configuration has loaded."""
        from hostcheck.core.log import setup_logger
        from hostcheck.core.yaml_settings import _cleanup_bootstrap_logger

        if self.logger is None:
            self.logger = Logger(level=self.log_level)

        setup_logger(
            log_root=self.log_root,
            run_name=self.run_name,
            level=self.logger.level,
            console=self.logger.console,
            file=self.logger.file,
            logfire=self.logger.logfire,
        )
        _cleanup_bootstrap_logger()
        return self

    def close(self):
        """Close the global logger as well as any closeable fields."""
        from hostcheck.core.log import logger
        logger.close()
        super().close()


class State(BaseSettings):
    """Complete application state, loaded from every source.

    Priority (highest first): init arguments / CLI, YAML files,
    .env, environment variables (HOSTCHECK_CONFIG__RUN_NAME=...),
    file secrets.
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to include and merge. "
            "Use --include on the CLI or include: in YAML files."
        ),
    )

    model_config = SettingsConfigDict(
        yaml_file=PROJECT_CONFIG,
        env_file=".env",
        env_prefix="HOSTCHECK_",
        env_nested_delimiter="__",
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )


__all__ = ["CheckSpec", "Config", "State"]
