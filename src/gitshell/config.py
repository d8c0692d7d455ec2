from __future__ import annotations

import logging
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from gitshell.constants import DEFAULT_OUTPUT_HISTORY
from gitshell.exceptions import ConfigError
from gitshell.logging import get_logger

__all__ = [
    "GitShellConfig",
    "load_config",
    "get_user_config_path",
    "PROJECT_CONFIG_NAME",
]

logger = get_logger(__name__)

#: File name of the per-project configuration file
PROJECT_CONFIG_NAME = "gitshell.yaml"

# Project config file selected by load_config() for the current context
_project_config_path: ContextVar[Path | None] = ContextVar(
    "gitshell_project_config_path", default=None
)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
                    if loaded is None:
                        logger.warning("config_file_empty", path=str(yaml_file))
                    elif isinstance(loaded, dict):
                        self._config_data = loaded
                    else:
                        raise ConfigError(
                            message=f"Config file {yaml_file} must contain a mapping",
                            field=None,
                            value=loaded,
                        )
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class GitShellConfig(BaseSettings):
    """Settings shared by every repository handle.

    Attributes:
        binary: Override for the git executable. None applies the default
            rule (/usr/bin/git if present, otherwise ``git`` from PATH).
        timeout: Default per-command timeout in seconds. None waits forever.
        network_retries: Retries for fetch/push/pull/clone on transient
            network failures. 0 disables retrying.
        output_history: Number of captured command outputs kept per handle.
        env: Environment variables applied to every git invocation.
        verbosity: Log level name.
    """

    model_config = SettingsConfigDict(
        env_prefix="GITSHELL_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    binary: str | None = None
    timeout: float | None = Field(default=None, gt=0)
    network_retries: int = Field(default=0, ge=0, le=10)
    output_history: int = Field(default=DEFAULT_OUTPUT_HISTORY, ge=1, le=10000)
    env: dict[str, str] = Field(default_factory=dict)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @field_validator("binary")
    @classmethod
    def check_binary_not_blank(cls, v: str | None) -> str | None:
        """Reject an empty executable override."""
        if v is not None and not v.strip():
            raise ValueError("binary must not be blank")
        return v

    @property
    def log_level(self) -> int:
        """Logging level constant for ``verbosity``, for ``configure_logging(level=...)``."""
        level: int = getattr(logging, self.verbosity.upper())
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Explicit keyword arguments
        2. Environment variables (GITSHELL_*)
        3. Project YAML config (./gitshell.yaml or the load_config() path)
        4. User YAML config (~/.config/gitshell/config.yaml)
        """
        project_config_path = _project_config_path.get()
        if project_config_path is None:
            project_config_path = Path.cwd() / PROJECT_CONFIG_NAME

        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/gitshell/config.yaml
    """
    return Path.home() / ".config" / "gitshell" / "config.yaml"


def load_config(config_path: Path | None = None) -> GitShellConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to project config file. Defaults to
            ./gitshell.yaml

    Returns:
        GitShellConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_NAME

    if not config_path.exists():
        logger.debug("project_config_missing", path=str(config_path))

    token = _project_config_path.set(config_path)
    try:
        return GitShellConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
