from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest


def test_load_defaults_when_no_config(clean_env: None, temp_dir: Path) -> None:
    """Test that defaults are used when no config file exists."""
    os.chdir(temp_dir)

    from gitshell.config import GitShellConfig, load_config

    config = load_config()
    assert isinstance(config, GitShellConfig)
    assert config.binary is None
    assert config.timeout is None
    assert config.network_retries == 0
    assert config.output_history == 32
    assert config.env == {}
    assert config.verbosity == "warning"


def test_load_project_config(clean_env: None, temp_dir: Path) -> None:
    """Test loading configuration from gitshell.yaml."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text(
        """
binary: /opt/git/bin/git
timeout: 30
network_retries: 3
env:
  GIT_AUTHOR_NAME: Release Bot
verbosity: info
"""
    )

    from gitshell.config import load_config

    config = load_config()
    assert config.binary == "/opt/git/bin/git"
    assert config.timeout == 30.0
    assert config.network_retries == 3
    assert config.env == {"GIT_AUTHOR_NAME": "Release Bot"}
    assert config.verbosity == "info"


def test_load_explicit_config_path(clean_env: None, temp_dir: Path) -> None:
    """Test load_config reads the given file instead of ./gitshell.yaml."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text("output_history: 5\n")
    custom = temp_dir / "custom.yaml"
    custom.write_text("output_history: 7\n")

    from gitshell.config import GitShellConfig, load_config

    assert load_config(custom).output_history == 7
    # The explicit path only applies to that call
    assert GitShellConfig().output_history == 5


def test_env_var_overrides(clean_env: None, temp_dir: Path) -> None:
    """Test that GITSHELL_* environment variables override config."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text("timeout: 30\n")
    os.environ["GITSHELL_TIMEOUT"] = "5"
    os.environ["GITSHELL_ENV"] = '{"GIT_TRACE": "1"}'

    from gitshell.config import load_config

    config = load_config()
    assert config.timeout == 5.0
    assert config.env == {"GIT_TRACE": "1"}


def test_invalid_config_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    """Test that invalid values raise ConfigError with the field name."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text("network_retries: 50\n")

    from gitshell.config import load_config
    from gitshell.exceptions import ConfigError

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "network_retries"
    assert exc_info.value.value == 50


def test_invalid_yaml_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    """Test that malformed YAML raises ConfigError."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text("timeout: [unclosed\n")

    from gitshell.config import load_config
    from gitshell.exceptions import ConfigError

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config()


def test_non_mapping_yaml_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    """Test that a YAML list at the top level is rejected."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text("- timeout\n- 5\n")

    from gitshell.config import load_config
    from gitshell.exceptions import ConfigError

    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_config()


def test_blank_binary_rejected(clean_env: None, temp_dir: Path) -> None:
    """Test that a blank executable override is invalid."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text('binary: "  "\n')

    from gitshell.config import load_config
    from gitshell.exceptions import ConfigError

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "binary"


def test_unknown_keys_ignored(clean_env: None, temp_dir: Path) -> None:
    """Test that unknown keys in YAML do not fail loading."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text("future_option: true\ntimeout: 2\n")

    from gitshell.config import load_config

    config = load_config()
    assert config.timeout == 2.0
    assert not hasattr(config, "future_option")


def test_load_user_config(clean_env: None, temp_dir: Path, isolated_git_env: Path) -> None:
    """Test loading configuration from ~/.config/gitshell/config.yaml."""
    os.chdir(temp_dir)

    from gitshell.config import get_user_config_path, load_config

    user_config = get_user_config_path()
    assert user_config == isolated_git_env / ".config" / "gitshell" / "config.yaml"
    user_config.parent.mkdir(parents=True)
    user_config.write_text("output_history: 64\n")

    config = load_config()
    assert config.output_history == 64


def test_project_config_overrides_user_config(
    clean_env: None, temp_dir: Path, isolated_git_env: Path
) -> None:
    """Test that the project file wins over the user file."""
    os.chdir(temp_dir)

    from gitshell.config import get_user_config_path, load_config

    user_config = get_user_config_path()
    user_config.parent.mkdir(parents=True)
    user_config.write_text("output_history: 64\nnetwork_retries: 1\n")
    (temp_dir / "gitshell.yaml").write_text("output_history: 8\n")

    config = load_config()
    assert config.output_history == 8
    assert config.network_retries == 1


def test_empty_config_file_uses_defaults(clean_env: None, temp_dir: Path) -> None:
    """Test that an empty YAML file falls back to defaults."""
    os.chdir(temp_dir)
    (temp_dir / "gitshell.yaml").write_text("# nothing configured yet\n")

    from gitshell.config import load_config

    config = load_config()
    assert config.output_history == 32


def test_invalid_env_var_value_produces_error(clean_env: None, temp_dir: Path) -> None:
    """Test that invalid environment values surface as ConfigError."""
    os.chdir(temp_dir)
    os.environ["GITSHELL_TIMEOUT"] = "-1"

    from gitshell.config import load_config
    from gitshell.exceptions import ConfigError

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "timeout"


def test_log_level_from_verbosity(clean_env: None, temp_dir: Path) -> None:
    """Test verbosity maps to a logging level constant."""
    os.chdir(temp_dir)

    from gitshell.config import GitShellConfig

    assert GitShellConfig().log_level == logging.WARNING
    assert GitShellConfig(verbosity="debug").log_level == logging.DEBUG
