"""Run configuration file I/O operations.

This module provides functions for loading and saving run
configurations with proper validation using Pydantic models. TOML files
are read with tomllib; any other suffix is read as JSON.
"""

import json
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from dirkeeper.core.paths import get_config_path
from dirkeeper.models.entry import RunConfig


class ConfigError(Exception):
    """Base exception for configuration-related errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when configuration content is invalid."""


def _is_toml(path: Path) -> bool:
    return path.suffix.lower() == ".toml"


def load_config(path: Path | None = None) -> RunConfig:
    """Load and validate a run configuration file.

    Args:
        path: Path to the configuration file. If None, uses the default path.

    Returns:
        Validated RunConfig object.

    Raises:
        ConfigNotFoundError: If the configuration file doesn't exist.
        ConfigParseError: If the TOML or JSON syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.is_file():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        if _is_toml(config_path):
            with open(config_path, "rb") as f:
                data: Any = tomllib.load(f)
        else:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigParseError(f"Invalid syntax in {config_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Config is not valid UTF-8: {config_path}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    return parse_config(data)


def parse_config(data: Any) -> RunConfig:
    """Validate already-decoded configuration data.

    Args:
        data: Decoded TOML or JSON document.

    Returns:
        Validated RunConfig object.

    Raises:
        ConfigValidationError: If the content doesn't match the schema.
    """
    try:
        return RunConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: RunConfig, path: Path | None = None) -> Path:
    """Save a run configuration as TOML.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.
    The temporary file is cleaned up on failure.

    Args:
        config: The RunConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_exists(path: Path | None = None) -> bool:
    """Check if a configuration file exists.

    Args:
        path: Path to check. If None, uses the default path.

    Returns:
        True if the configuration file exists, False otherwise.
    """
    config_path = path or get_config_path()
    return config_path.exists()


def require_config(config_path: Path | None = None) -> RunConfig:
    """Load configuration or exit with helpful error message.

    This is a convenience wrapper around load_config() that handles
    common error cases by printing user-friendly messages and exiting.

    Args:
        config_path: Optional custom configuration path.

    Returns:
        Loaded and validated RunConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    import typer

    from dirkeeper.utils.formatting import print_error, print_info

    path = config_path or get_config_path()
    try:
        return load_config(path)
    except ConfigNotFoundError as e:
        print_error(f"Config not found: {path}")
        print_info("Run 'dirkeeper config init' to create an empty configuration.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e


def _config_to_dict(config: RunConfig) -> dict[str, Any]:
    """Convert a RunConfig to a dictionary suitable for TOML serialization.

    Uses the on-disk key names and omits an unset archive root, which
    TOML cannot represent.

    Args:
        config: The RunConfig object to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, Any] = {}
    if config.archive_root is not None:
        result["backup_root_path"] = config.archive_root
    result["directories"] = [
        {
            "path": entry.path,
            "include_directories": entry.include_subdirectories,
            "action": entry.action.value,
        }
        for entry in config.entries
    ]
    return result
