"""Config file I/O operations.

This module provides functions for loading and saving the cruftctl
config file in TOML format with validation using Pydantic models.
"""

import logging
import os
import tomllib
from collections.abc import Iterable
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cruftctl.core.paths import get_config_path
from cruftctl.core.targets import DEFAULT_TARGETS, Target

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for config-related errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


class CruftConfig(BaseModel):
    """User configuration.

    Attributes:
        use_defaults: Whether the built-in targets are active.
        targets: Additional targets, checked after the built-in ones.
    """

    model_config = ConfigDict(extra="forbid")

    use_defaults: Annotated[bool, Field(description="Enable built-in targets")] = True
    targets: Annotated[
        list[Target], Field(default_factory=list, description="Additional targets")
    ]


def load_config(path: Path | None = None) -> CruftConfig:
    """Load and validate the config file.

    A missing file is not an error: the default config is returned.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated CruftConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return CruftConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return CruftConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: CruftConfig, path: Path | None = None) -> Path:
    """Save the config to a TOML file.

    The file is written to a temporary file in the same directory and
    then moved into place with os.replace().

    Args:
        config: The config to save.
        path: Destination. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

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
            tomli_w.dump(_config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def resolve_targets(config: CruftConfig, extra: Iterable[Target] = ()) -> list[Target]:
    """Build the ordered list of active targets.

    Built-in targets come first (if enabled), then configured targets,
    then ``extra`` (targets given on the command line).
    """
    targets: list[Target] = list(DEFAULT_TARGETS) if config.use_defaults else []
    targets.extend(config.targets)
    targets.extend(extra)
    return targets


def _config_to_dict(config: CruftConfig) -> dict[str, Any]:
    """Convert a config to a dictionary suitable for TOML serialization.

    None values are dropped since TOML has no null.
    """
    return {
        "use_defaults": config.use_defaults,
        "targets": [t.model_dump(exclude_none=True) for t in config.targets],
    }
