"""pacup configuration and settings.

This module provides the configuration model and I/O functions for
pacup. Configuration is stored in ~/.config/pacup/config.toml; every key
is optional and command-line flags override what the file says.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pacup.core.paths import DEFAULT_PACMAN_CONF, get_config_path

logger = logging.getLogger(__name__)

DEFAULT_AUR_URL = "https://aur.archlinux.org"
DEFAULT_REQUEST_SPLIT_N = 150


class PacupConfig(BaseModel):
    """Configuration for upgrade resolution.

    Attributes:
        request_split_n: Maximum number of names per AUR info request.
        time_update: Also treat AUR packages modified after the local build
            date as upgrades, even when the version did not change.
        devel: Check tracked VCS packages for new upstream commits.
        no_confirm: Skip the selection prompt and upgrade everything.
        aur_url: Base URL of the AUR.
        timeout_seconds: HTTP timeout for AUR requests.
        ignore: Extra glob patterns of packages never to upgrade, on top of
            pacman.conf's IgnorePkg.
        pacman_conf: pacman configuration read for IgnorePkg.
        aur_helper: Command used to build and install AUR targets
            (e.g. "paru -S"). When unset, AUR targets are only listed.
    """

    model_config = ConfigDict(extra="forbid")

    request_split_n: Annotated[
        int,
        Field(ge=1, le=500, description="Names per AUR request (1-500)"),
    ] = DEFAULT_REQUEST_SPLIT_N
    time_update: Annotated[
        bool,
        Field(description="Compare AUR modification time with local build date"),
    ] = False
    devel: Annotated[
        bool,
        Field(description="Check VCS packages for new commits"),
    ] = False
    no_confirm: Annotated[
        bool,
        Field(description="Do not prompt for packages to skip"),
    ] = False
    aur_url: Annotated[
        str,
        Field(min_length=1, description="AUR base URL"),
    ] = DEFAULT_AUR_URL
    timeout_seconds: Annotated[
        float,
        Field(ge=5, le=300, description="AUR request timeout in seconds (5-300)"),
    ] = 30.0
    ignore: Annotated[
        list[str],
        Field(description="Glob patterns of packages to ignore"),
    ] = []
    pacman_conf: Annotated[
        Path,
        Field(description="pacman.conf to read IgnorePkg from"),
    ] = DEFAULT_PACMAN_CONF
    aur_helper: Annotated[
        str | None,
        Field(description="Command used to install AUR targets"),
    ] = None

    @property
    def aur_helper_args(self) -> list[str]:
        """Split the configured AUR helper command into arguments."""
        return self.aur_helper.split() if self.aur_helper else []


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> PacupConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: pacup runs on defaults.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated PacupConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return PacupConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return PacupConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: PacupConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The PacupConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config_to_dict(config)

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


def config_to_dict(config: PacupConfig) -> dict[str, object]:
    """Convert PacupConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.
    """
    return config.model_dump(mode="json", exclude_none=True)
