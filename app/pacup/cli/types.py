"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum

import typer

from pacup.core.aggregator import UpgradeAggregator
from pacup.core.config import ConfigError, PacupConfig, load_config
from pacup.sources.aur import AurClient
from pacup.sources.ignore import IgnoreList
from pacup.sources.pacman import PacmanLocalDatabase, PacmanSyncDatabase
from pacup.sources.vcs import VcsStore
from pacup.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def load_config_or_exit() -> PacupConfig:
    """Load the configuration, exiting with an error message on failure."""
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def build_aggregator(config: PacupConfig, client: AurClient) -> UpgradeAggregator:
    """Wire the pacman, AUR and VCS sources into an aggregator.

    Args:
        config: Effective configuration (file merged with flags).
        client: AUR client; the caller owns and closes it.

    Returns:
        Ready-to-use UpgradeAggregator.
    """
    return UpgradeAggregator(
        PacmanLocalDatabase(),
        PacmanSyncDatabase(),
        client,
        ignore=IgnoreList.from_pacman_conf(config.pacman_conf, extra=config.ignore),
        revision_store=VcsStore(),
        devel=config.devel,
        split_n=config.request_split_n,
        time_update=config.time_update,
    )


def create_aur_client(config: PacupConfig) -> AurClient:
    """Create the AUR client described by the configuration."""
    return AurClient(config.aur_url, timeout=config.timeout_seconds)
