"""CLI package for pacup.

This package contains the Typer application and all subcommands.
"""

from pacup.cli.main import app

__all__ = ["app"]
