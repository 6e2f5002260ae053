"""Configuration commands.

Show, create and locate the pacup configuration file.
"""

from typing import Annotated

import tomli_w
import typer

from pacup.cli.types import load_config_or_exit
from pacup.core.config import ConfigError, PacupConfig, config_to_dict, save_config
from pacup.core.paths import get_config_path
from pacup.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and create the configuration file.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Print the effective configuration as TOML."""
    config = load_config_or_exit()
    path = get_config_path()
    source = str(path) if path.exists() else "defaults"
    console.print(f"[muted]# {source}[/]")
    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_info(f"Config already exists at {path} (use --force to overwrite).")
        raise typer.Exit(code=0)

    try:
        saved = save_config(PacupConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {saved}")


@app.command()
def path() -> None:
    """Print the config file location."""
    typer.echo(str(get_config_path()))
