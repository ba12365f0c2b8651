#!/usr/bin/env python3
"""maya CLI - Main entry point"""

from pathlib import Path

import click
from rich.console import Console

from mayactl.config.manager import ConfigError, ConfigManager
from mayactl.log import init_logging

console = Console()


@click.group()
@click.option("--config", type=click.Path(), help="Config file path")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, config, verbose):
    """maya - Maya server management utilities"""
    ctx.ensure_object(dict)

    config_path = Path(config) if config else Path.home() / ".maya" / "config.yaml"
    try:
        cfg = ConfigManager(config_path).load()
    except ConfigError as e:
        raise click.ClickException(str(e))

    level = "debug" if verbose else cfg["logging"]["level"]
    log_file = cfg["logging"].get("file")
    init_logging(level, Path(log_file) if log_file else None)

    ctx.obj["config"] = cfg
    ctx.obj["verbose"] = verbose


@cli.command()
def version():
    """Show version information"""
    from mayactl import __version__

    console.print(f"maya CLI version {__version__}")


from mayactl.cli import install

cli.add_command(install.install_maya)


if __name__ == "__main__":
    cli()
