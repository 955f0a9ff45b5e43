"""Entry point for the `gdrive` command."""

from __future__ import annotations

import logging
from typing import Optional

import click

from gdrivecli.config import DEFAULT_PROFILE, load_settings, validate_profile_name
from gdrivecli.errors import ConfigError

from .auth_commands import auth_group
from .context import CliContext
from .file_commands import file_group
from .output import OutputFormatter


def setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("gdrivecli").setLevel(logging.DEBUG)
        # The discovery client logs every request URL at DEBUG.
        logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
    else:
        logging.basicConfig(level=logging.WARNING)


@click.group()
@click.option(
    "--profile",
    envvar="GDRIVE_PROFILE",
    default=DEFAULT_PROFILE,
    show_default=True,
    help="Profile to use",
)
@click.option(
    "--config-dir",
    envvar="GDRIVECLI_CONFIG_DIR",
    type=click.Path(file_okay=False),
    help="Configuration directory (default: ~/.config/gdrivecli)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="gdrivecli")
@click.pass_context
def cli(ctx: click.Context, profile: str, config_dir: Optional[str], verbose: bool) -> None:
    """Google Drive CLI tool."""
    setup_logging(verbose)
    try:
        validate_profile_name(profile)
    except ConfigError as exc:
        OutputFormatter().error(str(exc))
        ctx.exit(1)
    ctx.obj = CliContext(profile=profile, settings=load_settings(config_dir), verbose=verbose)


cli.add_command(auth_group)
cli.add_command(file_group)


def main() -> None:
    cli(prog_name="gdrive")


if __name__ == "__main__":
    main()
