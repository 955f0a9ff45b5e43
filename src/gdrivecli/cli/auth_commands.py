"""`gdrive auth ...` commands."""

from __future__ import annotations

import os
from typing import Optional

import click

from gdrivecli.auth import OAuthClient
from gdrivecli.controller import GoogleDriveController
from gdrivecli.errors import LocalFileNotFoundError

from .context import CliContext
from .output import OutputFormatter, handle_errors

SCOPES = GoogleDriveController.DEFAULT_SCOPES


@click.group("auth")
def auth_group() -> None:
    """Manage Google Drive authentication."""


@auth_group.command("login")
@click.option(
    "--credentials",
    "credentials_file",
    type=click.Path(dir_okay=False),
    help="OAuth client secrets JSON downloaded from Google Cloud Console",
)
@click.pass_obj
@handle_errors
def login(state: CliContext, credentials_file: Optional[str]) -> None:
    """Authorize this profile with Google Drive (opens a browser)."""
    out = OutputFormatter()
    registry = state.registry

    if credentials_file:
        if not os.path.isfile(credentials_file):
            raise LocalFileNotFoundError(
                f"Credentials file not found: {credentials_file}",
                details={"local_path": credentials_file},
            )
        registry.set_client_secrets_file(state.profile, credentials_file)

    client = OAuthClient(registry.auth_info(state.profile))
    out.info(f"[blue]Starting OAuth authentication for profile '{state.profile}'...[/blue]")
    client.login(SCOPES)
    out.success(f"Authenticated profile '{state.profile}'")


@auth_group.command("status")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_obj
@handle_errors
def status(state: CliContext, json_output: bool) -> None:
    """Show whether this profile has a stored token."""
    out = OutputFormatter(json_output=json_output)
    client = OAuthClient(state.registry.auth_info(state.profile))
    info = client.status(SCOPES)

    if out.json_output:
        out.output_json(info.to_dict())
        return

    data = info.to_dict()
    if data["authenticated"]:
        out.success(f"Profile '{state.profile}' is authenticated")
    else:
        out.info(f"[yellow]Profile '{state.profile}' is not authenticated[/yellow]")
    out.details(
        "Token:",
        [
            ("File", info.token_file),
            ("Valid", "yes" if info.valid else "no"),
            ("Expiry", data["expiry"] or "N/A"),
            ("Scopes", ", ".join(info.scopes) or "N/A"),
        ],
    )


@auth_group.command("logout")
@click.pass_obj
@handle_errors
def logout(state: CliContext) -> None:
    """Remove the stored token of this profile."""
    out = OutputFormatter()
    client = OAuthClient(state.registry.auth_info(state.profile))
    if client.logout():
        out.success(f"Logged out of profile '{state.profile}'")
    else:
        out.info(f"[yellow]Profile '{state.profile}' was not logged in[/yellow]")
