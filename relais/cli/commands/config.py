"""Config command implementation.

Manages relais configuration and Google authentication.
"""

import typer
from typing_extensions import Annotated

from relais.auth import authenticate
from relais.config import (
    CONFIG_FILE,
    init_config,
    load_config,
    set_config_value,
)
from relais.config.paths import CONFIG_DIR

app = typer.Typer(help="Manage configuration and authentication")

SECRET_KEYS = {"client_secret"}


@app.command()
def init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing config")
    ] = False,
):
    """Initialize configuration directory and template config file."""
    created = init_config(overwrite=force)

    if created:
        typer.echo(f"Created config directory: {CONFIG_DIR}")
        typer.echo(f"Created config file: {CONFIG_FILE}")
        typer.echo()
        typer.echo("Edit the config file to add your Google client and spreadsheet.")
    else:
        typer.echo(f"Config already exists at {CONFIG_FILE}")
        typer.echo("Use --force to overwrite.")


@app.command()
def auth():
    """Authenticate with Google (Gmail, Drive and Sheets).

    Opens a browser for you to sign in with your Google account.
    Tokens are cached locally for future use.
    """
    config = load_config()

    google = config.get("google")
    if not google:
        typer.echo("No Google client configured.", err=True)
        typer.echo()
        typer.echo("Run 'relais config init' and fill in the [google] section.")
        raise typer.Exit(1)

    typer.echo("Starting authentication...")

    result = authenticate(google)

    if "access_token" in result:
        typer.echo("Authentication successful!")
    else:
        error_msg = result.get(
            "error_description", result.get("error", "Unknown error")
        )
        typer.echo(f"Authentication failed: {error_msg}", err=True)
        raise typer.Exit(1)


@app.command()
def show():
    """Display current configuration.

    Secrets (like client_secret) are redacted in output.
    """
    config = load_config()

    if not config:
        typer.echo("No configuration found.")
        typer.echo(f"Run 'relais config init' to create {CONFIG_FILE}")
        return

    for section, values in config.items():
        typer.echo(f"[{section}]")
        for key, value in values.items():
            if key in SECRET_KEYS:
                display_value = "***REDACTED***" if value else "(not set)"
            else:
                display_value = value
            typer.echo(f"  {key} = {display_value}")
        typer.echo()


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(help="Configuration key (dot notation, e.g., 'spreadsheet.id')"),
    ],
    value: Annotated[str, typer.Argument(help="Configuration value")],
):
    """Set a configuration value using dot notation.

    Examples:
        relais config set spreadsheet.id 1AbCdEf...
        relais config set defaults.folder_path /Invoices
    """
    try:
        set_config_value(key, value)
        typer.echo(f"Set {key} = {value}")
    except ValueError as e:
        typer.echo(f"Invalid value: {e}", err=True)
        raise typer.Exit(1)
