"""Main CLI entry point for relais."""

import logging

import typer
from rich.logging import RichHandler
from typing_extensions import Annotated

from relais import __version__
from relais.cli import commands
from relais.cli.console import stderr_console

app = typer.Typer(
    name="relais",
    help="Forward PDF attachments from Gmail into Google Drive",
    no_args_is_help=True,
)

app.add_typer(commands.init.app, name="init")
app.add_typer(commands.search.app, name="search")
app.add_typer(commands.copy.app, name="copy")
app.add_typer(commands.folders.app, name="folders")
app.add_typer(commands.config.app, name="config")


def setup_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=stderr_console, rich_tracebacks=verbose)],
    )
    # Drop the discovery client's per-request chatter
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
):
    """Forward PDF attachments from Gmail into Google Drive."""
    setup_logging(verbose, quiet)


@app.command()
def version():
    """Show version information."""
    typer.echo(f"relais version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
