"""Folders command implementation."""

import typer
from typing_extensions import Annotated

from relais.cli.session import open_session
from relais.drive.client import DriveClient
from relais.errors import RelaisError
from relais.ledger.criteria_sheet import CriteriaSheet
from relais.ledger.folder_sheet import FolderListSheet

app = typer.Typer(help="Pick the destination folder from a list of Drive folders")


@app.command("list")
def list_folders(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Don't ask for confirmation")
    ] = False,
):
    """Write every Drive folder to the folder list sheet."""
    if not yes:
        typer.confirm(
            "Listing all Drive folders can take a while on large drives. Continue?",
            abort=True,
        )

    try:
        session = open_session()
        folders = DriveClient(session.credentials).list_folders()
        FolderListSheet(session.sheets, session.layout).display(folders)
    except RelaisError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Found {len(folders)} folder(s).")
    typer.echo(
        f"Tick one folder in the '{session.layout.folders_sheet}' sheet, "
        "then run 'relais folders select'."
    )


@app.command()
def select():
    """Use the ticked folder as the destination folder path."""
    try:
        session = open_session()
        folder = FolderListSheet(session.sheets, session.layout).get_selected()

        if folder is None:
            typer.echo(
                f"No folder is ticked in the '{session.layout.folders_sheet}' sheet.",
                err=True,
            )
            raise typer.Exit(1)

        CriteriaSheet(session.sheets, session.layout).set_folder_path(folder.path)
    except RelaisError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Destination folder set.")
    typer.echo(f"  Name: {folder.name}")
    typer.echo(f"  Path: {folder.path}")
