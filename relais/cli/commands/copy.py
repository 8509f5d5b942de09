"""Copy command implementation."""

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from relais.cli.console import stderr_console
from relais.cli.session import open_session
from relais.drive.client import DriveClient
from relais.errors import RelaisError
from relais.forward.engine import ForwardEngine
from relais.ledger.criteria_sheet import CriteriaSheet
from relais.ledger.store import ResultLedger
from relais.mail.gmail import GmailClient

app = typer.Typer(help="Copy ticked attachments from the results sheet into Drive")


@app.callback(invoke_without_command=True)
def copy(ctx: typer.Context):
    """Copy ticked, unprocessed rows of the results sheet into Drive.

    Rows that already have a Result are left alone, so the command can be
    re-run safely.
    """
    try:
        session = open_session()
        criteria = CriteriaSheet(session.sheets, session.layout).read()

        engine = ForwardEngine(
            GmailClient(session.credentials),
            DriveClient(session.credentials),
            ResultLedger(session.sheets, session.layout),
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=stderr_console,
            transient=True,
        ) as progress:
            task = progress.add_task("Copying...", total=None)

            def on_progress(title: str, current: int, total: int) -> None:
                progress.update(task, description=title, completed=current, total=total)

            result = engine.review_and_copy(
                criteria.folder_path, progress_callback=on_progress
            )
    except RelaisError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    total = result.copied + result.skipped + result.errors + result.already_processed
    if total == 0:
        typer.echo("No rows are selected.")
        return

    typer.echo("Copy complete.")
    typer.echo(f"  Copied: {result.copied}")
    typer.echo(f"  Skipped (already exists): {result.skipped}")
    typer.echo(f"  Errors: {result.errors}")
    typer.echo(f"  Already processed: {result.already_processed}")

    for detail in result.error_details:
        typer.echo(f"  - {detail}", err=True)
