"""Search command implementation."""

import dataclasses

import typer
from typing_extensions import Annotated

from relais.cli.session import open_session
from relais.config import get_max_threads
from relais.criteria import normalize_folder_path, parse_date
from relais.drive.client import DriveClient
from relais.errors import RelaisError
from relais.forward.engine import ForwardEngine
from relais.ledger.criteria_sheet import CriteriaSheet
from relais.ledger.store import ResultLedger
from relais.mail.gmail import GmailClient

app = typer.Typer(help="Search Gmail and list PDF attachments for review")


@app.callback(invoke_without_command=True)
def search(
    ctx: typer.Context,
    since: Annotated[
        str | None, typer.Option("--since", help="Start date (YYYY-MM-DD)")
    ] = None,
    until: Annotated[
        str | None, typer.Option("--until", help="End date (YYYY-MM-DD)")
    ] = None,
    keyword: Annotated[
        list[str] | None,
        typer.Option("--keyword", "-k", help="Subject keyword (repeatable)"),
    ] = None,
    folder: Annotated[
        str | None, typer.Option("--folder", help="Destination folder path")
    ] = None,
):
    """Search Gmail and list PDF attachments in the results sheet.

    Criteria come from the search sheet; options override its values.
    The results sheet is cleared first.
    """
    try:
        session = open_session()
        criteria = CriteriaSheet(session.sheets, session.layout).read()

        overrides = {}
        if since:
            overrides["start_date"] = parse_date(since)
        if until:
            overrides["end_date"] = parse_date(until)
        if keyword:
            overrides["keywords"] = [k.strip() for k in keyword if k.strip()]
        if folder is not None:
            overrides["folder_path"] = normalize_folder_path(folder)
        criteria = dataclasses.replace(criteria, **overrides)

        engine = ForwardEngine(
            GmailClient(session.credentials),
            DriveClient(session.credentials),
            ResultLedger(session.sheets, session.layout),
            max_threads=get_max_threads(session.config),
        )
        outcome = engine.search_and_list(criteria)
    except RelaisError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if outcome.threads == 0:
        typer.echo("No mail matched the search criteria.")
        return

    typer.echo(
        f"Search complete: {outcome.rows} PDF attachment(s) "
        f"in {outcome.threads} thread(s)."
    )
    typer.echo(
        f"Review the '{session.layout.results_sheet}' sheet (untick rows, "
        "set file names and folders), then run 'relais copy'."
    )
